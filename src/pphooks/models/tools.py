"""Tool invocation models.

An InvocationStrategy is chosen once by the tool resolver and turned into a
ToolSet, which is then the only thing validators use to build argv lists.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from types import MappingProxyType
from typing import Dict, Iterable, List, Mapping, Tuple

from ..types.enums import InvocationMode, ToolName


class InvocationStrategy(ABC):
    """Decides the argv prefix used to start an external tool."""

    mode: InvocationMode

    @abstractmethod
    def prefix(self, tool: ToolName) -> Tuple[str, ...]:
        """Return the argv prefix that starts ``tool``."""

    def build_toolset(self, tools: Iterable[ToolName]) -> ToolSet:
        return ToolSet(
            prefixes={tool: self.prefix(tool) for tool in tools},
            mode=self.mode,
        )


class DirectInvocation(InvocationStrategy):
    """Start each tool from the absolute path it was found at."""

    mode = InvocationMode.DIRECT

    def __init__(self, paths: Mapping[ToolName, str]):
        self._paths = dict(paths)

    def prefix(self, tool: ToolName) -> Tuple[str, ...]:
        return (self._paths[tool],)


class BundledInvocation(InvocationStrategy):
    """Start each tool through ``bundle exec`` so the Gemfile pins its version."""

    mode = InvocationMode.BUNDLED

    def __init__(self, runner: str):
        self.runner = runner

    def prefix(self, tool: ToolName) -> Tuple[str, ...]:
        return (self.runner, "exec", tool.executable)


@dataclass(frozen=True)
class ToolSet:
    """Immutable mapping from tool to invocation prefix.

    Attributes:
        prefixes: argv prefix per tool
        mode: strategy the prefixes were built with
    """
    prefixes: Mapping[ToolName, Tuple[str, ...]]
    mode: InvocationMode = InvocationMode.DIRECT

    def __post_init__(self) -> None:
        frozen = {tool: tuple(prefix) for tool, prefix in self.prefixes.items()}
        object.__setattr__(self, "prefixes", MappingProxyType(frozen))

    def command(self, tool: ToolName, *args: str) -> List[str]:
        """Build the argv that runs ``tool`` with ``args``.

        Raises:
            KeyError: If the tool was not resolved
        """
        return [*self.prefixes[tool], *args]

    def describe(self) -> Dict[str, str]:
        return {tool.value: " ".join(prefix) for tool, prefix in self.prefixes.items()}
