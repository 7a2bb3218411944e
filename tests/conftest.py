"""pytest configuration and shared fixtures for pphooks tests."""

import io
import json
import sys
import textwrap
from pathlib import Path
from typing import Dict, List

import pytest

from pphooks.models.tools import ToolSet
from pphooks.types.enums import InvocationMode, ToolName
from pphooks.utils.formatters import ConsoleReporter

# Stand-in for puppet-lint, puppet, erb and ruby. The first argument names the
# tool being faked; marker strings in the checked file decide the outcome.
FAKE_TOOL_SOURCE = textwrap.dedent('''
    import json
    import os
    import sys

    tool, args = sys.argv[1], sys.argv[2:]

    log_path = os.environ.get("FAKE_TOOL_LOG")
    if log_path:
        with open(log_path, "a", encoding="utf-8") as log:
            log.write(json.dumps([tool] + args) + "\\n")

    def read(path):
        with open(path, encoding="utf-8") as handle:
            return handle.read()

    if tool == "puppet-lint":
        path = args[-1]
        if "LINT_ERROR" in read(path):
            print(f"ERROR: trailing whitespace found on line 1 ({path})")
            sys.exit(1)
        sys.exit(0)

    if tool == "puppet":
        path = args[-1]
        if "SYNTAX_ERROR" in read(path):
            print(f"Error: Could not parse for environment production: {path}", file=sys.stderr)
            sys.exit(1)
        sys.exit(0)

    if tool == "erb":
        sys.stdout.write(read(args[-1]))
        sys.exit(0)

    if tool == "ruby":
        if args[0] == "-c":
            source = read(args[1]) if len(args) > 1 else sys.stdin.read()
            if "SYNTAX_ERROR" in source:
                print("-:1: syntax error, unexpected end-of-input", file=sys.stderr)
                sys.exit(1)
            print("Syntax OK")
            sys.exit(0)
        if args[0] == "-e":
            if "INVALID_YAML" in read(args[-1]):
                print("(<unknown>): did not find expected key while parsing a block mapping", file=sys.stderr)
                sys.exit(1)
            sys.exit(0)

    print(f"unexpected invocation: {tool} {args}", file=sys.stderr)
    sys.exit(2)
''')


@pytest.fixture
def fake_tool_script(tmp_path_factory) -> Path:
    """Write the fake tool script outside the repository under test."""
    script = tmp_path_factory.mktemp("bin") / "fake_tool.py"
    script.write_text(FAKE_TOOL_SOURCE, encoding="utf-8")
    return script


@pytest.fixture
def fake_tools(fake_tool_script) -> ToolSet:
    """ToolSet whose every tool is the fake tool script."""
    return ToolSet(
        prefixes={
            tool: (sys.executable, str(fake_tool_script), tool.executable)
            for tool in ToolName
        },
        mode=InvocationMode.DIRECT,
    )


@pytest.fixture
def tool_log(tmp_path_factory, monkeypatch) -> Path:
    """Record every fake tool invocation as one JSON line."""
    log_path = tmp_path_factory.mktemp("log") / "invocations.jsonl"
    monkeypatch.setenv("FAKE_TOOL_LOG", str(log_path))
    return log_path


@pytest.fixture
def read_tool_log(tool_log):
    """Return the recorded invocations as argv lists."""

    def _read() -> List[List[str]]:
        if not tool_log.exists():
            return []
        return [json.loads(line) for line in tool_log.read_text(encoding="utf-8").splitlines()]

    return _read


@pytest.fixture
def repo(tmp_path) -> Path:
    """Empty working-tree root."""
    root = tmp_path / "repo"
    root.mkdir()
    return root


@pytest.fixture
def write_files():
    """Create files below a root from a {relative_path: content} mapping."""

    def _write(root: Path, files: Dict[str, str]) -> List[Path]:
        created = []
        for relative, content in files.items():
            path = root / relative
            path.parent.mkdir(parents=True, exist_ok=True)
            path.write_text(content, encoding="utf-8")
            created.append(path)
        return created

    return _write


@pytest.fixture
def report_stream() -> io.StringIO:
    return io.StringIO()


@pytest.fixture
def reporter(report_stream) -> ConsoleReporter:
    """Colourless reporter writing into report_stream."""
    return ConsoleReporter(report_stream, color=False)
