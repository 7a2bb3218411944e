"""Unit tests for tool, category and validation models."""

from dataclasses import FrozenInstanceError
from pathlib import Path

import pytest

from pphooks.models.categories import (
    DEFAULT_CATEGORIES,
    RESERVED_SUBTREE,
    YAML_LOAD_SNIPPET,
    ValidationCommand,
    get_category,
    list_categories,
)
from pphooks.models.tools import BundledInvocation, DirectInvocation, ToolSet
from pphooks.models.validation import AggregateStatus, ValidationOutcome
from pphooks.types.enums import FileCategoryKind, InvocationMode, ToolName

DIRECT_PATHS = {
    ToolName.STYLE_LINTER: "/usr/bin/puppet-lint",
    ToolName.SYNTAX_VALIDATOR: "/opt/puppetlabs/bin/puppet",
    ToolName.TEMPLATE_COMPILER: "/usr/bin/erb",
    ToolName.INTERPRETER: "/usr/bin/ruby",
}


@pytest.fixture
def direct_tools() -> ToolSet:
    return DirectInvocation(DIRECT_PATHS).build_toolset(ToolName.required())


@pytest.fixture
def bundled_tools() -> ToolSet:
    return BundledInvocation("/usr/local/bin/bundle").build_toolset(ToolName.required())


class TestInvocationStrategies:
    def test_direct_prefix(self, direct_tools):
        assert direct_tools.mode == InvocationMode.DIRECT
        assert direct_tools.command(ToolName.INTERPRETER, "-c", "x.rb") == ["/usr/bin/ruby", "-c", "x.rb"]

    def test_bundled_prefix(self, bundled_tools):
        assert bundled_tools.mode == InvocationMode.BUNDLED
        assert bundled_tools.command(ToolName.STYLE_LINTER, "init.pp") == [
            "/usr/local/bin/bundle", "exec", "puppet-lint", "init.pp",
        ]

    def test_describe(self, bundled_tools):
        assert bundled_tools.describe()["erb"] == "/usr/local/bin/bundle exec erb"


class TestToolSet:
    def test_is_immutable(self, direct_tools):
        with pytest.raises(FrozenInstanceError):
            direct_tools.mode = InvocationMode.BUNDLED
        with pytest.raises(TypeError):
            direct_tools.prefixes[ToolName.INTERPRETER] = ("/bin/false",)

    def test_copies_caller_mapping(self):
        prefixes = {ToolName.INTERPRETER: ["/usr/bin/ruby"]}
        tools = ToolSet(prefixes=prefixes)
        prefixes[ToolName.INTERPRETER].append("--evil")
        assert tools.command(ToolName.INTERPRETER) == ["/usr/bin/ruby"]

    def test_unknown_tool(self):
        tools = ToolSet(prefixes={ToolName.INTERPRETER: ("ruby",)})
        with pytest.raises(KeyError):
            tools.command(ToolName.STYLE_LINTER, "init.pp")


class TestValidationCommand:
    def test_single(self):
        command = ValidationCommand.single(["ruby", "-c", "a.rb"])
        assert command.stages == (("ruby", "-c", "a.rb"),)
        assert command.decisive_stage == 0

    def test_pipeline_display(self):
        command = ValidationCommand.pipeline(["erb", "a.erb"], ["ruby", "-c"], decisive_stage=1)
        assert command.display() == "erb a.erb | ruby -c"

    def test_rejects_empty(self):
        with pytest.raises(ValueError):
            ValidationCommand(stages=())

    def test_rejects_out_of_range_decisive_stage(self):
        with pytest.raises(ValueError):
            ValidationCommand.pipeline(["erb"], ["ruby", "-c"], decisive_stage=2)


class TestFileCategories:
    def test_default_order(self):
        assert [category.kind for category in DEFAULT_CATEGORIES] == list(FileCategoryKind)
        assert list_categories() == list(DEFAULT_CATEGORIES)

    def test_patterns(self):
        patterns = {category.kind: category.pattern for category in DEFAULT_CATEGORIES}
        assert patterns == {
            FileCategoryKind.STYLE_CHECK: "*.pp",
            FileCategoryKind.SYNTAX_CHECK: "*.pp",
            FileCategoryKind.COMPILED_TEMPLATE: "*.erb",
            FileCategoryKind.SCRIPT_TEMPLATE: "*.epp",
            FileCategoryKind.INTERPRETED_SCRIPT: "*.rb",
            FileCategoryKind.STRUCTURED_DATA: "*.yaml",
        }

    def test_every_category_excludes_reserved_subtree(self):
        assert all(category.excluded_prefix == RESERVED_SUBTREE for category in DEFAULT_CATEGORIES)

    def test_sentinel_suppressed_for_ruby_syntax_checks_only(self):
        suppressed = {category.kind for category in DEFAULT_CATEGORIES if category.suppress_sentinel}
        assert suppressed == {FileCategoryKind.COMPILED_TEMPLATE, FileCategoryKind.INTERPRETED_SCRIPT}

    def test_get_category_by_string(self):
        assert get_category("script-template").pattern == "*.epp"

    def test_get_category_unknown(self):
        with pytest.raises(ValueError):
            get_category("markdown")

    def test_is_excluded(self):
        category = get_category(FileCategoryKind.STYLE_CHECK)
        assert category.is_excluded("spec/fixtures/modules/stdlib/manifests/init.pp")
        assert not category.is_excluded("spec/classes/init_spec.rb")
        assert not category.is_excluded("manifests/spec/fixtures.pp")


class TestBuildCommand:
    def test_style_check_with_lint_options(self, direct_tools):
        category = get_category(FileCategoryKind.STYLE_CHECK)
        command = category.build_command(direct_tools, Path("manifests/init.pp"), ["--no-80chars-check"])
        assert command.stages == (
            ("/usr/bin/puppet-lint", "--no-80chars-check", "manifests/init.pp"),
        )

    def test_style_check_without_lint_options(self, direct_tools):
        command = get_category(FileCategoryKind.STYLE_CHECK).build_command(direct_tools, "init.pp")
        assert command.stages == (("/usr/bin/puppet-lint", "init.pp"),)

    def test_lint_options_ignored_elsewhere(self, direct_tools):
        command = get_category(FileCategoryKind.SYNTAX_CHECK).build_command(
            direct_tools, "init.pp", ["--no-80chars-check"]
        )
        assert command.stages == (("/opt/puppetlabs/bin/puppet", "parser", "validate", "init.pp"),)

    def test_compiled_template_pipeline(self, direct_tools):
        command = get_category(FileCategoryKind.COMPILED_TEMPLATE).build_command(
            direct_tools, "templates/motd.erb"
        )
        assert command.stages == (
            ("/usr/bin/erb", "-P", "-x", "-T", "-", "templates/motd.erb"),
            ("/usr/bin/ruby", "-c"),
        )
        assert command.decisive_stage == 1

    def test_script_template(self, bundled_tools):
        command = get_category(FileCategoryKind.SCRIPT_TEMPLATE).build_command(
            bundled_tools, "templates/motd.epp"
        )
        assert command.stages == (
            ("/usr/local/bin/bundle", "exec", "puppet", "epp", "validate", "templates/motd.epp"),
        )

    def test_interpreted_script(self, direct_tools):
        command = get_category(FileCategoryKind.INTERPRETED_SCRIPT).build_command(
            direct_tools, "lib/facter/role.rb"
        )
        assert command.stages == (("/usr/bin/ruby", "-c", "lib/facter/role.rb"),)

    def test_structured_data_uses_inline_snippet(self, direct_tools):
        command = get_category(FileCategoryKind.STRUCTURED_DATA).build_command(
            direct_tools, "data/common.yaml"
        )
        assert command.stages == (("/usr/bin/ruby", "-e", YAML_LOAD_SNIPPET, "data/common.yaml"),)


class TestValidationOutcome:
    def test_success(self):
        outcome = ValidationOutcome.success("manifests/init.pp")
        assert outcome.passed
        assert not outcome.failed
        assert outcome.path == Path("manifests/init.pp")

    def test_failure_to_dict(self):
        outcome = ValidationOutcome.failure(
            "data/common.yaml",
            diagnostics="did not find expected key",
            category=FileCategoryKind.STRUCTURED_DATA,
            exit_status=1,
        )
        assert outcome.to_dict() == {
            "path": "data/common.yaml",
            "passed": False,
            "diagnostics": "did not find expected key",
            "category": "structured-data",
            "exit_status": 1,
        }


class TestAggregateStatus:
    def test_initial_state(self):
        status = AggregateStatus()
        assert not status.failed
        assert status.exit_code == 0

    def test_record_returns_new_value(self):
        status = AggregateStatus()
        updated = status.record(ValidationOutcome.success("a.pp"))
        assert updated is not status
        assert status.checked == 0
        assert updated.checked == 1

    def test_failure_is_never_reset(self):
        status = AggregateStatus().record(ValidationOutcome.failure("bad.pp"))
        for index in range(5):
            status = status.record(ValidationOutcome.success(f"good{index}.pp"))
        assert status.failed
        assert status.exit_code == 1
        assert status.checked == 6
        assert status.failures == 1

    def test_to_dict(self):
        status = AggregateStatus().record(ValidationOutcome.failure("bad.pp"))
        assert status.to_dict() == {"failed": True, "checked": 1, "failures": 1, "exit_code": 1}
