from pathlib import Path

import pytest

from loguru import logger

from conftest import FakeSpecTool, make_change
from openspec_ext.config_loader import ExtensionConfig
from openspec_ext.router import ERROR_TAG, CommandResult, CommandRouter, build_router
from openspec_ext.spec_tool import ProcessResult
from openspec_ext.workspace import Workspace


class RecordingFactory:
    """Workspace factory that remembers every root it was asked for."""

    def __init__(self):
        self.roots: list[Path] = []

    def __call__(self, root: Path) -> Workspace:
        self.roots.append(root)
        return Workspace(root)


@pytest.fixture
def factory() -> RecordingFactory:
    return RecordingFactory()


@pytest.fixture
def router(tool: FakeSpecTool, factory: RecordingFactory) -> CommandRouter:
    return CommandRouter(ExtensionConfig(), tool=tool, workspace_factory=factory)


def test_command_table():
    assert build_router(tool=FakeSpecTool()).commands == [
        "initialize-workspace",
        "create-proposal",
        "apply-change",
        "archive-change",
        "list-changes",
        "view-audit",
        "validate-file",
        "show-coverage",
    ]


def test_unknown_command(router: CommandRouter, tmp_path: Path, factory: RecordingFactory):
    result = router.dispatch("openspec:init", [], tmp_path)

    assert result == CommandResult(ok=False, text=f"{ERROR_TAG} Unknown command: openspec:init")
    assert factory.roots == []


def test_command_names_are_case_sensitive(router: CommandRouter, tmp_path: Path):
    result = router.dispatch("List-Changes", [], tmp_path)
    assert not result.ok
    assert "List-Changes" in result.text


@pytest.mark.parametrize("command, message", [
    ("create-proposal", "Proposal name required"),
    ("apply-change", "Change ID required"),
    ("archive-change", "Change ID required"),
    ("validate-file", "File path required"),
])
def test_missing_argument_precedes_side_effects(
    router: CommandRouter,
    tool: FakeSpecTool,
    factory: RecordingFactory,
    tmp_path: Path,
    command: str,
    message: str,
):
    result = router.dispatch(command, [], tmp_path)

    assert result.ok is False
    assert result.text == f"{ERROR_TAG} {message}"
    assert factory.roots == []
    assert tool.calls == []


def test_apply_defaults_to_configured_provider(router: CommandRouter, initialized: Path):
    make_change(initialized, "add-auth")

    result = router.dispatch("apply-change", ["add-auth"], initialized)

    assert result.ok
    assert "LLM Provider configured: claude" in result.text


def test_apply_explicit_provider(router: CommandRouter, initialized: Path):
    make_change(initialized, "add-auth")

    result = router.dispatch("apply-change", ["add-auth", "gpt-4"], initialized)

    assert "LLM Provider configured: gpt-4" in result.text


def test_handler_errors_are_tagged(router: CommandRouter, initialized: Path):
    result = router.dispatch("archive-change", ["ghost"], initialized)
    assert result.text == f"{ERROR_TAG} Change 'ghost' not found"


def test_external_failure_keeps_stderr(initialized: Path):
    tool = FakeSpecTool({"proposal": ProcessResult(1, stderr="boom\n")})
    router = CommandRouter(ExtensionConfig(), tool=tool)

    result = router.dispatch("create-proposal", ["add-auth"], initialized)

    assert result.text == f"{ERROR_TAG} Failed to create proposal:\nboom\n"


def test_list_changes_through_router(router: CommandRouter, initialized: Path, factory: RecordingFactory):
    for name in ("b", "a"):
        make_change(initialized, name)
    make_change(initialized, "c", with_proposal=False)

    result = router.dispatch("list-changes", [], initialized)

    assert result.ok
    assert "1. a\n2. b" in result.text
    assert factory.roots == [initialized]


def test_view_audit_accepts_unused_filter(router: CommandRouter, tmp_path: Path):
    result = router.dispatch("view-audit", ["change=add-auth"], tmp_path)
    assert result.ok
    assert result.text.startswith("No audit entries found.")


def test_extra_arguments_are_ignored(router: CommandRouter, initialized: Path, tool: FakeSpecTool):
    make_change(initialized, "add-auth")

    result = router.dispatch("archive-change", ["add-auth", "extra"], initialized)

    assert result.ok
    assert tool.calls == [("archive", ["add-auth", "--yes"], initialized)]


def test_string_workspace_root(router: CommandRouter, tmp_path: Path, factory: RecordingFactory):
    router.dispatch("show-coverage", [], str(tmp_path))
    assert factory.roots == [tmp_path]


@pytest.fixture
def log_messages():
    messages: list[str] = []
    handler_id = logger.add(lambda m: messages.append(m.record["message"]), level="DEBUG")
    yield messages
    logger.remove(handler_id)


def test_trace_lines_on_success(router: CommandRouter, initialized: Path, log_messages: list[str]):
    router.dispatch("list-changes", ["--all"], initialized)

    traces = [m for m in log_messages if m.startswith("[ROUTER]")]
    assert traces == [
        "[ROUTER] dispatch list-changes args=['--all']",
        "[ROUTER] list-changes succeeded",
    ]


def test_trace_lines_on_failure(router: CommandRouter, tmp_path: Path, log_messages: list[str]):
    router.dispatch("archive-change", [], tmp_path)

    traces = [m for m in log_messages if m.startswith("[ROUTER]")]
    assert traces == [
        "[ROUTER] dispatch archive-change args=[]",
        "[ROUTER] archive-change failed: Change ID required",
    ]


def test_build_router_warns_on_unknown_fallback(log_messages: list[str]):
    config = ExtensionConfig.model_validate({"llm": {"fallback_chain": ["mistral"]}})

    router = build_router(config, tool=FakeSpecTool())

    assert router.config.llm.fallback_chain == ["mistral"]
    assert "[ROUTER] Fallback provider 'mistral' has no provider configuration" in log_messages


def test_apply_empty_provider_is_kept(router: CommandRouter, initialized: Path):
    make_change(initialized, "add-auth")

    result = router.dispatch("apply-change", ["add-auth", ""], initialized)

    assert result.ok
    assert "LLM Provider configured: \n" in result.text


def test_list_changes_skips_unreadable_change(router: CommandRouter, initialized: Path, monkeypatch):
    make_change(initialized, "a")
    locked = make_change(initialized, "locked")
    real_is_file = Path.is_file

    def is_file(self, *args, **kwargs):
        if locked in self.parents:
            raise PermissionError(13, "Permission denied", str(self))
        return real_is_file(self, *args, **kwargs)

    monkeypatch.setattr(Path, "is_file", is_file)

    result = router.dispatch("list-changes", [], initialized)

    assert result.ok
    assert "OpenSpec Changes (1):" in result.text
    assert "1. a" in result.text
    assert "locked" not in result.text
