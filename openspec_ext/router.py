"""
OpenSpec Router: Command Dispatch

Maps host command names to handlers by exact string match, checks
positional arguments before anything touches the workspace or the
external CLI, and folds every outcome into a two-variant
CommandResult. No retries, no recovery: a failure is final for that
invocation.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Callable, Sequence

from loguru import logger
from pydantic import BaseModel

from openspec_ext.commands import CommandContext
from openspec_ext.commands.apply import handle_apply_change
from openspec_ext.commands.archive import handle_archive_change
from openspec_ext.commands.audit import handle_view_audit
from openspec_ext.commands.coverage import handle_show_coverage
from openspec_ext.commands.init import handle_init
from openspec_ext.commands.listing import handle_list_changes
from openspec_ext.commands.proposal import handle_new_proposal
from openspec_ext.commands.validate import handle_validate_file
from openspec_ext.config_loader import ExtensionConfig, load_or_default, unknown_fallback_providers
from openspec_ext.errors import MissingArgumentError, OpenSpecError, UnknownCommandError
from openspec_ext.spec_tool import OpenSpecCLI, SpecTool
from openspec_ext.workspace import Workspace

ERROR_TAG = "[OpenSpec]"


# ---------------------------------------------------------------------------
# Results
# ---------------------------------------------------------------------------

class CommandResult(BaseModel):
    ok: bool
    text: str

    @classmethod
    def success(cls, text: str) -> CommandResult:
        return cls(ok=True, text=text)

    @classmethod
    def failure(cls, message: str) -> CommandResult:
        return cls(ok=False, text=f"{ERROR_TAG} {message}")


# ---------------------------------------------------------------------------
# Routing table
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class Route:
    handler: Callable[..., str]
    required: tuple[str, ...] = ()  # one "argument required" message per positional
    optional: int = 0


def _apply(ctx: CommandContext, change_id: str, llm_provider: str | None = None) -> str:
    if llm_provider is None:
        llm_provider = ctx.config.llm.default_provider
    return handle_apply_change(ctx, change_id, llm_provider)


ROUTES: dict[str, Route] = {
    "initialize-workspace": Route(handle_init),
    "create-proposal": Route(handle_new_proposal, required=("Proposal name required",)),
    "apply-change": Route(_apply, required=("Change ID required",), optional=1),
    "archive-change": Route(handle_archive_change, required=("Change ID required",)),
    "list-changes": Route(handle_list_changes),
    "view-audit": Route(handle_view_audit, optional=1),
    "validate-file": Route(handle_validate_file, required=("File path required",)),
    "show-coverage": Route(handle_show_coverage),
}


def _extract(route: Route, args: Sequence[str]) -> list[str | None]:
    """Positional values for the handler: required first, then optional padded with None."""
    if len(args) < len(route.required):
        raise MissingArgumentError(route.required[len(args)])
    wanted = len(route.required) + route.optional
    values: list[str | None] = list(args[:wanted])
    values.extend([None] * (wanted - len(values)))
    return values


# ---------------------------------------------------------------------------
# Router
# ---------------------------------------------------------------------------

class CommandRouter:
    """
    Host-facing dispatcher.

    The host calls `router.dispatch(command, args, workspace_root)`.
    The router resolves the handler, validates arguments, builds a
    CommandContext and returns a CommandResult.
    """

    def __init__(
        self,
        config: ExtensionConfig,
        tool: SpecTool | None = None,
        workspace_factory: Callable[[Path], Workspace] = Workspace,
    ):
        self.config = config
        self.tool = tool or OpenSpecCLI()
        self._workspace_factory = workspace_factory
        self._routes = dict(ROUTES)

    @property
    def commands(self) -> list[str]:
        return list(self._routes)

    def dispatch(self, command: str, args: Sequence[str], workspace_root: Path) -> CommandResult:
        """Run one command and report its outcome as success or error text."""
        logger.info(f"[ROUTER] dispatch {command} args={list(args)}")
        try:
            text = self._execute(command, args, Path(workspace_root))
        except OpenSpecError as e:
            logger.info(f"[ROUTER] {command} failed: {e}")
            return CommandResult.failure(str(e))
        logger.info(f"[ROUTER] {command} succeeded")
        return CommandResult.success(text)

    def _execute(self, command: str, args: Sequence[str], workspace_root: Path) -> str:
        route = self._routes.get(command)
        if route is None:
            raise UnknownCommandError(command)

        values = _extract(route, args)
        ctx = CommandContext(
            workspace=self._workspace_factory(workspace_root),
            tool=self.tool,
            config=self.config,
        )
        return route.handler(ctx, *values)


def build_router(config: ExtensionConfig | None = None, tool: SpecTool | None = None) -> CommandRouter:
    """Process-start initialisation: one configuration, one router."""
    if config is None:
        config = load_or_default()
    for name in unknown_fallback_providers(config):
        logger.warning(f"[ROUTER] Fallback provider '{name}' has no provider configuration")
    router = CommandRouter(config, tool=tool)
    logger.info(f"[ROUTER] OpenSpec extension initialized ({len(router.commands)} commands)")
    return router
