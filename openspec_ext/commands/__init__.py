"""
OpenSpec Command Handlers

Each handler:
  - Takes a CommandContext plus its already-extracted arguments
  - Checks workspace preconditions before doing any work
  - Returns display text, or raises an OpenSpecError

Handlers never build host results. That is the router's job.
"""

from __future__ import annotations

from dataclasses import dataclass

from openspec_ext.config_loader import ExtensionConfig
from openspec_ext.errors import CommandFailedError, ToolSpawnError
from openspec_ext.spec_tool import ProcessResult, SpecTool
from openspec_ext.workspace import Workspace


@dataclass
class CommandContext:
    """Everything a handler may touch for one invocation."""
    workspace: Workspace
    tool: SpecTool
    config: ExtensionConfig


def run_tool(ctx: CommandContext, subcommand: str, *args: str) -> ProcessResult:
    """Invoke the external CLI in the workspace root, spawn failures included."""
    try:
        return ctx.tool.invoke(subcommand, list(args), ctx.workspace.root)
    except OSError as e:
        raise ToolSpawnError(f"Failed to execute openspec {subcommand}: {e}") from e


def require_success(result: ProcessResult, failure_header: str) -> str:
    """Return stdout of a successful run; raise with stderr otherwise."""
    if not result.ok:
        raise CommandFailedError(
            f"{failure_header}:\n{result.stderr}",
            stderr=result.stderr,
            exit_code=result.exit_code,
        )
    return result.stdout
