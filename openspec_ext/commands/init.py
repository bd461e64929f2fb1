"""initialize-workspace: bootstrap OpenSpec in the workspace root."""

from __future__ import annotations

from loguru import logger

from openspec_ext.commands import CommandContext, require_success, run_tool
from openspec_ext.errors import CLINotFoundError, ToolSpawnError


def handle_init(ctx: CommandContext) -> str:
    logger.info(f"[OPENSPEC] Initializing OpenSpec in: {ctx.workspace.root}")

    try:
        version_check = run_tool(ctx, "--version")
    except ToolSpawnError as e:
        raise CLINotFoundError() from e
    if not version_check.ok:
        raise CLINotFoundError()
    logger.info(f"[OPENSPEC] Found OpenSpec CLI: {version_check.stdout.strip()}")

    stdout = require_success(run_tool(ctx, "init"), "OpenSpec init failed")
    return f"OpenSpec initialized successfully!\n\n{stdout}"
