"""archive-change: move a finished change out of the active set."""

from __future__ import annotations

from loguru import logger

from openspec_ext.commands import CommandContext, require_success, run_tool
from openspec_ext.errors import ChangeNotFoundError


def handle_archive_change(ctx: CommandContext, change_id: str) -> str:
    logger.info(f"[OPENSPEC] Archiving change: {change_id}")

    if not ctx.workspace.dir_exists(ctx.workspace.change_dir(change_id)):
        raise ChangeNotFoundError(change_id)

    # TODO: gate on tasks.md completion once task tracking parses checklists
    if ctx.config.workflow.require_all_tasks_complete:
        logger.debug("[OPENSPEC] Task completion check not enforced yet")

    stdout = require_success(
        run_tool(ctx, "archive", change_id, "--yes"),
        "Failed to archive change",
    )
    return f"Change '{change_id}' archived successfully!\n\n{stdout}"
