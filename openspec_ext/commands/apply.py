"""apply-change: precondition checks for LLM code generation (not wired to a model yet)."""

from __future__ import annotations

from loguru import logger

from openspec_ext.commands import CommandContext
from openspec_ext.errors import ChangeNotFoundError


def handle_apply_change(ctx: CommandContext, change_id: str, llm_provider: str) -> str:
    logger.info(f"[OPENSPEC] Applying change: {change_id} with provider: {llm_provider}")

    if not ctx.workspace.dir_exists(ctx.workspace.change_dir(change_id)):
        raise ChangeNotFoundError(
            change_id,
            f"Change '{change_id}' not found. "
            f"Available changes can be viewed with 'list-changes'",
        )

    return (
        f"Code generation for change '{change_id}' is not yet implemented.\n\n"
        f"For now, you can:\n"
        f"1. Manually implement the tasks in openspec/changes/{change_id}/tasks.md\n"
        f"2. Mark tasks as complete in tasks.md\n"
        f"3. Run 'archive-change' when all tasks are done\n\n"
        f"LLM Provider configured: {llm_provider}\n"
        f"Configuration: {ctx.config.llm!r}"
    )
