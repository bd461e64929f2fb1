"""show-coverage: spec coverage analysis (placeholder)."""

from __future__ import annotations

from loguru import logger

from openspec_ext.commands import CommandContext

NOT_INITIALIZED = "OpenSpec not initialized. Run 'initialize-workspace' first."


def handle_show_coverage(ctx: CommandContext) -> str:
    logger.info("[OPENSPEC] Showing coverage analysis")

    if not ctx.workspace.dir_exists(ctx.workspace.spec_root):
        return NOT_INITIALIZED

    return (
        "Coverage analysis is not yet implemented.\n\n"
        "Features coming:\n"
        "- Calculate spec coverage (% of code from specs vs ad-hoc)\n"
        "- File-level coverage indicators\n"
        "- Line-level spec→code mapping\n"
        "- Visual coverage heat maps\n"
        "- Coverage trends over time\n\n"
        "Coverage will be calculated from audit trail data."
    )
