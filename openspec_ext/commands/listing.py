"""list-changes: enumerate active changes that carry a proposal."""

from __future__ import annotations

from loguru import logger

from openspec_ext.commands import CommandContext
from openspec_ext.workspace import PROPOSAL_FILE

NO_CHANGES_DIR = "No changes found. OpenSpec may not be initialized or no proposals created yet."
NO_CHANGES = "No changes found. Create one with 'create-proposal'"


def find_changes(ctx: CommandContext) -> list[str]:
    """Sorted names of subdirectories holding a top-level proposal.md."""
    workspace = ctx.workspace
    return sorted(
        d.name for d in workspace.list_subdirectories(workspace.changes_dir)
        if workspace.file_exists(d / PROPOSAL_FILE)
    )


def handle_list_changes(ctx: CommandContext) -> str:
    logger.info("[OPENSPEC] Listing changes")

    if not ctx.workspace.dir_exists(ctx.workspace.changes_dir):
        return NO_CHANGES_DIR

    changes = find_changes(ctx)
    if not changes:
        return NO_CHANGES

    numbered = "\n".join(f"{i}. {name}" for i, name in enumerate(changes, start=1))
    return (
        f"OpenSpec Changes ({len(changes)}):\n\n{numbered}\n\n"
        f"Use 'apply-change <name>' to generate code for a change."
    )
