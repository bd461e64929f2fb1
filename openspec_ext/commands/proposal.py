"""create-proposal: scaffold a new change through the external CLI."""

from __future__ import annotations

from loguru import logger

from openspec_ext.commands import CommandContext, require_success, run_tool
from openspec_ext.errors import InvalidProposalNameError, NotInitializedError

MAX_NAME_LENGTH = 64


def is_valid_proposal_name(name: str) -> bool:
    """1-64 characters, each alphanumeric, '-' or '_'."""
    if not name or len(name) > MAX_NAME_LENGTH:
        return False
    return all(c.isalnum() or c in "-_" for c in name)


def handle_new_proposal(ctx: CommandContext, name: str) -> str:
    logger.info(f"[OPENSPEC] Creating new proposal: {name}")

    if not is_valid_proposal_name(name):
        raise InvalidProposalNameError(name)

    if not ctx.workspace.dir_exists(ctx.workspace.spec_root):
        raise NotInitializedError()

    stdout = require_success(run_tool(ctx, "proposal", name), "Failed to create proposal")
    return (
        f"Proposal '{name}' created successfully!\n\n{stdout}\n\n"
        f"Next steps:\n"
        f"1. Edit openspec/changes/{name}/proposal.md\n"
        f"2. Add specs to openspec/changes/{name}/specs/\n"
        f"3. Define tasks in openspec/changes/{name}/tasks.md\n"
        f"4. Run 'apply-change' to generate code"
    )
