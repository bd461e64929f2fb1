"""view-audit: audit trail viewer (placeholder)."""

from __future__ import annotations

from loguru import logger

from openspec_ext.commands import CommandContext

NO_AUDIT = (
    "No audit entries found. Generate code with 'apply-change' "
    "to create audit records."
)


def handle_view_audit(ctx: CommandContext, filter: str | None = None) -> str:
    logger.info("[OPENSPEC] Viewing audit trail")
    if filter:
        logger.debug(f"[OPENSPEC] Audit filter ignored: {filter}")

    audit_dir = ctx.workspace.audit_dir
    if not ctx.workspace.dir_exists(audit_dir):
        return NO_AUDIT

    return (
        "Audit trail viewer is not yet implemented.\n\n"
        f"Audit entries will be stored in: {audit_dir}\n\n"
        "Features coming:\n"
        "- View all code generation audit entries\n"
        "- Filter by developer, change, LLM provider, date\n"
        "- Export audit data for compliance\n"
        "- Cryptographic signature verification"
    )
