"""
validate-file: structural checks on a single spec document.

Content problems only ever produce warnings. The command fails only
when the file is missing or cannot be read as text.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from loguru import logger

from openspec_ext.commands import CommandContext
from openspec_ext.errors import SpecFileNotFoundError

SPEC_ROOT_PREFIX = "openspec/"
REQUIREMENT_MARKER = "### Requirement:"
SCENARIO_MARKER = "#### Scenario:"
ADDED_MARKER = "## ADDED"


@dataclass
class ValidationReport:
    file_path: str
    requirement_count: int = 0
    scenario_count: int = 0
    warnings: list[str] = field(default_factory=list)

    @property
    def passed(self) -> bool:
        return not self.warnings

    def render(self) -> str:
        found = (
            "Found:\n"
            f"- {self.requirement_count} requirement(s)\n"
            f"- {self.scenario_count} scenario(s)"
        )
        if self.passed:
            return f"✓ Validation passed for: {self.file_path}\n\n{found}"
        listed = "\n".join(f"{i}. {w}" for i, w in enumerate(self.warnings, start=1))
        return f"⚠ Validation warnings for: {self.file_path}\n\n{listed}\n\n{found}"


def check_spec(file_path: str, content: str) -> ValidationReport:
    """Run the structural checks; markers are counted as literal substrings."""
    report = ValidationReport(
        file_path=file_path,
        requirement_count=content.count(REQUIREMENT_MARKER),
        scenario_count=content.count(SCENARIO_MARKER),
    )

    if not file_path.startswith(SPEC_ROOT_PREFIX):
        report.warnings.append("File is not in openspec/ directory")

    if REQUIREMENT_MARKER not in content and ADDED_MARKER not in content:
        report.warnings.append("No requirements or spec deltas found")

    if report.requirement_count > 0 and report.scenario_count == 0:
        report.warnings.append("Requirements found but no scenarios defined")

    return report


def handle_validate_file(ctx: CommandContext, file_path: str) -> str:
    logger.info(f"[OPENSPEC] Validating file: {file_path}")

    full_path = ctx.workspace.resolve(file_path)
    if not ctx.workspace.exists(full_path):
        raise SpecFileNotFoundError(file_path)

    content = ctx.workspace.read_file(full_path)
    report = check_spec(file_path, content)
    logger.debug(
        f"[OPENSPEC] {file_path}: {report.requirement_count} requirements, "
        f"{report.scenario_count} scenarios, {len(report.warnings)} warnings"
    )
    return report.render()
