"""Shared test fixtures for OpenSpec."""

from __future__ import annotations

from pathlib import Path
from typing import Sequence

import pytest

from openspec_ext.errors import ToolSpawnError
from openspec_ext.spec_tool import ProcessResult


class FakeSpecTool:
    """Records every invocation and answers from a scripted table."""

    def __init__(self, results: dict[str, ProcessResult] | None = None, missing: bool = False):
        self.results = results or {}
        self.missing = missing
        self.calls: list[tuple[str, list[str], Path]] = []

    def invoke(self, subcommand: str, args: Sequence[str], cwd: Path) -> ProcessResult:
        self.calls.append((subcommand, list(args), cwd))
        if self.missing:
            raise ToolSpawnError(f"Failed to execute openspec {subcommand}: not installed")
        return self.results.get(subcommand, ProcessResult(exit_code=0, stdout=f"{subcommand} done\n"))


def make_change(root: Path, name: str, with_proposal: bool = True) -> Path:
    change = root / "openspec" / "changes" / name
    change.mkdir(parents=True, exist_ok=True)
    if with_proposal:
        (change / "proposal.md").write_text(f"# {name}\n")
    return change


@pytest.fixture
def tool() -> FakeSpecTool:
    return FakeSpecTool()


@pytest.fixture
def initialized(tmp_path: Path) -> Path:
    """A workspace root with an (empty) openspec/changes tree."""
    (tmp_path / "openspec" / "changes").mkdir(parents=True)
    return tmp_path

