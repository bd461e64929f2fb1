"""
OpenSpec ← External CLI bridge

Every real mutation of a workspace (init, proposal scaffolding,
archiving) is done by the separately installed `openspec` CLI.
This module is the only place that spawns it.

Usage:
    tool = OpenSpecCLI()
    if tool.available:
        result = tool.invoke("proposal", ["add-auth"], cwd=workspace_root)
        if result.ok:
            print(result.stdout)
"""

from __future__ import annotations

import shutil
import subprocess
from dataclasses import dataclass
from pathlib import Path
from typing import Protocol, Sequence

from loguru import logger

from openspec_ext.errors import ToolSpawnError

DEFAULT_EXECUTABLE = "openspec"


@dataclass(frozen=True)
class ProcessResult:
    exit_code: int
    stdout: str = ""
    stderr: str = ""

    @property
    def ok(self) -> bool:
        return self.exit_code == 0


class SpecTool(Protocol):
    """Anything that can run an OpenSpec subcommand in a directory."""

    def invoke(self, subcommand: str, args: Sequence[str], cwd: Path) -> ProcessResult:
        ...


def _decode(stream: bytes | None) -> str:
    return (stream or b"").decode("utf-8", errors="replace")


class OpenSpecCLI:
    """
    Subprocess wrapper around the `openspec` executable.

    Runs synchronously with the workspace root as cwd. Output is
    captured as bytes and decoded lossily, so decoding never fails.
    """

    def __init__(self, executable: str = DEFAULT_EXECUTABLE):
        self.executable = executable

    @property
    def available(self) -> bool:
        """Is the CLI on PATH?"""
        return shutil.which(self.executable) is not None

    def invoke(self, subcommand: str, args: Sequence[str], cwd: Path) -> ProcessResult:
        cmd = [self.executable, subcommand, *args]
        logger.debug(f"[OPENSPEC] Running: {' '.join(cmd)} (cwd={cwd})")

        try:
            completed = subprocess.run(cmd, cwd=str(cwd), capture_output=True)
        except OSError as e:
            raise ToolSpawnError(f"Failed to execute openspec {subcommand}: {e}") from e

        result = ProcessResult(
            exit_code=completed.returncode,
            stdout=_decode(completed.stdout),
            stderr=_decode(completed.stderr),
        )
        logger.debug(f"[OPENSPEC] {subcommand} exited with {result.exit_code}")
        return result

    def version(self, cwd: Path) -> str | None:
        """Return the installed CLI version string, or None if unusable."""
        try:
            result = self.invoke("--version", [], cwd)
        except ToolSpawnError:
            return None
        return result.stdout.strip() if result.ok else None
