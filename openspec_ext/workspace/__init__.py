"""
OpenSpec Workspace Prober

Thin, uncached pass-through to the filesystem. Knows where the
spec root, the change directories and the audit trail live inside a
workspace; every OS failure comes back as a WorkspaceError naming the
operation and the path.
"""

from __future__ import annotations

from pathlib import Path

from loguru import logger

from openspec_ext.errors import WorkspaceError

SPEC_ROOT = "openspec"
CHANGES_DIR = "changes"
AUDIT_DIR = Path(".openspec") / "audit"
PROPOSAL_FILE = "proposal.md"


class Workspace:
    """
    Filesystem view of a single workspace root.
    """

    def __init__(self, root: Path):
        self.root = Path(root)

    # ------------------------------------------------------------------
    # Layout
    # ------------------------------------------------------------------

    @property
    def spec_root(self) -> Path:
        return self.root / SPEC_ROOT

    @property
    def changes_dir(self) -> Path:
        return self.spec_root / CHANGES_DIR

    @property
    def audit_dir(self) -> Path:
        return self.root / AUDIT_DIR

    def change_dir(self, change_id: str) -> Path:
        return self.changes_dir / change_id

    def resolve(self, relative: str) -> Path:
        """Join a workspace-relative path onto the root."""
        return self.root / relative

    # ------------------------------------------------------------------
    # Probes
    # ------------------------------------------------------------------

    # An entry that cannot be stat'ed counts as absent.
    def exists(self, path: Path) -> bool:
        try:
            return path.exists()
        except OSError as e:
            logger.debug(f"[WORKSPACE] Cannot stat {path}: {e}")
            return False

    def dir_exists(self, path: Path) -> bool:
        try:
            return path.is_dir()
        except OSError as e:
            logger.debug(f"[WORKSPACE] Cannot stat {path}: {e}")
            return False

    def file_exists(self, path: Path) -> bool:
        try:
            return path.is_file()
        except OSError as e:
            logger.debug(f"[WORKSPACE] Cannot stat {path}: {e}")
            return False

    def read_file(self, path: Path) -> str:
        try:
            return path.read_text(encoding="utf-8")
        except (OSError, UnicodeDecodeError) as e:
            raise WorkspaceError(f"Failed to read file: {path}: {e}") from e

    def write_file(self, path: Path, content: str) -> None:
        try:
            path.write_text(content, encoding="utf-8")
        except OSError as e:
            raise WorkspaceError(f"Failed to write file: {path}: {e}") from e
        logger.debug(f"[WORKSPACE] Wrote {len(content)} chars to {path}")

    def list_subdirectories(self, path: Path) -> list[Path]:
        """Immediate subdirectories of `path`, in directory order."""
        try:
            entries = list(path.iterdir())
        except OSError as e:
            raise WorkspaceError(f"Failed to read directory: {path}: {e}") from e
        return [p for p in entries if self.dir_exists(p)]
