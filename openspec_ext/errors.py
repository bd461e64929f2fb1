"""
Error taxonomy for OpenSpec commands.

Every error renders to display text through ``str(exc)``. The router is
the only place these are turned into host-facing results.
"""

from __future__ import annotations

INSTALL_HINT = "npm install -g @fission-ai/openspec@latest"


class OpenSpecError(Exception):
    """Base class for every failure a command can report."""
    pass


# ---------------------------------------------------------------------------
# Preconditions
# ---------------------------------------------------------------------------

class NotInitializedError(OpenSpecError):
    def __init__(self, message: str = "OpenSpec not initialized. Run 'initialize-workspace' first."):
        super().__init__(message)


class ChangeNotFoundError(OpenSpecError):
    def __init__(self, change_id: str, message: str | None = None):
        self.change_id = change_id
        super().__init__(message or f"Change '{change_id}' not found")


class InvalidProposalNameError(OpenSpecError):
    def __init__(self, name: str):
        self.name = name
        super().__init__(
            "Invalid proposal name. Use only alphanumeric characters, "
            "hyphens, and underscores. Max 64 characters."
        )


class SpecFileNotFoundError(OpenSpecError):
    def __init__(self, file_path: str):
        self.file_path = file_path
        super().__init__(f"File not found: {file_path}")


class MissingArgumentError(OpenSpecError):
    pass


class UnknownCommandError(OpenSpecError):
    def __init__(self, command: str):
        self.command = command
        super().__init__(f"Unknown command: {command}")


# ---------------------------------------------------------------------------
# External tool
# ---------------------------------------------------------------------------

class CLINotFoundError(OpenSpecError):
    def __init__(self):
        super().__init__(f"OpenSpec CLI not found. Install it with:\n{INSTALL_HINT}")


class ToolSpawnError(OpenSpecError):
    """The external CLI process could not be started at all."""
    pass


class CommandFailedError(OpenSpecError):
    """The external CLI ran but exited non-zero."""

    def __init__(self, message: str, stderr: str = "", exit_code: int | None = None):
        self.stderr = stderr
        self.exit_code = exit_code
        super().__init__(message)


# ---------------------------------------------------------------------------
# IO
# ---------------------------------------------------------------------------

class WorkspaceError(OpenSpecError):
    pass

