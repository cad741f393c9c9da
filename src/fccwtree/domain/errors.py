from __future__ import annotations

"""
Workspace Error Taxonomy.

Defines the exceptions raised by the indexing and file operation services.
Every recoverable failure carries the offending path so interface layers
can report it without re-deriving context.
"""

from typing import Optional


# -----------------------------------------------------------------------------
# BASE ERROR
# -----------------------------------------------------------------------------

class WorkspaceError(RuntimeError):
    """
    Base class for failures that abort a single workspace operation.

    Attributes:
        path: Filesystem path involved in the failure, if any.
        reason: Human readable cause.
    """

    def __init__(self, reason: str, path: Optional[str] = None) -> None:
        self.path = path
        self.reason = reason
        message = f"{reason}: {path}" if path else reason
        super().__init__(message)


# -----------------------------------------------------------------------------
# CONCRETE ERRORS
# -----------------------------------------------------------------------------

class ConfigParseError(WorkspaceError):
    """Configuration file content is malformed or violates the schema."""


class FilesystemAccessError(WorkspaceError):
    """A path is missing, unreadable or could not be written."""


class InvalidNameError(WorkspaceError):
    """A user-supplied file name cannot be placed inside the target directory."""


class UserCancelled(Exception):
    """The user dismissed a prompt. Handled as a silent no-op."""
