"""Exception hierarchy shared by the session, theme, and document layers.

None of these errors is fatal to the running application. Callers catch them
at the shell boundary, keep the previous good state, and surface a status
message instead of aborting.
"""

from __future__ import annotations

from pathlib import Path

__all__ = [
    "ProjectWriterError",
    "PlatformCapabilityUnavailable",
    "StorageError",
    "DocumentIOError",
]


class ProjectWriterError(Exception):
    """Base class for all Project Writer failures."""


class PlatformCapabilityUnavailable(ProjectWriterError):
    """Raised when an optional OS capability (glass composition) cannot be used."""

    def __init__(self, capability: str, reason: str | None = None) -> None:
        self.capability = capability
        self.reason = reason
        message = f"{capability} is unavailable"
        if reason:
            message = f"{message}: {reason}"
        super().__init__(message)


class StorageError(ProjectWriterError):
    """Raised when the session file cannot be read or written."""

    def __init__(self, path: Path | str, reason: str) -> None:
        self.path = Path(path)
        self.reason = reason
        super().__init__(f"Unable to access session file {self.path}: {reason}")


class DocumentIOError(ProjectWriterError):
    """Raised when a user document cannot be opened or saved."""

    def __init__(self, path: Path | str, operation: str, reason: str) -> None:
        self.path = Path(path)
        self.operation = operation
        self.reason = reason
        super().__init__(f"Failed to {operation} {self.path.name}: {reason}")
