"""Shared primitives used across the editor shell."""

from .errors import DocumentIOError, PlatformCapabilityUnavailable, ProjectWriterError, StorageError
from .release import RELEASE_NAME, VERSION

__all__ = [
    "DocumentIOError",
    "PlatformCapabilityUnavailable",
    "ProjectWriterError",
    "StorageError",
    "RELEASE_NAME",
    "VERSION",
]
