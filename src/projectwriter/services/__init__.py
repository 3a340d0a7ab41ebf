"""Persistence services for the editor shell."""

from .session import (
    MAX_RECENT_FILES,
    SUPPORTED_LANGUAGES,
    SessionState,
    SessionStore,
    default_language,
)

__all__ = [
    "MAX_RECENT_FILES",
    "SUPPORTED_LANGUAGES",
    "SessionState",
    "SessionStore",
    "default_language",
]
