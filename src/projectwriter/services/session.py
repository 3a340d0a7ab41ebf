"""Session state dataclass and the line-oriented persistence adapter."""

from __future__ import annotations

import locale
import logging
import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Iterable

from ..core.errors import StorageError
from ..utils.file_io import read_text, write_text

__all__ = [
    "MAX_RECENT_FILES",
    "SUPPORTED_LANGUAGES",
    "DEFAULT_LANGUAGE",
    "SessionState",
    "SessionStore",
    "default_language",
    "normalize_recent_files",
]

LOGGER = logging.getLogger(__name__)
_SESSION_DIR = Path.home() / ".projectwriter"
_DEFAULT_SESSION_PATH = _SESSION_DIR / "project.dat"
_PATH_ENV = "PROJECTWRITER_SESSION_PATH"
MAX_RECENT_FILES = 10
SUPPORTED_LANGUAGES: tuple[str, ...] = ("en", "de")
DEFAULT_LANGUAGE = "en"


@dataclass(slots=True)
class SessionState:
    """State persisted between runs: UI language and the recent-file list."""

    language: str = DEFAULT_LANGUAGE
    recent_files: list[str] = field(default_factory=list)


def default_language(locale_name: str | None = None) -> str:
    """Map a host locale such as ``de_DE`` onto a supported language tag."""

    candidate = locale_name
    if candidate is None:
        candidate = locale.getlocale()[0] or os.environ.get("LANG") or ""
    tag = candidate.replace("-", "_").split("_", 1)[0].strip().lower()
    if tag in SUPPORTED_LANGUAGES:
        return tag
    return DEFAULT_LANGUAGE


def normalize_recent_files(paths: Iterable[str]) -> list[str]:
    """Drop blanks and duplicates, keeping first occurrences, capped at the limit."""

    result: list[str] = []
    for raw in paths:
        path = raw.strip()
        if not path or path in result:
            continue
        result.append(path)
        if len(result) >= MAX_RECENT_FILES:
            break
    return result


class SessionStore:
    """Persistence adapter for :class:`SessionState`.

    The file is plain text: the first line holds the language tag and every
    following line one recent path, most recent first. Paths containing a
    newline cannot be represented.
    """

    def __init__(self, path: Path | str | None = None, *, locale_name: str | None = None) -> None:
        self._path = _resolve_path(path)
        self._locale_name = locale_name

    @property
    def path(self) -> Path:
        """Return the resolved path backing this store."""

        return self._path

    def defaults(self) -> SessionState:
        """Return the first-run state for this host."""

        return SessionState(language=default_language(self._locale_name))

    def load(self) -> SessionState:
        """Read the session file, synthesizing defaults when it is absent or unreadable."""

        if not self._path.exists():
            LOGGER.debug("No session file at %s; using first-run defaults", self._path)
            return self.defaults()
        try:
            text = read_text(self._path)
        except (OSError, UnicodeDecodeError) as exc:
            LOGGER.warning("Unable to read session file %s: %s", self._path, exc)
            return self.defaults()

        lines = text.split("\n")
        language = lines[0].strip().lower() if lines else ""
        if language not in SUPPORTED_LANGUAGES:
            if language:
                LOGGER.warning("Ignoring unsupported language tag %r in %s", language, self._path)
            language = default_language(self._locale_name)
        state = SessionState(language=language, recent_files=normalize_recent_files(lines[1:]))
        LOGGER.debug(
            "Session loaded from %s: language=%s, %d recent file(s)",
            self._path,
            state.language,
            len(state.recent_files),
        )
        return state

    def save(self, state: SessionState) -> Path:
        """Write ``state`` to disk, raising :class:`StorageError` when the medium refuses."""

        lines = [state.language, *state.recent_files[:MAX_RECENT_FILES]]
        body = "\n".join(lines) + "\n"
        try:
            write_text(self._path, body)
        except OSError as exc:
            raise StorageError(self._path, str(exc)) from exc
        LOGGER.debug(
            "Session saved to %s: language=%s, %d recent file(s)",
            self._path,
            state.language,
            len(state.recent_files),
        )
        return self._path


def _resolve_path(path: Path | str | None) -> Path:
    env_override = os.environ.get(_PATH_ENV)
    return Path(path or env_override or _DEFAULT_SESSION_PATH).expanduser()
