"""Most-recently-used file list backed by the session store."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Callable, Protocol

from ..core.errors import StorageError
from ..services.session import MAX_RECENT_FILES, SessionState
from .events import EventBus, RecentFilesChanged, StatusMessage

__all__ = ["RecentFileEntry", "RecentFilesController", "SessionWriter"]

LOGGER = logging.getLogger(__name__)

Opener = Callable[[str], None]


class SessionWriter(Protocol):
    def save(self, state: SessionState) -> Path:
        ...


@dataclass(frozen=True, slots=True)
class RecentFileEntry:
    """One row of the Recent Files menu."""

    label: str
    path: str
    open: Callable[[], None]


class RecentFilesController:
    """Maintains the bounded, de-duplicated MRU list inside ``state``.

    Every mutation is written through to ``store``. A failed write is logged
    and reported on the status line; the in-memory list stays authoritative
    for the rest of the session.
    """

    def __init__(
        self,
        state: SessionState,
        store: SessionWriter,
        bus: EventBus,
        *,
        opener: Opener | None = None,
        failure_message: Callable[[StorageError], str] | None = None,
    ) -> None:
        self._state = state
        self._store = store
        self._bus = bus
        self._opener = opener
        self._failure_message = failure_message or str

    @property
    def entries(self) -> tuple[str, ...]:
        return tuple(self._state.recent_files)

    def set_opener(self, opener: Opener) -> None:
        """Install the callable that shows the editor and opens a path."""

        self._opener = opener

    def record_open(self, path: str | Path) -> None:
        """Move ``path`` to the front of the list, trimming it to the limit."""

        normalized = str(path)
        updated = [normalized]
        updated.extend(existing for existing in self._state.recent_files if existing != normalized)
        self._state.recent_files = updated[:MAX_RECENT_FILES]
        LOGGER.debug("Recorded recent file %s (total=%d)", normalized, len(self._state.recent_files))
        self._persist()

    def clear(self) -> None:
        if not self._state.recent_files:
            return
        self._state.recent_files = []
        self._persist()

    def materialize(self) -> list[RecentFileEntry]:
        """Return the menu rows, labelled with each file's base name."""

        return [
            RecentFileEntry(label=Path(path).name or path, path=path, open=self._open_action(path))
            for path in self._state.recent_files
        ]

    def _open_action(self, path: str) -> Callable[[], None]:
        def _open() -> None:
            if self._opener is None:
                LOGGER.debug("No opener installed; ignoring recent file %s", path)
                return
            try:
                self._opener(path)
            except Exception as exc:
                LOGGER.warning("Unable to reopen recent file %s: %s", path, exc)

        return _open

    def _persist(self) -> None:
        try:
            self._store.save(self._state)
        except StorageError as exc:
            LOGGER.warning("Recent files not persisted: %s", exc)
            self._bus.publish(StatusMessage(self._failure_message(exc)))
        self._bus.publish(RecentFilesChanged(paths=self.entries))
