"""Two-way synchronization between the formatting toolbar and the selection.

The controller is an explicit two-state machine. While it is ``APPLYING``
it is writing either into the toolbar controls or into the text surface, and
every notification those writes echo back is dropped. That is the only
thing preventing "selection changed" and "control changed" handlers from
driving each other forever.
"""

from __future__ import annotations

import logging
import math
from contextlib import contextmanager
from enum import Enum
from typing import Callable, Iterator, Protocol

from ..theme.models import ColorTuple
from .formatting import (
    BODY_COLOR,
    BODY_FONT,
    HEADING_COLOR,
    HEADING_FONT,
    FontChange,
    FontSpec,
    SelectionFontView,
    TextSurface,
)

__all__ = ["FormattingControls", "SelectionSyncController", "SyncState", "parse_font_size"]

LOGGER = logging.getLogger(__name__)


class SyncState(Enum):
    IDLE = "idle"
    APPLYING = "applying"


class FormattingControls(Protocol):
    """Toolbar widgets mirrored from the selection font."""

    def show_font_name(self, family: str) -> None:
        ...

    def show_font_size(self, text: str) -> None:
        ...

    def show_bold(self, checked: bool) -> None:
        ...

    def show_italic(self, checked: bool) -> None:
        ...


StateListener = Callable[[SyncState], None]


def parse_font_size(text: str) -> float | None:
    """Parse the size box; returns ``None`` for anything that is not a usable size."""

    try:
        value = float(str(text).strip().replace(",", "."))
    except ValueError:
        return None
    if not math.isfinite(value) or value <= 0:
        return None
    return value


class SelectionSyncController:
    """Keeps the formatting controls and the live selection consistent."""

    def __init__(self, surface: TextSurface, controls: FormattingControls) -> None:
        self._surface = surface
        self._controls = controls
        self._state = SyncState.IDLE
        self._listeners: list[StateListener] = []

    @property
    def state(self) -> SyncState:
        return self._state

    def add_state_listener(self, listener: StateListener) -> None:
        """Register ``listener`` to observe every state transition."""

        self._listeners.append(listener)

    # ------------------------------------------------------------------
    # Document -> controls
    # ------------------------------------------------------------------
    def on_selection_changed(self) -> None:
        """Mirror the current selection font into the toolbar."""

        with self._applying("selection") as active:
            if not active:
                return
            font = self._current_font()
            if font is None:
                return
            view = SelectionFontView.from_font(font)
            self._controls.show_font_name(view.family)
            self._controls.show_font_size(str(view.size_pt))
            self._controls.show_bold(view.bold)
            self._controls.show_italic(view.italic)

    # ------------------------------------------------------------------
    # Controls -> document
    # ------------------------------------------------------------------
    def on_font_name_changed(self, family: str) -> None:
        family = (family or "").strip()
        if not family:
            return
        self._write_font("font name", FontChange(family=family))

    def on_font_size_changed(self, text: str) -> None:
        size = parse_font_size(text)
        if size is None:
            LOGGER.debug("Ignoring unparseable font size %r", text)
        self._write_font("font size", FontChange(size=size))

    def on_bold_toggled(self, checked: bool) -> None:
        self._write_font("bold", FontChange(bold=bool(checked)))

    def on_italic_toggled(self, checked: bool) -> None:
        self._write_font("italic", FontChange(italic=bool(checked)))

    def on_heading_toggled(self, checked: bool) -> None:
        """Apply the heading style, or restore body text when switched off."""

        font, color = (HEADING_FONT, HEADING_COLOR) if checked else (BODY_FONT, BODY_COLOR)
        with self._applying("heading") as active:
            if not active:
                return
            self._surface.set_selection_font(font)
            self._surface.set_selection_color(color)
            self._surface.focus()

    def apply_color(self, color: ColorTuple) -> None:
        with self._applying("color") as active:
            if not active:
                return
            self._surface.set_selection_color(color)
            self._surface.focus()

    def apply_font(self, font: FontSpec) -> None:
        """Write a complete font, e.g. one chosen in the font dialog."""

        with self._applying("font") as active:
            if not active:
                return
            self._surface.set_selection_font(font)
            self._surface.focus()

    # ------------------------------------------------------------------
    # Internals
    # ------------------------------------------------------------------
    def _write_font(self, reason: str, change: FontChange) -> None:
        # Mixed selections keep every attribute the edit does not name.
        with self._applying(reason) as active:
            if not active:
                return
            if not change.is_empty:
                self._surface.merge_selection_font(change)
            self._surface.focus()

    def _current_font(self) -> FontSpec | None:
        font = self._surface.selection_font()
        if font is None:
            font = self._surface.leading_edge_font()
        return font

    @contextmanager
    def _applying(self, reason: str) -> Iterator[bool]:
        if self._state is SyncState.APPLYING:
            LOGGER.debug("Suppressed re-entrant %s update", reason)
            yield False
            return
        self._transition(SyncState.APPLYING)
        try:
            yield True
        finally:
            self._transition(SyncState.IDLE)

    def _transition(self, state: SyncState) -> None:
        self._state = state
        for listener in list(self._listeners):
            listener(state)
