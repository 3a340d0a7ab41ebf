"""Shared test helpers and stub classes.

This module contains reusable fakes for the protocols the core controllers
talk to (canvas, theme surfaces, glass capability, text surface, toolbar
controls, session store). Import from here instead of duplicating these
classes in individual test files.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Callable

from projectwriter.core.errors import PlatformCapabilityUnavailable, StorageError
from projectwriter.editor.formatting import FontChange, FontSpec
from projectwriter.services.session import SessionState
from projectwriter.theme.engine import ThemeSurfaces
from projectwriter.theme.models import BLACK, ColorTuple
from projectwriter.theme.renderers import Rect, RenderStrategy


class RecordingCanvas:
    """Canvas that records every draw call as a tuple."""

    def __init__(self) -> None:
        self.calls: list[tuple[Any, ...]] = []

    def fill_rect(self, rect: Rect, color: ColorTuple) -> None:
        self.calls.append(("fill_rect", rect, color))

    def fill_vertical_gradient(self, rect: Rect, top: ColorTuple, bottom: ColorTuple) -> None:
        self.calls.append(("gradient", rect, top, bottom))

    def draw_rect_outline(self, rect: Rect, color: ColorTuple) -> None:
        self.calls.append(("outline", rect, color))

    def draw_line(self, x1: int, y1: int, x2: int, y2: int, color: ColorTuple) -> None:
        self.calls.append(("line", (x1, y1, x2, y2), color))


class FakeStripSurface:
    """Menu bar or toolbar stand-in."""

    def __init__(self, height: int = 24) -> None:
        self._height = height
        self.strategy: RenderStrategy | None = None
        self.foreground: ColorTuple | None = None
        self.refreshes = 0

    def install_strategy(self, strategy: RenderStrategy) -> None:
        self.strategy = strategy

    def set_foreground(self, color: ColorTuple) -> None:
        self.foreground = color

    def height(self) -> int:
        return self._height

    def refresh(self) -> None:
        self.refreshes += 1


class FakeWindowSurface:
    _UNSET: Any = object()

    def __init__(self) -> None:
        self.background: ColorTuple | None | Any = self._UNSET
        self.refreshes = 0

    def set_background(self, color: ColorTuple | None) -> None:
        self.background = color

    def refresh(self) -> None:
        self.refreshes += 1


def make_surfaces(menu_height: int = 24, toolbar_height: int = 32) -> ThemeSurfaces:
    return ThemeSurfaces(
        menu=FakeStripSurface(menu_height),
        toolbar=FakeStripSurface(toolbar_height),
        window=FakeWindowSurface(),
    )


class FakeGlass:
    """Glass capability with scripted support and failure."""

    def __init__(self, *, supported: bool = True, fail: bool = False) -> None:
        self.supported = supported
        self.fail = fail
        self.insets: list[int] = []

    def supports_composition(self) -> bool:
        return self.supported

    def extend_into_client_area(self, top_inset: int) -> None:
        self.insets.append(top_inset)
        if self.fail:
            raise PlatformCapabilityUnavailable("glass composition", "scripted failure")


@dataclass
class FakeTextSurface:
    """Text surface with a single uniform (or mixed) selection font."""

    font: FontSpec | None = field(default_factory=lambda: FontSpec("Calibri", 11.5))
    leading_edge: FontSpec | None = field(default_factory=lambda: FontSpec("Arial", 10))
    color: ColorTuple = BLACK
    written_fonts: list[FontSpec] = field(default_factory=list)
    written_changes: list[FontChange] = field(default_factory=list)
    written_colors: list[ColorTuple] = field(default_factory=list)
    focus_count: int = 0
    on_write: Callable[[], None] | None = None

    def selection_font(self) -> FontSpec | None:
        return self.font

    def leading_edge_font(self) -> FontSpec | None:
        return self.leading_edge

    def set_selection_font(self, font: FontSpec) -> None:
        self.written_fonts.append(font)
        self.font = font
        if self.on_write is not None:
            self.on_write()

    def merge_selection_font(self, change: FontChange) -> None:
        self.written_changes.append(change)
        if self.font is not None:
            self.font = change.apply_to(self.font)
        if self.on_write is not None:
            self.on_write()

    def selection_color(self) -> ColorTuple:
        return self.color

    def set_selection_color(self, color: ColorTuple) -> None:
        self.written_colors.append(color)
        self.color = color

    def focus(self) -> None:
        self.focus_count += 1


class FakeControls:
    """Formatting controls that record what they were shown.

    ``on_show`` lets a test simulate the change signal a real widget would
    emit back into the controller when its value is set programmatically.
    """

    def __init__(self) -> None:
        self.shown: dict[str, Any] = {}
        self.show_calls = 0
        self.on_show: Callable[[str, Any], None] | None = None

    def _record(self, name: str, value: Any) -> None:
        self.shown[name] = value
        self.show_calls += 1
        if self.on_show is not None:
            self.on_show(name, value)

    def show_font_name(self, family: str) -> None:
        self._record("font_name", family)

    def show_font_size(self, text: str) -> None:
        self._record("font_size", text)

    def show_bold(self, checked: bool) -> None:
        self._record("bold", checked)

    def show_italic(self, checked: bool) -> None:
        self._record("italic", checked)


class FakeSessionStore:
    """In-memory session store; ``raise_on_save`` simulates a read-only medium."""

    def __init__(self, *, raise_on_save: bool = False) -> None:
        self.saved: list[SessionState] = []
        self.raise_on_save = raise_on_save
        self.path = Path("/nonexistent/project.dat")

    def save(self, state: SessionState) -> Path:
        if self.raise_on_save:
            raise StorageError(self.path, "Simulated save failure")
        self.saved.append(SessionState(language=state.language, recent_files=list(state.recent_files)))
        return self.path
