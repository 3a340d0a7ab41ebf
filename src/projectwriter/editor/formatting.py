"""Font and selection models shared by the text surface and the toolbar."""

from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Protocol

from ..theme.models import BLACK, ColorTuple

__all__ = [
    "BODY_COLOR",
    "BODY_FONT",
    "FONT_SIZE_CHOICES",
    "FontChange",
    "FontSpec",
    "HEADING_COLOR",
    "HEADING_FONT",
    "LINES_PER_PAGE",
    "SelectionFontView",
    "TextSurface",
    "page_for_line",
]

LINES_PER_PAGE = 60
FONT_SIZE_CHOICES: tuple[str, ...] = ("8", "9", "10", "11", "12", "14", "16", "18", "24", "36", "48", "72")


@dataclass(frozen=True, slots=True)
class FontSpec:
    """Font applied to a run of text."""

    family: str
    size: float
    bold: bool = False
    italic: bool = False

    def with_changes(self, **changes: object) -> "FontSpec":
        return replace(self, **changes)


@dataclass(frozen=True, slots=True)
class FontChange:
    """A single toolbar edit; unset fields leave each run's own value alone."""

    family: str | None = None
    size: float | None = None
    bold: bool | None = None
    italic: bool | None = None

    @property
    def is_empty(self) -> bool:
        return self.family is None and self.size is None and self.bold is None and self.italic is None

    def apply_to(self, font: FontSpec) -> FontSpec:
        changes = {
            name: getattr(self, name)
            for name in ("family", "size", "bold", "italic")
            if getattr(self, name) is not None
        }
        return font.with_changes(**changes)


@dataclass(frozen=True, slots=True)
class SelectionFontView:
    """Snapshot of the selection font pushed into the toolbar controls."""

    family: str
    size_pt: int
    bold: bool
    italic: bool

    @classmethod
    def from_font(cls, font: FontSpec) -> "SelectionFontView":
        return cls(family=font.family, size_pt=int(font.size), bold=font.bold, italic=font.italic)


HEADING_FONT = FontSpec("Segoe UI", 16, bold=True)
HEADING_COLOR: ColorTuple = (0, 120, 215)
BODY_FONT = FontSpec("Calibri", 11.5)
BODY_COLOR: ColorTuple = BLACK


class TextSurface(Protocol):
    """Selection-level formatting access offered by the rich-text editor."""

    def selection_font(self) -> FontSpec | None:
        """Return the font shared by the whole selection, or ``None`` when mixed."""

    def leading_edge_font(self) -> FontSpec | None:
        """Return the font at the start of the selection."""

    def set_selection_font(self, font: FontSpec) -> None:
        ...

    def merge_selection_font(self, change: FontChange) -> None:
        """Apply only the fields set on ``change`` to every run in the selection."""

    def selection_color(self) -> ColorTuple:
        ...

    def set_selection_color(self, color: ColorTuple) -> None:
        ...

    def focus(self) -> None:
        ...


def page_for_line(line: int) -> int:
    """Approximate 1-based page number for a 0-based line index."""

    return max(0, line) // LINES_PER_PAGE + 1
