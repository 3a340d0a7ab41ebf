"""Rich-text editing surface built on ``QTextEdit``."""

from __future__ import annotations

import logging
from pathlib import Path

from PySide6.QtCore import QPoint
from PySide6.QtGui import QColor, QFont, QTextCharFormat, QTextCursor
from PySide6.QtWidgets import QFrame, QTextEdit, QWidget

from ..core.errors import DocumentIOError
from ..editor.formatting import BODY_FONT, FontChange, FontSpec
from ..theme.models import ColorTuple
from ..utils.file_io import DocumentMode, detect_mode, read_text, write_text

__all__ = ["PAGE_SIZE", "RichTextEditor"]

LOGGER = logging.getLogger(__name__)

# A4 at 96 dpi.
PAGE_SIZE = (794, 1123)


class RichTextEditor(QTextEdit):
    """``QTextEdit`` exposing the selection-level API used by the controllers."""

    def __init__(self, parent: QWidget | None = None) -> None:
        super().__init__(parent)
        self.setFixedSize(*PAGE_SIZE)
        self.setFrameShape(QFrame.Shape.NoFrame)
        default = QFont(BODY_FONT.family)
        default.setPointSizeF(BODY_FONT.size)
        self.document().setDefaultFont(default)

    # ------------------------------------------------------------------
    # Selection formatting
    # ------------------------------------------------------------------
    def selection_font(self) -> FontSpec | None:
        cursor = self.textCursor()
        if not cursor.hasSelection():
            return self._font_from_format(self.currentCharFormat())
        start, end = cursor.selectionStart(), cursor.selectionEnd()
        found: FontSpec | None = None
        block = self.document().findBlock(start)
        while block.isValid() and block.position() < end:
            for fmt_range in block.textFormats():
                range_start = block.position() + fmt_range.start
                range_end = range_start + fmt_range.length
                if range_end <= start or range_start >= end:
                    continue
                spec = self._font_from_format(fmt_range.format)
                if found is None:
                    found = spec
                elif spec != found:
                    return None
            block = block.next()
        return found or self.leading_edge_font()

    def leading_edge_font(self) -> FontSpec | None:
        selection = self.textCursor()
        cursor = QTextCursor(self.document())
        cursor.setPosition(selection.selectionStart())
        if selection.hasSelection():
            cursor.movePosition(QTextCursor.MoveOperation.NextCharacter)
        return self._font_from_format(cursor.charFormat())

    def set_selection_font(self, font: FontSpec) -> None:
        self.merge_selection_font(FontChange(font.family, font.size, font.bold, font.italic))

    def merge_selection_font(self, change: FontChange) -> None:
        fmt = QTextCharFormat()
        if change.family is not None:
            fmt.setFontFamilies([change.family])
        if change.size is not None:
            fmt.setFontPointSize(change.size)
        if change.bold is not None:
            fmt.setFontWeight(QFont.Weight.Bold if change.bold else QFont.Weight.Normal)
        if change.italic is not None:
            fmt.setFontItalic(change.italic)
        self.mergeCurrentCharFormat(fmt)

    def selection_color(self) -> ColorTuple:
        color = self.textColor()
        return (color.red(), color.green(), color.blue())

    def set_selection_color(self, color: ColorTuple) -> None:
        self.setTextColor(QColor(*color))

    def focus(self) -> None:
        self.setFocus()

    def _font_from_format(self, fmt: QTextCharFormat) -> FontSpec:
        default = self.document().defaultFont()
        font = fmt.font()
        families = fmt.fontFamilies() if fmt.hasProperty(QTextCharFormat.Property.FontFamilies) else None
        family = families[0] if families else font.family() or default.family()
        size = fmt.fontPointSize() or default.pointSizeF()
        return FontSpec(family=family, size=size, bold=font.bold(), italic=font.italic())

    # ------------------------------------------------------------------
    # Documents
    # ------------------------------------------------------------------
    def load_file(self, path: Path | str, mode: DocumentMode | None = None) -> None:
        """Replace the document with ``path``; raises :class:`DocumentIOError`."""

        resolved_mode = mode or detect_mode(path)
        try:
            text = read_text(path)
        except (OSError, UnicodeDecodeError) as exc:
            raise DocumentIOError(path, "open", str(exc)) from exc
        if resolved_mode is DocumentMode.RICH_TEXT:
            self.setHtml(text)
        else:
            self.setPlainText(text)
        self.document().setModified(False)
        LOGGER.debug("Loaded %s as %s", path, resolved_mode.value)

    def save_file(self, path: Path | str, mode: DocumentMode | None = None) -> None:
        """Write the document to ``path``; raises :class:`DocumentIOError`."""

        resolved_mode = mode or detect_mode(path)
        content = self.toHtml() if resolved_mode is DocumentMode.RICH_TEXT else self.toPlainText()
        try:
            write_text(path, content)
        except OSError as exc:
            raise DocumentIOError(path, "save", str(exc)) from exc
        self.document().setModified(False)
        LOGGER.debug("Saved %s as %s", path, resolved_mode.value)

    def find_text(self, needle: str) -> int | None:
        """Return the offset of the first match of ``needle``, if any."""

        if not needle:
            return None
        cursor = self.document().find(needle, 0)
        if cursor.isNull():
            return None
        return cursor.selectionStart()

    def select_range(self, start: int, length: int) -> None:
        cursor = self.textCursor()
        cursor.setPosition(start)
        cursor.setPosition(start + length, QTextCursor.MoveMode.KeepAnchor)
        self.setTextCursor(cursor)

    def first_visible_line(self) -> int:
        return self.cursorForPosition(QPoint(0, 0)).blockNumber()

    def reset(self) -> None:
        self.clear()
        self.document().setModified(False)
