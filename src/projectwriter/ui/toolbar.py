"""Formatting toolbar: font name and size boxes plus bold/italic/heading toggles."""

from __future__ import annotations

from typing import Callable

from PySide6.QtGui import QAction, QFont
from PySide6.QtWidgets import QComboBox, QFontComboBox, QToolBar, QWidget

from ..editor.formatting import FONT_SIZE_CHOICES
from ..editor.selection_sync import SelectionSyncController

__all__ = ["FormattingToolbar"]


def _styled_font(family: str, size: int, *, bold: bool = False, italic: bool = False) -> QFont:
    font = QFont(family, size)
    font.setBold(bold)
    font.setItalic(italic)
    return font


class FormattingToolbar(QToolBar):
    """Toolbar whose widgets double as the controller's formatting controls.

    The ``show_*`` methods are called by :class:`SelectionSyncController`;
    they update the widgets programmatically, and the change signals they
    cause are swallowed by the controller while it is applying.
    """

    def __init__(self, parent: QWidget | None = None) -> None:
        super().__init__(parent)
        self.setMovable(False)
        self.setFloatable(False)

        self.open_action = QAction(self)
        self.addAction(self.open_action)
        self.addSeparator()

        self.font_box = QFontComboBox(self)
        self.font_box.setMinimumWidth(150)
        self._font_box_action = self.addWidget(self.font_box)

        self.size_box = QComboBox(self)
        self.size_box.setEditable(True)
        self.size_box.addItems(list(FONT_SIZE_CHOICES))
        self.size_box.setMinimumWidth(50)
        self._size_box_action = self.addWidget(self.size_box)
        self.addSeparator()

        self.bold_action = self._toggle("B", _styled_font("Times", 10, bold=True))
        self.italic_action = self._toggle("I", _styled_font("Times", 10, italic=True))
        self.heading_action = self._toggle("H", _styled_font("Arial", 11, bold=True))

    def _toggle(self, label: str, font: QFont) -> QAction:
        action = QAction(label, self)
        action.setCheckable(True)
        action.setFont(font)
        self.addAction(action)
        return action

    def bind(self, controller: SelectionSyncController, *, on_open: Callable[[], None]) -> None:
        """Route user edits on the toolbar into ``controller``."""

        self.open_action.triggered.connect(lambda _checked=False: on_open())
        self.font_box.currentFontChanged.connect(lambda font: controller.on_font_name_changed(font.family()))
        self.size_box.textActivated.connect(controller.on_font_size_changed)
        self.bold_action.toggled.connect(controller.on_bold_toggled)
        self.italic_action.toggled.connect(controller.on_italic_toggled)
        self.heading_action.triggered.connect(controller.on_heading_toggled)

    def set_font_controls_visible(self, visible: bool) -> None:
        self._font_box_action.setVisible(visible)
        self._size_box_action.setVisible(visible)

    def font_controls_visible(self) -> bool:
        return self._font_box_action.isVisible()

    # FormattingControls -------------------------------------------------
    def show_font_name(self, family: str) -> None:
        self.font_box.setCurrentFont(QFont(family))

    def show_font_size(self, text: str) -> None:
        self.size_box.setCurrentText(text)

    def show_bold(self, checked: bool) -> None:
        self.bold_action.setChecked(checked)

    def show_italic(self, checked: bool) -> None:
        self.italic_action.setChecked(checked)
