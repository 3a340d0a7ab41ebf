"""Main application window: welcome page, editor page, menus, and glue."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Callable

from PySide6.QtCore import QRect, Qt
from PySide6.QtGui import QAction, QActionGroup, QColor, QFont, QLinearGradient, QPainter, QPen
from PySide6.QtWidgets import (
    QColorDialog,
    QFileDialog,
    QFontDialog,
    QInputDialog,
    QLabel,
    QMainWindow,
    QMenu,
    QMenuBar,
    QMessageBox,
    QPushButton,
    QScrollArea,
    QStackedWidget,
    QStatusBar,
    QVBoxLayout,
    QWidget,
)

from ..core.release import RELEASE_NAME, VERSION
from ..core.errors import DocumentIOError
from ..editor.formatting import FontSpec, page_for_line
from ..editor.selection_sync import SelectionSyncController
from ..services.session import SessionState, SessionStore
from ..theme.engine import ThemeEngine, ThemeSurfaces
from ..theme.environment import create_glass_capability, detect_environment
from ..theme.models import EnvironmentInfo, ThemeId, color_to_hex
from ..utils.file_io import is_beta_format
from .events import EventBus, LanguageChanged, RecentFilesChanged, StatusMessage, ThemeApplied
from .i18n import LANGUAGE_NAMES, Translator
from .qt_theme import QtStripSurface, QtWindowSurface
from .recent_files import RecentFilesController
from .text_surface import RichTextEditor
from .toolbar import FormattingToolbar

__all__ = ["MainWindow", "WindowContext"]

LOGGER = logging.getLogger(__name__)

_THEME_MENU_ORDER = (
    ThemeId.UWP,
    ThemeId.UWP_DARK,
    ThemeId.AERO,
    ThemeId.LUNA,
    ThemeId.BLUE_GRADIENT_2009,
    ThemeId.CLASSIC,
)
_CANVAS_BACKGROUND = color_to_hex((80, 80, 80))


@dataclass(slots=True)
class WindowContext:
    """Process-scoped state handed to the window by the application bootstrap."""

    session: SessionState
    store: SessionStore
    environment: EnvironmentInfo | None = None
    theme_override: ThemeId | str | None = None
    bus: EventBus = field(default_factory=EventBus)


class WelcomePage(QWidget):
    """Landing page with a gradient header and the three start actions."""

    HEADER_HEIGHT = 100

    def __init__(self, translator: Translator, parent: QWidget | None = None) -> None:
        super().__init__(parent)
        self._translator = translator
        layout = QVBoxLayout(self)
        layout.setContentsMargins(50, 150, 50, 50)
        layout.setSpacing(10)
        self.new_button = self._button()
        self.open_button = self._button()
        self.theme_button = self._button()
        for button in (self.new_button, self.open_button, self.theme_button):
            layout.addWidget(button, alignment=Qt.AlignmentFlag.AlignLeft)
        layout.addStretch(1)

    def _button(self) -> QPushButton:
        button = QPushButton(self)
        button.setFixedSize(300, 40)
        button.setFlat(True)
        button.setFont(QFont("Segoe UI", 12))
        button.setCursor(Qt.CursorShape.PointingHandCursor)
        button.setStyleSheet(
            "QPushButton { text-align: left; padding-left: 8px; border: none; color: black; }"
            "QPushButton:hover { background-color: rgb(225, 240, 255); color: darkblue; }"
        )
        return button

    def retranslate(self) -> None:
        self.new_button.setText(self._translator.text("welcome_new"))
        self.open_button.setText(self._translator.text("welcome_open"))
        self.theme_button.setText(self._translator.text("welcome_theme"))
        self.update()

    def paintEvent(self, event: Any) -> None:  # noqa: N802 - Qt override
        del event
        painter = QPainter(self)
        width, height = self.width(), self.height()
        header = QRect(0, 0, width, self.HEADER_HEIGHT)
        gradient = QLinearGradient(0, 0, 0, self.HEADER_HEIGHT)
        gradient.setColorAt(0.0, QColor(0, 50, 120))
        gradient.setColorAt(1.0, QColor(0, 80, 180))
        painter.fillRect(header, gradient)

        body = QRect(0, self.HEADER_HEIGHT, width, max(0, height - self.HEADER_HEIGHT))
        body_gradient = QLinearGradient(0, self.HEADER_HEIGHT, 0, height)
        body_gradient.setColorAt(0.0, QColor(255, 255, 255))
        body_gradient.setColorAt(1.0, QColor(240, 240, 240))
        painter.fillRect(body, body_gradient)

        painter.setPen(QPen(QColor(255, 180, 60), 2))
        painter.drawLine(0, self.HEADER_HEIGHT, width, self.HEADER_HEIGHT)

        painter.setPen(QColor(255, 255, 255))
        painter.setFont(QFont("Segoe UI", 24, QFont.Weight.Bold))
        painter.drawText(30, 60, self._translator.text("welcome_title"))
        painter.setPen(QColor(173, 216, 230))
        painter.setFont(QFont("Segoe UI", 10))
        painter.drawText(
            35,
            88,
            self._translator.text("welcome_version", version=VERSION, release=RELEASE_NAME),
        )
        painter.end()


class MainWindow(QMainWindow):
    """Application shell wiring the theme engine and controllers to Qt widgets."""

    def __init__(self, context: WindowContext) -> None:
        super().__init__()
        self._context = context
        self._bus = context.bus
        self._session = context.session
        self._store = context.store
        self._translator = Translator(self._session, self._store, self._bus)
        self._recent = RecentFilesController(
            self._session,
            self._store,
            self._bus,
            opener=self._open_recent,
            failure_message=lambda _exc: self._translator.text("session_failed"),
        )
        self._translated: list[tuple[Any, str, Callable[[Any, str], None]]] = []
        self._theme_actions: dict[ThemeId, QAction] = {}
        self._language_actions: dict[str, QAction] = {}
        self._current_path: Path | None = None
        self._glass_refreshed = False

        self.resize(1000, 850)
        self._build_ui()

        glass = create_glass_capability(lambda: int(self.winId()))
        environment = context.environment or detect_environment(glass)
        self._theme_engine = ThemeEngine(environment, glass)
        self._surfaces = ThemeSurfaces(
            menu=QtStripSurface(self._menu_bar),
            toolbar=QtStripSurface(self._toolbar),
            window=QtWindowSurface(self),
        )

        self._sync = SelectionSyncController(self._editor, self._toolbar)
        self._toolbar.bind(self._sync, on_open=self.open_dialog)
        self._editor.cursorPositionChanged.connect(self._sync.on_selection_changed)
        self._editor.verticalScrollBar().valueChanged.connect(lambda _value: self._update_page_label())

        self._bus.subscribe(RecentFilesChanged, self._handle_recent_files_changed)
        self._bus.subscribe(LanguageChanged, self._handle_language_changed)
        self._bus.subscribe(StatusMessage, self._handle_status_message)
        self._bus.subscribe(ThemeApplied, self._handle_theme_applied)

        self.retranslate()
        self.apply_theme(context.theme_override or self._theme_engine.select_default())

    # ------------------------------------------------------------------
    # Accessors
    # ------------------------------------------------------------------
    @property
    def editor(self) -> RichTextEditor:
        return self._editor

    @property
    def toolbar(self) -> FormattingToolbar:
        return self._toolbar

    @property
    def theme_engine(self) -> ThemeEngine:
        return self._theme_engine

    @property
    def selection_sync(self) -> SelectionSyncController:
        return self._sync

    @property
    def recent_files(self) -> RecentFilesController:
        return self._recent

    @property
    def translator(self) -> Translator:
        return self._translator

    @property
    def menu_bar(self) -> QMenuBar:
        return self._menu_bar

    @property
    def recent_menu(self) -> QMenu:
        return self._recent_menu

    @property
    def status_bar(self) -> QStatusBar:
        return self._status_bar

    def checked_theme(self) -> ThemeId | None:
        """Return the theme whose menu entry is currently checked."""

        for theme, action in self._theme_actions.items():
            if action.isChecked():
                return theme
        return None

    def is_editor_visible(self) -> bool:
        return self._pages.currentWidget() is self._editor_page

    # ------------------------------------------------------------------
    # UI construction
    # ------------------------------------------------------------------
    def _build_ui(self) -> None:
        self._pages = QStackedWidget(self)
        self.setCentralWidget(self._pages)

        self._welcome = WelcomePage(self._translator, self)
        self._welcome.new_button.clicked.connect(self._new_from_welcome)
        self._welcome.open_button.clicked.connect(self.open_dialog)
        self._welcome.theme_button.clicked.connect(self._configure_theme_from_welcome)
        self._pages.addWidget(self._welcome)

        self._editor_page = QWidget(self)
        layout = QVBoxLayout(self._editor_page)
        layout.setContentsMargins(0, 0, 0, 0)
        layout.setSpacing(0)

        self._menu_bar = QMenuBar(self._editor_page)
        self._build_menus()
        layout.addWidget(self._menu_bar)

        self._toolbar = FormattingToolbar(self._editor_page)
        layout.addWidget(self._toolbar)

        self._editor = RichTextEditor()
        canvas = QScrollArea(self._editor_page)
        canvas.setStyleSheet(f"QScrollArea {{ background-color: {_CANVAS_BACKGROUND}; }}")
        holder = QWidget()
        holder.setStyleSheet(f"background-color: {_CANVAS_BACKGROUND};")
        holder_layout = QVBoxLayout(holder)
        holder_layout.setContentsMargins(50, 50, 50, 50)
        holder_layout.addWidget(self._editor, alignment=Qt.AlignmentFlag.AlignHCenter)
        canvas.setWidget(holder)
        canvas.setWidgetResizable(True)
        layout.addWidget(canvas, 1)

        self._status_bar = QStatusBar(self._editor_page)
        self._status_label = QLabel(self._status_bar)
        self._page_label = QLabel(self._status_bar)
        self._zoom_label = QLabel(self._status_bar)
        self._status_bar.addWidget(self._status_label, 1)
        self._status_bar.addPermanentWidget(self._page_label)
        self._status_bar.addPermanentWidget(self._zoom_label)
        layout.addWidget(self._status_bar)

        self._pages.addWidget(self._editor_page)
        self._pages.setCurrentWidget(self._welcome)

    def _build_menus(self) -> None:
        bar = self._menu_bar

        file_menu = self._menu(bar, "menu_file")
        self._action(file_menu, "file_new", self.new_document)
        self._action(file_menu, "file_open", self.open_dialog)
        self._recent_menu = self._menu(file_menu, "file_recent")
        self._action(file_menu, "file_save", self.save_dialog)
        file_menu.addSeparator()
        self._action(file_menu, "file_exit", self.close)

        format_menu = self._menu(bar, "menu_format")
        self._action(format_menu, "format_font", self.font_dialog)
        self._action(format_menu, "format_color", self.color_dialog)

        search_action = QAction(self)
        search_action.triggered.connect(lambda _checked=False: self.search_dialog())
        bar.addAction(search_action)
        self._translate(search_action, "menu_search")

        self._more_menu = self._menu(bar, "menu_more")
        toolbar_menu = self._menu(self._more_menu, "more_toolbar")
        self._show_fonts_action = self._action(toolbar_menu, "more_show_fonts", None)
        self._show_fonts_action.setCheckable(True)
        self._show_fonts_action.setChecked(True)
        self._show_fonts_action.toggled.connect(self.set_font_controls_visible)

        theme_menu = self._menu(self._more_menu, "more_theme")
        theme_menu.setToolTipsVisible(True)
        theme_group = QActionGroup(self)
        for theme in _THEME_MENU_ORDER:
            action = QAction(theme.title, self, checkable=True)
            action.triggered.connect(lambda _checked=False, t=theme: self.apply_theme(t))
            theme_group.addAction(action)
            theme_menu.addAction(action)
            self._theme_actions[theme] = action

        language_menu = self._menu(self._more_menu, "more_language")
        language_group = QActionGroup(self)
        for tag, name in LANGUAGE_NAMES.items():
            action = QAction(name, self, checkable=True)
            action.triggered.connect(lambda _checked=False, lang=tag: self.switch_language(lang))
            language_group.addAction(action)
            language_menu.addAction(action)
            self._language_actions[tag] = action

    def _menu(self, parent: QMenuBar | QMenu, key: str) -> QMenu:
        menu = parent.addMenu("")
        self._translate(menu, key, lambda target, text: target.setTitle(text))
        return menu

    def _action(self, menu: QMenu, key: str, slot: Callable[[], Any] | None) -> QAction:
        action = menu.addAction("")
        if slot is not None:
            action.triggered.connect(lambda _checked=False: slot())
        self._translate(action, key)
        return action

    def _translate(
        self,
        target: Any,
        key: str,
        setter: Callable[[Any, str], None] = lambda target, text: target.setText(text),
    ) -> None:
        self._translated.append((target, key, setter))

    def retranslate(self) -> None:
        """Re-render every user-facing string in the current language."""

        for target, key, setter in self._translated:
            setter(target, self._translator.text(key))
        self._toolbar.open_action.setText(self._translator.text("toolbar_open"))
        self._welcome.retranslate()
        self._status_label.setText(self._translator.text("status_ready"))
        self._zoom_label.setText(self._translator.text("status_zoom", zoom=100))
        self._update_page_label()
        self._update_title()
        for tag, action in self._language_actions.items():
            action.setChecked(tag == self._translator.language)
        aero = self._theme_actions[ThemeId.AERO]
        if self._theme_engine.environment.glass_available:
            aero.setToolTip("")
        else:
            aero.setToolTip(self._translator.text("theme_aero_flat"))
        self._rebuild_recent_menu()

    # ------------------------------------------------------------------
    # Pages
    # ------------------------------------------------------------------
    def start(self, initial_path: str | Path | None = None) -> None:
        """Show the editor with ``initial_path`` when it exists, else the welcome page."""

        if initial_path is not None and Path(initial_path).is_file():
            self.show_editor()
            self.open_file(initial_path)
        else:
            self.show_welcome()

    def show_welcome(self) -> None:
        self._pages.setCurrentWidget(self._welcome)

    def show_editor(self) -> None:
        self._pages.setCurrentWidget(self._editor_page)

    def _new_from_welcome(self) -> None:
        self.show_editor()
        self._reset_document()

    def new_document(self) -> None:
        self.show_welcome()
        self._reset_document()

    def _reset_document(self) -> None:
        self._editor.reset()
        self._current_path = None
        self._update_title()

    def _configure_theme_from_welcome(self) -> None:
        self.show_editor()
        self._menu_bar.setActiveAction(self._more_menu.menuAction())

    # ------------------------------------------------------------------
    # Documents
    # ------------------------------------------------------------------
    def open_dialog(self) -> None:
        path, _selected = QFileDialog.getOpenFileName(
            self, self._translator.text("file_open"), "", self._translator.text("filter_open")
        )
        if not path:
            return
        if is_beta_format(path):
            QMessageBox.information(
                self, self._translator.text("docx_beta_title"), self._translator.text("docx_beta")
            )
        self.show_editor()
        self.open_file(path)

    def open_file(self, path: str | Path) -> bool:
        """Load ``path`` into the editor; failures keep the current document."""

        target = Path(path)
        try:
            self._editor.load_file(target)
        except DocumentIOError as exc:
            LOGGER.warning("Open failed: %s", exc)
            self._bus.publish(StatusMessage(self._translator.text("open_failed", name=target.name)))
            return False
        self._current_path = target
        self._update_title()
        self._recent.record_open(str(target))
        self._update_page_label()
        self._bus.publish(StatusMessage(self._translator.text("opened", name=target.name)))
        return True

    def _open_recent(self, path: str) -> None:
        self.show_editor()
        self.open_file(path)

    def save_dialog(self) -> None:
        path, _selected = QFileDialog.getSaveFileName(
            self, self._translator.text("file_save"), "", self._translator.text("filter_save")
        )
        if path:
            self.save_file(path)

    def save_file(self, path: str | Path) -> bool:
        target = Path(path)
        try:
            self._editor.save_file(target)
        except DocumentIOError as exc:
            LOGGER.error("Save failed: %s", exc)
            self._bus.publish(StatusMessage(self._translator.text("save_failed", name=target.name), 0))
            return False
        self._current_path = target
        self._update_title()
        self._recent.record_open(str(target))
        self._bus.publish(StatusMessage(self._translator.text("saved", name=target.name)))
        return True

    def _update_title(self) -> None:
        if self._current_path is None:
            self.setWindowTitle(self._translator.text("app_title", version=VERSION, release=RELEASE_NAME))
        else:
            self.setWindowTitle(self._translator.text("doc_title", name=self._current_path.name))

    def _update_page_label(self) -> None:
        page = page_for_line(self._editor.first_visible_line())
        self._page_label.setText(self._translator.text("status_page", page=page))

    # ------------------------------------------------------------------
    # Format / search
    # ------------------------------------------------------------------
    def font_dialog(self) -> None:
        current = self._editor.selection_font() or self._editor.leading_edge_font()
        initial = QFont(current.family) if current else QFont()
        if current:
            initial.setPointSizeF(current.size)
            initial.setBold(current.bold)
            initial.setItalic(current.italic)
        ok, font = QFontDialog.getFont(initial, self)
        if not ok:
            return
        self._sync.apply_font(FontSpec(font.family(), font.pointSizeF(), font.bold(), font.italic()))
        self._sync.on_selection_changed()

    def color_dialog(self) -> None:
        color = QColorDialog.getColor(QColor(*self._editor.selection_color()), self)
        if color.isValid():
            self._sync.apply_color((color.red(), color.green(), color.blue()))

    def search_dialog(self) -> None:
        needle, ok = QInputDialog.getText(
            self, self._translator.text("search_title"), self._translator.text("search_prompt")
        )
        if ok and needle:
            self.search(needle)

    def search(self, needle: str) -> bool:
        offset = self._editor.find_text(needle)
        if offset is None:
            self._bus.publish(StatusMessage(self._translator.text("search_missing", needle=needle)))
            return False
        self._editor.select_range(offset, len(needle))
        return True

    def set_font_controls_visible(self, visible: bool) -> None:
        self._toolbar.set_font_controls_visible(visible)

    # ------------------------------------------------------------------
    # Theme / language
    # ------------------------------------------------------------------
    def apply_theme(self, theme: ThemeId | str) -> ThemeId:
        applied = self._theme_engine.apply(theme, self._surfaces)
        self._bus.publish(ThemeApplied(theme=applied, glass=self._theme_engine.glass_active))
        return applied

    def switch_language(self, language: str) -> bool:
        return self._translator.switch(language)

    def showEvent(self, event: Any) -> None:  # noqa: N802 - Qt override
        super().showEvent(event)
        if not self._glass_refreshed:
            self._glass_refreshed = True
            self._theme_engine.reapply_glass(self._surfaces)

    # ------------------------------------------------------------------
    # Event handlers
    # ------------------------------------------------------------------
    def _rebuild_recent_menu(self) -> None:
        for stale in self._recent_menu.actions():
            # The triggering entry may still be emitting; let Qt delete it later.
            self._recent_menu.removeAction(stale)
            stale.deleteLater()
        for entry in self._recent.materialize():
            action = self._recent_menu.addAction(entry.label)
            action.setToolTip(entry.path)
            action.triggered.connect(lambda _checked=False, run=entry.open: run())
        if self._recent.entries:
            self._recent_menu.addSeparator()
            clear = self._recent_menu.addAction(self._translator.text("file_recent_clear"))
            clear.triggered.connect(lambda _checked=False: self._recent.clear())
        self._recent_menu.setEnabled(bool(self._recent.entries))

    def _handle_recent_files_changed(self, event: RecentFilesChanged) -> None:
        del event
        self._rebuild_recent_menu()

    def _handle_language_changed(self, event: LanguageChanged) -> None:
        del event
        self.retranslate()

    def _handle_status_message(self, event: StatusMessage) -> None:
        self._status_bar.showMessage(event.message, event.timeout_ms)

    def _handle_theme_applied(self, event: ThemeApplied) -> None:
        action = self._theme_actions.get(event.theme)
        if action is not None:
            action.setChecked(True)
