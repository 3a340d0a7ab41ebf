"""UI package holding the desktop application's widgets and controllers.

Only the Qt-free controllers are re-exported here; the widget modules
(``main_window``, ``qt_theme``, ``text_surface``, ``toolbar``) import
PySide6 and are imported explicitly.
"""

from .events import Event, EventBus, LanguageChanged, RecentFilesChanged, StatusMessage, ThemeApplied
from .i18n import LANGUAGE_NAMES, Translator
from .recent_files import RecentFileEntry, RecentFilesController

__all__ = [
    # Event Bus
    "Event",
    "EventBus",
    "LanguageChanged",
    "RecentFilesChanged",
    "StatusMessage",
    "ThemeApplied",
    # Controllers
    "LANGUAGE_NAMES",
    "RecentFileEntry",
    "RecentFilesController",
    "Translator",
]
