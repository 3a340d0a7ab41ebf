"""User-facing strings and the in-place language switch."""

from __future__ import annotations

import logging
from typing import Any, Mapping

from ..core.errors import StorageError
from ..services.session import SUPPORTED_LANGUAGES, SessionState
from .events import EventBus, LanguageChanged, StatusMessage
from .recent_files import SessionWriter

__all__ = ["LANGUAGE_NAMES", "STRINGS", "Translator"]

LOGGER = logging.getLogger(__name__)

LANGUAGE_NAMES: Mapping[str, str] = {"en": "English", "de": "Deutsch (Beta)"}

STRINGS: Mapping[str, Mapping[str, str]] = {
    "en": {
        "app_title": "Project Writer {version} \"{release}\"",
        "doc_title": "Project Writer - {name}",
        "welcome_title": "Welcome to Project Writer",
        "welcome_version": "Version {version} \"{release}\"",
        "welcome_new": "Create New Document",
        "welcome_open": "Open Existing File...",
        "welcome_theme": "Configure Theme...",
        "menu_file": "File",
        "file_new": "New",
        "file_open": "Open...",
        "file_recent": "Recent Files",
        "file_recent_clear": "Clear List",
        "file_save": "Save...",
        "file_exit": "Exit",
        "menu_format": "Format",
        "format_font": "Font Dialog...",
        "format_color": "Color Dialog...",
        "menu_search": "Search",
        "menu_more": "More",
        "more_toolbar": "Toolbar Configuration",
        "more_show_fonts": "Show Font Controls",
        "more_theme": "Theme Configuration",
        "theme_aero_flat": "Glass is not available here; Aero uses a flat background",
        "more_language": "Language / Sprache",
        "toolbar_open": "Open",
        "status_ready": "Ready",
        "status_page": "Page: {page}",
        "status_zoom": "Zoom: {zoom}%",
        "search_title": "Search",
        "search_prompt": "Find:",
        "search_missing": "\"{needle}\" was not found",
        "docx_beta_title": "Project Writer Beta",
        "docx_beta": "Docx support is in Beta. Some WordArt features may be missing.",
        "open_failed": "Could not open {name}",
        "save_failed": "Could not save {name}; the document was not written",
        "session_failed": "Settings could not be saved",
        "opened": "Opened {name}",
        "saved": "Saved {name}",
        "filter_open": "Supported (*.html *.htm *.txt *.rtf *.docx);;All files (*)",
        "filter_save": "Rich text (*.html);;Plain text (*.txt)",
    },
    "de": {
        "app_title": "Project Writer {version} \"{release}\"",
        "doc_title": "Project Writer - {name}",
        "welcome_title": "Willkommen bei Project Writer",
        "welcome_version": "Version {version} \"{release}\"",
        "welcome_new": "Neues Dokument",
        "welcome_open": "Öffnen...",
        "welcome_theme": "Themen...",
        "menu_file": "Datei",
        "file_new": "Neu",
        "file_open": "Öffnen...",
        "file_recent": "Zuletzt verwendet",
        "file_recent_clear": "Liste leeren",
        "file_save": "Speichern...",
        "file_exit": "Beenden",
        "menu_format": "Format",
        "format_font": "Schriftart...",
        "format_color": "Farbe...",
        "menu_search": "Suchen",
        "menu_more": "Mehr",
        "more_toolbar": "Symbolleiste",
        "more_show_fonts": "Schriftauswahl anzeigen",
        "more_theme": "Design",
        "theme_aero_flat": "Glas ist hier nicht verfügbar; Aero nutzt einen flachen Hintergrund",
        "more_language": "Language / Sprache",
        "toolbar_open": "Öffnen",
        "status_ready": "Bereit",
        "status_page": "Seite: {page}",
        "status_zoom": "Zoom: {zoom}%",
        "search_title": "Suchen",
        "search_prompt": "Suchen nach:",
        "search_missing": "\"{needle}\" wurde nicht gefunden",
        "docx_beta_title": "Project Writer Beta",
        "docx_beta": "Docx-Unterstützung ist in der Beta. Einige WordArt-Funktionen fehlen eventuell.",
        "open_failed": "{name} konnte nicht geöffnet werden",
        "save_failed": "{name} konnte nicht gespeichert werden",
        "session_failed": "Einstellungen konnten nicht gespeichert werden",
        "opened": "{name} geöffnet",
        "saved": "{name} gespeichert",
        "filter_open": "Unterstützt (*.html *.htm *.txt *.rtf *.docx);;Alle Dateien (*)",
        "filter_save": "Formatierter Text (*.html);;Nur Text (*.txt)",
    },
}


class Translator:
    """Resolves strings for the session's current language.

    Switching languages updates the session, writes it through to the
    store, and publishes :class:`LanguageChanged` so open views re-render
    their labels without restarting the application.
    """

    def __init__(self, state: SessionState, store: SessionWriter, bus: EventBus) -> None:
        self._state = state
        self._store = store
        self._bus = bus

    @property
    def language(self) -> str:
        return self._state.language

    def text(self, key: str, **values: Any) -> str:
        table = STRINGS.get(self._state.language) or STRINGS["en"]
        template = table.get(key) or STRINGS["en"].get(key, key)
        return template.format(**values) if values else template

    def switch(self, language: str) -> bool:
        """Change the UI language; returns ``False`` for unknown or unchanged tags."""

        tag = language.strip().lower()
        if tag not in SUPPORTED_LANGUAGES:
            LOGGER.warning("Unsupported language %r", language)
            return False
        if tag == self._state.language:
            return False
        self._state.language = tag
        try:
            self._store.save(self._state)
        except StorageError as exc:
            LOGGER.warning("Language choice not persisted: %s", exc)
            self._bus.publish(StatusMessage(self.text("session_failed")))
        LOGGER.info("UI language switched to %s", tag)
        self._bus.publish(LanguageChanged(language=tag))
        return True
