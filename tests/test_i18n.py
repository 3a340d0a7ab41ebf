"""Tests for the string tables and the in-place language switch."""

from __future__ import annotations

import pytest

from projectwriter.services.session import SUPPORTED_LANGUAGES, SessionState
from projectwriter.ui.events import EventBus, LanguageChanged, StatusMessage
from projectwriter.ui.i18n import LANGUAGE_NAMES, STRINGS, Translator
from tests.helpers import FakeSessionStore


def test_every_language_defines_every_key() -> None:
    english = set(STRINGS["en"])
    for language in SUPPORTED_LANGUAGES:
        assert set(STRINGS[language]) == english
        assert language in LANGUAGE_NAMES


def test_text_formats_placeholders() -> None:
    translator = Translator(SessionState(language="de"), FakeSessionStore(), EventBus())

    assert translator.text("status_page", page=3) == "Seite: 3"
    assert translator.text("menu_file") == "Datei"


def test_unknown_key_is_returned_verbatim() -> None:
    translator = Translator(SessionState(), FakeSessionStore(), EventBus())

    assert translator.text("no_such_key") == "no_such_key"


def test_switch_updates_state_persists_and_publishes() -> None:
    state = SessionState(language="en", recent_files=["/a"])
    store = FakeSessionStore()
    bus = EventBus()
    events: list[LanguageChanged] = []
    bus.subscribe(LanguageChanged, events.append)
    translator = Translator(state, store, bus)

    assert translator.switch("DE") is True

    assert state.language == "de"
    assert store.saved[-1] == SessionState(language="de", recent_files=["/a"])
    assert events == [LanguageChanged(language="de")]
    assert translator.text("status_ready") == "Bereit"


@pytest.mark.parametrize("language", ["en", "fr", ""])
def test_switch_rejects_unchanged_or_unsupported(language: str) -> None:
    store = FakeSessionStore()
    translator = Translator(SessionState(language="en"), store, EventBus())

    assert translator.switch(language) is False
    assert store.saved == []


def test_switch_survives_storage_failure() -> None:
    state = SessionState(language="en")
    bus = EventBus()
    messages: list[StatusMessage] = []
    changes: list[LanguageChanged] = []
    bus.subscribe(StatusMessage, messages.append)
    bus.subscribe(LanguageChanged, changes.append)

    assert Translator(state, FakeSessionStore(raise_on_save=True), bus).switch("de") is True

    assert state.language == "de"
    assert [message.message for message in messages] == [STRINGS["de"]["session_failed"]]
    assert changes == [LanguageChanged(language="de")]
