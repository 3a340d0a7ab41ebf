"""Tests for the most-recently-used file list."""

from __future__ import annotations

from pathlib import Path

import pytest

from projectwriter.services.session import MAX_RECENT_FILES, SessionState, SessionStore
from projectwriter.ui.events import EventBus, RecentFilesChanged, StatusMessage
from projectwriter.ui.recent_files import RecentFilesController
from tests.helpers import FakeSessionStore


@pytest.fixture
def event_bus() -> EventBus:
    return EventBus()


@pytest.fixture
def published(event_bus: EventBus) -> list[object]:
    events: list[object] = []
    event_bus.subscribe(RecentFilesChanged, events.append)
    event_bus.subscribe(StatusMessage, events.append)
    return events


def test_record_open_moves_path_to_front(event_bus: EventBus) -> None:
    state = SessionState()
    store = FakeSessionStore()
    controller = RecentFilesController(state, store, event_bus)

    for path in ("/a", "/b", "/a"):
        controller.record_open(path)

    assert controller.entries == ("/a", "/b")
    assert store.saved[-1].recent_files == ["/a", "/b"]
    assert len(store.saved) == 3


def test_list_is_capped(event_bus: EventBus) -> None:
    state = SessionState()
    controller = RecentFilesController(state, FakeSessionStore(), event_bus)

    for index in range(MAX_RECENT_FILES + 5):
        controller.record_open(f"/doc{index}.txt")

    assert len(controller.entries) == MAX_RECENT_FILES
    assert controller.entries[0] == f"/doc{MAX_RECENT_FILES + 4}.txt"
    assert "/doc0.txt" not in controller.entries


def test_every_mutation_publishes_the_new_list(event_bus: EventBus, published: list[object]) -> None:
    controller = RecentFilesController(SessionState(), FakeSessionStore(), event_bus)

    controller.record_open("/a")
    controller.record_open("/b")

    assert published == [RecentFilesChanged(paths=("/a",)), RecentFilesChanged(paths=("/b", "/a"))]


def test_save_failure_is_reported_but_not_fatal(event_bus: EventBus, published: list[object]) -> None:
    state = SessionState()
    controller = RecentFilesController(
        state,
        FakeSessionStore(raise_on_save=True),
        event_bus,
        failure_message=lambda exc: "settings not saved",
    )

    controller.record_open("/a")

    assert state.recent_files == ["/a"]
    assert StatusMessage("settings not saved") in published
    assert published[-1] == RecentFilesChanged(paths=("/a",))


def test_materialize_labels_with_base_names(event_bus: EventBus) -> None:
    state = SessionState(recent_files=["/docs/report.rtf", "/other/notes.txt"])
    controller = RecentFilesController(state, FakeSessionStore(), event_bus)

    entries = controller.materialize()

    assert [entry.label for entry in entries] == ["report.rtf", "notes.txt"]
    assert [entry.path for entry in entries] == state.recent_files


def test_materialized_entry_invokes_opener(event_bus: EventBus) -> None:
    opened: list[str] = []
    state = SessionState(recent_files=["/docs/report.rtf"])
    controller = RecentFilesController(state, FakeSessionStore(), event_bus, opener=opened.append)

    controller.materialize()[0].open()

    assert opened == ["/docs/report.rtf"]


def test_opener_failure_is_contained(event_bus: EventBus, caplog: pytest.LogCaptureFixture) -> None:
    def broken(path: str) -> None:
        raise FileNotFoundError(path)

    state = SessionState(recent_files=["/gone.txt"])
    controller = RecentFilesController(state, FakeSessionStore(), event_bus)
    controller.set_opener(broken)

    with caplog.at_level("WARNING"):
        controller.materialize()[0].open()

    assert "/gone.txt" in caplog.text
    assert controller.entries == ("/gone.txt",)


def test_clear_empties_list_once(event_bus: EventBus, published: list[object]) -> None:
    store = FakeSessionStore()
    controller = RecentFilesController(SessionState(recent_files=["/a"]), store, event_bus)

    controller.clear()
    controller.clear()

    assert controller.entries == ()
    assert len(store.saved) == 1
    assert published == [RecentFilesChanged(paths=())]


def test_end_to_end_first_run_scenario(tmp_path: Path, event_bus: EventBus) -> None:
    store = SessionStore(tmp_path / "project.dat", locale_name="de_DE")
    state = store.load()
    controller = RecentFilesController(state, store, event_bus)

    assert state.language == "de"
    assert state.recent_files == []

    controller.record_open("/docs/a.rtf")
    controller.record_open("/docs/b.rtf")
    controller.record_open("/docs/a.rtf")

    assert (tmp_path / "project.dat").read_text(encoding="utf-8") == "de\n/docs/a.rtf\n/docs/b.rtf\n"
    reloaded = store.load()
    assert reloaded.language == "de"
    assert reloaded.recent_files == ["/docs/a.rtf", "/docs/b.rtf"]
