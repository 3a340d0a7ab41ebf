"""Tests for the session file persistence adapter."""

from __future__ import annotations

from pathlib import Path

import pytest

from projectwriter.core.errors import StorageError
from projectwriter.services.session import (
    MAX_RECENT_FILES,
    SessionState,
    SessionStore,
    default_language,
    normalize_recent_files,
)


@pytest.mark.parametrize(
    ("locale_name", "expected"),
    [("de_DE", "de"), ("de-AT", "de"), ("en_US", "en"), ("fr_FR", "en"), ("", "en")],
)
def test_default_language_maps_host_locale(locale_name: str, expected: str) -> None:
    assert default_language(locale_name) == expected


def test_missing_file_yields_locale_defaults(tmp_path: Path) -> None:
    store = SessionStore(tmp_path / "project.dat", locale_name="de_DE")

    state = store.load()

    assert state == SessionState(language="de", recent_files=[])
    assert not store.path.exists()


def test_round_trip_preserves_language_and_order(tmp_path: Path) -> None:
    store = SessionStore(tmp_path / "project.dat")
    original = SessionState(language="de", recent_files=["/docs/b.rtf", "/docs/a.rtf"])

    store.save(original)

    assert store.load() == original


def test_file_format_is_language_then_paths(tmp_path: Path) -> None:
    store = SessionStore(tmp_path / "project.dat", locale_name="de_DE")
    state = store.load()
    state.recent_files = ["/docs/a.rtf", "/docs/b.rtf"]

    store.save(state)

    assert (tmp_path / "project.dat").read_text(encoding="utf-8") == "de\n/docs/a.rtf\n/docs/b.rtf\n"


def test_save_creates_missing_directories(tmp_path: Path) -> None:
    target = tmp_path / "nested" / "dir" / "project.dat"

    SessionStore(target).save(SessionState())

    assert target.read_text(encoding="utf-8") == "en\n"


def test_unwritable_location_raises_storage_error(tmp_path: Path) -> None:
    blocker = tmp_path / "blocker"
    blocker.write_text("not a directory", encoding="utf-8")
    store = SessionStore(blocker / "project.dat")

    with pytest.raises(StorageError) as excinfo:
        store.save(SessionState(language="en", recent_files=["/x"]))

    assert excinfo.value.path == blocker / "project.dat"


def test_load_normalizes_hand_edited_file(tmp_path: Path) -> None:
    path = tmp_path / "project.dat"
    lines = ["DE", "", "/a", "/b", "/a", "  "] + [f"/extra{i}" for i in range(15)]
    path.write_text("\r\n".join(lines), encoding="utf-8")

    state = SessionStore(path).load()

    assert state.language == "de"
    assert state.recent_files[:2] == ["/a", "/b"]
    assert len(state.recent_files) == MAX_RECENT_FILES
    assert len(set(state.recent_files)) == MAX_RECENT_FILES


def test_unknown_language_tag_uses_locale_default(tmp_path: Path, caplog: pytest.LogCaptureFixture) -> None:
    path = tmp_path / "project.dat"
    path.write_text("klingon\n/a\n", encoding="utf-8")

    with caplog.at_level("WARNING"):
        state = SessionStore(path, locale_name="en_GB").load()

    assert state.language == "en"
    assert state.recent_files == ["/a"]
    assert "klingon" in caplog.text


def test_empty_file_yields_defaults(tmp_path: Path) -> None:
    path = tmp_path / "project.dat"
    path.write_text("", encoding="utf-8")

    assert SessionStore(path, locale_name="de").load() == SessionState(language="de")


def test_save_truncates_to_limit(tmp_path: Path) -> None:
    store = SessionStore(tmp_path / "project.dat")
    state = SessionState(recent_files=[f"/f{i}" for i in range(MAX_RECENT_FILES + 3)])

    store.save(state)

    assert len(store.load().recent_files) == MAX_RECENT_FILES


def test_environment_override_selects_path(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    target = tmp_path / "env.dat"
    monkeypatch.setenv("PROJECTWRITER_SESSION_PATH", str(target))

    assert SessionStore().path == target


def test_normalize_recent_files_keeps_first_occurrence() -> None:
    assert normalize_recent_files(["a", "b", "a", " c ", ""]) == ["a", "b", "c"]


def test_save_of_unmodified_load_keeps_content(tmp_path: Path) -> None:
    path = tmp_path / "project.dat"
    path.write_text("de\n/docs/a.rtf\n/docs/b.rtf\n", encoding="utf-8")
    store = SessionStore(path)

    store.save(store.load())

    assert path.read_text(encoding="utf-8") == "de\n/docs/a.rtf\n/docs/b.rtf\n"


def test_undecodable_file_yields_locale_defaults(tmp_path: Path, caplog: pytest.LogCaptureFixture) -> None:
    path = tmp_path / "project.dat"
    path.write_bytes(b"\xff\xfe\x00")

    with caplog.at_level("WARNING"):
        state = SessionStore(path, locale_name="de_DE").load()

    assert state == SessionState(language="de")
    assert "Unable to read session file" in caplog.text
