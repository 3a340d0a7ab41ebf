"""Tests for the logging setup helpers."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Iterator

import pytest

from projectwriter.utils import logging as logging_utils


@pytest.fixture(autouse=True)
def _fresh_logging(monkeypatch: pytest.MonkeyPatch) -> Iterator[None]:
    monkeypatch.setattr(logging_utils, "_ACTIVE_PATH", None)
    yield
    root = logging.getLogger()
    for handler in list(root.handlers):
        root.removeHandler(handler)
        handler.close()


def test_log_dir_follows_environment(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("PROJECTWRITER_LOG_DIR", str(tmp_path / "custom"))

    settings = logging_utils.LogSettings()

    assert settings.log_path == tmp_path / "custom" / "projectwriter.log"
    assert settings.level == logging.INFO


def test_setup_writes_records_to_rotating_file(tmp_path: Path) -> None:
    settings = logging_utils.LogSettings(debug=True, log_dir=tmp_path, console=False)

    path = logging_utils.setup_logging(settings)
    logging.getLogger("projectwriter.test").debug("hello from the editor")
    for handler in logging.getLogger().handlers:
        handler.flush()

    assert path == tmp_path / "projectwriter.log"
    assert logging_utils.get_log_path() == path
    assert "projectwriter.test: hello from the editor" in path.read_text(encoding="utf-8")


def test_setup_runs_once_unless_forced(tmp_path: Path) -> None:
    first = logging_utils.setup_logging(logging_utils.LogSettings(log_dir=tmp_path / "a", console=False))
    second = logging_utils.setup_logging(logging_utils.LogSettings(log_dir=tmp_path / "b", console=False))
    forced = logging_utils.setup_logging(
        logging_utils.LogSettings(log_dir=tmp_path / "b", console=False), force=True
    )

    assert second == first
    assert forced == tmp_path / "b" / "projectwriter.log"


@pytest.mark.parametrize(("debug", "qt_level"), [(False, logging.WARNING), (True, logging.DEBUG)])
def test_qt_logger_is_quiet_outside_debug(tmp_path: Path, debug: bool, qt_level: int) -> None:
    logging_utils.setup_logging(logging_utils.LogSettings(debug=debug, log_dir=tmp_path, console=False))

    assert logging.getLogger(logging_utils.QT_LOGGER_NAME).level == qt_level
