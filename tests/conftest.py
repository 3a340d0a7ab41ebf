"""Shared pytest fixtures."""

from __future__ import annotations

import os
from pathlib import Path

import pytest

# Widget tests run headless.
os.environ.setdefault("QT_QPA_PLATFORM", "offscreen")


@pytest.fixture(autouse=True)
def _isolated_user_dirs(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep session and log files out of the real home directory."""

    monkeypatch.setenv("PROJECTWRITER_SESSION_PATH", str(tmp_path / "session" / "project.dat"))
    monkeypatch.setenv("PROJECTWRITER_LOG_DIR", str(tmp_path / "logs"))
    monkeypatch.delenv("PROJECTWRITER_THEME", raising=False)
