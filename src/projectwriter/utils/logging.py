"""Logging for Project Writer: a rotating log file, console echo, and Qt message routing."""

from __future__ import annotations

import logging
import logging.handlers
import os
from dataclasses import dataclass, field
from pathlib import Path

__all__ = ["LogSettings", "get_log_path", "route_qt_messages", "setup_logging"]

LOG_DIR_ENV = "PROJECTWRITER_LOG_DIR"
LOG_FILE_NAME = "projectwriter.log"
QT_LOGGER_NAME = "projectwriter.qt"

_FORMAT = "%(asctime)s %(levelname)-7s %(name)s: %(message)s"
_DATE_FORMAT = "%H:%M:%S"
_ACTIVE_PATH: Path | None = None


def _default_log_dir() -> Path:
    override = os.environ.get(LOG_DIR_ENV)
    return Path(override).expanduser() if override else Path.home() / ".projectwriter" / "logs"


@dataclass(frozen=True, slots=True)
class LogSettings:
    """Where and how verbosely the editor logs."""

    debug: bool = False
    log_dir: Path = field(default_factory=_default_log_dir)
    console: bool = True
    max_bytes: int = 500_000
    backup_count: int = 2

    @property
    def level(self) -> int:
        return logging.DEBUG if self.debug else logging.INFO

    @property
    def log_path(self) -> Path:
        return self.log_dir / LOG_FILE_NAME


def setup_logging(settings: LogSettings | None = None, *, force: bool = False) -> Path:
    """Install the root handlers once per process; ``force`` replaces them."""

    global _ACTIVE_PATH
    if _ACTIVE_PATH is not None and not force:
        return _ACTIVE_PATH

    settings = settings or LogSettings()
    settings.log_dir.mkdir(parents=True, exist_ok=True)
    formatter = logging.Formatter(_FORMAT, datefmt=_DATE_FORMAT)

    handlers: list[logging.Handler] = [
        logging.handlers.RotatingFileHandler(
            settings.log_path,
            maxBytes=settings.max_bytes,
            backupCount=settings.backup_count,
            encoding="utf-8",
        )
    ]
    if settings.console:
        handlers.append(logging.StreamHandler())
    for handler in handlers:
        handler.setFormatter(formatter)

    logging.basicConfig(level=settings.level, handlers=handlers, force=True)
    logging.captureWarnings(True)
    # Qt chatter only reaches the log in debug sessions.
    logging.getLogger(QT_LOGGER_NAME).setLevel(settings.level if settings.debug else logging.WARNING)

    _ACTIVE_PATH = settings.log_path
    return _ACTIVE_PATH


def get_log_path() -> Path | None:
    """Return the log file in use, or ``None`` before :func:`setup_logging`."""

    return _ACTIVE_PATH


def route_qt_messages() -> bool:
    """Send Qt's own warnings through :data:`QT_LOGGER_NAME`; ``False`` without PySide6."""

    try:
        from PySide6.QtCore import QtMsgType, qInstallMessageHandler
    except ImportError:  # pragma: no cover - PySide6 optional during tests
        return False

    levels = {
        QtMsgType.QtDebugMsg: logging.DEBUG,
        QtMsgType.QtInfoMsg: logging.INFO,
        QtMsgType.QtWarningMsg: logging.WARNING,
        QtMsgType.QtCriticalMsg: logging.ERROR,
        QtMsgType.QtFatalMsg: logging.CRITICAL,
    }
    logger = logging.getLogger(QT_LOGGER_NAME)

    def _handler(mode, context, message):  # type: ignore[no-untyped-def]
        category = getattr(context, "category", None) or "default"
        logger.log(levels.get(mode, logging.INFO), "[%s] %s", category, message)

    qInstallMessageHandler(_handler)
    return True
