"""Application bootstrap helpers for the Project Writer desktop app."""

from __future__ import annotations

import argparse
import logging
import os
import sys
from pathlib import Path
from typing import Any, Sequence, TextIO, cast

from .core.release import RELEASE_NAME, VERSION
from .services.session import SessionState, SessionStore
from .theme.models import ThemeId
from .utils import logging as logging_utils

_TRUE_VALUES = {"1", "true", "yes", "on", "debug"}
_LOGGER = logging.getLogger(__name__)


def configure_logging(debug: bool = False, *, force: bool = False) -> None:
    """Configure structured logging for the application."""

    log_path = logging_utils.setup_logging(logging_utils.LogSettings(debug=debug), force=force)
    routed = logging_utils.route_qt_messages()
    _LOGGER.debug("Logging to %s (debug=%s, qt messages routed=%s)", log_path, debug, routed)


def resolve_theme_override(value: str | None) -> ThemeId | None:
    """Map ``PROJECTWRITER_THEME`` onto a theme, ignoring unknown names."""

    if not value:
        return None
    try:
        return ThemeId.parse(value)
    except ValueError:
        _LOGGER.warning("Ignoring unknown theme override %r", value)
        return None


def create_qapp(argv: Sequence[str] | None = None) -> Any:
    """Create (or reuse) the process-wide ``QApplication``."""

    try:  # Local import keeps the CLI helpers importable without a display stack.
        from PySide6.QtWidgets import QApplication
    except ImportError as exc:  # pragma: no cover - depends on desktop stack
        raise RuntimeError("PySide6 must be installed to launch the Project Writer UI.") from exc

    os.environ.setdefault("QT_ENABLE_HIGHDPI_SCALING", "1")
    app = cast(Any, QApplication.instance() or QApplication(list(argv or sys.argv)))
    app.setApplicationName("Project Writer")
    app.setApplicationDisplayName("Project Writer")
    app.setApplicationVersion(VERSION)
    return app


def main(argv: Sequence[str] | None = None) -> int:
    """Entry point invoked by the `projectwriter` console script."""

    args = _parse_cli_args(argv)

    debug = _env_flag("PROJECTWRITER_DEBUG", default=False)
    configure_logging(debug)

    session_path = args.session_path or os.environ.get("PROJECTWRITER_SESSION_PATH")
    store = SessionStore(Path(session_path).expanduser() if session_path else None)
    session = store.load()

    if args.dump_session:
        _dump_session(session, store)
        return 0

    app = create_qapp()
    from .ui.main_window import MainWindow, WindowContext

    window = MainWindow(
        WindowContext(
            session=session,
            store=store,
            theme_override=resolve_theme_override(os.environ.get("PROJECTWRITER_THEME")),
        )
    )
    window.start(args.path)
    window.show()
    _LOGGER.info("Project Writer %s \"%s\" started", VERSION, RELEASE_NAME)
    try:
        return int(app.exec())
    except KeyboardInterrupt:  # pragma: no cover - manual shutdown path
        _LOGGER.info("Shutdown requested by user.")
        return 0


def _env_flag(name: str, *, default: bool = False) -> bool:
    value = os.environ.get(name)
    if value is None:
        return default
    return value.strip().lower() in _TRUE_VALUES


def _parse_cli_args(argv: Sequence[str] | None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        prog="projectwriter",
        add_help=True,
        description="Launch the Project Writer desktop editor.",
    )
    parser.add_argument(
        "path",
        nargs="?",
        default=None,
        help="Document to open on start-up; the welcome page shows when it does not exist.",
    )
    parser.add_argument(
        "--session-path",
        metavar="PATH",
        help="Override the default ~/.projectwriter/project.dat path.",
    )
    parser.add_argument(
        "--dump-session",
        action="store_true",
        help="Print the stored language and recent files, then exit.",
    )
    return parser.parse_args(argv)


def _dump_session(session: SessionState, store: SessionStore, *, stream: TextIO | None = None) -> None:
    target = stream or sys.stdout
    target.write(f"# {store.path}\n")
    target.write(f"language: {session.language}\n")
    for index, path in enumerate(session.recent_files, start=1):
        target.write(f"{index:>2}. {path}\n")
    target.flush()


if __name__ == "__main__":  # pragma: no cover - manual launch
    raise SystemExit(main())
