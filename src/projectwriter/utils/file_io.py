"""File IO helpers shared by the session store and the document surface."""

from __future__ import annotations

import codecs
import locale
import os
import tempfile
from enum import Enum
from pathlib import Path

__all__ = [
    "DocumentMode",
    "BETA_SUFFIXES",
    "detect_mode",
    "is_beta_format",
    "read_text",
    "write_text",
]

_BOM_MAP: dict[bytes, str] = {
    codecs.BOM_UTF8: "utf-8-sig",
    codecs.BOM_UTF16_LE: "utf-16-le",
    codecs.BOM_UTF16_BE: "utf-16-be",
    codecs.BOM_UTF32_LE: "utf-32-le",
    codecs.BOM_UTF32_BE: "utf-32-be",
}
_RICH_TEXT_SUFFIXES = frozenset({".html", ".htm"})
BETA_SUFFIXES = frozenset({".docx"})


class DocumentMode(Enum):
    """How the text surface interprets a file's contents."""

    RICH_TEXT = "rich-text"
    PLAIN_TEXT = "plain-text"


def detect_mode(path: Path | str) -> DocumentMode:
    """Choose the load/save mode for ``path`` from its suffix."""

    suffix = Path(path).suffix.lower()
    if suffix in _RICH_TEXT_SUFFIXES:
        return DocumentMode.RICH_TEXT
    return DocumentMode.PLAIN_TEXT


def is_beta_format(path: Path | str) -> bool:
    """Return ``True`` for formats that only load partially (e.g. ``.docx``)."""

    return Path(path).suffix.lower() in BETA_SUFFIXES


def read_text(path: Path | str) -> str:
    """Read a document or session file, honouring a BOM and folding newlines to ``\\n``.

    Raises :class:`OSError` when the file cannot be read and
    :class:`UnicodeDecodeError` when a BOM promises an encoding the bytes break.
    """

    raw = Path(path).read_bytes()
    text = raw.decode(_detect_encoding(raw))
    if text.startswith("\ufeff"):
        text = text[1:]
    return _normalize_newlines(text)


def write_text(path: Path | str, content: str) -> Path:
    """Replace ``path`` atomically with ``content`` as UTF-8 with ``\\n`` line ends."""

    target = Path(path)
    target.parent.mkdir(parents=True, exist_ok=True)
    descriptor, tmp_name = tempfile.mkstemp(
        dir=str(target.parent), prefix=f".{target.name}.", suffix=".tmp"
    )
    try:
        with os.fdopen(descriptor, "w", encoding="utf-8", newline="") as handle:
            handle.write(_normalize_newlines(content))
            handle.flush()
            os.fsync(handle.fileno())
        os.replace(tmp_name, target)
    finally:
        if os.path.exists(tmp_name):  # pragma: no cover - cleanup path
            try:
                os.unlink(tmp_name)
            except OSError:
                pass
    return target


def _detect_encoding(raw: bytes) -> str:
    for bom, encoding in _BOM_MAP.items():
        if raw.startswith(bom):
            return encoding
    # Files without a BOM come from this app (UTF-8) or older hand edits.
    for candidate in ("utf-8", locale.getpreferredencoding(False)):
        if not candidate:
            continue
        try:
            raw.decode(candidate)
        except UnicodeDecodeError:
            continue
        return candidate
    return "latin-1"


def _normalize_newlines(text: str) -> str:
    if "\r" not in text:
        return text
    return text.replace("\r\n", "\n").replace("\r", "\n")
