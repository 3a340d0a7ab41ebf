"""Tests for the file IO helpers."""

from __future__ import annotations

import codecs
from pathlib import Path

import pytest

from projectwriter.utils.file_io import DocumentMode, detect_mode, is_beta_format, read_text, write_text


@pytest.mark.parametrize(
    ("name", "mode"),
    [
        ("page.html", DocumentMode.RICH_TEXT),
        ("PAGE.HTM", DocumentMode.RICH_TEXT),
        ("notes.txt", DocumentMode.PLAIN_TEXT),
        ("letter.rtf", DocumentMode.PLAIN_TEXT),
        ("report.docx", DocumentMode.PLAIN_TEXT),
        ("README", DocumentMode.PLAIN_TEXT),
    ],
)
def test_detect_mode(name: str, mode: DocumentMode) -> None:
    assert detect_mode(name) is mode


def test_is_beta_format() -> None:
    assert is_beta_format("/docs/Report.DOCX")
    assert not is_beta_format("/docs/report.rtf")


def test_read_text_strips_bom_and_normalizes_newlines(tmp_path: Path) -> None:
    path = tmp_path / "bom.txt"
    path.write_bytes(codecs.BOM_UTF8 + "first\r\nsecond\rthird".encode("utf-8"))

    assert read_text(path) == "first\nsecond\nthird"


def test_read_text_decodes_utf16(tmp_path: Path) -> None:
    path = tmp_path / "wide.txt"
    path.write_bytes(codecs.BOM_UTF16_LE + "Grüße".encode("utf-16-le"))

    assert read_text(path) == "Grüße"


def test_write_text_is_atomic_and_leaves_no_temp_files(tmp_path: Path) -> None:
    target = tmp_path / "out" / "doc.txt"

    write_text(target, "a\r\nb")
    write_text(target, "replaced\n")

    assert target.read_text(encoding="utf-8") == "replaced\n"
    assert [entry.name for entry in target.parent.iterdir()] == ["doc.txt"]


def test_write_text_folds_carriage_returns(tmp_path: Path) -> None:
    target = tmp_path / "mixed.txt"

    write_text(target, "a\r\nb\rc\n")

    assert target.read_bytes() == b"a\nb\nc\n"


def test_read_text_falls_back_to_latin1(tmp_path: Path) -> None:
    path = tmp_path / "legacy.txt"
    path.write_bytes(b"caf\xe9\xff")

    assert read_text(path).startswith("caf")


def test_read_text_rejects_truncated_utf16(tmp_path: Path) -> None:
    path = tmp_path / "broken.txt"
    path.write_bytes(codecs.BOM_UTF16_LE + b"\x00")

    with pytest.raises(UnicodeDecodeError):
        read_text(path)
