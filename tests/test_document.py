# tests/test_document.py

from __future__ import annotations

from pathlib import Path

import pytest

from tracker_linker.connectors.document import TextDocument
from tracker_linker.core.ports import Cursor


def test_append_line_moves_cursor_to_end() -> None:
    doc = TextDocument()
    assert doc.append_line("first ") == Cursor(0, 6)
    assert doc.append_line("second") == Cursor(1, 6)
    assert doc.get_value() == "first \nsecond"
    assert doc.get_line(1) == "second"
    assert doc.get_line(5) == ""


def test_cursor_is_clamped() -> None:
    doc = TextDocument("ab\ncdef")
    doc.set_cursor(Cursor(9, 9))
    assert doc.get_cursor() == Cursor(1, 4)
    doc.set_value("x")
    assert doc.get_cursor() == Cursor(0, 1)


def test_load_and_save_roundtrip(tmp_path: Path) -> None:
    path = tmp_path / "notes.md"
    path.write_text("hello ABC-1 \n", "utf-8")

    doc = TextDocument.load(path)
    doc.set_value(doc.get_value() + "more")
    doc.save()

    assert path.read_text("utf-8") == "hello ABC-1 \nmore"


def test_load_missing_file_gives_empty_document(tmp_path: Path) -> None:
    doc = TextDocument.load(tmp_path / "new.md")
    assert doc.get_value() == ""


def test_save_without_path_raises() -> None:
    with pytest.raises(ValueError):
        TextDocument("x").save()
