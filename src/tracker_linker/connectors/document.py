# src/tracker_linker/connectors/document.py

from __future__ import annotations

import logging
import os
from pathlib import Path

from ..core.ports import Cursor

logger = logging.getLogger(__name__)


class TextDocument:
    """
    In-memory text surface (TextSurface port), optionally backed by a markdown file.

    Lines are separated by "\\n"; the cursor is clamped to the document on every set.
    """

    def __init__(self, text: str = "", *, path: Path | None = None) -> None:
        self._text = text
        self._cursor = Cursor(0, 0)
        self.path = path

    @classmethod
    def load(cls, path: str | Path) -> TextDocument:
        path = Path(path)
        text = path.read_text("utf-8") if path.exists() else ""
        doc = cls(text, path=path)
        logger.info("Loaded document %s (%d lines)", path, doc.line_count())
        return doc

    def save(self, path: str | Path | None = None) -> Path:
        target = Path(path) if path is not None else self.path
        if target is None:
            raise ValueError("No path to save the document to.")
        target.parent.mkdir(parents=True, exist_ok=True)
        tmp = target.with_suffix(target.suffix + ".tmp")
        tmp.write_text(self._text, "utf-8")
        os.replace(tmp, target)
        self.path = target
        logger.info("Saved document to %s", target)
        return target

    # ---- TextSurface ----

    def get_value(self) -> str:
        return self._text

    def set_value(self, text: str) -> None:
        self._text = text
        self._cursor = self._clamp(self._cursor)

    def get_line(self, line: int) -> str:
        lines = self._text.split("\n")
        if 0 <= line < len(lines):
            return lines[line]
        return ""

    def get_cursor(self) -> Cursor:
        return self._cursor

    def set_cursor(self, cursor: Cursor) -> None:
        self._cursor = self._clamp(cursor)

    # ---- Editing helpers used by the console host ----

    def line_count(self) -> int:
        return len(self._text.split("\n"))

    def append_line(self, text: str) -> Cursor:
        """Append `text` as a new last line and move the cursor to its end."""
        if self._text:
            self._text = f"{self._text}\n{text}"
        else:
            self._text = text
        self._cursor = Cursor(self.line_count() - 1, len(text))
        return self._cursor

    def _clamp(self, cursor: Cursor) -> Cursor:
        lines = self._text.split("\n")
        line = min(max(cursor.line, 0), len(lines) - 1)
        ch = min(max(cursor.ch, 0), len(lines[line]))
        return Cursor(line, ch)
