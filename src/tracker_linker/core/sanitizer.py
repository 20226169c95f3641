# src/tracker_linker/core/sanitizer.py

"""Strip markdown markup from a line of notes so it can serve as an issue title."""

from __future__ import annotations

import re

_ORDERED_LIST_RE = re.compile(r"^[0-9]+\.\s+")
_BULLET_RE = re.compile(r"^[-*+]\s+")
_EMPHASIS_RE = re.compile(r"[*_]{1,3}([^*_]+)[*_]{1,3}")
_CODE_RE = re.compile(r"`([^`]+)`")
_LINK_RE = re.compile(r"\[([^\]]+)\]\([^)]+\)")
_BLOCKQUOTE_RE = re.compile(r"^>\s+")
_HTML_TAG_RE = re.compile(r"<[^>]+>")


def sanitize(text: str) -> str:
    """
    Return plain text for an issue title.

    List and blockquote markers are removed once, at the start only;
    emphasis, code spans, links and HTML tags everywhere.
    Never raises; all-markup input yields "".
    """
    out = text or ""
    out = _ORDERED_LIST_RE.sub("", out, count=1)
    out = _BULLET_RE.sub("", out, count=1)
    out = _EMPHASIS_RE.sub(r"\1", out)
    out = _CODE_RE.sub(r"\1", out)
    out = _LINK_RE.sub(r"\1", out)
    out = _BLOCKQUOTE_RE.sub("", out, count=1)
    out = _HTML_TAG_RE.sub("", out)
    return out.strip()
