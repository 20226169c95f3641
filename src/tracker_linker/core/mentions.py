# src/tracker_linker/core/mentions.py

"""
Mention matcher.

Classifies task mentions inside free-form markdown text:
- NewTaskMention: "free text QUEUE " on the cursor line -> a task to be created,
- BareReference: a standalone "QUEUE-123 " token -> to be rewritten into a link,
- LinkedReference: "[QUEUE-123](url)" -> already linked, never rewritten.

Key invariants:
- a token inside markdown link markup is never classified as bare,
- normalize_references() is a fixed point on its own output.

Mentions end with a space: the token is only complete once the user typed past it.
An optional prefix (e.g. "@") can be required in front of mentions; it is
consumed when the mention is rewritten.
"""

from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from functools import lru_cache

from ..tracker.models import is_task_id

logger = logging.getLogger(__name__)

# A line containing this already has a markdown link; new-task detection skips it.
LINK_OPENER = "]("

_MARKDOWN_LINK_RE = re.compile(r"\[([^\]\n]*)\]\(([^)\n]*)\)")


@dataclass(slots=True, frozen=True)
class NewTaskMention:
    preceding_text: str
    queue_key: str
    start: int
    end: int


@dataclass(slots=True, frozen=True)
class BareReference:
    task_id: str
    start: int
    end: int


@dataclass(slots=True, frozen=True)
class LinkedReference:
    task_id: str
    url: str
    start: int
    end: int


Mention = NewTaskMention | BareReference | LinkedReference


def _boundary(prefix: str) -> str:
    # Without a prefix the token must start a word, so "fooBAR" and "http://x/ABC-1" are not mentions.
    return re.escape(prefix) if prefix else r"(?<![\w/-])"


@lru_cache(maxsize=8)
def _new_task_re(prefix: str) -> re.Pattern[str]:
    return re.compile(rf"^(.*?)\s*{_boundary(prefix)}([A-Z]+)(?= )")


@lru_cache(maxsize=8)
def _bare_reference_re(prefix: str) -> re.Pattern[str]:
    return re.compile(rf"{_boundary(prefix)}([A-Z]+-[0-9]+)(?= )")


def render_link(task_id: str, base_url: str) -> str:
    return f"[{task_id}]({base_url}{task_id})"


def find_new_task_mention(line: str, prefix: str = "") -> NewTaskMention | None:
    """
    Return the first new-task mention on a single line, or None.

    A line that already contains link markup is never considered.
    """
    if LINK_OPENER in line:
        return None
    m = _new_task_re(prefix).search(line)
    if m is None:
        return None
    return NewTaskMention(
        preceding_text=m.group(1),
        queue_key=m.group(2),
        start=m.start(),
        end=m.end(),
    )


def rewrite_new_task_line(line: str, mention: NewTaskMention, task_id: str, base_url: str) -> str:
    """Replace the mention span with "<preceding text> [ID](url)"."""
    link = render_link(task_id, base_url)
    replacement = f"{mention.preceding_text} {link}" if mention.preceding_text else link
    return line[: mention.start] + replacement + line[mention.end :]


def is_link_target(text: str, start: int) -> bool:
    """True when the token at `start` directly follows "](", i.e. it is a link URL."""
    return text[max(0, start - 3) : start].endswith(LINK_OPENER)


def _line_bounds(text: str, pos: int) -> tuple[int, int]:
    line_start = text.rfind("\n", 0, pos) + 1
    line_end = text.find("\n", pos)
    if line_end == -1:
        line_end = len(text)
    return line_start, line_end


def line_has_link(text: str, pos: int, task_id: str, base_url: str) -> bool:
    """True when the line containing `pos` already links `task_id` to its canonical URL."""
    line_start, line_end = _line_bounds(text, pos)
    return render_link(task_id, base_url) in text[line_start:line_end]


def scan_references(
    text: str,
    base_url: str,
    prefix: str = "",
) -> list[Mention]:
    """
    Classify every task reference in `text`, ordered by position.

    Links labelled with a task id come back as LinkedReference. Tokens that sit
    inside link markup, are a link target, or are already linked on their line
    are left out: they must not be rewritten.
    """
    found: list[Mention] = []
    link_spans: list[tuple[int, int]] = []

    for m in _MARKDOWN_LINK_RE.finditer(text):
        link_spans.append(m.span())
        label = m.group(1)
        if is_task_id(label):
            found.append(LinkedReference(task_id=label, url=m.group(2), start=m.start(), end=m.end()))

    for m in _bare_reference_re(prefix).finditer(text):
        task_id = m.group(1)
        start, end = m.span()

        if any(s <= start < e for s, e in link_spans):
            logger.debug("skip %s at %d: inside link markup", task_id, start)
            continue
        if is_link_target(text, start):
            logger.debug("skip %s at %d: link target", task_id, start)
            continue
        if line_has_link(text, start, task_id, base_url):
            logger.debug("skip %s at %d: already linked on this line", task_id, start)
            continue

        found.append(BareReference(task_id=task_id, start=start, end=end))

    found.sort(key=lambda ref: ref.start)
    return found


def normalize_references(text: str, base_url: str, prefix: str = "") -> str:
    """Rewrite every bare task reference into a canonical markdown link."""
    bare = [ref for ref in scan_references(text, base_url, prefix) if isinstance(ref, BareReference)]
    if not bare:
        return text

    parts: list[str] = []
    pos = 0
    for ref in bare:
        parts.append(text[pos : ref.start])
        parts.append(render_link(ref.task_id, base_url))
        pos = ref.end
    parts.append(text[pos:])
    return "".join(parts)
