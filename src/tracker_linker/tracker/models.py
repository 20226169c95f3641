# src/tracker_linker/tracker/models.py

from __future__ import annotations

import re
from dataclasses import dataclass, field
from datetime import UTC, date, datetime, timedelta
from typing import Any

DEFAULT_SUMMARY = "New task"

TASK_ID_RE = re.compile(r"^[A-Z]+-[0-9]+$")


def is_task_id(value: str) -> bool:
    return bool(TASK_ID_RE.match(value or ""))


def parse_tags(raw: str) -> list[str]:
    """Split a comma-separated tag list, dropping blanks."""
    return [t.strip() for t in (raw or "").split(",") if t.strip()]


def default_deadline(today: date) -> date:
    """Suggested deadline: tomorrow."""
    return today + timedelta(days=1)


def deadline_to_timestamp(raw: str) -> str | None:
    """
    Convert a "YYYY-MM-DD" deadline into the timestamp the tracker expects.

    Date-only input is pinned to UTC midnight. Empty input means "no deadline".
    Raises ValueError on anything that is not a calendar date.
    """
    raw = (raw or "").strip()
    if not raw:
        return None
    day = date.fromisoformat(raw)
    midnight = datetime(day.year, day.month, day.day, tzinfo=UTC)
    return midnight.strftime("%Y-%m-%dT%H:%M:%S.000Z")


@dataclass(slots=True, frozen=True)
class ConfirmationRequest:
    """What the user is asked to confirm before an issue is created."""

    summary: str
    queue_key: str
    description: str
    deadline: date
    tags: list[str] = field(default_factory=list)
    assignee: str = ""
    assignee_suggestions: list[str] = field(default_factory=list)


@dataclass(slots=True, frozen=True)
class ConfirmationResult:
    """
    The user's answer.

    deadline is the raw "YYYY-MM-DD" string from the prompt ("" for none).
    A cancelled (or dismissed) prompt carries confirmed=False and empty fields.
    """

    confirmed: bool
    summary: str
    description: str = ""
    deadline: str = ""
    tags: list[str] = field(default_factory=list)
    assignee: str = ""

    @classmethod
    def cancelled(cls, summary: str = "") -> ConfirmationResult:
        return cls(confirmed=False, summary=summary)


@dataclass(slots=True, frozen=True)
class TaskCreationRequest:
    summary: str
    queue_key: str
    description: str
    deadline: str | None = None
    tags: list[str] = field(default_factory=list)
    assignee: str | None = None

    @classmethod
    def from_confirmation(cls, result: ConfirmationResult, queue_key: str) -> TaskCreationRequest:
        """Build a request from the edited prompt fields. Raises ValueError on a bad deadline."""
        return cls(
            summary=result.summary.strip() or DEFAULT_SUMMARY,
            queue_key=queue_key,
            description=result.description.strip(),
            deadline=deadline_to_timestamp(result.deadline),
            tags=[t.strip() for t in result.tags if t.strip()],
            assignee=result.assignee.strip() or None,
        )

    def to_payload(self) -> dict[str, Any]:
        payload: dict[str, Any] = {
            "summary": self.summary,
            "queue": {"key": self.queue_key},
            "description": self.description,
            "tags": list(self.tags),
        }
        if self.deadline:
            payload["deadline"] = self.deadline
        # The tracker rejects an empty assignee, so it is only sent when set.
        if self.assignee:
            payload["assignee"] = self.assignee
        return payload
