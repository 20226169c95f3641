# src/tracker_linker/core/ports.py

from __future__ import annotations

"""
Ports (interfaces) used by the core.

The core depends on Protocols instead of concrete implementations.
This keeps hosts (editor surface, confirmation UI) and the tracker API swappable
and makes testing easier.
"""

from dataclasses import dataclass
from typing import Awaitable, Protocol

from ..tracker.models import ConfirmationRequest, ConfirmationResult, TaskCreationRequest


@dataclass(slots=True, frozen=True)
class Cursor:
    """Zero-based line index and column."""

    line: int
    ch: int


class TextSurface(Protocol):
    """Host text-editing surface: whole document, single lines, cursor."""

    def get_value(self) -> str: ...
    def set_value(self, text: str) -> None: ...
    def get_line(self, line: int) -> str: ...
    def get_cursor(self) -> Cursor: ...
    def set_cursor(self, cursor: Cursor) -> None: ...


class ConfirmationPrompt(Protocol):
    """
    Asks the user to confirm (and edit) a task before it is created.

    Must resolve with ConfirmationResult.cancelled(...) on cancel or dismissal;
    it never raises for a user decision.
    """

    def confirm(self, request: ConfirmationRequest) -> Awaitable[ConfirmationResult]: ...


class IssueCreator(Protocol):
    """Remote issue creation. Returns the tracker-assigned task id or raises RemoteCallFailed."""

    def create_issue(self, request: TaskCreationRequest) -> Awaitable[str]: ...


class Notifier(Protocol):
    """User-visible notices (success, configuration required, failures)."""

    def notify(self, message: str) -> None: ...
