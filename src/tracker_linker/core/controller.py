# src/tracker_linker/core/controller.py

"""
Mention resolution controller.

One pass per triggering edit:

    IDLE -> SCANNING -> (no new task | AWAITING_CONFIRMATION)
         -> (cancelled | CREATING) -> (failed | REWRITING) -> IDLE

Every pass ends with the normalization of bare references over the whole
document, except when the user cancels, creation fails or credentials are
missing: then the document is left untouched.

Key invariants:
- at most one pass is in flight; events seen while not IDLE are dropped, not queued,
- the line is rewritten only after the issue was created,
- the document is written back only when the computed text differs, and the
  cursor is restored after every write.
"""

from __future__ import annotations

import logging
from collections.abc import Callable
from dataclasses import dataclass
from datetime import date
from enum import StrEnum

from ..config import credentials_configured
from ..errors import ConfigurationMissing, RemoteCallFailed
from ..tracker.models import (
    DEFAULT_SUMMARY,
    ConfirmationRequest,
    TaskCreationRequest,
    default_deadline,
)
from .mentions import (
    NewTaskMention,
    find_new_task_mention,
    normalize_references,
    render_link,
    rewrite_new_task_line,
)
from .ports import ConfirmationPrompt, Cursor, IssueCreator, Notifier, TextSurface
from .sanitizer import sanitize

logger = logging.getLogger(__name__)

TRIGGER_CHAR = " "


class ResolutionState(StrEnum):
    IDLE = "idle"
    SCANNING = "scanning"
    AWAITING_CONFIRMATION = "awaiting_confirmation"
    CREATING = "creating"
    REWRITING = "rewriting"


class PassOutcome(StrEnum):
    DROPPED_BUSY = "dropped_busy"
    NOT_TRIGGERED = "not_triggered"
    NO_NEW_TASK = "no_new_task"
    CONFIG_MISSING = "config_missing"
    CANCELLED = "cancelled"
    FAILED = "failed"
    CREATED = "created"


@dataclass(slots=True, frozen=True)
class PassResult:
    outcome: PassOutcome
    task_id: str | None = None
    text_changed: bool = False


class MentionController:
    """Per-document orchestration of mention detection, task creation and link normalization."""

    def __init__(
        self,
        *,
        settings,
        surface: TextSurface,
        prompt: ConfirmationPrompt,
        creator: IssueCreator,
        notifier: Notifier,
        today: Callable[[], date] = date.today,
    ) -> None:
        self._settings = settings
        self._surface = surface
        self._prompt = prompt
        self._creator = creator
        self._notifier = notifier
        self._today = today
        self._state = ResolutionState.IDLE

    @property
    def state(self) -> ResolutionState:
        return self._state

    @property
    def busy(self) -> bool:
        return self._state is not ResolutionState.IDLE

    def _transition(self, new_state: ResolutionState) -> None:
        logger.debug("resolution: %s -> %s", self._state.value, new_state.value)
        self._state = new_state

    # ---- Entry points ----

    async def on_edit(self, typed_char: str) -> PassResult:
        """Edit-completion event from the host, carrying the last typed character."""
        if self.busy:
            logger.debug("edit event dropped: pass in flight (state=%s)", self._state.value)
            return PassResult(PassOutcome.DROPPED_BUSY)
        if typed_char != TRIGGER_CHAR:
            return PassResult(PassOutcome.NOT_TRIGGERED)
        return await self.process_text()

    async def on_editor_change(self) -> PassResult:
        """Variant for hosts that only report "something changed": look at the char before the cursor."""
        cursor = self._surface.get_cursor()
        line = self._surface.get_line(cursor.line)
        typed_char = line[cursor.ch - 1] if 0 < cursor.ch <= len(line) else ""
        return await self.on_edit(typed_char)

    async def process_text(self) -> PassResult:
        """Run a full pass regardless of the trigger character (manual "convert links")."""
        if self.busy:
            logger.debug("process_text dropped: pass in flight (state=%s)", self._state.value)
            return PassResult(PassOutcome.DROPPED_BUSY)

        # Claimed synchronously, before the first await.
        self._transition(ResolutionState.SCANNING)
        try:
            return await self._run_pass()
        finally:
            self._transition(ResolutionState.IDLE)

    # ---- Pass ----

    async def _run_pass(self) -> PassResult:
        settings = self._settings
        base_url = settings.tracker_base_url
        prefix = getattr(settings, "mention_prefix", "") or ""

        cursor = self._surface.get_cursor()
        content = self._surface.get_value()
        lines = content.split("\n")
        current_line = lines[cursor.line] if 0 <= cursor.line < len(lines) else ""

        mention = find_new_task_mention(current_line, prefix)
        if mention is None:
            changed = self._normalize_and_commit(cursor, base_url, prefix)
            return PassResult(PassOutcome.NO_NEW_TASK, text_changed=changed)

        if not credentials_configured(settings):
            self._notifier.notify(str(ConfigurationMissing()))
            return PassResult(PassOutcome.CONFIG_MISSING)

        logger.info("New task mention: queue=%s line=%d", mention.queue_key, cursor.line)

        self._transition(ResolutionState.AWAITING_CONFIRMATION)
        request = ConfirmationRequest(
            summary=sanitize(mention.preceding_text) or DEFAULT_SUMMARY,
            queue_key=mention.queue_key,
            description=settings.default_description,
            deadline=default_deadline(self._today()),
            tags=[],
            assignee="",
            assignee_suggestions=list(settings.default_assignees or []),
        )
        answer = await self._prompt.confirm(request)
        if not answer.confirmed:
            logger.info("Task creation cancelled by user (queue=%s)", mention.queue_key)
            return PassResult(PassOutcome.CANCELLED)

        self._transition(ResolutionState.CREATING)
        try:
            creation = TaskCreationRequest.from_confirmation(answer, mention.queue_key)
        except ValueError as e:
            logger.warning("Task creation rejected: %s", e)
            self._notifier.notify(f"Failed to create task: invalid deadline {answer.deadline!r}")
            return PassResult(PassOutcome.FAILED)

        try:
            task_id = await self._creator.create_issue(creation)
        except (RemoteCallFailed, ConfigurationMissing) as e:
            logger.warning("Task creation failed: %s", e)
            self._notifier.notify(f"Failed to create task: {e}")
            return PassResult(PassOutcome.FAILED)

        self._transition(ResolutionState.REWRITING)
        changed = self._rewrite_line(cursor, current_line, mention, task_id, base_url)
        self._notifier.notify(f"Task {task_id} created successfully!")
        changed = self._normalize_and_commit(cursor, base_url, prefix) or changed
        return PassResult(PassOutcome.CREATED, task_id=task_id, text_changed=changed)

    def _commit(self, before: str, after: str, cursor: Cursor) -> bool:
        if after == before:
            return False
        self._surface.set_value(after)
        self._surface.set_cursor(cursor)
        return True

    def _rewrite_line(
        self,
        cursor: Cursor,
        original_line: str,
        mention: NewTaskMention,
        task_id: str,
        base_url: str,
    ) -> bool:
        # The document may have been edited while we were waiting on the user or the
        # tracker: rewrite the line where it is now, never from the stale snapshot.
        current = self._surface.get_value()
        lines = current.split("\n")

        index = cursor.line
        if not (0 <= index < len(lines) and lines[index] == original_line):
            # Only follow the line when it moved unambiguously.
            index = lines.index(original_line) if lines.count(original_line) == 1 else -1

        if index < 0:
            logger.warning("Line of task %s changed during creation; link not inserted", task_id)
            self._notifier.notify(
                f"Task {task_id} created, but the line was edited meanwhile: {render_link(task_id, base_url)}"
            )
            return False

        lines[index] = rewrite_new_task_line(original_line, mention, task_id, base_url)
        return self._commit(current, "\n".join(lines), cursor)

    def _normalize_and_commit(self, cursor: Cursor, base_url: str, prefix: str) -> bool:
        before = self._surface.get_value()
        after = normalize_references(before, base_url, prefix)
        return self._commit(before, after, cursor)
