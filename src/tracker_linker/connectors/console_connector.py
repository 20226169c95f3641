# src/tracker_linker/connectors/console_connector.py

from __future__ import annotations

import asyncio
import logging
from collections.abc import Callable
from datetime import datetime

from ..cli.commands import registry as command_registry
from ..core.controller import PassOutcome
from ..core.state import AppState
from ..tracker.models import ConfirmationRequest, ConfirmationResult, parse_tags

logger = logging.getLogger(__name__)


def _ts_local() -> str:
    return datetime.now().astimezone().strftime("%Y-%m-%d %H:%M:%S")


def _print_ts(text: str) -> None:
    print(f"[{_ts_local()}] {text}")


class ConsoleNotifier:
    """Notifier port: prints notices with a timestamp."""

    def notify(self, message: str) -> None:
        logger.debug("notice: %s", message)
        _print_ts(f"[NOTICE] {message}")


class ConsoleConfirmationPrompt:
    """
    ConfirmationPrompt port on top of input().

    Each field shows its default; an empty answer keeps it. The blocking input()
    calls run in a worker thread so the event loop keeps running.
    """

    def __init__(self, ask: Callable[[str], str] = input) -> None:
        self._ask = ask

    async def confirm(self, request: ConfirmationRequest) -> ConfirmationResult:
        return await asyncio.to_thread(self._confirm_sync, request)

    def _field(self, label: str, default: str) -> str:
        shown = default.replace("\n", " ")
        if len(shown) > 60:
            shown = shown[:57] + "..."
        answer = self._ask(f"  {label} [{shown}]: ").strip()
        return answer or default

    def _assignee(self, suggestions: list[str]) -> str:
        if suggestions:
            options = "  ".join(f"{i}) {name}" for i, name in enumerate(suggestions, start=1))
            print(f"  Quick assignees: {options}")
        answer = self._ask("  Assignee (username or number, empty for none): ").strip()
        if answer.isdigit() and 1 <= int(answer) <= len(suggestions):
            return suggestions[int(answer) - 1]
        return answer

    def _confirm_sync(self, request: ConfirmationRequest) -> ConfirmationResult:
        print(f"Create tracker task in queue {request.queue_key}?")
        try:
            summary = self._field("Summary", request.summary)
            description = self._field("Description", request.description)
            deadline = self._field("Deadline (YYYY-MM-DD, '-' for none)", request.deadline.isoformat())
            tags = parse_tags(self._ask("  Tags (comma-separated): "))
            assignee = self._assignee(list(request.assignee_suggestions))
            go = self._ask("  Create? [Y/n]: ").strip().lower()
        except EOFError:
            # Ctrl+D counts as cancel. Ctrl+C reaches the main thread, not this worker.
            print()
            return ConfirmationResult.cancelled(request.summary)

        if go not in ("", "y", "yes"):
            return ConfirmationResult.cancelled(request.summary)

        return ConfirmationResult(
            confirmed=True,
            summary=summary.strip(),
            description=description.strip(),
            deadline="" if deadline.strip() == "-" else deadline.strip(),
            tags=tags,
            assignee=assignee.strip(),
        )


async def type_line(state: AppState, text: str) -> PassOutcome:
    """
    Append a typed line to the document and fire the edit event.

    Pressing Enter completes the last token, so the line is stored with a
    trailing space and the event carries " ".
    """
    state.document.append_line(f"{text} ")
    result = await state.controller.on_edit(" ")
    return result.outcome


async def run_console_loop(state: AppState) -> None:
    logger.info("Console connector started.")
    _print_ts("[CONSOLE] Type note lines. End a line with a queue key (e.g. 'fix login TASKS') to create a task.")
    _print_ts("[CONSOLE] Use /help for commands. Use /exit to quit.\n")

    def emit(text: str) -> None:
        print(f"[{_ts_local()}] {text}", flush=True)

    while True:
        try:
            user_input = await asyncio.to_thread(input, ">>> ")
        except EOFError:
            logger.info("Console EOF received, exiting.")
            break
        except KeyboardInterrupt:
            logger.info("Console KeyboardInterrupt, exiting.")
            print()
            break

        stripped = user_input.strip()
        if not stripped:
            continue

        if stripped.lower() in ("/exit", "/quit"):
            logger.info("Console exit command received.")
            break

        try:
            cmd_response = await command_registry.handle(state, stripped, emit=emit)
        except Exception:
            logger.exception("Command handler crashed.")
            cmd_response = "Internal error while handling a command."

        if cmd_response is not None:
            _print_ts(cmd_response)
            continue

        try:
            outcome = await type_line(state, user_input.rstrip())
        except Exception:
            logger.exception("Console edit handler crashed.")
            _print_ts("Internal error while processing the line.")
            continue

        if outcome in (PassOutcome.CREATED, PassOutcome.NO_NEW_TASK):
            cursor = state.document.get_cursor()
            _print_ts(f"    {state.document.get_line(cursor.line)}")

    logger.info("Console connector finished.")
