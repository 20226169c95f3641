# src/tracker_linker/cli/commands.py

from __future__ import annotations

import inspect
import logging
from collections.abc import Awaitable, Callable

from ..config import credentials_configured
from ..core.controller import PassOutcome
from ..core.state import AppState

CommandEmitter = Callable[[str], None]
CommandHandler = Callable[[AppState, list[str], CommandEmitter | None], str | Awaitable[str]]

logger = logging.getLogger(__name__)


class CommandRegistry:
    """Simple slash-command registry used by the console host (/help, /convert, ...)."""

    def __init__(self) -> None:
        self._handlers: dict[str, CommandHandler] = {}
        self._help: dict[str, str] = {}

    def register(
        self,
        name: str,
        handler: CommandHandler,
        help_text: str,
        aliases: list[str] | None = None,
    ) -> None:
        aliases = aliases or []
        key = name.lower()
        self._handlers[key] = handler
        self._help[key] = help_text
        for alias in aliases:
            self._handlers[alias.lower()] = handler

    async def handle(
        self,
        state: AppState,
        line: str,
        emit: CommandEmitter | None = None,
    ) -> str | None:
        """
        Handle a string like "/command args".
        Returns a reply string or None if not a command.
        Handlers may be plain functions or coroutines.
        """
        if not line.startswith("/"):
            return None

        parts = line[1:].split()
        if not parts:
            return "Empty command. Use /help to list available commands."

        name = parts[0].lower()
        args = parts[1:]

        handler = self._handlers.get(name)
        if not handler:
            return f"Unknown command: /{name}. Use /help to list available commands."

        reply = handler(state, args, emit)
        if inspect.isawaitable(reply):
            reply = await reply
        return reply

    def build_help(self) -> str:
        lines = ["Available commands:"]
        for name, help_text in self._help.items():
            lines.append(f"  /{name} - {help_text}")
        return "\n".join(lines)


registry = CommandRegistry()


def cmd_help(state: AppState, args: list[str], emit: CommandEmitter | None = None) -> str:
    return registry.build_help()


def cmd_status(state: AppState, args: list[str], emit: CommandEmitter | None = None) -> str:
    s = state.settings
    creds = "configured" if credentials_configured(s) else "MISSING (set TRACKER_API_TOKEN and TRACKER_ORG_ID)"
    assignees = ", ".join(list(getattr(s, "default_assignees", []) or [])) or "-"
    prefix = getattr(s, "mention_prefix", "") or "(none)"
    path = getattr(state.document, "path", None) or "(unsaved)"
    return (
        "Status:\n"
        f"  Links: {s.tracker_base_url}<ID>\n"
        f"  API: {getattr(s, 'api_url', '-')}\n"
        f"  Credentials: {creds}\n"
        f"  Mention prefix: {prefix}\n"
        f"  Default assignees: {assignees}\n"
        f"  Document: {path}\n"
        f"  Controller: {state.controller.state.value}"
    )


def cmd_show(state: AppState, args: list[str], emit: CommandEmitter | None = None) -> str:
    text = state.document.get_value()
    if not text:
        return "Document is empty."
    width = len(str(text.count("\n") + 1))
    return "\n".join(f"{i:>{width}} | {line}" for i, line in enumerate(text.split("\n"), start=1))


async def cmd_convert(state: AppState, args: list[str], emit: CommandEmitter | None = None) -> str:
    """
    /convert -> run a full pass now (new task on the cursor line + link normalization)
    """
    result = await state.controller.process_text()
    if result.outcome is PassOutcome.DROPPED_BUSY:
        return "Busy: another task is being created."
    if result.outcome is PassOutcome.CREATED:
        return f"Created {result.task_id}."
    if result.outcome is PassOutcome.NO_NEW_TASK:
        return "Links converted." if result.text_changed else "Nothing to convert."
    return f"Pass ended: {result.outcome.value}."


def cmd_save(state: AppState, args: list[str], emit: CommandEmitter | None = None) -> str:
    """
    /save        -> save to the file the document was loaded from
    /save <path> -> save to <path>
    """
    target = args[0] if args else None
    try:
        path = state.document.save(target)
    except ValueError:
        return "Usage: /save <path> (document has no file yet)."
    except OSError as e:
        logger.exception("Failed to save document.")
        return f"Failed to save: {e}"
    return f"Saved to {path}."


registry.register("help", cmd_help, help_text="Show available commands.", aliases=["h", "?"])
registry.register("status", cmd_status, help_text="Show current settings (links/API/credentials).")
registry.register("show", cmd_show, help_text="Print the document with line numbers.")
registry.register(
    "convert", cmd_convert, help_text="Convert tracker links now (same as typing a space).", aliases=["c"]
)
registry.register("save", cmd_save, help_text="Save the document: /save [path].")
