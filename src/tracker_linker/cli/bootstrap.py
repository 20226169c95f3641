# src/tracker_linker/cli/bootstrap.py

"""
CLI bootstrap helpers.

This module is the "composition root":
- loads settings once,
- ensures the local (gitignored) data directory exists,
- wires the document, console prompt/notifier and tracker client into AppState.
"""

from __future__ import annotations

import logging
from pathlib import Path

from ..config import get_settings
from ..connectors.console_connector import ConsoleConfirmationPrompt, ConsoleNotifier
from ..connectors.document import TextDocument
from ..core.controller import MentionController
from ..core.ports import ConfirmationPrompt, Notifier
from ..core.state import AppState
from ..tracker.client import TrackerClient

logger = logging.getLogger(__name__)


def create_initial_state(
    *,
    settings=None,
    document_path: str | Path | None = None,
    prompt: ConfirmationPrompt | None = None,
    notifier: Notifier | None = None,
) -> AppState:
    """
    Create AppState from the provided settings.

    Keeping settings injectable makes the app easier to test and avoids hidden global config reads.
    If settings is None, falls back to get_settings().
    """
    if settings is None:
        settings = get_settings()

    settings.data_dir.mkdir(parents=True, exist_ok=True)

    document = TextDocument.load(document_path) if document_path else TextDocument()
    tracker = TrackerClient(settings)

    controller = MentionController(
        settings=settings,
        surface=document,
        prompt=prompt or ConsoleConfirmationPrompt(),
        creator=tracker,
        notifier=notifier or ConsoleNotifier(),
    )

    if not settings.has_credentials:
        logger.info("Tracker credentials are not set: new tasks cannot be created, links still convert.")

    return AppState(settings=settings, document=document, controller=controller, tracker=tracker)
