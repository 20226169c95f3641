# src/tracker_linker/core/state.py

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

from .controller import MentionController


@dataclass
class AppState:
    # Store Settings on the state for easy access in commands/connectors.
    settings: Any

    # The document the controller edits (TextSurface; TextDocument in the console host).
    document: Any
    controller: MentionController

    # Concrete issue creator, kept so the entry point can close it on shutdown.
    tracker: Any = None
