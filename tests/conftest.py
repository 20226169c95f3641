# tests/conftest.py

from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from pathlib import Path
from types import SimpleNamespace

import pytest

from tracker_linker.connectors.document import TextDocument
from tracker_linker.core.controller import MentionController
from tracker_linker.core.ports import Cursor
from tracker_linker.core.state import AppState

from .fakes import FakeIssueCreator, FakeNotifier, FakePrompt

BASE_URL = "https://tracker.example/"
TODAY = date(2026, 1, 1)


@pytest.fixture()
def settings(tmp_path: Path) -> SimpleNamespace:
    """
    Minimal settings object compatible with the controller, client and commands.

    We intentionally use a SimpleNamespace rather than importing real config,
    to keep unit tests isolated from the environment.
    """
    return SimpleNamespace(
        app_name="tracker-linker",
        log_level="INFO",
        data_dir=tmp_path / "data",
        tracker_base_url=BASE_URL,
        mention_prefix="",
        api_url="https://api.tracker.example/v2/issues/",
        api_token="token-123",
        org_id="org-42",
        auth_scheme="OAuth",
        org_header="X-Org-ID",
        http_connect_timeout=5.0,
        http_read_timeout=30.0,
        default_description="Created from notes.",
        default_assignees=["alice", "bob"],
    )


@dataclass
class Harness:
    controller: MentionController
    document: TextDocument
    prompt: FakePrompt
    creator: FakeIssueCreator
    notifier: FakeNotifier


@pytest.fixture()
def make_harness(settings: SimpleNamespace):
    """
    Build a controller over an in-memory document.

    The cursor defaults to the end of the last line, as if the user just typed it.
    """

    def _make(
        text: str,
        cursor: Cursor | None = None,
        *,
        prompt: FakePrompt | None = None,
        creator: FakeIssueCreator | None = None,
    ) -> Harness:
        document = TextDocument(text)
        if cursor is None:
            last = text.split("\n")[-1]
            cursor = Cursor(text.count("\n"), len(last))
        document.set_cursor(cursor)

        prompt = prompt or FakePrompt()
        creator = creator or FakeIssueCreator()
        notifier = FakeNotifier()
        controller = MentionController(
            settings=settings,
            surface=document,
            prompt=prompt,
            creator=creator,
            notifier=notifier,
            today=lambda: TODAY,
        )
        return Harness(controller, document, prompt, creator, notifier)

    return _make


@pytest.fixture()
def state(settings: SimpleNamespace, make_harness) -> AppState:
    """AppState wired with deterministic fakes (empty document)."""
    h = make_harness("")
    return AppState(settings=settings, document=h.document, controller=h.controller, tracker=h.creator)
