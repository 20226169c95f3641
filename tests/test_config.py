# tests/test_config.py

from __future__ import annotations

from pathlib import Path

import pytest

from tracker_linker.config import (
    DEFAULT_API_URL,
    DEFAULT_BASE_URL,
    Settings,
    credentials_configured,
    normalize_base_url,
)

_VARS = [
    "TRACKER_BASE_URL",
    "TRACKER_API_URL",
    "TRACKER_API_TOKEN",
    "TRACKER_ORG_ID",
    "TRACKER_AUTH_SCHEME",
    "TRACKER_ORG_HEADER",
    "TRACKER_DEFAULT_DESCRIPTION",
    "TRACKER_DEFAULT_ASSIGNEES",
    "TRACKER_MENTION_PREFIX",
    "TRACKER_HTTP_CONNECT_TIMEOUT_SECONDS",
    "TRACKER_HTTP_READ_TIMEOUT_SECONDS",
    "TRACKER_DATA_DIR",
]


@pytest.fixture(autouse=True)
def clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    for name in _VARS:
        monkeypatch.delenv(name, raising=False)


def test_defaults_need_no_secrets() -> None:
    s = Settings.from_env()
    assert s.tracker_base_url == DEFAULT_BASE_URL
    assert s.api_url == DEFAULT_API_URL
    assert s.auth_scheme == "OAuth"
    assert s.org_header == "X-Org-ID"
    assert s.mention_prefix == ""
    assert s.default_assignees == []
    assert "{% cut" in s.default_description
    assert not s.has_credentials


def test_values_from_env(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("TRACKER_BASE_URL", "https://tracker.example")
    monkeypatch.setenv("TRACKER_API_TOKEN", " tok ")
    monkeypatch.setenv("TRACKER_ORG_ID", "42")
    monkeypatch.setenv("TRACKER_DEFAULT_ASSIGNEES", "alice, bob  carol")
    monkeypatch.setenv("TRACKER_DEFAULT_DESCRIPTION", "line one\\nline two")
    monkeypatch.setenv("TRACKER_MENTION_PREFIX", "@")
    monkeypatch.setenv("TRACKER_HTTP_READ_TIMEOUT_SECONDS", "not-a-number")
    monkeypatch.setenv("TRACKER_DATA_DIR", "/tmp/tl-data")

    s = Settings.from_env()

    assert s.tracker_base_url == "https://tracker.example/"
    assert s.api_token == "tok"
    assert s.has_credentials
    assert s.default_assignees == ["alice", "bob", "carol"]
    assert s.default_description == "line one\nline two"
    assert s.mention_prefix == "@"
    assert s.http_read_timeout == 30.0
    assert s.data_dir == Path("/tmp/tl-data")


@pytest.mark.parametrize(
    ("raw", "expected"),
    [
        ("https://tracker.yandex.ru/", "https://tracker.yandex.ru/"),
        ("https://tracker.yandex.ru", "https://tracker.yandex.ru/"),
        ("  ", DEFAULT_BASE_URL),
    ],
)
def test_normalize_base_url(raw: str, expected: str) -> None:
    assert normalize_base_url(raw) == expected


def test_credentials_configured_accepts_any_settings_object(settings) -> None:
    assert credentials_configured(settings)
    settings.api_token = "   "
    assert not credentials_configured(settings)
