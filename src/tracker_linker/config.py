# src/tracker_linker/config.py

"""Centralized settings loaded from environment variables (+ optional .env).

Design goals:
- One Settings object for the whole app (normal "settings layer").
- No secrets required at import time.
- The core only reads settings; it never mutates them.
"""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path
from typing import List

from dotenv import load_dotenv

ENV_PREFIX = "TRACKER"

DEFAULT_BASE_URL = "https://tracker.yandex.ru/"
DEFAULT_API_URL = "https://api.tracker.yandex.net/v2/issues/"

DEFAULT_DESCRIPTION = """{% cut "Created from notes" %}

This task was created from notes.

{% endcut %}"""


def _k(suffix: str) -> str:
    """Build env var name with the project prefix."""
    return f"{ENV_PREFIX}_{suffix}"


load_dotenv(override=False)


def _env(name: str, default: str = "") -> str:
    v = os.getenv(name)
    return default if v is None else v


def _env_float(name: str, default: float) -> float:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        return float(raw)
    except ValueError:
        return default


def _env_list(name: str, default: List[str]) -> List[str]:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return list(default)
    parts = [p.strip() for p in raw.replace(",", " ").split() if p.strip()]
    return parts


def _env_path(name: str, default: Path) -> Path:
    raw = os.getenv(name)
    if raw is None or raw.strip() == "":
        return default
    return Path(raw).expanduser()


def normalize_base_url(raw: str) -> str:
    """
    Link URLs are built as base_url + task_id, so the base must end with "/".
    An empty value falls back to the default tracker UI.
    """
    url = (raw or "").strip()
    if not url:
        return DEFAULT_BASE_URL
    if not url.endswith("/"):
        url += "/"
    return url


def credentials_configured(settings) -> bool:
    """True when both the API token and the organization id are present."""
    token = (getattr(settings, "api_token", "") or "").strip()
    org_id = (getattr(settings, "org_id", "") or "").strip()
    return bool(token and org_id)


@dataclass(frozen=True, slots=True)
class Settings:
    # ---- App / logging ----
    app_name: str
    log_level: str
    data_dir: Path

    # ---- Links ----
    tracker_base_url: str
    mention_prefix: str

    # ---- Tracker API ----
    api_url: str
    api_token: str
    org_id: str
    auth_scheme: str
    org_header: str
    http_connect_timeout: float
    http_read_timeout: float

    # ---- Confirmation defaults ----
    default_description: str
    default_assignees: List[str]

    @property
    def has_credentials(self) -> bool:
        return credentials_configured(self)

    @staticmethod
    def from_env() -> "Settings":
        app_name = _env(_k("APP_NAME"), "tracker-linker").strip() or "tracker-linker"
        log_level = _env(_k("LOG_LEVEL"), "INFO")
        data_dir = _env_path(_k("DATA_DIR"), Path(".local/tracker-linker"))

        tracker_base_url = normalize_base_url(_env(_k("BASE_URL"), DEFAULT_BASE_URL))
        mention_prefix = _env(_k("MENTION_PREFIX"), "").strip()

        api_url = _env(_k("API_URL"), DEFAULT_API_URL).strip() or DEFAULT_API_URL
        api_token = _env(_k("API_TOKEN"), "").strip()
        org_id = _env(_k("ORG_ID"), "").strip()
        auth_scheme = _env(_k("AUTH_SCHEME"), "OAuth").strip() or "OAuth"
        org_header = _env(_k("ORG_HEADER"), "X-Org-ID").strip() or "X-Org-ID"

        connect_timeout = _env_float(_k("HTTP_CONNECT_TIMEOUT_SECONDS"), 5.0)
        read_timeout = _env_float(_k("HTTP_READ_TIMEOUT_SECONDS"), 30.0)

        # .env files cannot hold raw newlines comfortably; accept "\n" escapes.
        default_description = _env(_k("DEFAULT_DESCRIPTION"), DEFAULT_DESCRIPTION).replace("\\n", "\n")
        default_assignees = _env_list(_k("DEFAULT_ASSIGNEES"), [])

        return Settings(
            app_name=app_name,
            log_level=log_level,
            data_dir=data_dir,
            tracker_base_url=tracker_base_url,
            mention_prefix=mention_prefix,
            api_url=api_url,
            api_token=api_token,
            org_id=org_id,
            auth_scheme=auth_scheme,
            org_header=org_header,
            http_connect_timeout=connect_timeout,
            http_read_timeout=read_timeout,
            default_description=default_description,
            default_assignees=default_assignees,
        )


_SETTINGS: Settings | None = None


def get_settings() -> Settings:
    global _SETTINGS
    if _SETTINGS is None:
        _SETTINGS = Settings.from_env()
    return _SETTINGS
