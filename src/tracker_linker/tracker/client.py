# src/tracker_linker/tracker/client.py

from __future__ import annotations

import logging
from typing import Any

import httpx

from ..config import credentials_configured
from ..errors import ConfigurationMissing, RemoteCallFailed
from .models import TaskCreationRequest

logger = logging.getLogger(__name__)


def _make_timeout(settings) -> httpx.Timeout:
    connect_s = float(getattr(settings, "http_connect_timeout", 5.0))
    read_s = float(getattr(settings, "http_read_timeout", 30.0))
    return httpx.Timeout(connect=connect_s, read=read_s, write=10.0, pool=connect_s)


def _extract_task_key(body: Any) -> str:
    """The tracker answers with an issue object, or a list whose first element is one."""
    if isinstance(body, list):
        body = body[0] if body else None
    if not isinstance(body, dict):
        raise RemoteCallFailed("Invalid API response: missing task key")
    key = body.get("key")
    if not isinstance(key, str) or not key.strip():
        raise RemoteCallFailed("Invalid API response: missing task key")
    return key.strip()


class TrackerClient:
    """
    Issue-creation client for the tracker REST API.

    IMPORTANT:
    - No secrets required at construction time; they are checked per call.
    - No automatic retries: a failed creation is reported and the user re-triggers.
    """

    def __init__(self, settings, *, transport: httpx.AsyncBaseTransport | None = None) -> None:
        self._settings = settings
        self._http = httpx.AsyncClient(timeout=_make_timeout(settings), transport=transport)

    def _headers(self) -> dict[str, str]:
        s = self._settings
        return {
            "Authorization": f"{s.auth_scheme} {s.api_token}",
            s.org_header: s.org_id,
            "Content-Type": "application/json",
        }

    async def create_issue(self, request: TaskCreationRequest) -> str:
        if not credentials_configured(self._settings):
            raise ConfigurationMissing()

        url = self._settings.api_url
        logger.info("Creating issue in queue=%s (summary=%r)", request.queue_key, request.summary)

        try:
            response = await self._http.post(url, headers=self._headers(), json=request.to_payload())
        except httpx.HTTPError as e:
            logger.warning("Issue creation: transport error (%s)", e.__class__.__name__, exc_info=True)
            raise RemoteCallFailed(f"Network error: {e.__class__.__name__}") from e

        if response.status_code != 201:
            logger.warning(
                "Issue creation: unexpected status=%s body=%s",
                response.status_code,
                response.text[:500],
            )
            raise RemoteCallFailed(
                f"API request failed: {response.status_code}",
                status_code=response.status_code,
            )

        try:
            body = response.json()
        except ValueError as e:
            raise RemoteCallFailed("Invalid API response: body is not JSON") from e

        key = _extract_task_key(body)
        logger.info("Issue created: %s", key)
        return key

    async def aclose(self) -> None:
        await self._http.aclose()
