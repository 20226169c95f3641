# src/tracker_linker/errors.py

"""Error types raised by the tracker client and handled by the controller."""

from __future__ import annotations


class TrackerLinkerError(RuntimeError):
    """Base class for errors that end a resolution pass with a user notice."""


class ConfigurationMissing(TrackerLinkerError):
    """API token or organization id is not configured."""

    def __init__(self, message: str = "Please configure API Token and Organization ID in settings") -> None:
        super().__init__(message)


class RemoteCallFailed(TrackerLinkerError):
    """Issue creation failed: transport error, non-201 status or malformed response."""

    def __init__(self, message: str, *, status_code: int | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code
