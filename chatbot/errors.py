"""Error taxonomy for the send path."""

from __future__ import annotations

from typing import Optional


class ChatError(Exception):
    """Base class for classified send-path failures."""

    kind = "ChatError"

    def __init__(self, detail: str = "") -> None:
        super().__init__(detail)
        self.detail = detail

    @property
    def status(self) -> Optional[int]:
        return None


class ConfigurationMissing(ChatError):
    """No credential is configured; nothing may be sent."""

    kind = "ConfigurationMissing"


class NetworkFailure(ChatError):
    """The call could not complete and no response was obtained."""

    kind = "NetworkFailure"


class ApiError(ChatError):
    """A response was obtained with a non-success status."""

    kind = "ApiError"

    def __init__(self, status: int, message: str) -> None:
        super().__init__(f"API Error: {status} - {message}")
        self._status = status
        self.message = message

    @property
    def status(self) -> Optional[int]:
        return self._status


class MalformedResponse(ChatError):
    """A success response did not carry the expected content shape."""

    kind = "MalformedResponse"
