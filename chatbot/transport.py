"""HTTP transport for the remote completion endpoint."""

from __future__ import annotations

import logging
from typing import Any, Dict, Optional, Protocol

import httpx
from pydantic import ValidationError

from .constants import (
    COMPLETION_ENDPOINT,
    CREDENTIAL_HEADER,
    PROTOCOL_VERSION,
    PROTOCOL_VERSION_HEADER,
    UNKNOWN_ERROR_MESSAGE,
)
from .errors import ApiError, MalformedResponse, NetworkFailure
from .schemas import CompletionRequest, ErrorBody

logger = logging.getLogger(__name__)


class CompletionTransport(Protocol):
    async def send(self, request: CompletionRequest) -> Dict[str, Any]:
        ...


def extract_error_message(response: httpx.Response) -> str:
    """Best-effort read of ``{"error": {"message": ...}}`` from an error response."""
    try:
        return ErrorBody.model_validate(response.json()).error.message
    except (ValueError, ValidationError):
        return UNKNOWN_ERROR_MESSAGE


class HttpCompletionTransport:
    """Performs one POST per request and classifies the outcome."""

    def __init__(
        self,
        api_key: str,
        *,
        endpoint: str = COMPLETION_ENDPOINT,
        protocol_version: str = PROTOCOL_VERSION,
        timeout: Optional[float] = None,
        client: Optional[httpx.AsyncClient] = None,
    ) -> None:
        self.endpoint = endpoint
        self._headers = {
            "Content-Type": "application/json",
            CREDENTIAL_HEADER: api_key,
            PROTOCOL_VERSION_HEADER: protocol_version,
        }
        self._owns_client = client is None
        self._client = client or httpx.AsyncClient(timeout=timeout)

    async def send(self, request: CompletionRequest) -> Dict[str, Any]:
        """
        POST the request and return the decoded success body.

        Raises:
            NetworkFailure: No response was obtained.
            ApiError: The response status was not a success.
            MalformedResponse: A success response was not JSON.
        """
        try:
            response = await self._client.post(
                self.endpoint,
                json=request.to_payload(),
                headers=self._headers,
            )
        except httpx.HTTPError as exc:
            raise NetworkFailure(f"{type(exc).__name__}: {exc}") from exc

        if not response.is_success:
            raise ApiError(response.status_code, extract_error_message(response))

        try:
            body = response.json()
        except ValueError as exc:
            raise MalformedResponse(f"Response body is not JSON: {exc}") from exc
        logger.debug(f"Completion call succeeded with status {response.status_code}")
        return body

    async def aclose(self) -> None:
        if self._owns_client:
            await self._client.aclose()

    async def __aenter__(self) -> "HttpCompletionTransport":
        return self

    async def __aexit__(self, *exc_info: Any) -> None:
        await self.aclose()
