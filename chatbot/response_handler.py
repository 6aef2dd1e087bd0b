"""Converts transport outcomes into exactly one assistant message."""

from __future__ import annotations

from typing import Any, Optional

from pydantic import ValidationError

from .constants import FAILURE_NOTICE
from .diagnostics import DiagnosticChannel
from .errors import ChatError, MalformedResponse
from .schemas import CompletionResponse
from .state import Message, Role


def message_from_body(body: Any) -> Message:
    """Build the assistant message from the first content segment's text."""
    try:
        parsed = CompletionResponse.model_validate(body)
    except ValidationError as exc:
        raise MalformedResponse(f"Unexpected success body: {exc.error_count()} validation error(s)") from exc
    return Message.create(Role.ASSISTANT, parsed.first_text)


def failure_message() -> Message:
    return Message.create(Role.ASSISTANT, FAILURE_NOTICE)


class ResponseHandler:
    """Turns success bodies or classified errors into transcript messages."""

    def __init__(self, diagnostics: DiagnosticChannel) -> None:
        self.diagnostics = diagnostics

    def on_success(
        self,
        body: Any,
        *,
        generation: Optional[int] = None,
        model: Optional[str] = None,
    ) -> Message:
        try:
            return message_from_body(body)
        except MalformedResponse as exc:
            return self.on_failure(exc, generation=generation, model=model)

    def on_failure(
        self,
        error: ChatError,
        *,
        generation: Optional[int] = None,
        model: Optional[str] = None,
    ) -> Message:
        # Kind and detail go to diagnostics; the transcript only gets the notice.
        self.diagnostics.report_failure(error, generation=generation, model=model)
        return failure_message()
