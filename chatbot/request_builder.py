"""Turns the visible history and a new user turn into a completion request."""

from __future__ import annotations

from typing import Iterable, List, Optional

from .constants import DEFAULT_MAX_TOKENS
from .registry import ModelDescriptor
from .schemas import ChatTurn, CompletionRequest
from .state import Message, Role


def history_to_turns(history: Iterable[Message]) -> List[ChatTurn]:
    """Keep only role and content; ids and timestamps never leave the session."""
    return [ChatTurn(role=Role(message.role).value, content=message.content) for message in history]


def build_request(
    history: Iterable[Message],
    text: str,
    descriptor: Optional[ModelDescriptor],
    *,
    model_id: Optional[str] = None,
) -> CompletionRequest:
    """
    Build the outbound request for one turn.

    The service keeps no server-side conversation, so the whole visible
    history is resent on every call.

    Args:
        history: Messages already in the transcript, oldest first.
        text: New user-supplied text.
        descriptor: Descriptor of the selected model, or None when the
            selected id is not in the catalog.
        model_id: Selected id to send when ``descriptor`` is None.

    Returns:
        Request ready for the transport.
    """
    if descriptor is not None:
        model = descriptor.id
        max_tokens = descriptor.max_tokens
    else:
        if not model_id:
            raise ValueError("model_id is required when no descriptor is resolved")
        model = model_id
        max_tokens = DEFAULT_MAX_TOKENS

    turns = history_to_turns(history)
    turns.append(ChatTurn(role=Role.USER.value, content=text))
    return CompletionRequest(model=model, max_tokens=max_tokens, messages=turns)
