"""Chat package exposing the conversational session controller."""

from .registry import DEFAULT_MODEL_ID, MODEL_CATALOG, ModelDescriptor, lookup
from .session import ChatSession
from .state import Message, Role, SessionState

__all__ = [
    "ChatSession",
    "DEFAULT_MODEL_ID",
    "MODEL_CATALOG",
    "Message",
    "ModelDescriptor",
    "Role",
    "SessionState",
    "lookup",
]
