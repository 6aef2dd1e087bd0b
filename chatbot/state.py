"""Dataclasses for messages, session state and the ordered message store."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import Iterator, List, Set, Tuple
from uuid import uuid4


class Role(str, Enum):
    USER = "user"
    ASSISTANT = "assistant"


class SessionState(str, Enum):
    IDLE = "idle"
    SENDING = "sending"


@dataclass(frozen=True)
class Message:
    """One user or assistant turn; never mutated after creation."""

    id: str
    role: Role
    content: str
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    @classmethod
    def create(cls, role: Role, content: str) -> "Message":
        return cls(id=uuid4().hex, role=Role(role), content=content)


class MessageStore:
    """Ordered, append-only history of turns with a clear/reset operation."""

    def __init__(self) -> None:
        self._messages: List[Message] = []
        self._ids: Set[str] = set()

    def append(self, message: Message) -> Tuple[Message, ...]:
        """
        Append a message at the end of the history.

        Args:
            message: Message to store. Its id must not already be present.

        Returns:
            Read-only snapshot of the history after the append.

        Raises:
            ValueError: If a message with the same id is already stored.
        """
        if message.id in self._ids:
            raise ValueError(f"Duplicate message id: {message.id}")
        self._messages.append(message)
        self._ids.add(message.id)
        return self.snapshot()

    def clear(self) -> None:
        self._messages.clear()
        self._ids.clear()

    def snapshot(self) -> Tuple[Message, ...]:
        return tuple(self._messages)

    def __len__(self) -> int:
        return len(self._messages)

    def __iter__(self) -> Iterator[Message]:
        return iter(self.snapshot())
