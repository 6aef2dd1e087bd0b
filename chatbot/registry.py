"""Static catalog of the selectable completion models."""

from __future__ import annotations

from dataclasses import dataclass
from typing import List, Optional, Tuple


@dataclass(frozen=True)
class ModelDescriptor:
    """Describes one backend model variant and its response-length ceiling."""

    id: str
    display_name: str
    description: str
    max_tokens: int

    def __post_init__(self) -> None:
        if self.max_tokens <= 0:
            raise ValueError(f"max_tokens must be positive, got {self.max_tokens} for {self.id}")


MODEL_CATALOG: Tuple[ModelDescriptor, ...] = (
    ModelDescriptor(
        id="claude-3-5-sonnet-20241022",
        display_name="Claude 3.5 Sonnet",
        description="Most advanced model for complex tasks",
        max_tokens=8192,
    ),
    ModelDescriptor(
        id="claude-3-5-haiku-20241022",
        display_name="Claude 3.5 Haiku",
        description="Fastest model for simple tasks",
        max_tokens=4096,
    ),
    ModelDescriptor(
        id="claude-3-opus-20240229",
        display_name="Claude 3 Opus",
        description="Most powerful model for the heaviest tasks",
        max_tokens=4096,
    ),
    ModelDescriptor(
        id="claude-3-sonnet-20240229",
        display_name="Claude 3 Sonnet",
        description="Balanced model for everyday use",
        max_tokens=4096,
    ),
    ModelDescriptor(
        id="claude-3-haiku-20240307",
        display_name="Claude 3 Haiku",
        description="Quick and efficient for simple questions",
        max_tokens=4096,
    ),
)

DEFAULT_MODEL_ID = MODEL_CATALOG[0].id

_BY_ID = {descriptor.id: descriptor for descriptor in MODEL_CATALOG}


def lookup(model_id: Optional[str]) -> Optional[ModelDescriptor]:
    """Return the descriptor registered under ``model_id``, or None."""
    if not model_id:
        return None
    return _BY_ID.get(model_id)


def list_models() -> List[ModelDescriptor]:
    return list(MODEL_CATALOG)
