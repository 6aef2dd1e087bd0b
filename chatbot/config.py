"""Configuration helpers for the chat client."""

from __future__ import annotations

import os
from dataclasses import dataclass
from typing import Optional

from dotenv import load_dotenv

from .constants import COMPLETION_ENDPOINT
from .registry import DEFAULT_MODEL_ID

API_KEY_VARS = ("ANTHROPIC_API_KEY", "VITE_ANTHROPIC_API_KEY")


def _coerce_float(value: Optional[str], fallback: Optional[float]) -> Optional[float]:
    try:
        return float(value) if value else fallback
    except ValueError:
        return fallback


def _read_api_key() -> Optional[str]:
    for var_name in API_KEY_VARS:
        key = (os.getenv(var_name) or "").strip()
        if key:
            return key
    return None


@dataclass
class ChatConfig:
    """Holds runtime settings for one chat session."""

    api_key: Optional[str]
    model_id: str = DEFAULT_MODEL_ID
    endpoint: str = COMPLETION_ENDPOINT
    timeout_seconds: Optional[float] = None
    log_level: str = "INFO"


def load_chat_config() -> ChatConfig:
    """Load configuration from .env; a missing key is reported, not raised."""

    load_dotenv()
    return ChatConfig(
        api_key=_read_api_key(),
        model_id=os.getenv("CHAT_MODEL") or DEFAULT_MODEL_ID,
        endpoint=os.getenv("CHAT_ENDPOINT") or COMPLETION_ENDPOINT,
        timeout_seconds=_coerce_float(os.getenv("CHAT_TIMEOUT_SECONDS"), None),
        log_level=(os.getenv("CHAT_LOG_LEVEL") or "INFO").upper(),
    )
