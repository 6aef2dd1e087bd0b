"""Pydantic schemas for the completion endpoint's request and response bodies."""

from __future__ import annotations

from typing import Any, Dict, List, Literal

from pydantic import BaseModel, ConfigDict, Field, PositiveInt


class ChatTurn(BaseModel):
    role: Literal["user", "assistant"] = Field(..., description="Author of the turn.")
    content: str = Field(..., description="Turn text.")


class CompletionRequest(BaseModel):
    model: str = Field(..., description="Remote model name.")
    max_tokens: PositiveInt = Field(..., description="Response-length ceiling.")
    messages: List[ChatTurn] = Field(default_factory=list, description="Full visible history plus the new turn.")

    def to_payload(self) -> Dict[str, Any]:
        return self.model_dump(mode="json")


class ContentSegment(BaseModel):
    model_config = ConfigDict(extra="ignore")

    text: str


class CompletionResponse(BaseModel):
    """Success body; only the first segment's text is consumed."""

    model_config = ConfigDict(extra="ignore")

    content: List[ContentSegment] = Field(..., min_length=1)

    @property
    def first_text(self) -> str:
        return self.content[0].text


class ErrorDetail(BaseModel):
    model_config = ConfigDict(extra="ignore")

    message: str


class ErrorBody(BaseModel):
    model_config = ConfigDict(extra="ignore")

    error: ErrorDetail
