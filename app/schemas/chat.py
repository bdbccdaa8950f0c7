"""Pydantic schemas for the chat endpoint and the upstream completion API."""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator

MAX_MESSAGE_LENGTH = 4000
MAX_HISTORY_CONTENT_LENGTH = 20000
MAX_HISTORY_LENGTH = 50


class ChatMessage(BaseModel):
    """A single turn in the conversation history."""

    model_config = ConfigDict(frozen=True)

    role: Literal["user", "assistant"]
    content: str = Field(..., min_length=1, max_length=MAX_HISTORY_CONTENT_LENGTH)


class ChatRequest(BaseModel):
    """Body for POST /chat — sent by the Frontend."""

    message: str
    history: list[ChatMessage] = Field(default_factory=list, max_length=MAX_HISTORY_LENGTH)

    @field_validator("message")
    @classmethod
    def _trim_message(cls, value: str) -> str:
        # Length limits apply to the trimmed text.
        trimmed = value.strip()
        if not trimmed:
            raise ValueError("Message cannot be empty")
        if len(trimmed) > MAX_MESSAGE_LENGTH:
            raise ValueError(f"Message exceeds {MAX_MESSAGE_LENGTH} characters")
        return trimmed


class ChatReply(BaseModel):
    """Body returned by POST /chat."""

    response: str


# ── Upstream (OpenAI-compatible) completion payload ──────────────────────────


class CompletionMessage(BaseModel):
    content: str


class CompletionChoice(BaseModel):
    message: CompletionMessage


class CompletionResponse(BaseModel):
    """Subset of a chat-completion body; only the choices are consumed."""

    choices: list[CompletionChoice] = Field(..., min_length=1)
