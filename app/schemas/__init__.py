"""Pydantic schemas package."""

from app.schemas.chat import (
    ChatMessage,
    ChatReply,
    ChatRequest,
    CompletionChoice,
    CompletionMessage,
    CompletionResponse,
)
from app.schemas.session import SessionUser

__all__ = [
    "ChatMessage", "ChatRequest", "ChatReply",
    "CompletionChoice", "CompletionMessage", "CompletionResponse",
    "SessionUser",
]
