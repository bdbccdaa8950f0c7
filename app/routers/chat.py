"""
Chat endpoint — called by the Frontend with the user's Supabase access token.
Returns the assistant's plain-text reply as {"response": "..."}.
"""

from __future__ import annotations

import json
import logging
from typing import Optional

from fastapi import APIRouter, Depends, Header, HTTPException, Request, status
from pydantic import ValidationError

from app.dependencies import get_chat_service, get_session_verifier
from app.schemas.chat import ChatReply, ChatRequest
from app.schemas.session import SessionUser
from app.services.session import SessionError, SessionVerifier, parse_authorization
from app.services.species_chat import SpeciesChatService

logger = logging.getLogger(__name__)

router = APIRouter(tags=["chat"])


# ── Auth dependency ──────────────────────────────────────────────────────────


async def require_session(
    authorization: Optional[str] = Header(None),
    verifier: SessionVerifier = Depends(get_session_verifier),
) -> SessionUser:
    """Reject the request unless it carries a valid Supabase session."""
    try:
        return verifier.verify(parse_authorization(authorization))
    except SessionError as exc:
        logger.info("Rejected chat request: %s", exc)
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Unauthorized",
            headers={"WWW-Authenticate": "Bearer"},
        )


# ── Helpers ──────────────────────────────────────────────────────────────────


def _bad_request(detail: str, code: str) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_400_BAD_REQUEST,
        detail=detail,
        headers={"X-Error-Code": code},
    )


def _validation_failure(exc: ValidationError) -> HTTPException:
    """Map the first schema error to the boundary's rejection message."""
    error = exc.errors(include_url=False)[0]
    field = error["loc"][0] if error["loc"] else None

    if field == "history":
        return _bad_request("Invalid 'history' field", "INVALID_HISTORY")
    if field == "message" and "Message cannot be empty" in error["msg"]:
        return _bad_request("Message cannot be empty", "EMPTY_MESSAGE")
    return _bad_request("Missing or invalid 'message' field", "INVALID_MESSAGE")


async def _parse_body(request: Request) -> ChatRequest:
    """Parse and validate the raw body; the chat service never sees bad input."""
    raw = await request.body()
    try:
        payload = json.loads(raw)
    except (ValueError, UnicodeDecodeError):
        raise _bad_request("Invalid JSON", "INVALID_JSON")

    try:
        return ChatRequest.model_validate(payload)
    except ValidationError as exc:
        raise _validation_failure(exc)


# ── Endpoints ────────────────────────────────────────────────────────────────


@router.post("/chat", response_model=ChatReply)
async def chat(
    request: Request,
    user: SessionUser = Depends(require_session),
    chat_service: SpeciesChatService = Depends(get_chat_service),
) -> ChatReply:
    """
    Answer an animal question in the context of the prior conversation.

    Body: {"message": str, "history"?: [{"role": "user"|"assistant", "content": str}]}

    Upstream failures never surface as errors; the reply then carries a
    fallback sentence instead of the assistant's answer.
    """
    body = await _parse_body(request)
    logger.info(
        "Chat turn for user %s (history=%d, message=%d chars)",
        user.user_id,
        len(body.history),
        len(body.message),
    )
    response = await chat_service.generate_response(body.message, body.history)
    return ChatReply(response=response)
