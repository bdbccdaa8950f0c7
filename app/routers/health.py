"""Health check endpoints — used by load balancers and uptime monitoring."""

from __future__ import annotations

import logging

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse

from app.config import settings
from app.dependencies import get_session_verifier
from app.services.session import SessionVerifier

logger = logging.getLogger(__name__)

APP_VERSION = "1.0.0"

router = APIRouter(tags=["health"])


@router.get("/health")
async def health() -> dict:
    """Liveness probe — returns 200 if the process is running."""
    return {"status": "ok", "version": APP_VERSION}


@router.get("/ready")
async def ready(
    verifier: SessionVerifier = Depends(get_session_verifier),
) -> JSONResponse:
    """
    Readiness probe — checks that the upstream completion endpoint and
    session verification are configured. Makes no network calls.
    Returns 503 with the failing component marked "error".
    """
    status: dict[str, str] = {
        "upstream": "ok" if settings.chat_api_url and settings.chat_model else "error",
        "auth": "ok" if verifier.configured else "error",
    }
    all_ok = all(value == "ok" for value in status.values())
    if not all_ok:
        logger.warning("Readiness check failed: %s", status)

    return JSONResponse(content=status, status_code=200 if all_ok else 503)
