"""
Species Chat Agent — FastAPI application entry point.
Lifespan: open the shared upstream HTTP client → build the chat service.
"""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator

import httpx
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from app.config import settings
from app.routers import chat, health
from app.services.species_chat import SpeciesChatService

logging.basicConfig(
    level=getattr(logging, settings.log_level.upper(), logging.INFO),
    format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncIterator[None]:
    """
    Application lifespan handler.
    1. Open one pooled httpx client for all upstream calls.
    2. Bind the species chat service to it.
    """
    logger.info("Starting Species Chat Agent (env=%s)", settings.app_env)

    client = httpx.AsyncClient(timeout=settings.chat_timeout_seconds)
    app.state.chat_service = SpeciesChatService(
        client=client,
        api_url=settings.chat_api_url,
        model=settings.chat_model,
        timeout_seconds=settings.chat_timeout_seconds,
        api_key=settings.chat_api_key or None,
    )
    logger.info("Chat service ready (model=%s).", settings.chat_model)

    if not settings.supabase_jwt_secret:
        logger.error("SUPABASE_JWT_SECRET is not set; every chat request will be rejected.")

    yield

    logger.info("Shutting down Species Chat Agent.")
    await client.aclose()


app = FastAPI(
    title="Species Chat Agent",
    description="Animal-facts assistant for the species catalogue.",
    version=health.APP_VERSION,
    lifespan=lifespan,
)

# ── CORS ─────────────────────────────────────────────────────────────────────

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.allowed_origins_list,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# ── Routers ──────────────────────────────────────────────────────────────────

app.include_router(health.router)
app.include_router(chat.router)


# ── Global exception handler ─────────────────────────────────────────────────

@app.exception_handler(Exception)
async def global_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Return a machine-readable error for any unhandled exception."""
    logger.exception("Unhandled exception on %s %s", request.method, request.url)
    return JSONResponse(
        status_code=500,
        content={"detail": "Internal server error", "code": "AGENT_UNAVAILABLE"},
    )
