"""Shared test fixtures and fakes."""

from __future__ import annotations

import json
import time
from typing import Callable

import httpx
import jwt
import pytest
from fastapi.testclient import TestClient

from app.dependencies import get_chat_service, get_session_verifier
from app.main import app
from app.schemas.chat import ChatMessage
from app.services.session import SessionVerifier
from app.services.species_chat import SpeciesChatService

TEST_JWT_SECRET = "test-supabase-jwt-secret-with-enough-bytes"
TEST_API_URL = "https://upstream.test/v1/chat/completions"
TEST_MODEL = "test/animal-model"


# --- Fakes ---


class FakeChatService:
    """Stands in for SpeciesChatService at the HTTP boundary."""

    def __init__(self, reply: str = "Otters hold hands while they sleep!"):
        self.reply = reply
        self.calls: list[tuple[str, list[ChatMessage]]] = []

    async def generate_response(self, message, history=()):
        self.calls.append((message, list(history)))
        return self.reply


class RecordingTransport:
    """httpx transport handler that records requests and replays a canned response."""

    def __init__(self, respond: Callable[[httpx.Request], httpx.Response]):
        self._respond = respond
        self.requests: list[httpx.Request] = []

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        return self._respond(request)

    def sent_json(self, index: int = 0) -> dict:
        return json.loads(self.requests[index].content)


def completion_body(content: str) -> dict:
    return {"choices": [{"message": {"role": "assistant", "content": content}}]}


def make_token(
    sub: str = "7d1c4f0e-9a43-4b1e-8b55-0d2c7f1a9e10",
    secret: str = TEST_JWT_SECRET,
    audience: str = "authenticated",
    expires_in: int = 3600,
    **extra,
) -> str:
    claims = {
        "sub": sub,
        "aud": audience,
        "exp": int(time.time()) + expires_in,
        "email": "naturalist@example.com",
        "role": "authenticated",
        **extra,
    }
    return jwt.encode(claims, secret, algorithm="HS256")


# --- Fixtures ---


@pytest.fixture
def make_service():
    """Build a SpeciesChatService over an httpx.MockTransport."""
    def _make(handler, timeout_seconds: float = 60.0) -> SpeciesChatService:
        client = httpx.AsyncClient(transport=httpx.MockTransport(handler))
        return SpeciesChatService(
            client=client,
            api_url=TEST_API_URL,
            model=TEST_MODEL,
            timeout_seconds=timeout_seconds,
        )

    return _make


@pytest.fixture
def fake_chat_service() -> FakeChatService:
    return FakeChatService()


@pytest.fixture
def api_client(fake_chat_service):
    """TestClient with the chat service faked and a known JWT secret."""
    app.dependency_overrides[get_chat_service] = lambda: fake_chat_service
    app.dependency_overrides[get_session_verifier] = lambda: SessionVerifier(TEST_JWT_SECRET)
    yield TestClient(app)
    app.dependency_overrides.clear()


@pytest.fixture
def auth_headers() -> dict[str, str]:
    return {"Authorization": f"Bearer {make_token()}"}
