"""Tests for the liveness and readiness probes and the app lifespan."""

from fastapi.testclient import TestClient

from app.config import settings
from app.dependencies import get_session_verifier
from app.main import app
from app.services.session import SessionVerifier
from app.services.species_chat import SpeciesChatService


def test_health(api_client):
    resp = api_client.get("/health")

    assert resp.status_code == 200
    assert resp.json()["status"] == "ok"


def test_ready_when_configured(api_client):
    resp = api_client.get("/ready")

    assert resp.status_code == 200
    assert resp.json() == {"upstream": "ok", "auth": "ok"}


def test_not_ready_without_jwt_secret(api_client):
    app.dependency_overrides[get_session_verifier] = lambda: SessionVerifier("")

    resp = api_client.get("/ready")

    assert resp.status_code == 503
    assert resp.json()["auth"] == "error"


def test_lifespan_builds_chat_service():
    with TestClient(app):
        service = app.state.chat_service
        assert isinstance(service, SpeciesChatService)
        assert service.model == settings.chat_model
