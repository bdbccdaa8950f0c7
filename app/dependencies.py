"""FastAPI dependencies for the services created in the application lifespan."""

from fastapi import Request

from app.config import settings
from app.services.session import SessionVerifier
from app.services.species_chat import SpeciesChatService


def get_chat_service(request: Request) -> SpeciesChatService:
    """FastAPI dependency: the shared chat proxy bound to the app's HTTP client."""
    return request.app.state.chat_service


def get_session_verifier() -> SessionVerifier:
    """FastAPI dependency: verifier for Supabase access tokens."""
    return SessionVerifier(
        jwt_secret=settings.supabase_jwt_secret,
        audience=settings.supabase_jwt_audience,
    )
