"""
Session verification — validates Supabase Auth access tokens.

Sessions are issued and stored by Supabase; this service only checks the
HS256-signed JWT the Frontend forwards in the Authorization header.
"""

from __future__ import annotations

import logging
from typing import Optional, Sequence

import jwt
from pydantic import ValidationError

from app.schemas.session import SessionUser

logger = logging.getLogger(__name__)

_BEARER_PREFIX = "bearer "


class SessionError(Exception):
    """Raised when the caller has no valid session."""


def parse_authorization(header: Optional[str]) -> str:
    """Extract the token from an ``Authorization: Bearer <token>`` header."""
    if not header:
        raise SessionError("Authorization header missing")
    if not header.lower().startswith(_BEARER_PREFIX):
        raise SessionError("Authorization scheme must be Bearer")
    token = header[len(_BEARER_PREFIX):].strip()
    if not token:
        raise SessionError("Bearer token is empty")
    return token


class SessionVerifier:
    """Decode and validate access tokens with a shared secret."""

    def __init__(
        self,
        jwt_secret: str,
        audience: str = "authenticated",
        algorithms: Sequence[str] = ("HS256",),
        leeway_seconds: int = 0,
    ) -> None:
        self._secret = jwt_secret
        self._audience = audience
        self._algorithms = list(algorithms)
        self._leeway = leeway_seconds

    @property
    def configured(self) -> bool:
        return bool(self._secret)

    def verify(self, token: str) -> SessionUser:
        """Return the session owner, or raise SessionError."""
        if not self.configured:
            raise SessionError("Session verification is not configured")
        try:
            claims = jwt.decode(
                token,
                self._secret,
                algorithms=self._algorithms,
                audience=self._audience,
                leeway=self._leeway,
                options={"require": ["exp", "sub"]},
            )
        except jwt.ExpiredSignatureError as exc:
            raise SessionError("Token expired") from exc
        except jwt.InvalidTokenError as exc:
            raise SessionError(f"Invalid token: {exc}") from exc

        if not claims.get("sub"):
            raise SessionError("Token has no subject")
        try:
            return SessionUser(
                user_id=str(claims["sub"]),
                email=claims.get("email"),
                role=claims.get("role"),
            )
        except ValidationError as exc:
            raise SessionError(f"Malformed token claims: {exc.error_count()} errors") from exc
