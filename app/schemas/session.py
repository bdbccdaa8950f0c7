"""Pydantic schema for a verified caller session."""

from __future__ import annotations

from typing import Optional

from pydantic import BaseModel, ConfigDict


class SessionUser(BaseModel):
    """Identity extracted from a verified Supabase access token."""

    model_config = ConfigDict(frozen=True)

    user_id: str
    email: Optional[str] = None
    role: Optional[str] = None
