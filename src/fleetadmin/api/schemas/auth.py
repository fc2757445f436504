"""Authentication API schemas."""

from __future__ import annotations

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field


class LoginRequest(BaseModel):
    password: str = ""


class SessionResponse(BaseModel):
    """Details of the session presented with the request."""

    model_config = ConfigDict(populate_by_name=True)

    ok: bool = True
    expires_at: datetime = Field(alias="expiresAt")
