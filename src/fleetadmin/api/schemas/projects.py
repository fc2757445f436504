"""Project API schemas."""

from __future__ import annotations

from pydantic import BaseModel


class CreateProjectRequest(BaseModel):
    """Payload for provisioning a project."""

    name: str = ""


class OkResponse(BaseModel):
    ok: bool = True
