"""Operation journal API schemas."""

from __future__ import annotations

from pydantic import BaseModel

from fleetadmin.models.events import OperationEvent


class EventsResponse(BaseModel):
    """Collection of journal entries."""

    items: list[OperationEvent]
