"""Operation journal routes."""

from __future__ import annotations

from fastapi import APIRouter, Depends, HTTPException, Query, status

from fleetadmin.api.deps import get_journal
from fleetadmin.api.schemas.events import EventsResponse
from fleetadmin.db.journal import OperationJournal
from fleetadmin.models.events import Operation

router = APIRouter(prefix="/api/projects/{name}/events", tags=["events"])


@router.get("", response_model=EventsResponse)
async def list_project_events(
    name: str,
    operation: str | None = None,
    limit: int | None = Query(default=None, ge=1, le=1000),
    journal: OperationJournal = Depends(get_journal),
) -> EventsResponse:
    parsed_operation: Operation | None = None
    if operation is not None:
        try:
            parsed_operation = Operation(operation)
        except ValueError as exc:
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail="invalid operation",
            ) from exc

    events = await journal.list_events(project=name, operation=parsed_operation, limit=limit)
    return EventsResponse(items=events)
