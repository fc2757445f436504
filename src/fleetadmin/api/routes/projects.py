"""Project routes."""

from __future__ import annotations

from fastapi import APIRouter, Depends, Query
from fastapi.responses import PlainTextResponse

from fleetadmin.api.deps import get_coordinator
from fleetadmin.api.schemas.projects import CreateProjectRequest, OkResponse
from fleetadmin.core.lifecycle import LifecycleCoordinator
from fleetadmin.models.project import Project

router = APIRouter(prefix="/api/projects", tags=["projects"])

_FALSE_FLAGS = frozenset({"", "0", "false", "no"})


def _flag(value: str | None) -> bool:
    return value is not None and value.strip().lower() not in _FALSE_FLAGS


@router.get("", response_model=list[Project])
async def list_projects(
    coordinator: LifecycleCoordinator = Depends(get_coordinator),
) -> list[Project]:
    return await coordinator.list()


@router.post("", response_model=OkResponse)
async def create_project(
    request: CreateProjectRequest,
    coordinator: LifecycleCoordinator = Depends(get_coordinator),
) -> OkResponse:
    await coordinator.create(request.name)
    return OkResponse()


@router.get("/{name}", response_model=Project)
async def get_project(
    name: str,
    coordinator: LifecycleCoordinator = Depends(get_coordinator),
) -> Project:
    return await coordinator.get(name)


@router.post("/{name}/start", response_model=OkResponse)
async def start_project(
    name: str,
    coordinator: LifecycleCoordinator = Depends(get_coordinator),
) -> OkResponse:
    await coordinator.start(name)
    return OkResponse()


@router.post("/{name}/stop", response_model=OkResponse)
async def stop_project(
    name: str,
    coordinator: LifecycleCoordinator = Depends(get_coordinator),
) -> OkResponse:
    await coordinator.stop(name)
    return OkResponse()


@router.delete("/{name}", response_model=OkResponse)
async def destroy_project(
    name: str,
    purge: str | None = Query(default=None),
    coordinator: LifecycleCoordinator = Depends(get_coordinator),
) -> OkResponse:
    await coordinator.destroy(name, purge=_flag(purge))
    return OkResponse()


@router.post("/{name}/backup", response_model=OkResponse)
async def backup_project(
    name: str,
    coordinator: LifecycleCoordinator = Depends(get_coordinator),
) -> OkResponse:
    await coordinator.backup(name)
    return OkResponse()


@router.get("/{name}/logs/backup", response_class=PlainTextResponse)
async def backup_log(
    name: str,
    coordinator: LifecycleCoordinator = Depends(get_coordinator),
) -> PlainTextResponse:
    return PlainTextResponse(await coordinator.backup_log(name))
