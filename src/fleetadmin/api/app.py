"""FastAPI app entrypoint."""

from __future__ import annotations

import logging

import uvicorn
from fastapi import FastAPI, Request, status
from fastapi.responses import FileResponse, JSONResponse, Response
from starlette.exceptions import HTTPException as StarletteHTTPException
from starlette.staticfiles import StaticFiles

from fleetadmin.api.deps import get_session_signer
from fleetadmin.api.middleware import API_PREFIX, SessionGateMiddleware
from fleetadmin.api.routes.auth import router as auth_router
from fleetadmin.api.routes.events import router as events_router
from fleetadmin.api.routes.projects import router as projects_router
from fleetadmin.config import Settings, get_settings
from fleetadmin.core.errors import FleetAdminError

log = logging.getLogger(__name__)


def create_app(settings: Settings | None = None) -> FastAPI:
    if settings is None:
        settings = get_settings()
    if not settings.admin_bcrypt_hash:
        log.warning("ADMIN_BCRYPT_HASH is not set; admin login is disabled")

    app = FastAPI(title="Fleet Admin API", version="0.1.0")
    app.dependency_overrides[get_settings] = lambda: settings
    app.add_middleware(SessionGateMiddleware, signer=get_session_signer(settings))

    app.include_router(auth_router)
    app.include_router(projects_router)
    app.include_router(events_router)

    @app.get("/api/health", tags=["system"])
    async def health() -> dict[str, bool]:
        return {"ok": True}

    index_file = settings.ui_path / "index.html"

    @app.exception_handler(FleetAdminError)
    async def handle_fleet_admin_error(request: Request, exc: FleetAdminError) -> JSONResponse:
        return JSONResponse(exc.payload(), status_code=exc.status_code)

    @app.exception_handler(StarletteHTTPException)
    async def handle_http_error(request: Request, exc: StarletteHTTPException) -> Response:
        if exc.status_code == status.HTTP_404_NOT_FOUND:
            if not request.url.path.startswith(API_PREFIX) and index_file.is_file():
                return FileResponse(index_file, media_type="text/html")
            return JSONResponse({"error": "not found"}, status_code=exc.status_code)
        return JSONResponse(
            {"error": exc.detail},
            status_code=exc.status_code,
            headers=getattr(exc, "headers", None),
        )

    if settings.ui_path.is_dir():
        app.mount("/", StaticFiles(directory=settings.ui_path, html=True), name="ui")
    else:
        log.info("admin UI bundle not found at %s; serving API only", settings.ui_path)

    return app


def run() -> None:
    settings = get_settings()
    logging.basicConfig(
        level=settings.log_level.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    uvicorn.run(create_app(settings), host=settings.host, port=settings.port, reload=False)
