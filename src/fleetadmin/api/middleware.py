"""Session gate applied before every API route."""

from __future__ import annotations

import logging

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import JSONResponse, Response
from starlette.types import ASGIApp

from fleetadmin.core.auth import SESSION_COOKIE, SessionSigner
from fleetadmin.core.errors import FleetAdminError

log = logging.getLogger(__name__)

API_PREFIX = "/api/"
PUBLIC_ROUTES = frozenset({("POST", "/api/auth/login"), ("GET", "/api/health")})


class SessionGateMiddleware(BaseHTTPMiddleware):
    """Reject API requests without a valid session cookie."""

    def __init__(self, app: ASGIApp, signer: SessionSigner) -> None:
        super().__init__(app)
        self._signer = signer

    async def dispatch(self, request: Request, call_next: RequestResponseEndpoint) -> Response:
        path = request.url.path
        if not path.startswith(API_PREFIX) or (request.method, path) in PUBLIC_ROUTES:
            return await call_next(request)
        try:
            self._signer.verify(request.cookies.get(SESSION_COOKIE))
        except FleetAdminError as exc:
            log.debug("gate rejected %s %s: %s", request.method, path, exc.message)
            return JSONResponse(exc.payload(), status_code=exc.status_code)
        return await call_next(request)
