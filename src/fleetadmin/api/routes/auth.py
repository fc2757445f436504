"""Login and session routes."""

from __future__ import annotations

import logging

from fastapi import APIRouter, Depends, Request, Response

from fleetadmin.api.deps import get_session_signer
from fleetadmin.api.schemas.auth import LoginRequest, SessionResponse
from fleetadmin.api.schemas.projects import OkResponse
from fleetadmin.config import Settings, get_settings
from fleetadmin.core.auth import SESSION_COOKIE, SessionSigner, verify_password
from fleetadmin.core.errors import Unauthorized

log = logging.getLogger(__name__)

router = APIRouter(prefix="/api/auth", tags=["auth"])


@router.post("/login", response_model=OkResponse)
async def login(
    request: LoginRequest,
    response: Response,
    settings: Settings = Depends(get_settings),
    signer: SessionSigner = Depends(get_session_signer),
) -> OkResponse:
    if not verify_password(request.password, settings.admin_bcrypt_hash):
        log.warning("rejected admin login")
        raise Unauthorized("invalid credentials")
    response.set_cookie(
        SESSION_COOKIE,
        signer.issue(),
        max_age=int(signer.ttl.total_seconds()),
        path="/",
        httponly=True,
        samesite="lax",
        secure=settings.cookie_secure,
    )
    return OkResponse()


@router.post("/logout", response_model=OkResponse)
async def logout(response: Response, settings: Settings = Depends(get_settings)) -> OkResponse:
    response.delete_cookie(
        SESSION_COOKIE,
        path="/",
        httponly=True,
        samesite="lax",
        secure=settings.cookie_secure,
    )
    return OkResponse()


@router.get("/session", response_model=SessionResponse)
async def current_session(
    request: Request,
    signer: SessionSigner = Depends(get_session_signer),
) -> SessionResponse:
    session = signer.verify(request.cookies.get(SESSION_COOKIE))
    return SessionResponse(expires_at=session.expires_at)
