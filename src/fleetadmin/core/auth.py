"""Admin password check and session tokens."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import UTC, datetime, timedelta

import bcrypt
import jwt

from fleetadmin.core.errors import ServerMisconfigured, Unauthorized

log = logging.getLogger(__name__)

SESSION_COOKIE = "msession"
SESSION_TTL = timedelta(days=7)
SESSION_SUBJECT = "admin"
JWT_ALGORITHM = "HS256"


def verify_password(password: str, password_hash: str) -> bool:
    """Compare a submitted password against the configured bcrypt hash."""
    if not password_hash:
        raise ServerMisconfigured("ADMIN_BCRYPT_HASH")
    try:
        return bcrypt.checkpw(password.encode("utf-8"), password_hash.encode("utf-8"))
    except ValueError:
        log.error("ADMIN_BCRYPT_HASH is not a valid bcrypt hash")
        raise ServerMisconfigured("ADMIN_BCRYPT_HASH") from None


@dataclass(slots=True, frozen=True)
class Session:
    subject: str
    issued_at: datetime
    expires_at: datetime


class SessionSigner:
    """Issue and verify signed, time-limited admin session tokens."""

    def __init__(self, secret: str, *, ttl: timedelta = SESSION_TTL) -> None:
        self._secret = secret
        self._ttl = ttl

    @property
    def ttl(self) -> timedelta:
        return self._ttl

    def issue(self, *, now: datetime | None = None) -> str:
        if not self._secret:
            raise ServerMisconfigured("ADMIN_JWT_SECRET")
        issued_at = now or datetime.now(UTC)
        claims = {
            "sub": SESSION_SUBJECT,
            "iat": int(issued_at.timestamp()),
            "exp": int((issued_at + self._ttl).timestamp()),
        }
        return jwt.encode(claims, self._secret, algorithm=JWT_ALGORITHM)

    def verify(self, token: str | None) -> Session:
        if not self._secret:
            raise ServerMisconfigured("ADMIN_JWT_SECRET")
        if not token:
            raise Unauthorized()
        try:
            claims = jwt.decode(
                token,
                self._secret,
                algorithms=[JWT_ALGORITHM],
                options={"require": ["exp", "iat", "sub"]},
            )
        except jwt.ExpiredSignatureError as exc:
            log.debug("rejected expired session token")
            raise Unauthorized() from exc
        except jwt.InvalidTokenError as exc:
            raise Unauthorized() from exc
        if claims["sub"] != SESSION_SUBJECT:
            raise Unauthorized()
        return Session(
            subject=claims["sub"],
            issued_at=datetime.fromtimestamp(claims["iat"], UTC),
            expires_at=datetime.fromtimestamp(claims["exp"], UTC),
        )
