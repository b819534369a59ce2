"""
Session cookie helpers.

Handlers and the authentication gate never write Set-Cookie directly. They record
the cookie change on `request.state`, and SessionCookieMiddleware applies it to
whatever response leaves the application, so a renewed or cleared cookie also
reaches the client on error responses.
"""
from dataclasses import dataclass
from datetime import UTC, datetime

from fastapi import Request, Response
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint

from core.config import get_settings
from models.base import as_utc

SESSION_COOKIE_NAME = "auth-session"
COOKIE_PATH = "/"
COOKIE_SAMESITE = "lax"

_EXPIRED = datetime(1970, 1, 1, tzinfo=UTC)


@dataclass(frozen=True)
class PendingCookie:
    """A cookie change waiting to be written to the response. `value=None` deletes it."""

    value: str | None
    expires: datetime


def set_session_token_cookie(request: Request, token: str, expires_at: datetime) -> None:
    """Issue the session cookie holding the raw token, expiring with the session."""
    request.state.session_cookie = PendingCookie(value=token, expires=as_utc(expires_at))


def delete_session_token_cookie(request: Request) -> None:
    """Instruct the client to discard the session cookie."""
    request.state.session_cookie = PendingCookie(value=None, expires=_EXPIRED)


def apply_session_cookie(response: Response, pending: PendingCookie) -> None:
    """Write a pending cookie change onto a response."""
    settings = get_settings()
    response.set_cookie(
        key=SESSION_COOKIE_NAME,
        value=pending.value or "",
        expires=pending.expires,
        max_age=0 if pending.value is None else None,
        path=COOKIE_PATH,
        secure=settings.session_cookie_secure,
        httponly=True,
        samesite=COOKIE_SAMESITE,
    )


class SessionCookieMiddleware(BaseHTTPMiddleware):
    """Apply the cookie change recorded during the request to the outgoing response."""

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint,
    ) -> Response:
        """Process request and attach any pending session cookie to the response."""
        response = await call_next(request)
        pending = getattr(request.state, "session_cookie", None)
        if pending is not None:
            apply_session_cookie(response, pending)
        return response
