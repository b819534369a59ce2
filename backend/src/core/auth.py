"""Cookie-based session authentication."""
import logging

from fastapi import Depends, HTTPException, Request, status
from fastapi.security import APIKeyCookie
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from core.request_context import ANONYMOUS, RequestIdentity
from core.session_cookie import (
    SESSION_COOKIE_NAME,
    delete_session_token_cookie,
    set_session_token_cookie,
)
from db.session import get_async_session
from models.user import User
from services.session_service import validate_session_token

logger = logging.getLogger(__name__)


# Cookie scheme; auto_error=False so anonymous requests reach the handlers
session_cookie = APIKeyCookie(name=SESSION_COOKIE_NAME, auto_error=False)


async def resolve_identity(
    request: Request,
    token: str | None = Depends(session_cookie),
    db: AsyncSession = Depends(get_async_session),
) -> RequestIdentity:
    """
    Resolve the request's identity from the session cookie.

    Installed as an application-wide dependency so every request passes through it.
    Anonymous requests are allowed through; handlers that need a user depend on
    get_current_user.

    A valid session has its cookie re-issued with the (possibly renewed) expiry.
    A presented but unknown or expired token has its cookie cleared. Renewal and
    lazy deletion are committed right away so they stick even if the handler
    later fails.

    If the store cannot be reached the request continues anonymously and the
    cookie is left untouched, so a transient outage does not log the client out.
    """
    identity = ANONYMOUS

    if token:
        try:
            result = await validate_session_token(db, token)
            await db.commit()
        except SQLAlchemyError:
            logger.exception("Session validation failed, continuing as anonymous")
            await db.rollback()
        else:
            if result.is_authenticated:
                identity = RequestIdentity(user=result.user, session=result.session)
                set_session_token_cookie(request, token, result.session.expires_at)
            else:
                delete_session_token_cookie(request)

    request.state.identity = identity
    return identity


async def get_identity(identity: RequestIdentity = Depends(resolve_identity)) -> RequestIdentity:
    """Dependency returning the request identity, authenticated or not."""
    return identity


async def get_current_user(identity: RequestIdentity = Depends(resolve_identity)) -> User:
    """
    Dependency that returns the authenticated user.

    Raises:
        HTTPException: 401 if the request carries no valid session. Missing,
            malformed, unknown and expired tokens all produce the same response.
    """
    if identity.user is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Unauthorized",
        )
    return identity.user
