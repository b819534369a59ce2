"""Registration, login and logout endpoints."""
import logging

from fastapi import APIRouter, Depends, HTTPException, Request, status
from sqlalchemy.ext.asyncio import AsyncSession

from api.dependencies import get_async_session, get_identity, get_settings
from core.config import Settings
from core.rate_limit_config import RateLimitedOperation
from core.rate_limiter import rate_limit
from core.request_context import RequestIdentity
from core.session_cookie import delete_session_token_cookie, set_session_token_cookie
from schemas.auth import IdentityResponse, LoginRequest, RegisterRequest, UserResponse
from services import session_service, user_service
from services.exceptions import AlreadyExistsError, InvalidCredentialsError
from services.token_service import generate_session_token

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/auth", tags=["auth"])


def _identity_response(identity: RequestIdentity) -> IdentityResponse:
    return IdentityResponse.model_validate(
        {"user": identity.user, "session": identity.session},
        from_attributes=True,
    )


@router.post(
    "/register",
    response_model=UserResponse,
    status_code=status.HTTP_201_CREATED,
    dependencies=[Depends(rate_limit(RateLimitedOperation.REGISTER))],
)
async def register(
    data: RegisterRequest,
    db: AsyncSession = Depends(get_async_session),
) -> UserResponse:
    """
    Create an account.

    Does not log in; call /auth/login afterwards.

    Returns 409 if the username or email is already taken.
    """
    try:
        user = await user_service.register_user(
            db, username=data.username, password=data.password, email=data.email,
        )
    except AlreadyExistsError as e:
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail=str(e),
        ) from e
    return UserResponse.model_validate(user)


@router.post(
    "/login",
    response_model=IdentityResponse,
    dependencies=[Depends(rate_limit(RateLimitedOperation.LOGIN))],
)
async def login(
    data: LoginRequest,
    request: Request,
    identity: RequestIdentity = Depends(get_identity),
    db: AsyncSession = Depends(get_async_session),
    settings: Settings = Depends(get_settings),
) -> IdentityResponse:
    """
    Log in and receive a session cookie.

    A session already bound to the request's cookie is invalidated first, so a
    login never leaves the previous session usable.

    Returns 401 for an unknown username, or a wrong password when password
    checking is enabled. Both cases produce the same message.
    """
    try:
        user = await user_service.authenticate_user(
            db,
            username=data.username,
            password=data.password,
            check_password=settings.password_check_enabled,
        )
    except InvalidCredentialsError as e:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=str(e),
        ) from e

    if identity.session is not None:
        await session_service.invalidate_session(db, identity.session.id)

    token = generate_session_token()
    session = await session_service.create_session(db, token, user.id)
    set_session_token_cookie(request, token, session.expires_at)
    logger.info("User %s logged in", user.id)

    new_identity = RequestIdentity(user=user, session=session)
    request.state.identity = new_identity
    return _identity_response(new_identity)


@router.post("/logout", status_code=status.HTTP_204_NO_CONTENT)
async def logout(
    request: Request,
    identity: RequestIdentity = Depends(get_identity),
    db: AsyncSession = Depends(get_async_session),
) -> None:
    """Invalidate the current session, if any, and clear the session cookie."""
    if identity.session is not None:
        await session_service.invalidate_session(db, identity.session.id)
    delete_session_token_cookie(request)


@router.get("/me", response_model=IdentityResponse)
async def me(identity: RequestIdentity = Depends(get_identity)) -> IdentityResponse:
    """
    Describe the request's identity.

    Never returns 401: anonymous callers get null user and session.
    """
    return _identity_response(identity)
