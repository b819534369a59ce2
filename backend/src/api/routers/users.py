"""Account endpoints for the logged-in user."""
from fastapi import APIRouter, Depends, Request, status
from sqlalchemy.ext.asyncio import AsyncSession

from api.dependencies import get_async_session, get_current_user
from core.session_cookie import delete_session_token_cookie
from models.user import User
from schemas.auth import UserResponse
from services import user_service


router = APIRouter(prefix="/users", tags=["users"])


@router.get("/me", response_model=UserResponse)
async def get_me(current_user: User = Depends(get_current_user)) -> User:
    """Get the current authenticated user's info."""
    return current_user


@router.delete("/me", status_code=status.HTTP_204_NO_CONTENT)
async def delete_me(
    request: Request,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_async_session),
) -> None:
    """
    Delete the current user's account.

    Sessions, categories, tags and bookmarks are removed with it. The session
    cookie is cleared since the session no longer exists.
    """
    await user_service.delete_user(db, current_user.id)
    delete_session_token_cookie(request)
