"""Bookmark CRUD endpoints."""
from fastapi import APIRouter, Depends, status
from sqlalchemy.ext.asyncio import AsyncSession

from api.dependencies import get_async_session, get_current_user
from models.user import User
from schemas.site import SiteCreate, SiteReplace, SiteResponse
from services import site_service

router = APIRouter(prefix="/bookmarks", tags=["bookmarks"])


@router.get("/", response_model=dict[str, list[SiteResponse]])
async def list_bookmarks(
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_async_session),
) -> dict[str, list[SiteResponse]]:
    """
    Get the current user's bookmarks grouped by category name.

    Only categories holding at least one bookmark appear. Categories and the
    bookmarks inside each are sorted by name; every bookmark includes its
    language and tags.
    """
    grouped = await site_service.list_sites_by_category(db, current_user.id)
    return {
        category_name: [SiteResponse.model_validate(site) for site in sites]
        for category_name, sites in grouped.items()
    }


@router.post("/", response_model=SiteResponse, status_code=status.HTTP_201_CREATED)
async def create_bookmark(
    data: SiteCreate,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_async_session),
) -> SiteResponse:
    """
    Create a new bookmark.

    Returns 404 if the category isn't the user's or the language doesn't exist.
    Tag ids that aren't the user's are ignored.
    """
    site = await site_service.create_site(db, current_user.id, data)
    return SiteResponse.model_validate(site)


@router.get("/{bookmark_id}", response_model=SiteResponse)
async def get_bookmark(
    bookmark_id: int,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_async_session),
) -> SiteResponse:
    """Get a single bookmark by ID."""
    site = await site_service.get_site(db, current_user.id, bookmark_id)
    return SiteResponse.model_validate(site)


@router.put("/{bookmark_id}", response_model=SiteResponse)
async def replace_bookmark(
    bookmark_id: int,
    data: SiteReplace,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_async_session),
) -> SiteResponse:
    """Replace a bookmark, including its tag set."""
    site = await site_service.replace_site(db, current_user.id, bookmark_id, data)
    return SiteResponse.model_validate(site)


@router.delete("/{bookmark_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_bookmark(
    bookmark_id: int,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_async_session),
) -> None:
    """Delete a bookmark."""
    await site_service.delete_site(db, current_user.id, bookmark_id)
