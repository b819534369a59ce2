"""Tag management endpoints."""
from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.ext.asyncio import AsyncSession

from api.dependencies import get_async_session, get_current_user
from models.user import User
from schemas.tag import TagCount, TagCreate, TagRenameRequest, TagResponse
from services import tag_service
from services.exceptions import AlreadyExistsError

router = APIRouter(prefix="/tags", tags=["tags"])


@router.get("/", response_model=list[TagCount] | list[TagResponse])
async def list_tags(
    counts: bool = False,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_async_session),
) -> list[TagCount] | list[TagResponse]:
    """
    Get all tags for the current user, sorted by name.

    With counts=true each tag carries `count`, the number of the user's
    bookmarks tagged with it (unused tags have a count of 0).
    """
    if counts:
        return await tag_service.list_tags_with_counts(db, current_user.id)
    tags = await tag_service.list_tags(db, current_user.id)
    return [TagResponse.model_validate(t) for t in tags]


@router.post("/", response_model=TagResponse, status_code=status.HTTP_201_CREATED)
async def create_tag(
    data: TagCreate,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_async_session),
) -> TagResponse:
    """
    Create a tag. The name is trimmed and lowercased.

    Returns 409 if the user already has a tag with this name.
    """
    try:
        tag = await tag_service.create_tag(db, current_user.id, data.name)
    except AlreadyExistsError as e:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=str(e)) from e
    return TagResponse.model_validate(tag)


@router.patch("/{tag_id}", response_model=TagResponse)
async def rename_tag(
    tag_id: int,
    rename_request: TagRenameRequest,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_async_session),
) -> TagResponse:
    """
    Rename a tag.

    All bookmarks using this tag will automatically reflect the new name.

    Returns 404 if the tag doesn't exist or isn't the user's.
    Returns 409 if a tag with the new name already exists.
    """
    try:
        tag = await tag_service.rename_tag(db, current_user.id, tag_id, rename_request.name)
    except AlreadyExistsError as e:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=str(e)) from e
    return TagResponse.model_validate(tag)


@router.delete("/{tag_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_tag(
    tag_id: int,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_async_session),
) -> None:
    """
    Delete a tag and remove it from all bookmarks.

    Returns 404 if the tag doesn't exist or isn't the user's.
    """
    await tag_service.delete_tag(db, current_user.id, tag_id)
