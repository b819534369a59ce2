"""Category management endpoints."""
from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.ext.asyncio import AsyncSession

from api.dependencies import get_async_session, get_current_user
from models.user import User
from schemas.category import CategoryCreate, CategoryResponse, CategoryUpdate
from services import category_service
from services.exceptions import AlreadyExistsError, ResourceInUseError

router = APIRouter(prefix="/categories", tags=["categories"])


@router.get("/", response_model=list[CategoryResponse])
async def list_categories(
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_async_session),
) -> list[CategoryResponse]:
    """Get the current user's categories sorted by name."""
    categories = await category_service.list_categories(db, current_user.id)
    return [CategoryResponse.model_validate(c) for c in categories]


@router.post("/", response_model=CategoryResponse, status_code=status.HTTP_201_CREATED)
async def create_category(
    data: CategoryCreate,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_async_session),
) -> CategoryResponse:
    """
    Create a category.

    Returns 409 if the user already has a category with this name.
    """
    try:
        category = await category_service.create_category(db, current_user.id, data)
    except AlreadyExistsError as e:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=str(e)) from e
    return CategoryResponse.model_validate(category)


@router.patch("/{category_id}", response_model=CategoryResponse)
async def update_category(
    category_id: int,
    data: CategoryUpdate,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_async_session),
) -> CategoryResponse:
    """
    Rename a category or change its description.

    Returns 404 if the category doesn't exist or isn't the user's.
    Returns 409 if the new name is already used by another of the user's categories.
    """
    try:
        category = await category_service.update_category(
            db, current_user.id, category_id, data,
        )
    except AlreadyExistsError as e:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=str(e)) from e
    return CategoryResponse.model_validate(category)


@router.delete("/{category_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_category(
    category_id: int,
    current_user: User = Depends(get_current_user),
    db: AsyncSession = Depends(get_async_session),
) -> None:
    """
    Delete a category.

    Returns 404 if the category doesn't exist or isn't the user's.
    Returns 409 while bookmarks are still filed under it.
    """
    try:
        await category_service.delete_category(db, current_user.id, category_id)
    except ResourceInUseError as e:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=str(e)) from e
