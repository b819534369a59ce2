"""Service layer for category operations."""
import logging
from uuid import UUID

from sqlalchemy import func, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from models.category import Category
from models.site import Site
from schemas.category import CategoryCreate, CategoryUpdate
from services.exceptions import AlreadyExistsError, ResourceInUseError
from services.ownership import OwnershipRule, get_owned

logger = logging.getLogger(__name__)

CATEGORY_RULE = OwnershipRule(Category, "Category")


async def _name_taken(
    db: AsyncSession,
    user_id: UUID,
    name: str,
    exclude_id: int | None = None,
) -> bool:
    query = select(Category.id).where(Category.user_id == user_id, Category.name == name)
    if exclude_id is not None:
        query = query.where(Category.id != exclude_id)
    result = await db.execute(query)
    return result.first() is not None


async def _flush_or_conflict(db: AsyncSession, name: str) -> None:
    try:
        await db.flush()
    except IntegrityError as e:
        await db.rollback()
        raise AlreadyExistsError("Category", "name", name) from e


async def list_categories(db: AsyncSession, user_id: UUID) -> list[Category]:
    """Get the user's categories sorted by name."""
    result = await db.execute(
        select(Category).where(Category.user_id == user_id).order_by(Category.name),
    )
    return list(result.scalars())


async def create_category(db: AsyncSession, user_id: UUID, data: CategoryCreate) -> Category:
    """
    Create a category.

    Raises:
        AlreadyExistsError: If the user already has a category with this name.
    """
    if await _name_taken(db, user_id, data.name):
        raise AlreadyExistsError("Category", "name", data.name)

    category = Category(user_id=user_id, name=data.name, description=data.description)
    db.add(category)
    await _flush_or_conflict(db, data.name)
    return category


async def update_category(
    db: AsyncSession,
    user_id: UUID,
    category_id: int,
    data: CategoryUpdate,
) -> Category:
    """
    Update a category's name and/or description.

    Raises:
        NotFoundOrForbiddenError: If the category is missing or owned by someone else.
        AlreadyExistsError: If the new name collides with another of the user's categories.
    """
    category = await get_owned(db, CATEGORY_RULE, category_id, user_id)
    updates = data.model_dump(exclude_unset=True)

    new_name = updates.get("name")
    if new_name is not None and new_name != category.name:
        if await _name_taken(db, user_id, new_name, exclude_id=category.id):
            raise AlreadyExistsError("Category", "name", new_name)
        category.name = new_name
    if "description" in updates:
        category.description = updates["description"]

    await _flush_or_conflict(db, category.name)
    return category


async def delete_category(db: AsyncSession, user_id: UUID, category_id: int) -> None:
    """
    Delete an empty category.

    Raises:
        NotFoundOrForbiddenError: If the category is missing or owned by someone else.
        ResourceInUseError: If bookmarks are still filed under it.
    """
    category = await get_owned(db, CATEGORY_RULE, category_id, user_id)

    result = await db.execute(
        select(func.count()).select_from(Site).where(Site.category_id == category.id),
    )
    site_count = result.scalar_one()
    if site_count:
        raise ResourceInUseError("Category", category.id, site_count)

    await db.delete(category)
    await db.flush()
    logger.info("Deleted category %s for user %s", category_id, user_id)
