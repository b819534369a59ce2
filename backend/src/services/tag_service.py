"""Service layer for tag operations."""
import logging
from uuid import UUID

from sqlalchemy import func, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from models.site import Site
from models.tag import Tag, site_tags
from schemas.tag import TagCount
from services.exceptions import AlreadyExistsError
from services.ownership import OwnershipRule, get_owned

logger = logging.getLogger(__name__)

TAG_RULE = OwnershipRule(Tag, "Tag")


async def _get_tag_by_name(db: AsyncSession, user_id: UUID, name: str) -> Tag | None:
    result = await db.execute(
        select(Tag).where(Tag.user_id == user_id, Tag.name == name),
    )
    return result.scalar_one_or_none()


async def list_tags(db: AsyncSession, user_id: UUID) -> list[Tag]:
    """Get the user's tags sorted by name."""
    result = await db.execute(
        select(Tag).where(Tag.user_id == user_id).order_by(Tag.name),
    )
    return list(result.scalars())


async def list_tags_with_counts(db: AsyncSession, user_id: UUID) -> list[TagCount]:
    """
    Get all of the user's tags with the number of their bookmarks carrying each.

    Tags on no bookmark are included with a count of zero.

    Returns:
        List of TagCount objects sorted by name.
    """
    # LEFT JOINs keep unused tags; COUNT ignores the NULL site ids they produce
    result = await db.execute(
        select(
            Tag.id,
            Tag.name,
            func.count(Site.id).label("count"),
        )
        .outerjoin(site_tags, Tag.id == site_tags.c.tag_id)
        .outerjoin(
            Site,
            (site_tags.c.site_id == Site.id) & (Site.user_id == user_id),
        )
        .where(Tag.user_id == user_id)
        .group_by(Tag.id, Tag.name)
        .order_by(Tag.name),
    )
    return [TagCount(id=row.id, name=row.name, count=row.count) for row in result]


async def create_tag(db: AsyncSession, user_id: UUID, name: str) -> Tag:
    """
    Create a tag. `name` is expected to be normalized already (see schemas.tag).

    Raises:
        AlreadyExistsError: If the user already has a tag with this name.
    """
    if await _get_tag_by_name(db, user_id, name) is not None:
        raise AlreadyExistsError("Tag", "name", name)

    tag = Tag(user_id=user_id, name=name)
    db.add(tag)
    try:
        await db.flush()
    except IntegrityError as e:
        await db.rollback()
        raise AlreadyExistsError("Tag", "name", name) from e
    return tag


async def rename_tag(db: AsyncSession, user_id: UUID, tag_id: int, new_name: str) -> Tag:
    """
    Rename a tag. Every bookmark carrying it shows the new name.

    Raises:
        NotFoundOrForbiddenError: If the tag is missing or owned by someone else.
        AlreadyExistsError: If the user already has a tag with new_name.
    """
    tag = await get_owned(db, TAG_RULE, tag_id, user_id)
    if tag.name == new_name:
        return tag

    if await _get_tag_by_name(db, user_id, new_name) is not None:
        raise AlreadyExistsError("Tag", "name", new_name)

    tag.name = new_name
    try:
        await db.flush()
    except IntegrityError as e:
        await db.rollback()
        raise AlreadyExistsError("Tag", "name", new_name) from e
    return tag


async def delete_tag(db: AsyncSession, user_id: UUID, tag_id: int) -> None:
    """
    Delete a tag. Its links to bookmarks are removed by the site_tags cascade.

    Raises:
        NotFoundOrForbiddenError: If the tag is missing or owned by someone else.
    """
    tag = await get_owned(db, TAG_RULE, tag_id, user_id)
    await db.delete(tag)
    await db.flush()
    logger.info("Deleted tag %s for user %s", tag_id, user_id)


async def get_owned_tags(db: AsyncSession, user_id: UUID, tag_ids: list[int]) -> list[Tag]:
    """
    Resolve tag ids to the subset the user owns.

    Ids that do not exist or belong to another user are dropped silently.
    """
    if not tag_ids:
        return []
    result = await db.execute(
        select(Tag)
        .where(Tag.user_id == user_id, Tag.id.in_(set(tag_ids)))
        .order_by(Tag.name),
    )
    return list(result.scalars())
