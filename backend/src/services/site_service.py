"""Service layer for bookmarks (sites)."""
import logging
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from models.category import Category
from models.site import Site
from schemas.site import SiteBase
from services import language_service, tag_service
from services.category_service import CATEGORY_RULE
from services.ownership import OwnershipRule, get_owned

logger = logging.getLogger(__name__)

SITE_LOAD_OPTIONS = (selectinload(Site.language), selectinload(Site.tags))

SITE_RULE = OwnershipRule(Site, "Bookmark", load_options=SITE_LOAD_OPTIONS)


async def _apply_payload(db: AsyncSession, user_id: UUID, site: Site, data: SiteBase) -> None:
    """
    Copy a create/replace payload onto a site after checking its references.

    The category must belong to the user and the language must exist. Tag ids the
    user does not own are dropped.
    """
    await get_owned(db, CATEGORY_RULE, data.category_id, user_id)
    language = None
    if data.language_id is not None:
        language = await language_service.get_language(db, data.language_id)

    site.name = data.name
    site.url = data.url
    site.description = data.description
    site.category_id = data.category_id
    site.language = language
    site.tags = await tag_service.get_owned_tags(db, user_id, data.tag_ids)


async def _reload(db: AsyncSession, site_id: int) -> Site:
    result = await db.execute(
        select(Site)
        .where(Site.id == site_id)
        .options(*SITE_LOAD_OPTIONS)
        .execution_options(populate_existing=True),
    )
    return result.scalar_one()


async def list_sites_by_category(db: AsyncSession, user_id: UUID) -> dict[str, list[Site]]:
    """
    Get the user's bookmarks grouped by category name.

    Categories without bookmarks are left out. Categories and the bookmarks in
    each are ordered by name.
    """
    result = await db.execute(
        select(Site, Category.name)
        .join(Category, Site.category_id == Category.id)
        .where(Site.user_id == user_id)
        .options(*SITE_LOAD_OPTIONS)
        .order_by(Category.name, Site.name),
    )
    grouped: dict[str, list[Site]] = {}
    for site, category_name in result:
        grouped.setdefault(category_name, []).append(site)
    return grouped


async def get_site(db: AsyncSession, user_id: UUID, site_id: int) -> Site:
    """
    Get one of the user's bookmarks.

    Raises:
        NotFoundOrForbiddenError: If the bookmark is missing or owned by someone else.
    """
    return await get_owned(db, SITE_RULE, site_id, user_id)


async def create_site(db: AsyncSession, user_id: UUID, data: SiteBase) -> Site:
    """
    Create a bookmark.

    Raises:
        NotFoundOrForbiddenError: If the category is not the user's or the language
            does not exist.
    """
    site = Site(user_id=user_id, tags=[])
    await _apply_payload(db, user_id, site, data)
    db.add(site)
    await db.flush()
    logger.info("Created bookmark %s for user %s", site.id, user_id)
    return await _reload(db, site.id)


async def replace_site(db: AsyncSession, user_id: UUID, site_id: int, data: SiteBase) -> Site:
    """
    Replace every field of a bookmark, including its tags.

    Raises:
        NotFoundOrForbiddenError: If the bookmark or its new category is not the
            user's, or the language does not exist.
    """
    site = await get_owned(db, SITE_RULE, site_id, user_id)
    await _apply_payload(db, user_id, site, data)
    await db.flush()
    return await _reload(db, site.id)


async def delete_site(db: AsyncSession, user_id: UUID, site_id: int) -> None:
    """
    Delete a bookmark.

    Raises:
        NotFoundOrForbiddenError: If the bookmark is missing or owned by someone else.
    """
    site = await get_owned(db, SITE_RULE, site_id, user_id)
    await db.delete(site)
    await db.flush()
    logger.info("Deleted bookmark %s for user %s", site_id, user_id)
