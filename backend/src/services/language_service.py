"""Service layer for the global language list."""
from sqlalchemy import or_, select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from models.language import Language
from services.exceptions import AlreadyExistsError, NotFoundOrForbiddenError


async def list_languages(db: AsyncSession) -> list[Language]:
    """Get all languages sorted by name."""
    result = await db.execute(select(Language).order_by(Language.name))
    return list(result.scalars())


async def get_language(db: AsyncSession, language_id: int) -> Language:
    """
    Get a language by id.

    Languages are shared, so there is no owner to check; a missing id is still
    reported as not found.
    """
    language = await db.get(Language, language_id)
    if language is None:
        raise NotFoundOrForbiddenError("Language", language_id)
    return language


async def create_language(db: AsyncSession, name: str, short_name: str) -> Language:
    """
    Add a language.

    Raises:
        AlreadyExistsError: If the name or short name is already used.
    """
    result = await db.execute(
        select(Language).where(
            or_(Language.name == name, Language.short_name == short_name),
        ),
    )
    existing = result.scalars().first()
    if existing is not None:
        field = "name" if existing.name == name else "short name"
        raise AlreadyExistsError("Language", field, name if field == "name" else short_name)

    language = Language(name=name, short_name=short_name)
    db.add(language)
    try:
        await db.flush()
    except IntegrityError as e:
        await db.rollback()
        raise AlreadyExistsError("Language", "name", name) from e
    return language
