"""
Per-user isolation for owned resources.

Every read-for-mutation of a category, tag or site goes through `get_owned`, so
the "row exists and belongs to the caller" check lives in exactly one place.
Rows owned by someone else are reported exactly like missing rows.
"""
from collections.abc import Callable, Sequence
from dataclasses import dataclass, field
from operator import attrgetter
from typing import Any, Generic, TypeVar
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm.interfaces import ORMOption

from models.base import Base
from services.exceptions import NotFoundOrForbiddenError

T = TypeVar("T", bound=Base)


@dataclass(frozen=True)
class OwnershipRule(Generic[T]):
    """
    How to load a resource and find out who owns it.

    Attributes:
        model: The ORM model to load.
        entity_name: Name used in "<entity> not found" errors.
        owner_of: Extracts the owning user id from a loaded row.
        load_options: Loader options (e.g. selectinload) applied to the lookup.
    """

    model: type[T]
    entity_name: str
    owner_of: Callable[[T], UUID] = attrgetter("user_id")
    load_options: Sequence[ORMOption] = field(default_factory=tuple)


async def get_owned(
    db: AsyncSession,
    rule: OwnershipRule[T],
    entity_id: Any,
    user_id: UUID,
) -> T:
    """
    Load a resource by primary key, requiring that `user_id` owns it.

    Raises:
        NotFoundOrForbiddenError: If the row does not exist or belongs to another user.
    """
    result = await db.execute(
        select(rule.model)
        .where(rule.model.id == entity_id)
        .options(*rule.load_options),
    )
    entity = result.scalar_one_or_none()
    if entity is None or rule.owner_of(entity) != user_id:
        raise NotFoundOrForbiddenError(rule.entity_name, entity_id)
    return entity
