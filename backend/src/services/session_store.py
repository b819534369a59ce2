"""Persistence for session records."""
import logging
from datetime import datetime
from uuid import UUID

from sqlalchemy import delete, select, update
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm.exc import FlushError

from models.session import Session
from models.user import User
from services.exceptions import ConstraintViolationError

logger = logging.getLogger(__name__)


class SessionStore:
    """
    Point operations on the sessions table.

    Holds no state of its own beyond the database handle it was constructed with,
    so a store is cheap to build per call. Writes are flushed, never committed;
    the caller owns the transaction.

    There is no per-user delete: a user's sessions disappear through the
    ON DELETE CASCADE on sessions.user_id.
    """

    def __init__(self, db: AsyncSession) -> None:
        self.db = db

    async def insert(self, session_id: str, user_id: UUID, expires_at: datetime) -> Session:
        """
        Insert a new session record.

        On failure the transaction is left for the caller to roll back.

        Raises:
            ConstraintViolationError: If the id already exists or user_id does not
                reference an existing user.
        """
        record = Session(id=session_id, user_id=user_id, expires_at=expires_at)
        self.db.add(record)
        try:
            await self.db.flush()
        except (IntegrityError, FlushError) as e:
            logger.warning("Session insert rejected for user %s: %s", user_id, e)
            raise ConstraintViolationError("Session could not be stored") from e
        return record

    async def find_by_id(self, session_id: str) -> Session | None:
        """Point lookup by session id."""
        result = await self.db.execute(select(Session).where(Session.id == session_id))
        return result.scalar_one_or_none()

    async def find_with_user(self, session_id: str) -> tuple[Session, User] | None:
        """Look up a session joined with its owning user in a single query."""
        result = await self.db.execute(
            select(Session, User)
            .join(User, Session.user_id == User.id)
            .where(Session.id == session_id),
        )
        row = result.one_or_none()
        if row is None:
            return None
        return row[0], row[1]

    async def update_expiry(self, session_id: str, expires_at: datetime) -> None:
        """Move a session's expiry. Does nothing if the session is absent."""
        await self.db.execute(
            update(Session).where(Session.id == session_id).values(expires_at=expires_at),
        )

    async def delete_by_id(self, session_id: str) -> None:
        """Delete a session. Deleting an absent id is not an error."""
        await self.db.execute(delete(Session).where(Session.id == session_id))

    async def delete_expired(self, now: datetime) -> int:
        """Delete every session whose expiry is at or before `now`. Returns the count."""
        result = await self.db.execute(
            delete(Session)
            .where(Session.expires_at <= now)
            .execution_options(synchronize_session=False),
        )
        return result.rowcount
