"""
Session lifecycle: creation, validation with sliding renewal, and invalidation.

A session is, from the caller's point of view, either absent or valid. Expired
sessions are not flagged; they are deleted the next time they are presented
(lazy deletion). Sessions validated during the second half of their lifetime
are extended to a full lifetime again (sliding expiration).
"""
import logging
from dataclasses import dataclass
from datetime import datetime, timedelta
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from models.base import as_utc, utcnow
from models.session import Session
from models.user import User
from services.session_store import SessionStore
from services.token_service import hash_session_token

logger = logging.getLogger(__name__)

SESSION_LIFETIME = timedelta(days=30)
RENEWAL_THRESHOLD = timedelta(days=15)


@dataclass(frozen=True)
class SessionValidationResult:
    """Outcome of validating a session token. Both fields are None when not authenticated."""

    session: Session | None = None
    user: User | None = None

    @property
    def is_authenticated(self) -> bool:
        return self.session is not None and self.user is not None


async def create_session(
    db: AsyncSession,
    token: str,
    user_id: UUID,
    now: datetime | None = None,
) -> Session:
    """
    Create a session for a freshly generated token.

    Args:
        db: Database session.
        token: The raw session token. Only its hash is stored.
        user_id: Owner of the new session.
        now: Current time, injectable for tests.

    Returns:
        The stored session record (never the raw token; the caller already has it).

    Raises:
        ConstraintViolationError: If the user does not exist or the id collides.
    """
    now = now or utcnow()
    session = await SessionStore(db).insert(
        session_id=hash_session_token(token),
        user_id=user_id,
        expires_at=now + SESSION_LIFETIME,
    )
    logger.info("Created session for user %s", user_id)
    return session


async def validate_session_token(
    db: AsyncSession,
    token: str,
    now: datetime | None = None,
) -> SessionValidationResult:
    """
    Resolve a raw token to its session and user.

    Expired sessions are deleted and reported as absent. Sessions inside the
    renewal window get a fresh expiry, which is persisted before returning.

    Never raises for an unknown, expired or malformed token; only store faults
    propagate.
    """
    now = now or utcnow()
    store = SessionStore(db)
    session_id = hash_session_token(token)

    found = await store.find_with_user(session_id)
    if found is None:
        return SessionValidationResult()

    session, user = found
    expires_at = as_utc(session.expires_at)

    if now >= expires_at:
        await store.delete_by_id(session_id)
        logger.info("Deleted expired session for user %s", user.id)
        return SessionValidationResult()

    if now >= expires_at - RENEWAL_THRESHOLD:
        renewed = now + SESSION_LIFETIME
        # the ORM-enabled UPDATE synchronizes the loaded session's expires_at
        await store.update_expiry(session_id, renewed)
        logger.debug("Renewed session for user %s until %s", user.id, renewed.isoformat())

    return SessionValidationResult(session=session, user=user)


async def invalidate_session(db: AsyncSession, session_id: str) -> None:
    """Delete a session. Idempotent: an absent id is not an error."""
    await SessionStore(db).delete_by_id(session_id)
