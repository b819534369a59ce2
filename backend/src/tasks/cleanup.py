"""
Scheduled cleanup task.

Expired sessions are already deleted lazily when they are next presented, so
this task is only housekeeping: it removes sessions whose owners never came back.
Designed to run as a cron job (e.g., daily at 3 AM).

Usage:
    python -m tasks.cleanup
"""
import asyncio
import logging
from dataclasses import dataclass
from datetime import datetime

from sqlalchemy.ext.asyncio import AsyncSession

from db.session import async_session_factory
from models.base import utcnow
from services.session_store import SessionStore

logger = logging.getLogger(__name__)


@dataclass
class CleanupStats:
    """Statistics from a cleanup run."""

    expired_sessions_deleted: int = 0

    def to_dict(self) -> dict[str, int]:
        """Convert to simple dict for logging/return."""
        return {"expired_sessions_deleted": self.expired_sessions_deleted}


async def purge_expired_sessions(db: AsyncSession, now: datetime | None = None) -> int:
    """
    Delete every session with expires_at at or before `now`.

    Args:
        db: Database session.
        now: Current time. Defaults to utcnow(); inject a specific time for testing
             boundary conditions.

    Returns:
        Number of sessions deleted.
    """
    now = now or utcnow()
    deleted = await SessionStore(db).delete_expired(now)
    await db.commit()
    if deleted > 0:
        logger.info("Purged %d expired sessions (cutoff=%s)", deleted, now.isoformat())
    return deleted


async def run_cleanup(
    db: AsyncSession | None = None,
    now: datetime | None = None,
) -> CleanupStats:
    """
    Run all cleanup tasks.

    Args:
        db: Database session. If None, creates one from async_session_factory.
        now: Current time for cutoff calculation. Defaults to utcnow().
    """
    logger.info("Starting cleanup task")

    async def _run(session: AsyncSession) -> CleanupStats:
        return CleanupStats(
            expired_sessions_deleted=await purge_expired_sessions(session, now=now),
        )

    if db is not None:
        stats = await _run(db)
    else:
        async with async_session_factory() as session:
            stats = await _run(session)

    logger.info("Cleanup complete: %s", stats.to_dict())
    return stats


def main() -> None:
    """Entry point for running cleanup as a script."""
    logging.basicConfig(
        level=logging.INFO,
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    )
    asyncio.run(run_cleanup())


if __name__ == "__main__":
    main()
