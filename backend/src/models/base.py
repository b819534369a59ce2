"""SQLAlchemy declarative base with common mixins."""
from datetime import UTC, datetime
from uuid import UUID

from sqlalchemy import DateTime, Uuid, func
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column
from uuid6 import uuid7


def utcnow() -> datetime:
    """Current time as a timezone-aware UTC datetime."""
    return datetime.now(UTC)


def as_utc(value: datetime) -> datetime:
    """
    Return value as a timezone-aware UTC datetime.

    Some backends (SQLite) hand back naive datetimes for TIMESTAMP WITH TIME ZONE
    columns; everything this application stores is UTC, so naive values are tagged.
    """
    if value.tzinfo is None:
        return value.replace(tzinfo=UTC)
    return value.astimezone(UTC)


class Base(DeclarativeBase):
    """Base class for all SQLAlchemy models."""

    pass


class UUIDv7Mixin:
    """
    Mixin that adds a UUIDv7 primary key.

    UUIDv7 values are time-ordered, so they index like a sequence while staying
    opaque to clients. The value is generated client-side, which keeps the id
    available before the first flush.
    """

    id: Mapped[UUID] = mapped_column(Uuid, primary_key=True, default=uuid7)


class TimestampMixin:
    """
    Mixin that adds created_at and updated_at columns.

    All timestamps are timezone-aware (stored as TIMESTAMP WITH TIME ZONE in PostgreSQL).
    Values are set client-side so they are readable right after a flush without a
    refresh round-trip; the server default covers rows inserted outside the ORM.
    """

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=utcnow,
        server_default=func.now(),
        nullable=False,
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=utcnow,
        onupdate=utcnow,
        server_default=func.now(),
        nullable=False,
    )
