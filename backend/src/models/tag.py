"""Tag model for storing user tags."""
from datetime import datetime
from typing import TYPE_CHECKING
from uuid import UUID

from sqlalchemy import (
    Column,
    DateTime,
    ForeignKey,
    Index,
    Integer,
    String,
    Table,
    UniqueConstraint,
    func,
)
from sqlalchemy.orm import Mapped, mapped_column, relationship

from models.base import Base, utcnow

if TYPE_CHECKING:
    from models.site import Site
    from models.user import User


# Junction table for many-to-many relationship between sites and tags
site_tags = Table(
    "site_tags",
    Base.metadata,
    Column(
        "site_id",
        Integer,
        ForeignKey("sites.id", ondelete="CASCADE"),
        primary_key=True,
    ),
    Column(
        "tag_id",
        Integer,
        ForeignKey("tags.id", ondelete="CASCADE"),
        primary_key=True,
    ),
    # Index for lookups by tag (composite PK already indexes site_id first)
    Index("ix_site_tags_tag_id", "tag_id"),
)


class Tag(Base):
    """Tag model - stores unique lowercase tags per user."""

    __tablename__ = "tags"
    __table_args__ = (
        UniqueConstraint("user_id", "name", name="uq_tags_user_id_name"),
    )

    id: Mapped[int] = mapped_column(primary_key=True)
    user_id: Mapped[UUID] = mapped_column(
        ForeignKey("users.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    name: Mapped[str] = mapped_column(String(100), nullable=False)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=utcnow,
        server_default=func.now(),
        nullable=False,
    )

    user: Mapped["User"] = relationship(back_populates="tags")
    sites: Mapped[list["Site"]] = relationship(
        secondary=site_tags,
        back_populates="tags",
        passive_deletes=True,
    )
