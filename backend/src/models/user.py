"""User model for registered accounts."""
from typing import TYPE_CHECKING

from sqlalchemy import String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from models.base import Base, TimestampMixin, UUIDv7Mixin

if TYPE_CHECKING:
    from models.category import Category
    from models.session import Session
    from models.site import Site
    from models.tag import Tag


class User(Base, UUIDv7Mixin, TimestampMixin):
    """
    User model - owns sessions, categories, tags and sites.

    Every owned row references users.id with ON DELETE CASCADE, so deleting a user
    removes all of their data (including active sessions) at the database level.
    """

    __tablename__ = "users"

    # id provided by UUIDv7Mixin
    username: Mapped[str] = mapped_column(String(100), unique=True, index=True)
    email: Mapped[str | None] = mapped_column(String(255), unique=True, nullable=True)
    password_hash: Mapped[str | None] = mapped_column(
        String(255),
        nullable=True,
        comment="bcrypt hash; only verified when PASSWORD_CHECK_ENABLED is set",
    )

    sessions: Mapped[list["Session"]] = relationship(
        back_populates="user",
        passive_deletes=True,
    )
    categories: Mapped[list["Category"]] = relationship(
        back_populates="user",
        passive_deletes=True,
    )
    tags: Mapped[list["Tag"]] = relationship(
        back_populates="user",
        passive_deletes=True,
    )
    sites: Mapped[list["Site"]] = relationship(
        back_populates="user",
        passive_deletes=True,
    )
