"""Site model for storing user bookmarks."""
from datetime import datetime
from typing import TYPE_CHECKING
from uuid import UUID

from sqlalchemy import DateTime, ForeignKey, String, Text, func
from sqlalchemy.orm import Mapped, mapped_column, relationship

from models.base import Base, utcnow
from models.tag import site_tags

if TYPE_CHECKING:
    from models.category import Category
    from models.language import Language
    from models.tag import Tag
    from models.user import User


class Site(Base):
    """
    Site model - a bookmarked URL filed under one of the owner's categories.

    Exposed through the API as a "bookmark".
    """

    __tablename__ = "sites"

    id: Mapped[int] = mapped_column(primary_key=True)
    user_id: Mapped[UUID] = mapped_column(
        ForeignKey("users.id", ondelete="CASCADE"),
        index=True,
    )
    # NO ACTION (checked at statement end) so a user delete can cascade both tables;
    # deleting a category that still holds sites is refused by category_service
    category_id: Mapped[int] = mapped_column(
        ForeignKey("categories.id"),
        index=True,
    )
    language_id: Mapped[int | None] = mapped_column(
        ForeignKey("languages.id", ondelete="SET NULL"),
        nullable=True,
    )
    name: Mapped[str] = mapped_column(String(500), nullable=False)
    url: Mapped[str] = mapped_column(Text, nullable=False)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        default=utcnow,
        server_default=func.now(),
        nullable=False,
    )

    user: Mapped["User"] = relationship(back_populates="sites")
    category: Mapped["Category"] = relationship(back_populates="sites")
    language: Mapped["Language | None"] = relationship()
    tags: Mapped[list["Tag"]] = relationship(
        secondary=site_tags,
        back_populates="sites",
    )
