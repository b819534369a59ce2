"""Language model - a global lookup table shared by all users."""
from sqlalchemy import String
from sqlalchemy.orm import Mapped, mapped_column

from models.base import Base


class Language(Base):
    """Language a site is written in, e.g. ('English', 'en')."""

    __tablename__ = "languages"

    id: Mapped[int] = mapped_column(primary_key=True)
    name: Mapped[str] = mapped_column(String(100), unique=True, nullable=False)
    short_name: Mapped[str] = mapped_column(
        String(10),
        unique=True,
        nullable=False,
        comment="Lowercase language code, e.g. 'en'",
    )
