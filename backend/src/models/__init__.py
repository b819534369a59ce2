"""SQLAlchemy models."""
from models.base import Base, TimestampMixin, UUIDv7Mixin
from models.user import User
from models.session import Session
from models.category import Category
from models.language import Language
from models.tag import Tag, site_tags  # Must be before site due to import
from models.site import Site

__all__ = [
    "Base",
    "Category",
    "Language",
    "Session",
    "Site",
    "Tag",
    "TimestampMixin",
    "UUIDv7Mixin",
    "User",
    "site_tags",
]
