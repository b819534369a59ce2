"""Pydantic schemas for tag endpoints."""
from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field, field_validator

from schemas.validators import normalize_tag_name


class TagCreate(BaseModel):
    """Schema for creating a tag."""

    name: str = Field(..., max_length=100)

    @field_validator("name")
    @classmethod
    def normalize_name(cls, v: str) -> str:
        """Normalize the tag name to trimmed lowercase."""
        return normalize_tag_name(v)


class TagRenameRequest(BaseModel):
    """Schema for renaming a tag."""

    name: str = Field(..., max_length=100)

    @field_validator("name")
    @classmethod
    def normalize_name(cls, v: str) -> str:
        """Normalize the new tag name."""
        return normalize_tag_name(v)


class TagResponse(BaseModel):
    """Schema for full tag response."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    created_at: datetime


class TagSummary(BaseModel):
    """Schema for a tag embedded in a bookmark."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str


class TagCount(BaseModel):
    """Schema for a tag with the number of bookmarks carrying it."""

    id: int
    name: str
    count: int
