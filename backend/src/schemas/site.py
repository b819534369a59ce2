"""Pydantic schemas for bookmark endpoints."""
from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field, field_validator

from schemas.language import LanguageResponse
from schemas.tag import TagSummary
from schemas.validators import strip_optional, strip_required


class SiteBase(BaseModel):
    """Fields shared by the create and replace payloads."""

    name: str = Field(..., max_length=500)
    url: str = Field(..., max_length=2048)
    description: str | None = Field(default=None, max_length=2000)
    category_id: int
    language_id: int | None = None
    tag_ids: list[int] = Field(default_factory=list)

    @field_validator("name")
    @classmethod
    def validate_name(cls, v: str) -> str:
        return strip_required(v, "Site name")

    @field_validator("url")
    @classmethod
    def validate_url(cls, v: str) -> str:
        return strip_required(v, "URL")

    @field_validator("description")
    @classmethod
    def validate_description(cls, v: str | None) -> str | None:
        return strip_optional(v)


class SiteCreate(SiteBase):
    """Schema for creating a bookmark."""


class SiteReplace(SiteBase):
    """Schema for replacing a bookmark (PUT). Every field is overwritten, tags included."""


class SiteResponse(BaseModel):
    """Schema for bookmark responses."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    url: str
    description: str | None
    category_id: int
    language_id: int | None
    created_at: datetime
    language: LanguageResponse | None
    tags: list[TagSummary]
