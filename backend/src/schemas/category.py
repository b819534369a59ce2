"""Pydantic schemas for category endpoints."""
from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field, field_validator

from schemas.validators import strip_optional, strip_required


class CategoryCreate(BaseModel):
    """Schema for creating a category."""

    name: str = Field(..., max_length=100)
    description: str | None = Field(default=None, max_length=2000)

    @field_validator("name")
    @classmethod
    def validate_name(cls, v: str) -> str:
        return strip_required(v, "Category name")

    @field_validator("description")
    @classmethod
    def validate_description(cls, v: str | None) -> str | None:
        return strip_optional(v)


class CategoryUpdate(BaseModel):
    """Schema for updating a category. Omitted fields are left unchanged."""

    name: str | None = Field(default=None, max_length=100)
    description: str | None = Field(default=None, max_length=2000)

    @field_validator("name")
    @classmethod
    def validate_name(cls, v: str | None) -> str | None:
        if v is None:
            return None
        return strip_required(v, "Category name")

    @field_validator("description")
    @classmethod
    def validate_description(cls, v: str | None) -> str | None:
        return strip_optional(v)


class CategoryResponse(BaseModel):
    """Schema for category responses."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    description: str | None
    created_at: datetime
