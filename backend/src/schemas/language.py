"""Pydantic schemas for language endpoints."""
from pydantic import BaseModel, ConfigDict, Field, field_validator

from schemas.validators import strip_required


class LanguageCreate(BaseModel):
    """Schema for adding a language."""

    name: str = Field(..., max_length=100)
    short_name: str = Field(..., max_length=10)

    @field_validator("name")
    @classmethod
    def validate_name(cls, v: str) -> str:
        return strip_required(v, "Language name")

    @field_validator("short_name")
    @classmethod
    def normalize_short_name(cls, v: str) -> str:
        """Short names are stored lowercase (e.g. 'en', 'de')."""
        return strip_required(v, "Short name").lower()


class LanguageResponse(BaseModel):
    """Schema for language responses."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    short_name: str
