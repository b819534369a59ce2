"""Pydantic schemas for authentication endpoints."""
from datetime import datetime
from uuid import UUID

from pydantic import BaseModel, ConfigDict, EmailStr, Field, field_validator


class RegisterRequest(BaseModel):
    """Schema for creating an account."""

    username: str = Field(..., min_length=3, max_length=100)
    email: EmailStr | None = None
    password: str = Field(..., min_length=1, max_length=200)

    @field_validator("username", mode="before")
    @classmethod
    def strip_username(cls, v: object) -> object:
        """Trim surrounding whitespace before length checks."""
        if isinstance(v, str):
            return v.strip()
        return v


class LoginRequest(BaseModel):
    """Schema for logging in."""

    username: str = Field(..., min_length=1, max_length=100)
    password: str = Field(..., min_length=1, max_length=200)

    @field_validator("username", mode="before")
    @classmethod
    def strip_username(cls, v: object) -> object:
        """Trim surrounding whitespace."""
        if isinstance(v, str):
            return v.strip()
        return v


class UserResponse(BaseModel):
    """Schema for the full account view."""

    model_config = ConfigDict(from_attributes=True)

    id: UUID
    username: str
    email: str | None
    created_at: datetime


class IdentityUser(BaseModel):
    """The user half of the request identity."""

    model_config = ConfigDict(from_attributes=True)

    id: UUID
    username: str


class IdentitySession(BaseModel):
    """The session half of the request identity."""

    model_config = ConfigDict(from_attributes=True)

    id: str
    expires_at: datetime


class IdentityResponse(BaseModel):
    """Who the request is authenticated as. Both fields are null when anonymous."""

    user: IdentityUser | None = None
    session: IdentitySession | None = None
