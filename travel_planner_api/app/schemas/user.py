"""
Pydantic models for user data and authentication payloads.

The stored password hash never appears in a response schema.
"""

from datetime import datetime
from typing import ClassVar, Optional

from pydantic import Field

from .common import ApiModel, PatchModel

EMAIL_PATTERN = r"^[^@\s]+@[^@\s]+\.[^@\s]+$"


class RegisterRequest(ApiModel):
    """Body of ``POST /auth/register``."""

    name: str = Field(..., min_length=1, examples=["Jane Traveller"])
    email: str = Field(..., pattern=EMAIL_PATTERN, examples=["jane@example.com"])
    password: str = Field(..., min_length=1, examples=["strongpassword"])
    confirm_password: str = Field(..., min_length=1, examples=["strongpassword"])
    phone_number: Optional[str] = Field(None, examples=["1234567890"])
    profile_picture_url: Optional[str] = Field(None, alias="profilePictureURL")


class LoginRequest(ApiModel):
    email: str = Field(..., min_length=1, examples=["jane@example.com"])
    password: str = Field(..., min_length=1)


class TokenRead(ApiModel):
    token: str


class UserRead(ApiModel):
    """Schema for reading a user from the API."""

    id: str
    name: str
    email: str
    phone_number: Optional[str] = None
    profile_picture_url: Optional[str] = Field(None, alias="profilePictureURL")
    created_at: datetime
    updated_at: datetime


class UserUpdate(PatchModel):
    """Partial profile update.  Password changes are not accepted here."""

    nullable_fields: ClassVar[frozenset] = frozenset({"phone_number", "profile_picture_url"})

    name: Optional[str] = Field(None, min_length=1)
    email: Optional[str] = Field(None, pattern=EMAIL_PATTERN)
    phone_number: Optional[str] = None
    profile_picture_url: Optional[str] = Field(None, alias="profilePictureURL")


class UserDelete(ApiModel):
    """Body of ``DELETE /users/{id}``: the account password, re-verified."""

    password: str = Field(..., min_length=1)
