"""
User I/O models for API requests and responses.
"""

from __future__ import annotations

from datetime import datetime
from typing import Literal, Optional

from pydantic import BaseModel, ConfigDict, Field

from coworkspace.core.models.domain.enums import UserRole

from .common import EMAIL_PATTERN


class UserRead(BaseModel):
    """Public view of a user account (never includes the password hash)."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    name: str
    surname: str
    email: str
    role: UserRole
    created_at: datetime


class UserRegister(BaseModel):
    """Schema for self-registration. Admin accounts cannot be self-registered."""

    name: str = Field(min_length=2, max_length=100)
    surname: str = Field(min_length=2, max_length=100)
    email: str = Field(max_length=255, pattern=EMAIL_PATTERN)
    password: str = Field(min_length=1, max_length=128)
    role: Literal["user", "manager"] = "user"


class UserLogin(BaseModel):
    email: str = Field(min_length=1)
    password: str = Field(min_length=1)


class ProfileUpdate(BaseModel):
    """Schema for updating one's own profile."""

    name: Optional[str] = Field(default=None, min_length=2, max_length=100)
    surname: Optional[str] = Field(default=None, min_length=2, max_length=100)
    email: Optional[str] = Field(default=None, max_length=255, pattern=EMAIL_PATTERN)


class PasswordChange(BaseModel):
    current_password: str = Field(min_length=1)
    new_password: str = Field(min_length=1, max_length=128)


class RoleUpdate(BaseModel):
    role: UserRole


class AuthResult(BaseModel):
    """Token issued on registration or login."""

    token: str
    token_type: str = "bearer"
    user: UserRead
