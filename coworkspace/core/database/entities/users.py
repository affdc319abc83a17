"""
User account entity.

Accounts authenticate with e-mail and password; the role decides which
management operations they may perform.

Table: users
"""

from __future__ import annotations

from datetime import datetime
from typing import Optional

from sqlalchemy import DateTime
from sqlmodel import Field

from coworkspace.core.models.domain.enums import UserRole

from ..base import Base, utc_now


class UserBase(Base):
    """Base fields for a user account."""

    name: str = Field(max_length=100, description="Given name")
    surname: str = Field(max_length=100, description="Family name")
    email: str = Field(max_length=255, unique=True, index=True, description="Login e-mail, unique")
    role: UserRole = Field(default=UserRole.user, description="Account role")


class User(UserBase, table=True):
    """Persistent user account.

    Table: users
    """

    __tablename__ = "users"
    __table_args__ = ({"extend_existing": True},)

    id: Optional[int] = Field(default=None, primary_key=True)
    password_hash: str = Field(description="bcrypt hash of the password")

    created_at: datetime = Field(default_factory=utc_now, sa_type=DateTime(timezone=True))
    updated_at: datetime = Field(
        default_factory=utc_now, sa_type=DateTime(timezone=True), sa_column_kwargs={"onupdate": utc_now}
    )

    def has_any_role(self, *roles: UserRole) -> bool:
        return self.role in roles
