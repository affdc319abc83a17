"""
Space type I/O models for API requests and responses.
"""

from __future__ import annotations

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field

# Letters (accented included), digits, spaces, hyphens and underscores.
TYPE_NAME_PATTERN = r"^[\w\s-]+$"


class SpaceTypeRead(BaseModel):
    """Schema for reading a space type from the API."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    type_name: str
    description: Optional[str] = None
    created_at: datetime
    updated_at: datetime


class SpaceTypeCreate(BaseModel):
    """Schema for creating a space type."""

    type_name: str = Field(min_length=1, max_length=100, pattern=TYPE_NAME_PATTERN, description="Unique type name")
    description: Optional[str] = Field(default=None, max_length=1000)


class SpaceTypeUpdate(BaseModel):
    """Schema for a partial space type update."""

    type_name: Optional[str] = Field(default=None, min_length=1, max_length=100, pattern=TYPE_NAME_PATTERN)
    description: Optional[str] = Field(default=None, max_length=1000)


class SpaceTypeDeleteCheck(BaseModel):
    """Whether a space type can be deleted, and why not."""

    can_delete: bool
    spaces_count: int
    message: str
