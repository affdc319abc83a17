"""
Space type entity (desk, meeting room, private office...).

Table: space_types
"""

from __future__ import annotations

from datetime import datetime
from typing import Optional

from sqlalchemy import DateTime
from sqlmodel import Field

from ..base import Base, utc_now


class SpaceTypeBase(Base):
    """Base fields for a space type."""

    type_name: str = Field(max_length=100, unique=True, index=True, description="Unique type name")
    description: Optional[str] = Field(default=None, description="What this kind of space offers")


class SpaceType(SpaceTypeBase, table=True):
    """Persistent space type.

    Table: space_types
    """

    __tablename__ = "space_types"
    __table_args__ = ({"extend_existing": True},)

    id: Optional[int] = Field(default=None, primary_key=True)

    created_at: datetime = Field(default_factory=utc_now, sa_type=DateTime(timezone=True))
    updated_at: datetime = Field(
        default_factory=utc_now, sa_type=DateTime(timezone=True), sa_column_kwargs={"onupdate": utc_now}
    )
