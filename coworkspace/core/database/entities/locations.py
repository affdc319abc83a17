"""
Location entity.

A location is a physical site (an address in a city) grouping spaces. It may
be assigned to a manager account who then administers its spaces and sees its
bookings.

Table: locations
"""

from __future__ import annotations

from datetime import datetime
from typing import Optional

from sqlalchemy import DateTime
from sqlmodel import Field

from ..base import Base, utc_now


class LocationBase(Base):
    """Base fields for a location."""

    location_name: str = Field(max_length=255, index=True, description="Display name of the site")
    address: str = Field(max_length=255, description="Street address")
    city: str = Field(max_length=100, index=True, description="City")
    description: Optional[str] = Field(default=None, description="Free-text description")
    manager_id: Optional[int] = Field(
        default=None, foreign_key="users.id", index=True, description="Managing user account"
    )


class Location(LocationBase, table=True):
    """Persistent location.

    Table: locations
    """

    __tablename__ = "locations"
    __table_args__ = ({"extend_existing": True},)

    id: Optional[int] = Field(default=None, primary_key=True)

    created_at: datetime = Field(default_factory=utc_now, sa_type=DateTime(timezone=True))
    updated_at: datetime = Field(
        default_factory=utc_now, sa_type=DateTime(timezone=True), sa_column_kwargs={"onupdate": utc_now}
    )
