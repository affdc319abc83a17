"""
Space entities.

A space is a bookable unit (desk, room) that belongs to a location and a
space type. It carries its prices and its weekly schedule: the opening and
closing time (``HH:MM``) and the ISO weekdays it is open on.

Tables: spaces, space_services
"""

from __future__ import annotations

from datetime import datetime
from typing import List, Optional

from sqlalchemy import JSON, Column, DateTime
from sqlmodel import Field

from coworkspace.core.models.domain.enums import SpaceStatus

from ..base import Base, utc_now

DEFAULT_OPENING_TIME = "09:00"
DEFAULT_CLOSING_TIME = "18:00"
DEFAULT_AVAILABLE_DAYS = [1, 2, 3, 4, 5]


class SpaceBase(Base):
    """Base fields for a space."""

    location_id: int = Field(foreign_key="locations.id", index=True, description="Owning location")
    space_type_id: int = Field(foreign_key="space_types.id", index=True, description="Kind of space")
    space_name: str = Field(max_length=255, description="Display name")
    description: Optional[str] = Field(default=None, description="Free-text description")
    capacity: int = Field(ge=1, description="Number of people the space fits")
    price_per_hour: float = Field(ge=0, description="Hourly rate")
    price_per_day: float = Field(ge=0, description="Daily rate")
    opening_time: str = Field(default=DEFAULT_OPENING_TIME, max_length=5, description="Opening time, HH:MM")
    closing_time: str = Field(default=DEFAULT_CLOSING_TIME, max_length=5, description="Closing time, HH:MM")
    status: SpaceStatus = Field(default=SpaceStatus.active, description="Operational state")


class Space(SpaceBase, table=True):
    """Persistent space.

    Table: spaces
    """

    __tablename__ = "spaces"
    __table_args__ = ({"extend_existing": True},)

    id: Optional[int] = Field(default=None, primary_key=True)
    available_days: List[int] = Field(
        default_factory=lambda: list(DEFAULT_AVAILABLE_DAYS),
        sa_column=Column(JSON, nullable=False),
        description="ISO weekdays the space is open on (1 = Monday)",
    )

    created_at: datetime = Field(default_factory=utc_now, sa_type=DateTime(timezone=True))
    updated_at: datetime = Field(
        default_factory=utc_now, sa_type=DateTime(timezone=True), sa_column_kwargs={"onupdate": utc_now}
    )


class SpaceServiceLink(Base, table=True):
    """Association between a space and an additional service it offers.

    Table: space_services
    """

    __tablename__ = "space_services"
    __table_args__ = ({"extend_existing": True},)

    space_id: int = Field(foreign_key="spaces.id", primary_key=True)
    service_id: int = Field(foreign_key="additional_services.id", primary_key=True)
    created_at: datetime = Field(default_factory=utc_now, sa_type=DateTime(timezone=True))
