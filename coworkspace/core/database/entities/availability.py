"""
Availability block entity.

A block marks a time window of one date as bookable (``is_available``) or
closed, for example for maintenance.

Table: availability
"""

from __future__ import annotations

from datetime import date, datetime
from typing import Optional

from sqlalchemy import DateTime
from sqlmodel import Field

from ..base import Base, utc_now


class AvailabilityBase(Base):
    """Base fields for an availability block."""

    space_id: int = Field(foreign_key="spaces.id", index=True, description="Space the block applies to")
    availability_date: date = Field(index=True, description="Calendar date of the block")
    start_time: str = Field(max_length=5, description="Start of the window, HH:MM")
    end_time: str = Field(max_length=5, description="End of the window, HH:MM (exclusive)")
    is_available: bool = Field(default=True, description="False marks the window as closed")
    reason: Optional[str] = Field(default=None, max_length=255, description="Why the window is closed")


class Availability(AvailabilityBase, table=True):
    """Persistent availability block.

    Table: availability
    """

    __tablename__ = "availability"
    __table_args__ = ({"extend_existing": True},)

    id: Optional[int] = Field(default=None, primary_key=True)

    created_at: datetime = Field(default_factory=utc_now, sa_type=DateTime(timezone=True))
    updated_at: datetime = Field(
        default_factory=utc_now, sa_type=DateTime(timezone=True), sa_column_kwargs={"onupdate": utc_now}
    )
