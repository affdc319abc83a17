"""
Availability I/O models for API requests and responses.
"""

from __future__ import annotations

from datetime import date, datetime
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field

from .common import TimeStr


class AvailabilityRead(BaseModel):
    """Schema for reading an availability block from the API."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    space_id: int
    availability_date: date
    start_time: str
    end_time: str
    is_available: bool
    reason: Optional[str] = None
    created_at: datetime
    updated_at: datetime


class AvailabilityCreate(BaseModel):
    """Schema for creating an availability block."""

    space_id: int = Field(gt=0)
    availability_date: date
    start_time: TimeStr
    end_time: TimeStr
    is_available: bool = True
    reason: Optional[str] = Field(default=None, max_length=255)


class AvailabilityUpdate(BaseModel):
    """Schema for a partial availability block update."""

    space_id: Optional[int] = Field(default=None, gt=0)
    availability_date: Optional[date] = None
    start_time: Optional[TimeStr] = None
    end_time: Optional[TimeStr] = None
    is_available: Optional[bool] = None
    reason: Optional[str] = Field(default=None, max_length=255)


class AvailabilityGenerate(BaseModel):
    """Schema for generating one block per day over a date range."""

    space_id: int = Field(gt=0)
    start_date: date
    end_date: date
    start_time: TimeStr
    end_time: TimeStr
    exclude_days: List[int] = Field(default_factory=list, description="ISO weekdays to skip (1 = Monday)")


class AvailabilityCheck(BaseModel):
    """Whether a space can be booked for a window."""

    space_id: int
    booking_date: date
    start_time: str
    end_time: str
    is_available: bool
    reason: Optional[str] = None
    message: str
