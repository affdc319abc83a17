"""
Space I/O models for API requests and responses.
"""

from __future__ import annotations

from datetime import date, datetime
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field, model_validator

from coworkspace.core.models.domain.enums import SpaceStatus

from .common import TimeStr, Weekdays


class SpaceRead(BaseModel):
    """Schema for reading a space from the API."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    location_id: int
    space_type_id: int
    space_name: str
    description: Optional[str] = None
    capacity: int
    price_per_hour: float
    price_per_day: float
    opening_time: str
    closing_time: str
    available_days: List[int]
    status: SpaceStatus
    created_at: datetime
    updated_at: datetime


class SpaceCreate(BaseModel):
    """Schema for creating a space."""

    location_id: int = Field(gt=0)
    space_type_id: int = Field(gt=0)
    space_name: str = Field(min_length=2, max_length=255)
    description: Optional[str] = Field(default=None, max_length=1000)
    capacity: int = Field(gt=0, le=1000, description="Number of people the space fits")
    price_per_hour: float = Field(ge=0, le=10000)
    price_per_day: float = Field(ge=0, le=100000)
    opening_time: TimeStr = "09:00"
    closing_time: TimeStr = "18:00"
    available_days: Weekdays = Field(default_factory=lambda: [1, 2, 3, 4, 5])
    status: SpaceStatus = SpaceStatus.active
    service_ids: List[int] = Field(default_factory=list, description="Additional services offered by the space")

    @model_validator(mode="after")
    def _opening_before_closing(self) -> "SpaceCreate":
        if self.opening_time >= self.closing_time:
            raise ValueError("Opening time must be earlier than closing time")
        return self


class SpaceUpdate(BaseModel):
    """Schema for a partial space update."""

    space_type_id: Optional[int] = Field(default=None, gt=0)
    space_name: Optional[str] = Field(default=None, min_length=2, max_length=255)
    description: Optional[str] = Field(default=None, max_length=1000)
    capacity: Optional[int] = Field(default=None, gt=0, le=1000)
    price_per_hour: Optional[float] = Field(default=None, ge=0, le=10000)
    price_per_day: Optional[float] = Field(default=None, ge=0, le=100000)
    opening_time: Optional[TimeStr] = None
    closing_time: Optional[TimeStr] = None
    available_days: Optional[Weekdays] = None
    status: Optional[SpaceStatus] = None


class SlotRead(BaseModel):
    """One bookable slot of a day."""

    start_time: str
    end_time: str
    available: bool
    duration_minutes: int


class AvailableSlots(BaseModel):
    """Slots of a space for one date."""

    space_id: int
    booking_date: date
    available: bool
    reason: Optional[str] = None
    message: Optional[str] = None
    opening_time: str
    closing_time: str
    slots: List[SlotRead] = Field(default_factory=list)


class PriceQuote(BaseModel):
    """Price breakdown for a prospective booking."""

    space_id: int
    booking_date: date
    start_time: str
    end_time: str
    total_hours: float
    price_per_hour: float
    price_per_day: float
    base_price: float
    services_cost: float
    total_price: float
