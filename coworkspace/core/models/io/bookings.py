"""
Booking I/O models for API requests and responses.
"""

from __future__ import annotations

from datetime import date, datetime
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field

from coworkspace.core.models.domain.enums import BookingStatus, PaymentStatus

from .common import TimeStr


class BookingRead(BaseModel):
    """Schema for reading a booking from the API."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    user_id: int
    space_id: int
    booking_date: date
    start_time: str
    end_time: str
    total_hours: float
    services_cost: float
    total_price: float
    status: BookingStatus
    payment_status: PaymentStatus
    notes: Optional[str] = None
    service_ids: List[int] = Field(default_factory=list)
    created_at: datetime
    updated_at: datetime


class BookingCreate(BaseModel):
    """Schema for creating a booking."""

    space_id: int = Field(gt=0)
    booking_date: date
    start_time: TimeStr
    end_time: TimeStr
    user_id: Optional[int] = Field(default=None, description="Booking owner; defaults to the caller")
    notes: Optional[str] = Field(default=None, max_length=1000)
    service_ids: List[int] = Field(default_factory=list, description="Additional services to add")


class BookingUpdate(BaseModel):
    """Schema for a partial booking update."""

    booking_date: Optional[date] = None
    start_time: Optional[TimeStr] = None
    end_time: Optional[TimeStr] = None
    notes: Optional[str] = Field(default=None, max_length=1000)
    status: Optional[BookingStatus] = None


class BookingStatusUpdate(BaseModel):
    status: BookingStatus


class PaymentStatusUpdate(BaseModel):
    payment_status: PaymentStatus


class BookingDashboard(BaseModel):
    """Aggregates and recent bookings for managers and admins."""

    stats: Dict[str, Any]
    recent_bookings: List[BookingRead]
    location_ids: Optional[List[int]] = None
