"""
Booking entities.

A booking reserves a space for a time window on one date. It stores the
computed price (space rate plus selected additional services) and the
booking and payment statuses.

Tables: bookings, booking_services
"""

from __future__ import annotations

from datetime import date, datetime
from typing import Optional

from sqlalchemy import DateTime
from sqlmodel import Field

from coworkspace.core.models.domain.enums import BookingStatus, PaymentStatus

from ..base import Base, utc_now


class BookingBase(Base):
    """Base fields for a booking."""

    user_id: int = Field(foreign_key="users.id", index=True, description="Account the booking belongs to")
    space_id: int = Field(foreign_key="spaces.id", index=True, description="Booked space")
    booking_date: date = Field(index=True, description="Calendar date of the booking")
    start_time: str = Field(max_length=5, description="Start of the window, HH:MM")
    end_time: str = Field(max_length=5, description="End of the window, HH:MM (exclusive)")
    total_hours: float = Field(default=0, description="Duration in hours")
    services_cost: float = Field(default=0, description="Sum of the selected additional services")
    total_price: float = Field(default=0, description="Space price plus services cost")
    status: BookingStatus = Field(default=BookingStatus.pending, index=True)
    payment_status: PaymentStatus = Field(default=PaymentStatus.pending)
    notes: Optional[str] = Field(default=None, description="Free-text notes")


class Booking(BookingBase, table=True):
    """Persistent booking.

    Table: bookings
    """

    __tablename__ = "bookings"
    __table_args__ = ({"extend_existing": True},)

    id: Optional[int] = Field(default=None, primary_key=True)

    created_at: datetime = Field(default_factory=utc_now, sa_type=DateTime(timezone=True))
    updated_at: datetime = Field(
        default_factory=utc_now, sa_type=DateTime(timezone=True), sa_column_kwargs={"onupdate": utc_now}
    )


class BookingServiceLink(Base, table=True):
    """Additional service selected for a booking, with the price charged at booking time.

    Table: booking_services
    """

    __tablename__ = "booking_services"
    __table_args__ = ({"extend_existing": True},)

    booking_id: int = Field(foreign_key="bookings.id", primary_key=True)
    service_id: int = Field(foreign_key="additional_services.id", primary_key=True)
    price: float = Field(default=0, description="Service price at booking time")
