"""
Payment entities.

A payment settles one booking. Its status is mirrored on the booking's
``payment_status`` so that booking listings can filter on it.

Tables: payments
"""

from __future__ import annotations

from datetime import datetime
from typing import Optional

from sqlalchemy import DateTime
from sqlmodel import Field

from coworkspace.core.models.domain.enums import PaymentMethod, PaymentStatus

from ..base import Base, utc_now


class PaymentBase(Base):
    """Base fields for a payment."""

    booking_id: int = Field(foreign_key="bookings.id", index=True, description="Booking being paid")
    user_id: int = Field(foreign_key="users.id", index=True, description="Owner of the paid booking")
    amount: float = Field(ge=0, description="Amount charged, equal to the booking total")
    method: PaymentMethod = Field(description="How the booking was paid")
    status: PaymentStatus = Field(default=PaymentStatus.completed, index=True)
    transaction_id: Optional[str] = Field(default=None, max_length=255, description="Reference from the payer")
    notes: Optional[str] = Field(default=None, description="Free-text notes")


class Payment(PaymentBase, table=True):
    """Persistent payment.

    Table: payments
    """

    __tablename__ = "payments"
    __table_args__ = ({"extend_existing": True},)

    id: Optional[int] = Field(default=None, primary_key=True)

    created_at: datetime = Field(default_factory=utc_now, sa_type=DateTime(timezone=True))
    updated_at: datetime = Field(
        default_factory=utc_now, sa_type=DateTime(timezone=True), sa_column_kwargs={"onupdate": utc_now}
    )
