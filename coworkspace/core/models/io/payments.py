"""
Payment I/O models for API requests and responses.
"""

from __future__ import annotations

from datetime import datetime
from typing import Dict, List, Optional

from pydantic import BaseModel, ConfigDict, Field

from coworkspace.core.models.domain.enums import BookingStatus, PaymentMethod, PaymentStatus


class PaymentRead(BaseModel):
    """Schema for reading a payment from the API."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    booking_id: int
    user_id: int
    amount: float
    method: PaymentMethod
    status: PaymentStatus
    transaction_id: Optional[str] = None
    notes: Optional[str] = None
    created_at: datetime
    updated_at: datetime


class PaymentCreate(BaseModel):
    """Schema for paying a booking."""

    booking_id: int = Field(gt=0)
    amount: Optional[float] = Field(default=None, ge=0, description="Must equal the booking total; defaults to it")
    method: PaymentMethod
    transaction_id: Optional[str] = Field(default=None, max_length=255)
    notes: Optional[str] = Field(default=None, max_length=1000)


class PaymentStatusChange(BaseModel):
    status: PaymentStatus
    notes: Optional[str] = Field(default=None, max_length=1000)


class PaymentStats(BaseModel):
    """Payment figures for managers and admins."""

    total_payments: int
    by_status: Dict[str, int]
    by_method: Dict[str, int]
    total_revenue: float
    refunded_amount: float
    monthly_revenue: Dict[str, float]
    location_ids: Optional[List[int]] = None


class CanPay(BaseModel):
    """Whether a booking can be paid now."""

    booking_id: int
    can_pay: bool
    amount: float
    booking_status: BookingStatus
    payment_status: PaymentStatus
    existing_payment_id: Optional[int] = None
    message: str
