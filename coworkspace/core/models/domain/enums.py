"""Domain enums for the booking platform."""

from __future__ import annotations

from enum import Enum
from typing import FrozenSet


class UserRole(str, Enum):
    """
    Role of a platform account.

    Roles widen what an account may touch: managers administer the locations
    they own, admins administer everything.
    """

    user = "user"
    manager = "manager"
    admin = "admin"


class SpaceStatus(str, Enum):
    """Operational state of a space. Only active spaces accept bookings."""

    active = "active"
    inactive = "inactive"
    maintenance = "maintenance"


class BookingStatus(str, Enum):
    """Lifecycle status of a booking."""

    pending = "pending"
    confirmed = "confirmed"
    cancelled = "cancelled"
    completed = "completed"

    @classmethod
    def blocking(cls) -> FrozenSet["BookingStatus"]:
        """Statuses that occupy the booked window."""
        return frozenset({cls.pending, cls.confirmed})

    def allowed_transitions(self) -> FrozenSet["BookingStatus"]:
        return _BOOKING_TRANSITIONS[self]


_BOOKING_TRANSITIONS = {
    BookingStatus.pending: frozenset({BookingStatus.confirmed, BookingStatus.cancelled}),
    BookingStatus.confirmed: frozenset({BookingStatus.completed, BookingStatus.cancelled}),
    BookingStatus.cancelled: frozenset(),
    BookingStatus.completed: frozenset(),
}


class PaymentStatus(str, Enum):
    """State of a payment, mirrored on the booking it pays for."""

    pending = "pending"
    completed = "completed"
    failed = "failed"
    refunded = "refunded"

    def allowed_transitions(self) -> FrozenSet["PaymentStatus"]:
        return _PAYMENT_TRANSITIONS[self]


_PAYMENT_TRANSITIONS = {
    PaymentStatus.pending: frozenset({PaymentStatus.completed, PaymentStatus.failed}),
    PaymentStatus.completed: frozenset({PaymentStatus.refunded}),
    PaymentStatus.failed: frozenset(),
    PaymentStatus.refunded: frozenset(),
}


class PaymentMethod(str, Enum):
    """How a payment was made."""

    credit_card = "credit_card"
    paypal = "paypal"
    bank_transfer = "bank_transfer"
    cash = "cash"
