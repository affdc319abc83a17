"""Domain enums."""

from .enums import BookingStatus, PaymentStatus, SpaceStatus, UserRole

__all__ = ["BookingStatus", "PaymentStatus", "SpaceStatus", "UserRole"]
