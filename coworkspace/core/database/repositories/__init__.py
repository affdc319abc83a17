"""
Repositories: one data access class per table, sharing ``AsyncBaseRepository``.
"""

from .additional_services import AdditionalServiceRepository
from .availability import AvailabilityRepository
from .base import AsyncBaseRepository, QueryBuilder
from .bookings import BookingRepository
from .locations import LocationRepository
from .payments import PaymentRepository
from .space_types import SpaceTypeRepository
from .spaces import SpaceRepository
from .users import UserRepository

__all__ = [
    "AdditionalServiceRepository",
    "AsyncBaseRepository",
    "AvailabilityRepository",
    "BookingRepository",
    "LocationRepository",
    "PaymentRepository",
    "QueryBuilder",
    "SpaceRepository",
    "SpaceTypeRepository",
    "UserRepository",
]
