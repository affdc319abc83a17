"""
Service layer: one service class per resource, each bound to an ``AsyncSession``.
"""

from .additional_services import AdditionalServiceService
from .availability import AvailabilityService
from .bookings import BookingService
from .locations import LocationService
from .space_types import SpaceTypeService
from .spaces import SpaceService
from .users import UserService

__all__ = [
    "AdditionalServiceService",
    "AvailabilityService",
    "BookingService",
    "LocationService",
    "SpaceService",
    "SpaceTypeService",
    "UserService",
]
