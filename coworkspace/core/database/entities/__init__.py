"""
Database entity models.

Each module holds one table (or a table and its association table):

- users: user accounts and roles
- locations: sites grouping spaces
- space_types: kinds of space
- spaces: bookable spaces and their offered services
- additional_services: paid add-ons
- availability: availability blocks
- bookings: bookings and their selected services
- payments: payments settling bookings
"""

from .additional_services import AdditionalService
from .availability import Availability
from .bookings import Booking, BookingServiceLink
from .locations import Location
from .payments import Payment
from .space_types import SpaceType
from .spaces import Space, SpaceServiceLink
from .users import User

__all__ = [
    "AdditionalService",
    "Availability",
    "Booking",
    "BookingServiceLink",
    "Location",
    "Payment",
    "Space",
    "SpaceServiceLink",
    "SpaceType",
    "User",
]
