"""
Rules deciding whether a space can be booked for a window.

Shared by bookings, the availability check and the slot listing so the three
always agree. Checks run in a fixed order and stop at the first failure:
space active, weekday open, inside opening hours, no unavailable block, no
pending or confirmed booking.
"""

from __future__ import annotations

from datetime import date
from typing import List, Optional, Sequence

from sqlalchemy.ext.asyncio import AsyncSession

from coworkspace.core.database.entities.additional_services import AdditionalService
from coworkspace.core.database.entities.spaces import Space
from coworkspace.core.database.repositories import (
    AdditionalServiceRepository,
    AvailabilityRepository,
    BookingRepository,
    SpaceRepository,
)
from coworkspace.core.errors import BadRequestError, ConflictError
from coworkspace.core.models.domain.enums import SpaceStatus
from coworkspace.core.scheduling import ScheduleViolation, check_schedule

SPACE_NOT_ACTIVE = "space_not_active"
SPACE_UNAVAILABLE = "space_unavailable"
ALREADY_BOOKED = "already_booked"

# Failures the caller can fix by changing the request; the rest are conflicts.
_BAD_REQUEST_REASONS = frozenset({SPACE_NOT_ACTIVE, "day_not_available", "outside_opening_hours"})


def raise_for_violation(violation: ScheduleViolation) -> None:
    if violation.reason in _BAD_REQUEST_REASONS:
        raise BadRequestError(violation.message, details={"reason": violation.reason})
    raise ConflictError(violation.message, details={"reason": violation.reason})


class BookingRules:
    """Evaluate booking windows against schedules, blocks and existing bookings."""

    def __init__(self, session: AsyncSession):
        self.session = session
        self.availability = AvailabilityRepository(session)
        self.bookings = BookingRepository(session)
        self.spaces = SpaceRepository(session)
        self.services = AdditionalServiceRepository(session)

    async def find_violation(
        self,
        space: Space,
        booking_date: date,
        start_time: str,
        end_time: str,
        exclude_booking_id: Optional[int] = None,
    ) -> Optional[ScheduleViolation]:
        """
        Return the first reason the window cannot be booked, or ``None``.

        Args:
            space: The space to book
            booking_date: Requested date
            start_time: Window start, HH:MM
            end_time: Window end, HH:MM
            exclude_booking_id: Booking being moved, ignored in the overlap check
        """
        if space.status != SpaceStatus.active:
            return ScheduleViolation(
                reason=SPACE_NOT_ACTIVE,
                message=f"The space is not available for booking (status: {space.status.value})",
            )

        violation = check_schedule(
            space.opening_time, space.closing_time, space.available_days, booking_date, start_time, end_time
        )
        if violation is not None:
            return violation

        blocks = await self.availability.find_overlapping(
            space.id, booking_date, start_time, end_time, is_available=False
        )
        if blocks:
            block = blocks[0]
            suffix = f": {block.reason}" if block.reason else ""
            return ScheduleViolation(
                reason=SPACE_UNAVAILABLE,
                message=f"The space is unavailable from {block.start_time} to {block.end_time}{suffix}",
            )

        overlapping = await self.bookings.find_overlapping(
            space.id, booking_date, start_time, end_time, exclude_id=exclude_booking_id
        )
        if overlapping:
            booking = overlapping[0]
            return ScheduleViolation(
                reason=ALREADY_BOOKED,
                message=f"The space is already booked from {booking.start_time} to {booking.end_time}",
            )
        return None

    async def resolve_services(self, space_id: int, service_ids: Sequence[int]) -> List[AdditionalService]:
        """
        Load the requested additional services for a space.

        Raises:
            BadRequestError: if a service does not exist, is inactive, or is
                not offered by the space.
        """
        requested = sorted(set(service_ids))
        if not requested:
            return []

        services = await self.services.get_many(requested)
        found = {service.id for service in services}
        missing = [service_id for service_id in requested if service_id not in found]
        if missing:
            raise BadRequestError(f"Additional services not found: {missing}")

        inactive = [service.id for service in services if not service.is_active]
        if inactive:
            raise BadRequestError(f"Additional services are not active: {inactive}")

        offered = set(await self.spaces.service_ids(space_id, requested))
        not_offered = [service_id for service_id in requested if service_id not in offered]
        if not_offered:
            raise BadRequestError(f"Additional services not offered by this space: {not_offered}")
        return sorted(services, key=lambda service: service.id)
