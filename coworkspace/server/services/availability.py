"""
Availability block service.

Blocks mark a window of one date as open or closed for a space. Blocks of
the same space and date never overlap. Closed blocks (``is_available`` false)
prevent bookings in their window.
"""

from __future__ import annotations

from datetime import date
from typing import List

from sqlalchemy.ext.asyncio import AsyncSession

from coworkspace.core.database.entities.availability import Availability
from coworkspace.core.database.entities.users import User
from coworkspace.core.database.repositories import (
    AvailabilityRepository,
    BookingRepository,
    LocationRepository,
    SpaceRepository,
)
from coworkspace.core.errors import BadRequestError, ConflictError, NotFoundError, translate_errors
from coworkspace.core.logging_config import get_logger
from coworkspace.core.models.io.availability import (
    AvailabilityCheck,
    AvailabilityCreate,
    AvailabilityGenerate,
    AvailabilityUpdate,
)
from coworkspace.core.scheduling import (
    DAY_NAMES,
    iter_dates,
    validate_date_range,
    validate_time_range,
)

from .access import ensure_can_manage_location
from .booking_rules import BookingRules

logger = get_logger(__name__)

# Upper bound on the days one generate call may cover.
MAX_GENERATE_DAYS = 366


class AvailabilityService:
    """Service for availability blocks."""

    def __init__(self, session: AsyncSession):
        self.session = session
        self.availability = AvailabilityRepository(session)
        self.spaces = SpaceRepository(session)
        self.locations = LocationRepository(session)
        self.bookings = BookingRepository(session)
        self.rules = BookingRules(session)

    async def _get_space(self, space_id: int):
        space = await self.spaces.get_by_id(space_id)
        if space is None:
            raise NotFoundError("Space")
        return space

    async def _ensure_can_manage_space(self, space_id: int, current_user: User) -> None:
        space = await self._get_space(space_id)
        location = await self.locations.get_by_id(space.location_id)
        if location is None:
            raise NotFoundError("Location")
        ensure_can_manage_location(current_user, location, "manage availability of")

    async def _ensure_no_overlap(
        self, space_id: int, availability_date: date, start_time: str, end_time: str, exclude_id=None
    ) -> None:
        clashes = await self.availability.find_overlapping(
            space_id, availability_date, start_time, end_time, exclude_id=exclude_id
        )
        if clashes:
            clash = clashes[0]
            raise ConflictError(
                f"The time range overlaps an existing availability block "
                f"({clash.start_time}-{clash.end_time}) on {availability_date.isoformat()}"
            )

    @translate_errors("Failed to list availability")
    async def list_availability(self, space_id: int, start_date: date, end_date: date) -> List[Availability]:
        validate_date_range(start_date, end_date)
        await self._get_space(space_id)
        return await self.availability.list_for_space(space_id, start_date, end_date)

    @translate_errors("Failed to load availability")
    async def get_availability(self, availability_id: int) -> Availability:
        block = await self.availability.get_by_id(availability_id)
        if block is None:
            raise NotFoundError("Availability")
        return block

    @translate_errors("Failed to create availability")
    async def create_availability(self, data: AvailabilityCreate, current_user: User) -> Availability:
        validate_time_range(data.start_time, data.end_time)
        await self._ensure_can_manage_space(data.space_id, current_user)
        await self._ensure_no_overlap(data.space_id, data.availability_date, data.start_time, data.end_time)

        block = await self.availability.create(Availability.model_validate(data.model_dump()))
        logger.info(
            f"Availability {block.id} created for space {block.space_id} on {block.availability_date} "
            f"{block.start_time}-{block.end_time} (available={block.is_available})"
        )
        return block

    @translate_errors("Failed to update availability")
    async def update_availability(
        self, availability_id: int, data: AvailabilityUpdate, current_user: User
    ) -> Availability:
        """
        Apply a partial update.

        The time range and overlap checks run against the merged record, so
        moving only the end time still validates against the stored start.
        """
        block = await self.get_availability(availability_id)
        changes = data.model_dump(exclude_unset=True)
        if not changes:
            raise BadRequestError("No valid fields provided for the update")
        for required in ("space_id", "availability_date", "start_time", "end_time", "is_available"):
            if required in changes and changes[required] is None:
                raise BadRequestError(f"Field '{required}' cannot be null")

        await self._ensure_can_manage_space(block.space_id, current_user)
        space_id = changes.get("space_id", block.space_id)
        if space_id != block.space_id:
            await self._ensure_can_manage_space(space_id, current_user)

        availability_date = changes.get("availability_date", block.availability_date)
        start_time = changes.get("start_time", block.start_time)
        end_time = changes.get("end_time", block.end_time)
        validate_time_range(start_time, end_time)
        await self._ensure_no_overlap(space_id, availability_date, start_time, end_time, exclude_id=block.id)

        for key, value in changes.items():
            setattr(block, key, value)
        return await self.availability.update(block)

    @translate_errors("Failed to delete availability")
    async def delete_availability(self, availability_id: int, current_user: User) -> None:
        block = await self.get_availability(availability_id)
        await self._ensure_can_manage_space(block.space_id, current_user)

        active = await self.bookings.find_overlapping(
            block.space_id, block.availability_date, block.start_time, block.end_time
        )
        if active:
            raise ConflictError(
                f"Cannot delete availability: it overlaps {len(active)} active bookings"
            )
        await self.availability.delete(availability_id)
        logger.info(f"Availability {availability_id} deleted by user {current_user.id}")

    @translate_errors("Failed to generate availability")
    async def generate(self, data: AvailabilityGenerate, current_user: User) -> List[Availability]:
        """
        Create one open block per day of a date range.

        Days listed in ``exclude_days`` are skipped, as are days that already
        hold an identical block. Days where the window would overlap another
        block are rejected as a whole. All blocks are committed together.
        """
        validate_date_range(data.start_date, data.end_date)
        validate_time_range(data.start_time, data.end_time)
        invalid = [day for day in data.exclude_days if day not in DAY_NAMES]
        if invalid:
            raise BadRequestError(f"Invalid weekdays {invalid}: allowed values are 1-7 (1 = Monday)")
        if (data.end_date - data.start_date).days + 1 > MAX_GENERATE_DAYS:
            raise BadRequestError(f"A generated range may cover at most {MAX_GENERATE_DAYS} days")
        await self._ensure_can_manage_space(data.space_id, current_user)

        excluded = set(data.exclude_days)
        created: List[Availability] = []
        for day in iter_dates(data.start_date, data.end_date):
            if day.isoweekday() in excluded:
                continue
            if await self.availability.find_exact(data.space_id, day, data.start_time, data.end_time):
                continue
            await self._ensure_no_overlap(data.space_id, day, data.start_time, data.end_time)
            block = Availability(
                space_id=data.space_id,
                availability_date=day,
                start_time=data.start_time,
                end_time=data.end_time,
                is_available=True,
            )
            created.append(await self.availability.create(block, commit=False))

        await self.session.commit()
        for block in created:
            await self.session.refresh(block)
        logger.info(f"Generated {len(created)} availability blocks for space {data.space_id}")
        return created

    @translate_errors("Failed to check availability")
    async def check(self, space_id: int, booking_date: date, start_time: str, end_time: str) -> AvailabilityCheck:
        """Report whether a booking for the window would be accepted."""
        validate_time_range(start_time, end_time)
        space = await self._get_space(space_id)
        violation = await self.rules.find_violation(space, booking_date, start_time, end_time)
        result = AvailabilityCheck(
            space_id=space_id,
            booking_date=booking_date,
            start_time=start_time,
            end_time=end_time,
            is_available=violation is None,
            message="The space is available" if violation is None else violation.message,
        )
        if violation is not None:
            result.reason = violation.reason
        return result
