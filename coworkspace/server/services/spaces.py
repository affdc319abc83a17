"""
Space service.

CRUD for spaces with location-scoped permissions, the hourly slot view of a
day, price quotes and the management of the additional services a space
offers.
"""

from __future__ import annotations

from datetime import date
from typing import List, Optional, Sequence

from sqlalchemy.ext.asyncio import AsyncSession

from coworkspace.core.database.entities.additional_services import AdditionalService
from coworkspace.core.database.entities.spaces import Space, SpaceServiceLink
from coworkspace.core.database.entities.users import User
from coworkspace.core.database.repositories import (
    AdditionalServiceRepository,
    AvailabilityRepository,
    BookingRepository,
    LocationRepository,
    SpaceRepository,
    SpaceTypeRepository,
)
from coworkspace.core.errors import BadRequestError, ConflictError, NotFoundError, translate_errors
from coworkspace.core.logging_config import get_logger
from coworkspace.core.models.domain.enums import SpaceStatus
from coworkspace.core.models.io.spaces import AvailableSlots, PriceQuote, SlotRead, SpaceCreate, SpaceUpdate
from coworkspace.core.pricing import calculate_booking_price, calculate_total, sum_service_prices
from coworkspace.core.scheduling import (
    check_schedule,
    duration_hours,
    hourly_slots,
    overlaps,
    to_minutes,
    validate_time_range,
)

from .access import ensure_can_manage_location
from .booking_rules import BookingRules

logger = get_logger(__name__)


class SpaceService:
    """Service for spaces."""

    def __init__(self, session: AsyncSession):
        self.session = session
        self.spaces = SpaceRepository(session)
        self.locations = LocationRepository(session)
        self.space_types = SpaceTypeRepository(session)
        self.services = AdditionalServiceRepository(session)
        self.availability = AvailabilityRepository(session)
        self.bookings = BookingRepository(session)
        self.rules = BookingRules(session)

    @translate_errors("Failed to list spaces")
    async def list_spaces(
        self,
        location_id: Optional[int] = None,
        space_type_id: Optional[int] = None,
        city: Optional[str] = None,
        min_capacity: Optional[int] = None,
        max_price_hour: Optional[float] = None,
        name: Optional[str] = None,
        status: Optional[SpaceStatus] = None,
    ) -> List[Space]:
        return await self.spaces.search(
            location_id=location_id,
            space_type_id=space_type_id,
            city=city,
            min_capacity=min_capacity,
            max_price_hour=max_price_hour,
            name=name,
            status=status,
        )

    @translate_errors("Failed to load space")
    async def get_space(self, space_id: int) -> Space:
        space = await self.spaces.get_by_id(space_id)
        if space is None:
            raise NotFoundError("Space")
        return space

    async def _ensure_can_manage(self, space_location_id: int, current_user: User, action: str) -> None:
        location = await self.locations.get_by_id(space_location_id)
        if location is None:
            raise NotFoundError("Location")
        ensure_can_manage_location(current_user, location, action)

    async def _ensure_space_type(self, space_type_id: int) -> None:
        if await self.space_types.get_by_id(space_type_id) is None:
            raise NotFoundError("Space type")

    async def _ensure_services_exist(self, service_ids: Sequence[int]) -> List[int]:
        requested = sorted(set(service_ids))
        found = {service.id for service in await self.services.get_many(requested)}
        missing = [service_id for service_id in requested if service_id not in found]
        if missing:
            raise NotFoundError("Additional service", f"Additional services not found: {missing}")
        return requested

    @translate_errors("Failed to create space")
    async def create_space(self, data: SpaceCreate, current_user: User) -> Space:
        """
        Create a space, together with its additional service links, in one transaction.

        The caller must be an admin or the manager of the target location.
        """
        await self._ensure_can_manage(data.location_id, current_user, "add spaces to")
        await self._ensure_space_type(data.space_type_id)
        service_ids = await self._ensure_services_exist(data.service_ids)

        space = Space.model_validate(data.model_dump(exclude={"service_ids"}))
        space = await self.spaces.create(space, commit=False)
        for service_id in service_ids:
            self.session.add(SpaceServiceLink(space_id=space.id, service_id=service_id))
        await self.session.commit()
        await self.session.refresh(space)
        logger.info(f"Space {space.id} '{space.space_name}' created in location {space.location_id}")
        return space

    @translate_errors("Failed to update space")
    async def update_space(self, space_id: int, data: SpaceUpdate, current_user: User) -> Space:
        space = await self.get_space(space_id)
        await self._ensure_can_manage(space.location_id, current_user, "edit spaces of")

        changes = data.model_dump(exclude_unset=True, exclude_none=True)
        if not changes:
            raise BadRequestError("No valid fields provided for the update")
        if "space_type_id" in changes:
            await self._ensure_space_type(changes["space_type_id"])

        opening = changes.get("opening_time", space.opening_time)
        closing = changes.get("closing_time", space.closing_time)
        if opening >= closing:
            raise BadRequestError("Opening time must be earlier than closing time")

        for key, value in changes.items():
            setattr(space, key, value)
        return await self.spaces.update(space)

    @translate_errors("Failed to delete space")
    async def delete_space(self, space_id: int, current_user: User) -> None:
        """Delete a space with its service links and availability blocks, unless it has active bookings."""
        space = await self.get_space(space_id)
        await self._ensure_can_manage(space.location_id, current_user, "delete spaces of")

        active = await self.bookings.count_active_for_space(space_id)
        if active > 0:
            raise ConflictError(f"Cannot delete space: it has {active} active bookings")

        await self.spaces.remove_all_service_links(space_id)
        for block in await self.availability.list(filters={"space_id": space_id}):
            await self.session.delete(block)
        await self.spaces.delete(space_id, commit=False)
        await self.session.commit()
        logger.info(f"Space {space_id} deleted by user {current_user.id}")

    @translate_errors("Failed to list available slots")
    async def available_slots(self, space_id: int, booking_date: date) -> AvailableSlots:
        """
        Hourly slots of a space for one date.

        A closed weekday or an inactive space yields no slots. Otherwise each
        slot is marked unavailable when it overlaps a pending or confirmed
        booking or an unavailable availability block.
        """
        space = await self.get_space(space_id)
        result = AvailableSlots(
            space_id=space.id,
            booking_date=booking_date,
            available=False,
            opening_time=space.opening_time,
            closing_time=space.closing_time,
        )
        if space.status != SpaceStatus.active:
            result.reason = "space_not_active"
            result.message = f"The space is not available for booking (status: {space.status.value})"
            return result

        violation = check_schedule(
            space.opening_time,
            space.closing_time,
            space.available_days,
            booking_date,
            space.opening_time,
            space.closing_time,
        )
        if violation is not None:
            result.reason = violation.reason
            result.message = violation.message
            return result

        taken = [(b.start_time, b.end_time) for b in await self.bookings.list_for_space_date(space_id, booking_date)]
        blocks = await self.availability.list_for_space(space_id, booking_date, booking_date)
        taken += [(b.start_time, b.end_time) for b in blocks if not b.is_available]

        for start, end in hourly_slots(space.opening_time, space.closing_time):
            free = not any(overlaps(start, end, other_start, other_end) for other_start, other_end in taken)
            result.slots.append(
                SlotRead(
                    start_time=start,
                    end_time=end,
                    available=free,
                    duration_minutes=to_minutes(end) - to_minutes(start),
                )
            )
        result.available = any(slot.available for slot in result.slots)
        if not result.available:
            result.reason = "fully_booked"
            result.message = "No free slots on this date"
        return result

    @translate_errors("Failed to calculate price")
    async def quote_price(
        self,
        space_id: int,
        booking_date: date,
        start_time: str,
        end_time: str,
        service_ids: Sequence[int] = (),
    ) -> PriceQuote:
        space = await self.get_space(space_id)
        validate_time_range(start_time, end_time)
        services = await self.rules.resolve_services(space_id, service_ids)

        total_hours = duration_hours(start_time, end_time)
        base_price = calculate_booking_price(total_hours, space.price_per_hour, space.price_per_day)
        services_cost = sum_service_prices(service.price for service in services)
        return PriceQuote(
            space_id=space.id,
            booking_date=booking_date,
            start_time=start_time,
            end_time=end_time,
            total_hours=total_hours,
            price_per_hour=space.price_per_hour,
            price_per_day=space.price_per_day,
            base_price=base_price,
            services_cost=services_cost,
            total_price=calculate_total(base_price, services_cost),
        )

    @translate_errors("Failed to list space services")
    async def list_services(self, space_id: int) -> List[AdditionalService]:
        await self.get_space(space_id)
        return await self.spaces.list_services(space_id)

    @translate_errors("Failed to add service to space")
    async def add_service(self, space_id: int, service_id: int, current_user: User) -> None:
        space = await self.get_space(space_id)
        await self._ensure_can_manage(space.location_id, current_user, "edit spaces of")
        if await self.services.get_by_id(service_id) is None:
            raise NotFoundError("Additional service")
        if await self.spaces.get_service_link(space_id, service_id) is not None:
            raise ConflictError("The service is already associated with this space")
        await self.spaces.add_service_link(space_id, service_id)
        logger.info(f"Service {service_id} added to space {space_id}")

    @translate_errors("Failed to remove service from space")
    async def remove_service(self, space_id: int, service_id: int, current_user: User) -> None:
        space = await self.get_space(space_id)
        await self._ensure_can_manage(space.location_id, current_user, "edit spaces of")
        link = await self.spaces.get_service_link(space_id, service_id)
        if link is None:
            raise NotFoundError("Service association", "The service is not associated with this space")
        await self.spaces.remove_service_link(link)
        logger.info(f"Service {service_id} removed from space {space_id}")
