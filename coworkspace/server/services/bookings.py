"""
Booking service.

Creates bookings after running the booking rules (space state, weekly
schedule, availability blocks, existing bookings), prices them, drives the
status lifecycle and builds the dashboard figures. Visibility is role
scoped: users see their own bookings, managers the bookings in the locations
they manage, admins everything.
"""

from __future__ import annotations

from datetime import date
from typing import List, Optional

from sqlalchemy.ext.asyncio import AsyncSession

from coworkspace.core.database.base import utc_now
from coworkspace.core.database.entities.bookings import Booking
from coworkspace.core.database.entities.spaces import Space
from coworkspace.core.database.entities.users import User
from coworkspace.core.database.repositories import (
    BookingRepository,
    LocationRepository,
    PaymentRepository,
    SpaceRepository,
    UserRepository,
)
from coworkspace.core.errors import BadRequestError, ConflictError, ForbiddenError, NotFoundError, translate_errors
from coworkspace.core.logging_config import get_logger
from coworkspace.core.models.domain.enums import BookingStatus, PaymentStatus, UserRole
from coworkspace.core.models.io.bookings import BookingCreate, BookingDashboard, BookingRead, BookingUpdate
from coworkspace.core.monitoring import log_booking_event
from coworkspace.core.pricing import calculate_booking_price, calculate_total, sum_service_prices
from coworkspace.core.scheduling import duration_hours, validate_time_range

from .access import is_admin
from .booking_rules import BookingRules, raise_for_violation

logger = get_logger(__name__)

RECENT_BOOKINGS_LIMIT = 10


def _today() -> date:
    return utc_now().date()


def _ensure_not_in_past(booking_date: date) -> None:
    if booking_date < _today():
        raise BadRequestError("Booking date cannot be in the past")


def _ensure_transition(current: BookingStatus, new: BookingStatus) -> None:
    if new == current:
        return
    if new not in current.allowed_transitions():
        raise BadRequestError(f"Cannot change booking status from {current.value} to {new.value}")


class BookingService:
    """Service for bookings."""

    def __init__(self, session: AsyncSession):
        self.session = session
        self.bookings = BookingRepository(session)
        self.spaces = SpaceRepository(session)
        self.locations = LocationRepository(session)
        self.users = UserRepository(session)
        self.payments = PaymentRepository(session)
        self.rules = BookingRules(session)

    async def to_read(self, booking: Booking) -> BookingRead:
        """Response model of a booking, with its selected service ids."""
        read = BookingRead.model_validate(booking)
        read.service_ids = await self.bookings.service_ids(booking.id)
        return read

    async def _get_space(self, space_id: int) -> Space:
        space = await self.spaces.get_by_id(space_id)
        if space is None:
            raise NotFoundError("Space")
        return space

    async def _manages_space(self, user: User, space: Space) -> bool:
        if user.role != UserRole.manager:
            return False
        location = await self.locations.get_by_id(space.location_id)
        return location is not None and location.manager_id == user.id

    async def _ensure_can_access(self, booking: Booking, user: User) -> None:
        if is_admin(user) or booking.user_id == user.id:
            return
        if await self._manages_space(user, await self._get_space(booking.space_id)):
            return
        raise ForbiddenError("You do not have permission to access this booking")

    async def _ensure_can_operate(self, booking: Booking, user: User) -> None:
        """Status and payment changes are for admins and the managing manager."""
        if is_admin(user):
            return
        if await self._manages_space(user, await self._get_space(booking.space_id)):
            return
        raise ForbiddenError("Only the location manager or an administrator can change this booking")

    @translate_errors("Failed to create booking")
    async def create_booking(self, data: BookingCreate, current_user: User) -> BookingRead:
        """
        Create a booking.

        Checks run in order and stop at the first failure: time range and
        date, space exists, booking permission, space active, weekday open,
        inside opening hours, no unavailable block, no overlapping booking,
        then the selected services. The booking and its service lines are
        committed together.
        """
        validate_time_range(data.start_time, data.end_time)
        _ensure_not_in_past(data.booking_date)

        user_id = data.user_id if data.user_id is not None else current_user.id
        if user_id != current_user.id and current_user.role == UserRole.user:
            raise ForbiddenError("You can only create bookings for yourself")

        space = await self._get_space(data.space_id)
        if user_id != current_user.id:
            if not is_admin(current_user) and not await self._manages_space(current_user, space):
                raise ForbiddenError("Managers can only book for others in the locations they manage")
            if await self.users.get_by_id(user_id) is None:
                raise NotFoundError("User")

        violation = await self.rules.find_violation(space, data.booking_date, data.start_time, data.end_time)
        if violation is not None:
            logger.info(f"Booking rejected for space {space.id} on {data.booking_date}: {violation.reason}")
            raise_for_violation(violation)

        services = await self.rules.resolve_services(space.id, data.service_ids)
        total_hours = duration_hours(data.start_time, data.end_time)
        base_price = calculate_booking_price(total_hours, space.price_per_hour, space.price_per_day)
        services_cost = sum_service_prices(service.price for service in services)

        booking = Booking(
            user_id=user_id,
            space_id=space.id,
            booking_date=data.booking_date,
            start_time=data.start_time,
            end_time=data.end_time,
            total_hours=total_hours,
            services_cost=services_cost,
            total_price=calculate_total(base_price, services_cost),
            notes=data.notes,
        )
        booking = await self.bookings.create(booking, commit=False)
        await self.bookings.add_service_links(booking.id, services)
        await self.session.commit()
        await self.session.refresh(booking)

        log_booking_event("booking.created", booking.id, booking.space_id, booking.user_id, booking.status.value)
        return await self.to_read(booking)

    @translate_errors("Failed to list bookings")
    async def list_bookings(
        self,
        current_user: User,
        status: Optional[BookingStatus] = None,
        payment_status: Optional[PaymentStatus] = None,
        space_id: Optional[int] = None,
        from_date: Optional[date] = None,
        to_date: Optional[date] = None,
    ) -> List[BookingRead]:
        filters = {
            "status": status,
            "payment_status": payment_status,
            "space_id": space_id,
            "from_date": from_date,
            "to_date": to_date,
        }
        if current_user.role == UserRole.user:
            filters["user_id"] = current_user.id
        elif current_user.role == UserRole.manager:
            filters["location_ids"] = await self.locations.ids_managed_by(current_user.id)

        bookings = await self.bookings.search(**filters)
        return [await self.to_read(booking) for booking in bookings]

    @translate_errors("Failed to load booking")
    async def get_booking(self, booking_id: int, current_user: User) -> Booking:
        booking = await self.bookings.get_by_id(booking_id)
        if booking is None:
            raise NotFoundError("Booking")
        await self._ensure_can_access(booking, current_user)
        return booking

    @translate_errors("Failed to update booking")
    async def update_booking(self, booking_id: int, data: BookingUpdate, current_user: User) -> BookingRead:
        """
        Apply a partial update.

        Users may edit, move or cancel their pending bookings; once a
        booking is confirmed they may only cancel it. Any other status
        change needs the managing manager or an admin, as on the status
        endpoint. Moving a booking re-runs the booking rules without the
        booking itself and reprices it.
        """
        booking = await self.get_booking(booking_id, current_user)
        changes = data.model_dump(exclude_unset=True)
        if not changes:
            raise BadRequestError("No valid fields provided for the update")

        new_status = changes.pop("status", None)
        if current_user.role == UserRole.user and booking.status == BookingStatus.confirmed:
            if changes or new_status not in (None, BookingStatus.cancelled):
                raise BadRequestError("A confirmed booking can only be cancelled")
        if new_status is not None and new_status != booking.status:
            owner_cancels = new_status == BookingStatus.cancelled and booking.user_id == current_user.id
            if not owner_cancels:
                if current_user.role == UserRole.user:
                    raise ForbiddenError("You can only cancel your own bookings")
                await self._ensure_can_operate(booking, current_user)
            _ensure_transition(booking.status, new_status)

        window_fields = {"booking_date", "start_time", "end_time"}
        if window_fields & {key for key, value in changes.items() if value is not None}:
            if booking.status not in BookingStatus.blocking():
                raise BadRequestError(f"A {booking.status.value} booking cannot be rescheduled")
            booking_date = changes.get("booking_date") or booking.booking_date
            start_time = changes.get("start_time") or booking.start_time
            end_time = changes.get("end_time") or booking.end_time
            validate_time_range(start_time, end_time)
            _ensure_not_in_past(booking_date)

            space = await self._get_space(booking.space_id)
            violation = await self.rules.find_violation(
                space, booking_date, start_time, end_time, exclude_booking_id=booking.id
            )
            if violation is not None:
                raise_for_violation(violation)

            booking.booking_date = booking_date
            booking.start_time = start_time
            booking.end_time = end_time
            booking.total_hours = duration_hours(start_time, end_time)
            base_price = calculate_booking_price(booking.total_hours, space.price_per_hour, space.price_per_day)
            booking.total_price = calculate_total(base_price, booking.services_cost)

        if "notes" in changes:
            booking.notes = changes["notes"]
        if new_status is not None:
            booking.status = new_status

        booking = await self.bookings.update(booking)
        log_booking_event("booking.updated", booking.id, booking.space_id, booking.user_id, booking.status.value)
        return await self.to_read(booking)

    @translate_errors("Failed to update booking status")
    async def update_status(self, booking_id: int, status: BookingStatus, current_user: User) -> BookingRead:
        booking = await self.get_booking(booking_id, current_user)
        await self._ensure_can_operate(booking, current_user)
        _ensure_transition(booking.status, status)

        previous = booking.status
        booking.status = status
        booking = await self.bookings.update(booking)
        logger.info(f"Booking {booking_id} status {previous.value} -> {status.value} by user {current_user.id}")
        log_booking_event("booking.status_changed", booking.id, booking.space_id, booking.user_id, status.value)
        return await self.to_read(booking)

    @translate_errors("Failed to update payment status")
    async def update_payment_status(
        self, booking_id: int, payment_status: PaymentStatus, current_user: User
    ) -> BookingRead:
        booking = await self.get_booking(booking_id, current_user)
        await self._ensure_can_operate(booking, current_user)
        if payment_status == PaymentStatus.refunded and booking.payment_status != PaymentStatus.completed:
            raise BadRequestError("Only a completed payment can be refunded")

        booking.payment_status = payment_status
        booking = await self.bookings.update(booking)
        logger.info(f"Booking {booking_id} payment status set to {payment_status.value}")
        return await self.to_read(booking)

    @translate_errors("Failed to delete booking")
    async def delete_booking(self, booking_id: int, current_user: User) -> None:
        booking = await self.get_booking(booking_id, current_user)
        if booking.status == BookingStatus.confirmed and not is_admin(current_user):
            raise ForbiddenError("Only administrators can delete confirmed bookings")
        payment_count = await self.payments.count_for_booking(booking_id)
        if payment_count:
            raise ConflictError(f"Cannot delete booking: it has {payment_count} payment(s)")

        await self.bookings.remove_service_links(booking_id)
        await self.bookings.delete(booking_id, commit=False)
        await self.session.commit()
        log_booking_event("booking.deleted", booking_id, booking.space_id, booking.user_id, booking.status.value)

    @translate_errors("Failed to build booking dashboard")
    async def dashboard(self, current_user: User) -> BookingDashboard:
        """Counts, revenue and recent bookings, scoped to the manager's locations."""
        location_ids: Optional[List[int]] = None
        if current_user.role == UserRole.manager:
            location_ids = await self.locations.ids_managed_by(current_user.id)
            if not location_ids:
                raise ForbiddenError("You do not manage any location")
        elif not is_admin(current_user):
            raise ForbiddenError("Only managers and administrators can view the dashboard")

        stats = await self.bookings.stats(location_ids=location_ids)
        recent = await self.bookings.search(limit=RECENT_BOOKINGS_LIMIT, location_ids=location_ids)
        return BookingDashboard(
            stats=stats,
            recent_bookings=[await self.to_read(booking) for booking in recent],
            location_ids=location_ids,
        )
