"""
Payment service.

Records the payment of a booking and keeps the booking's ``payment_status``
in step with it. A booking can be paid once: it must not be cancelled and
must not already have a pending or completed payment, and the amount must
match the booking total. Visibility follows the bookings: users see the
payments of their own bookings, managers those made in their locations,
admins all of them.
"""

from __future__ import annotations

from datetime import date
from typing import List, Optional

from sqlalchemy.ext.asyncio import AsyncSession

from coworkspace.core.database.entities.bookings import Booking
from coworkspace.core.database.entities.payments import Payment
from coworkspace.core.database.entities.users import User
from coworkspace.core.database.repositories import (
    BookingRepository,
    LocationRepository,
    PaymentRepository,
    SpaceRepository,
)
from coworkspace.core.errors import BadRequestError, ConflictError, ForbiddenError, NotFoundError, translate_errors
from coworkspace.core.logging_config import get_logger
from coworkspace.core.models.domain.enums import BookingStatus, PaymentMethod, PaymentStatus, UserRole
from coworkspace.core.models.io.payments import CanPay, PaymentCreate, PaymentStats, PaymentStatusChange
from coworkspace.core.monitoring import log_payment_event

from .access import is_admin

logger = get_logger(__name__)


def _amount_matches(amount: float, total: float) -> bool:
    return round(amount, 2) == round(total, 2)


class PaymentService:
    """Service for payments."""

    def __init__(self, session: AsyncSession):
        self.session = session
        self.payments = PaymentRepository(session)
        self.bookings = BookingRepository(session)
        self.spaces = SpaceRepository(session)
        self.locations = LocationRepository(session)

    async def _get_booking(self, booking_id: int) -> Booking:
        booking = await self.bookings.get_by_id(booking_id)
        if booking is None:
            raise NotFoundError("Booking")
        return booking

    async def _manages_booking(self, user: User, booking: Booking) -> bool:
        if user.role != UserRole.manager:
            return False
        space = await self.spaces.get_by_id(booking.space_id)
        if space is None:
            return False
        location = await self.locations.get_by_id(space.location_id)
        return location is not None and location.manager_id == user.id

    async def _ensure_can_access(self, booking: Booking, user: User) -> None:
        if is_admin(user) or booking.user_id == user.id:
            return
        if await self._manages_booking(user, booking):
            return
        raise ForbiddenError("You do not have permission to access payments of this booking")

    async def _open_payment_problem(self, booking: Booking) -> Optional[str]:
        """Why ``booking`` cannot be paid, or None when it can."""
        if booking.status == BookingStatus.cancelled:
            return "A cancelled booking cannot be paid"
        existing = await self.payments.find_open_for_booking(booking.id)
        if existing is None:
            return None
        if existing.status == PaymentStatus.completed:
            return "This booking is already paid"
        return "This booking already has a payment in progress"

    async def _sync_booking(self, booking_id: int) -> None:
        """Mirror the latest payment's status on the booking, ``pending`` when none is left."""
        booking = await self.bookings.get_by_id(booking_id)
        if booking is None:
            return
        remaining = await self.payments.list_for_booking(booking_id)
        booking.payment_status = remaining[-1].status if remaining else PaymentStatus.pending
        await self.bookings.update(booking, commit=False)

    @translate_errors("Failed to create payment")
    async def create_payment(self, data: PaymentCreate, current_user: User) -> Payment:
        """
        Pay a booking.

        Users pay their own bookings; managers may record payments for
        bookings in their locations, admins for any booking. The payment and
        the booking's payment status are committed together.
        """
        booking = await self._get_booking(data.booking_id)
        if current_user.role == UserRole.user and booking.user_id != current_user.id:
            raise ForbiddenError("You can only pay for your own bookings")
        await self._ensure_can_access(booking, current_user)

        if booking.status == BookingStatus.cancelled:
            raise BadRequestError("A cancelled booking cannot be paid")
        problem = await self._open_payment_problem(booking)
        if problem is not None:
            raise ConflictError(problem)

        amount = data.amount if data.amount is not None else booking.total_price
        if not _amount_matches(amount, booking.total_price):
            raise BadRequestError(
                f"Payment amount {amount:.2f} does not match the booking total {booking.total_price:.2f}"
            )

        payment = Payment(
            booking_id=booking.id,
            user_id=booking.user_id,
            amount=round(amount, 2),
            method=data.method,
            status=PaymentStatus.completed,
            transaction_id=data.transaction_id,
            notes=data.notes,
        )
        payment = await self.payments.create(payment, commit=False)
        booking.payment_status = payment.status
        await self.bookings.update(booking, commit=False)
        await self.session.commit()
        await self.session.refresh(payment)

        log_payment_event("payment.created", payment.id, booking.id, payment.amount, payment.status.value)
        return payment

    @translate_errors("Failed to list payments")
    async def list_payments(
        self,
        current_user: User,
        status: Optional[PaymentStatus] = None,
        method: Optional[PaymentMethod] = None,
        booking_id: Optional[int] = None,
        from_date: Optional[date] = None,
        to_date: Optional[date] = None,
    ) -> List[Payment]:
        filters = {
            "status": status,
            "method": method,
            "booking_id": booking_id,
            "from_date": from_date,
            "to_date": to_date,
        }
        if current_user.role == UserRole.user:
            filters["user_id"] = current_user.id
        elif current_user.role == UserRole.manager:
            filters["location_ids"] = await self.locations.ids_managed_by(current_user.id)
        return await self.payments.search(**filters)

    @translate_errors("Failed to load payment")
    async def get_payment(self, payment_id: int, current_user: User) -> Payment:
        payment = await self.payments.get_by_id(payment_id)
        if payment is None:
            raise NotFoundError("Payment")
        await self._ensure_can_access(await self._get_booking(payment.booking_id), current_user)
        return payment

    @translate_errors("Failed to update payment status")
    async def update_status(self, payment_id: int, change: PaymentStatusChange, current_user: User) -> Payment:
        """Move a payment along pending -> completed/failed, completed -> refunded."""
        payment = await self.get_payment(payment_id, current_user)
        booking = await self._get_booking(payment.booking_id)
        if not is_admin(current_user) and not await self._manages_booking(current_user, booking):
            raise ForbiddenError("Only the location manager or an administrator can change this payment")

        if change.status != payment.status:
            if change.status not in payment.status.allowed_transitions():
                raise BadRequestError(
                    f"Cannot change payment status from {payment.status.value} to {change.status.value}"
                )
            previous = payment.status
            payment.status = change.status
            logger.info(
                f"Payment {payment_id} status {previous.value} -> {change.status.value} by user {current_user.id}"
            )
        if change.notes is not None:
            payment.notes = change.notes

        payment = await self.payments.update(payment, commit=False)
        await self._sync_booking(payment.booking_id)
        await self.session.commit()
        await self.session.refresh(payment)

        log_payment_event(
            "payment.status_changed", payment.id, payment.booking_id, payment.amount, payment.status.value
        )
        return payment

    @translate_errors("Failed to delete payment")
    async def delete_payment(self, payment_id: int, current_user: User) -> None:
        payment = await self.get_payment(payment_id, current_user)
        booking_id = payment.booking_id

        await self.payments.delete(payment_id, commit=False)
        await self._sync_booking(booking_id)
        await self.session.commit()
        log_payment_event("payment.deleted", payment_id, booking_id, payment.amount, payment.status.value)

    @translate_errors("Failed to build payment statistics")
    async def statistics(
        self, current_user: User, from_date: Optional[date] = None, to_date: Optional[date] = None
    ) -> PaymentStats:
        """Payment counts and revenue, scoped to the manager's locations."""
        location_ids: Optional[List[int]] = None
        if current_user.role == UserRole.manager:
            location_ids = await self.locations.ids_managed_by(current_user.id)
            if not location_ids:
                raise ForbiddenError("You do not manage any location")
        elif not is_admin(current_user):
            raise ForbiddenError("Only managers and administrators can view payment statistics")

        stats = await self.payments.stats(location_ids=location_ids, from_date=from_date, to_date=to_date)
        return PaymentStats(**stats, location_ids=location_ids)

    @translate_errors("Failed to check booking payment")
    async def can_pay(self, booking_id: int, current_user: User) -> CanPay:
        booking = await self._get_booking(booking_id)
        await self._ensure_can_access(booking, current_user)

        existing = await self.payments.find_open_for_booking(booking.id)
        problem = await self._open_payment_problem(booking)
        return CanPay(
            booking_id=booking.id,
            can_pay=problem is None,
            amount=booking.total_price,
            booking_status=booking.status,
            payment_status=booking.payment_status,
            existing_payment_id=existing.id if existing is not None else None,
            message=problem or "The booking can be paid",
        )
