"""
Payment repository.

Data access for payments: role-scoped listing, the payments of a booking and
the aggregates behind the payment statistics.
"""

from __future__ import annotations

from datetime import date, datetime, time, timedelta, timezone
from typing import Any, Dict, List, Optional, Sequence

from sqlalchemy.ext.asyncio import AsyncSession
from sqlmodel import select

from coworkspace.core.models.domain.enums import PaymentMethod, PaymentStatus

from ..entities.bookings import Booking
from ..entities.payments import Payment
from ..entities.spaces import Space
from .base import AsyncBaseRepository, QueryBuilder

# A booking with a payment in one of these states cannot be paid again.
OPEN_STATUSES = (PaymentStatus.pending, PaymentStatus.completed)


def _start_of(day: date) -> datetime:
    return datetime.combine(day, time.min, tzinfo=timezone.utc)


class PaymentRepository(AsyncBaseRepository[Payment]):
    """Repository for payments."""

    def __init__(self, session: AsyncSession) -> None:
        super().__init__(session, Payment)

    def _scoped(
        self,
        stmt,
        user_id: Optional[int] = None,
        location_ids: Optional[Sequence[int]] = None,
        booking_id: Optional[int] = None,
        status: Optional[PaymentStatus] = None,
        method: Optional[PaymentMethod] = None,
        from_date: Optional[date] = None,
        to_date: Optional[date] = None,
    ):
        stmt = QueryBuilder.apply_filters(
            stmt,
            Payment,
            {"user_id": user_id, "booking_id": booking_id, "status": status, "method": method},
        )
        if location_ids is not None:
            stmt = (
                stmt.join(Booking, Booking.id == Payment.booking_id)
                .join(Space, Space.id == Booking.space_id)
                .where(Space.location_id.in_(list(location_ids)))
            )
        if from_date is not None:
            stmt = stmt.where(Payment.created_at >= _start_of(from_date))
        if to_date is not None:
            stmt = stmt.where(Payment.created_at < _start_of(to_date + timedelta(days=1)))
        return stmt

    async def search(self, limit: Optional[int] = None, **filters: Any) -> List[Payment]:
        """List payments newest first.

        Accepts ``user_id``, ``location_ids``, ``booking_id``, ``status``,
        ``method``, ``from_date`` and ``to_date`` filters.
        """
        stmt = self._scoped(select(Payment), **filters).order_by(Payment.created_at.desc(), Payment.id.desc())
        stmt = QueryBuilder.apply_pagination(stmt, limit, None)
        result = await self.session.execute(stmt)
        return list(result.scalars().all())

    async def list_for_booking(self, booking_id: int) -> List[Payment]:
        stmt = select(Payment).where(Payment.booking_id == booking_id).order_by(Payment.id)
        result = await self.session.execute(stmt)
        return list(result.scalars().all())

    async def find_open_for_booking(self, booking_id: int) -> Optional[Payment]:
        """The pending or completed payment of a booking, if any."""
        stmt = (
            select(Payment)
            .where(Payment.booking_id == booking_id, Payment.status.in_(list(OPEN_STATUSES)))
            .order_by(Payment.id.desc())
        )
        result = await self.session.execute(stmt)
        return result.scalars().first()

    async def count_for_booking(self, booking_id: int) -> int:
        return await self.count({"booking_id": booking_id})

    async def stats(self, **filters: Any) -> Dict[str, Any]:
        """Counts per status and method, plus revenue overall and per month.

        Revenue sums completed payments only; refunded amounts are reported
        separately.
        """
        payments = await self.search(**filters)

        by_status = {status.value: 0 for status in PaymentStatus}
        by_method = {method.value: 0 for method in PaymentMethod}
        monthly_revenue: Dict[str, float] = {}
        revenue = 0.0
        refunded = 0.0
        for payment in payments:
            by_status[payment.status.value] += 1
            by_method[payment.method.value] += 1
            if payment.status == PaymentStatus.completed:
                revenue += payment.amount
                month = payment.created_at.strftime("%Y-%m")
                monthly_revenue[month] = round(monthly_revenue.get(month, 0) + payment.amount, 2)
            elif payment.status == PaymentStatus.refunded:
                refunded += payment.amount

        return {
            "total_payments": len(payments),
            "by_status": by_status,
            "by_method": by_method,
            "total_revenue": round(revenue, 2),
            "refunded_amount": round(refunded, 2),
            "monthly_revenue": dict(sorted(monthly_revenue.items())),
        }
