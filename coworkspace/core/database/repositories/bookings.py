"""
Booking repository.

Data access for bookings: overlap detection against blocking statuses,
role-scoped listing, the selected services of a booking and the aggregate
figures shown on the dashboard.
"""

from __future__ import annotations

from datetime import date
from typing import Any, Dict, Iterable, List, Optional, Sequence

from sqlalchemy import func
from sqlalchemy.ext.asyncio import AsyncSession
from sqlmodel import select

from coworkspace.core.models.domain.enums import BookingStatus, PaymentStatus

from ..entities.additional_services import AdditionalService
from ..entities.bookings import Booking, BookingServiceLink
from ..entities.spaces import Space
from .base import AsyncBaseRepository, QueryBuilder


class BookingRepository(AsyncBaseRepository[Booking]):
    """Repository for bookings."""

    def __init__(self, session: AsyncSession) -> None:
        super().__init__(session, Booking)

    async def find_overlapping(
        self,
        space_id: int,
        booking_date: date,
        start_time: str,
        end_time: str,
        statuses: Iterable[BookingStatus] = BookingStatus.blocking(),
        exclude_id: Optional[int] = None,
    ) -> List[Booking]:
        """Bookings of the same space and date in ``statuses`` overlapping ``[start_time, end_time)``."""
        stmt = select(Booking).where(
            Booking.space_id == space_id,
            Booking.booking_date == booking_date,
            Booking.status.in_(list(statuses)),
            Booking.start_time < end_time,
            Booking.end_time > start_time,
        )
        if exclude_id is not None:
            stmt = stmt.where(Booking.id != exclude_id)
        result = await self.session.execute(stmt.order_by(Booking.start_time))
        return list(result.scalars().all())

    async def list_for_space_date(self, space_id: int, booking_date: date) -> List[Booking]:
        """Blocking bookings of a space on one date, in start-time order."""
        stmt = (
            select(Booking)
            .where(
                Booking.space_id == space_id,
                Booking.booking_date == booking_date,
                Booking.status.in_(list(BookingStatus.blocking())),
            )
            .order_by(Booking.start_time)
        )
        result = await self.session.execute(stmt)
        return list(result.scalars().all())

    def _scoped(
        self,
        stmt,
        user_id: Optional[int] = None,
        location_ids: Optional[Sequence[int]] = None,
        status: Optional[BookingStatus] = None,
        payment_status: Optional[PaymentStatus] = None,
        space_id: Optional[int] = None,
        from_date: Optional[date] = None,
        to_date: Optional[date] = None,
    ):
        stmt = QueryBuilder.apply_filters(
            stmt,
            Booking,
            {"user_id": user_id, "status": status, "payment_status": payment_status, "space_id": space_id},
        )
        if location_ids is not None:
            stmt = stmt.join(Space, Space.id == Booking.space_id).where(Space.location_id.in_(list(location_ids)))
        if from_date is not None:
            stmt = stmt.where(Booking.booking_date >= from_date)
        if to_date is not None:
            stmt = stmt.where(Booking.booking_date <= to_date)
        return stmt

    async def search(self, limit: Optional[int] = None, **filters: Any) -> List[Booking]:
        """List bookings newest first.

        Accepts ``user_id``, ``location_ids``, ``status``, ``payment_status``,
        ``space_id``, ``from_date`` and ``to_date`` filters.
        """
        stmt = self._scoped(select(Booking), **filters)
        stmt = stmt.order_by(Booking.booking_date.desc(), Booking.start_time.desc(), Booking.id.desc())
        stmt = QueryBuilder.apply_pagination(stmt, limit, None)
        result = await self.session.execute(stmt)
        return list(result.scalars().all())

    async def stats(self, **filters: Any) -> Dict[str, Any]:
        """Counts per status plus revenue and hours over non-cancelled bookings."""
        stmt = self._scoped(select(Booking.status, func.count(Booking.id)), **filters).group_by(Booking.status)
        result = await self.session.execute(stmt)
        counts = {status.value: 0 for status in BookingStatus}
        for status, count in result.all():
            key = status.value if isinstance(status, BookingStatus) else str(status)
            counts[key] = int(count)

        totals_stmt = self._scoped(
            select(
                func.coalesce(func.sum(Booking.total_price), 0),
                func.coalesce(func.sum(Booking.total_hours), 0),
            ),
            **filters,
        ).where(Booking.status != BookingStatus.cancelled)
        revenue, hours = (await self.session.execute(totals_stmt)).one()

        return {
            "total_bookings": sum(counts.values()),
            "by_status": counts,
            "total_revenue": round(float(revenue), 2),
            "total_hours": round(float(hours), 2),
        }

    async def count_active_for_space(self, space_id: int) -> int:
        stmt = (
            select(func.count())
            .select_from(Booking)
            .where(Booking.space_id == space_id, Booking.status.in_(list(BookingStatus.blocking())))
        )
        result = await self.session.execute(stmt)
        return int(result.scalar_one())

    async def count_by_user(self, user_id: int) -> int:
        return await self.count({"user_id": user_id})

    async def count_for_location(self, location_id: int) -> int:
        stmt = (
            select(func.count())
            .select_from(Booking)
            .join(Space, Space.id == Booking.space_id)
            .where(Space.location_id == location_id)
        )
        result = await self.session.execute(stmt)
        return int(result.scalar_one())

    # ------------------------------------------------------------------
    # Selected services
    # ------------------------------------------------------------------

    async def add_service_links(self, booking_id: int, services: Sequence[AdditionalService]) -> None:
        """Record the selected services inside the open transaction."""
        for service in services:
            self.session.add(BookingServiceLink(booking_id=booking_id, service_id=service.id, price=service.price))
        await self.session.flush()

    async def service_ids(self, booking_id: int) -> List[int]:
        stmt = (
            select(BookingServiceLink.service_id)
            .where(BookingServiceLink.booking_id == booking_id)
            .order_by(BookingServiceLink.service_id)
        )
        result = await self.session.execute(stmt)
        return list(result.scalars().all())

    async def remove_service_links(self, booking_id: int) -> None:
        stmt = select(BookingServiceLink).where(BookingServiceLink.booking_id == booking_id)
        result = await self.session.execute(stmt)
        for link in result.scalars().all():
            await self.session.delete(link)
        await self.session.flush()
