"""
Availability block repository.

Overlap queries use the half-open interval rule on ``HH:MM`` strings:
``start < other_end AND end > other_start``.
"""

from __future__ import annotations

from datetime import date
from typing import List, Optional

from sqlalchemy.ext.asyncio import AsyncSession
from sqlmodel import select

from ..entities.availability import Availability
from .base import AsyncBaseRepository


class AvailabilityRepository(AsyncBaseRepository[Availability]):
    """Repository for availability blocks."""

    def __init__(self, session: AsyncSession) -> None:
        super().__init__(session, Availability)

    async def list_for_space(self, space_id: int, start_date: date, end_date: date) -> List[Availability]:
        """Blocks of a space between two dates inclusive, in chronological order."""
        stmt = (
            select(Availability)
            .where(
                Availability.space_id == space_id,
                Availability.availability_date >= start_date,
                Availability.availability_date <= end_date,
            )
            .order_by(Availability.availability_date, Availability.start_time)
        )
        result = await self.session.execute(stmt)
        return list(result.scalars().all())

    async def find_overlapping(
        self,
        space_id: int,
        availability_date: date,
        start_time: str,
        end_time: str,
        exclude_id: Optional[int] = None,
        is_available: Optional[bool] = None,
    ) -> List[Availability]:
        """Blocks of the same space and date whose window overlaps ``[start_time, end_time)``.

        Args:
            space_id: Space to check
            availability_date: Date to check
            start_time: Window start, HH:MM
            end_time: Window end, HH:MM
            exclude_id: Block to ignore (the one being updated)
            is_available: Restrict to open (True) or closed (False) blocks
        """
        stmt = select(Availability).where(
            Availability.space_id == space_id,
            Availability.availability_date == availability_date,
            Availability.start_time < end_time,
            Availability.end_time > start_time,
        )
        if exclude_id is not None:
            stmt = stmt.where(Availability.id != exclude_id)
        if is_available is not None:
            stmt = stmt.where(Availability.is_available.is_(is_available))
        result = await self.session.execute(stmt.order_by(Availability.start_time))
        return list(result.scalars().all())

    async def find_exact(
        self, space_id: int, availability_date: date, start_time: str, end_time: str
    ) -> Optional[Availability]:
        stmt = select(Availability).where(
            Availability.space_id == space_id,
            Availability.availability_date == availability_date,
            Availability.start_time == start_time,
            Availability.end_time == end_time,
        )
        result = await self.session.execute(stmt)
        return result.scalars().first()
