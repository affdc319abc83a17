"""
Location repository.

Data access for locations, including the filters used by the listing
endpoint and the manager-to-locations lookup used for authorization.
"""

from __future__ import annotations

from typing import List, Optional

from sqlalchemy import func
from sqlalchemy.ext.asyncio import AsyncSession
from sqlmodel import select

from ..entities.locations import Location
from .base import AsyncBaseRepository


class LocationRepository(AsyncBaseRepository[Location]):
    """Repository for locations."""

    def __init__(self, session: AsyncSession) -> None:
        super().__init__(session, Location)

    async def search(
        self,
        city: Optional[str] = None,
        manager_id: Optional[int] = None,
        name: Optional[str] = None,
    ) -> List[Location]:
        """List locations ordered by city and name.

        Args:
            city: Exact city, case-insensitive
            manager_id: Only locations managed by this user
            name: Substring of the location name, case-insensitive
        """
        stmt = select(Location)
        if city:
            stmt = stmt.where(func.lower(Location.city) == city.lower())
        if manager_id is not None:
            stmt = stmt.where(Location.manager_id == manager_id)
        if name:
            stmt = stmt.where(Location.location_name.ilike(f"%{name}%"))
        stmt = stmt.order_by(Location.city, Location.location_name)
        result = await self.session.execute(stmt)
        return list(result.scalars().all())

    async def ids_managed_by(self, manager_id: int) -> List[int]:
        """IDs of the locations assigned to a manager."""
        stmt = select(Location.id).where(Location.manager_id == manager_id)
        result = await self.session.execute(stmt)
        return list(result.scalars().all())

    async def count_managed_by(self, manager_id: int) -> int:
        return await self.count({"manager_id": manager_id})
