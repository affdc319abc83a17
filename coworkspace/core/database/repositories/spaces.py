"""
Space repository.

Data access for spaces and for the space <-> additional service association.
"""

from __future__ import annotations

from typing import List, Optional, Sequence

from sqlalchemy import func
from sqlalchemy.ext.asyncio import AsyncSession
from sqlmodel import select

from coworkspace.core.models.domain.enums import SpaceStatus

from ..entities.additional_services import AdditionalService
from ..entities.locations import Location
from ..entities.spaces import Space, SpaceServiceLink
from .base import AsyncBaseRepository


class SpaceRepository(AsyncBaseRepository[Space]):
    """Repository for spaces."""

    def __init__(self, session: AsyncSession) -> None:
        super().__init__(session, Space)

    async def search(
        self,
        location_id: Optional[int] = None,
        space_type_id: Optional[int] = None,
        city: Optional[str] = None,
        min_capacity: Optional[int] = None,
        max_price_hour: Optional[float] = None,
        name: Optional[str] = None,
        status: Optional[SpaceStatus] = None,
    ) -> List[Space]:
        """List spaces matching every given filter, ordered by location then name.

        Args:
            location_id: Only spaces of this location
            space_type_id: Only spaces of this type
            city: City of the owning location, case-insensitive
            min_capacity: Capacity at least this value
            max_price_hour: Hourly rate at most this value
            name: Substring of the space name, case-insensitive
            status: Only spaces in this state
        """
        stmt = select(Space).join(Location, Location.id == Space.location_id)
        if location_id is not None:
            stmt = stmt.where(Space.location_id == location_id)
        if space_type_id is not None:
            stmt = stmt.where(Space.space_type_id == space_type_id)
        if city:
            stmt = stmt.where(func.lower(Location.city) == city.lower())
        if min_capacity is not None:
            stmt = stmt.where(Space.capacity >= min_capacity)
        if max_price_hour is not None:
            stmt = stmt.where(Space.price_per_hour <= max_price_hour)
        if name:
            stmt = stmt.where(Space.space_name.ilike(f"%{name}%"))
        if status is not None:
            stmt = stmt.where(Space.status == status)
        stmt = stmt.order_by(Location.location_name, Space.space_name)
        result = await self.session.execute(stmt)
        return list(result.scalars().all())

    async def list_by_type(self, space_type_id: int) -> List[Space]:
        return await self.list(filters={"space_type_id": space_type_id})

    async def count_by_type(self, space_type_id: int) -> int:
        return await self.count({"space_type_id": space_type_id})

    async def count_by_location(self, location_id: int) -> int:
        return await self.count({"location_id": location_id})

    # ------------------------------------------------------------------
    # Additional service associations
    # ------------------------------------------------------------------

    async def get_service_link(self, space_id: int, service_id: int) -> Optional[SpaceServiceLink]:
        return await self.session.get(SpaceServiceLink, (space_id, service_id))

    async def add_service_link(self, space_id: int, service_id: int) -> SpaceServiceLink:
        link = SpaceServiceLink(space_id=space_id, service_id=service_id)
        self.session.add(link)
        await self.session.commit()
        await self.session.refresh(link)
        return link

    async def remove_service_link(self, link: SpaceServiceLink) -> None:
        await self.session.delete(link)
        await self.session.commit()

    async def list_services(self, space_id: int) -> List[AdditionalService]:
        """Additional services associated with a space, ordered by name."""
        stmt = (
            select(AdditionalService)
            .join(SpaceServiceLink, SpaceServiceLink.service_id == AdditionalService.id)
            .where(SpaceServiceLink.space_id == space_id)
            .order_by(AdditionalService.service_name)
        )
        result = await self.session.execute(stmt)
        return list(result.scalars().all())

    async def list_by_service(self, service_id: int) -> List[Space]:
        """Spaces offering a given additional service."""
        stmt = (
            select(Space)
            .join(SpaceServiceLink, SpaceServiceLink.space_id == Space.id)
            .where(SpaceServiceLink.service_id == service_id)
            .order_by(Space.space_name)
        )
        result = await self.session.execute(stmt)
        return list(result.scalars().all())

    async def count_service_links(self, service_id: int) -> int:
        stmt = select(func.count()).select_from(SpaceServiceLink).where(SpaceServiceLink.service_id == service_id)
        result = await self.session.execute(stmt)
        return int(result.scalar_one())

    async def remove_all_service_links(self, space_id: int) -> None:
        """Delete every service association of a space inside the open transaction."""
        stmt = select(SpaceServiceLink).where(SpaceServiceLink.space_id == space_id)
        result = await self.session.execute(stmt)
        for link in result.scalars().all():
            await self.session.delete(link)
        await self.session.flush()

    async def service_ids(self, space_id: int, service_ids: Sequence[int]) -> List[int]:
        """Subset of ``service_ids`` associated with the space."""
        if not service_ids:
            return []
        stmt = select(SpaceServiceLink.service_id).where(
            SpaceServiceLink.space_id == space_id,
            SpaceServiceLink.service_id.in_(service_ids),
        )
        result = await self.session.execute(stmt)
        return list(result.scalars().all())
