"""
Additional service repository.
"""

from __future__ import annotations

from typing import List, Optional, Sequence

from sqlalchemy import func
from sqlalchemy.ext.asyncio import AsyncSession
from sqlmodel import select

from ..entities.additional_services import AdditionalService
from .base import AsyncBaseRepository


class AdditionalServiceRepository(AsyncBaseRepository[AdditionalService]):
    """Repository for additional services."""

    def __init__(self, session: AsyncSession) -> None:
        super().__init__(session, AdditionalService)

    async def get_by_name(self, service_name: str) -> Optional[AdditionalService]:
        """Get a service by name, case-insensitively."""
        stmt = select(AdditionalService).where(
            func.lower(AdditionalService.service_name) == service_name.strip().lower()
        )
        result = await self.session.execute(stmt)
        return result.scalars().first()

    async def list_services(self, include_inactive: bool = False) -> List[AdditionalService]:
        stmt = select(AdditionalService)
        if not include_inactive:
            stmt = stmt.where(AdditionalService.is_active.is_(True))
        stmt = stmt.order_by(AdditionalService.service_name)
        result = await self.session.execute(stmt)
        return list(result.scalars().all())

    async def get_many(self, service_ids: Sequence[int]) -> List[AdditionalService]:
        if not service_ids:
            return []
        stmt = select(AdditionalService).where(AdditionalService.id.in_(service_ids))
        result = await self.session.execute(stmt)
        return list(result.scalars().all())
