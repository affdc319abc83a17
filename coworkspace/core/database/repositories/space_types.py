"""
Space type repository.
"""

from __future__ import annotations

from typing import List, Optional

from sqlalchemy import func, or_
from sqlalchemy.ext.asyncio import AsyncSession
from sqlmodel import select

from ..entities.space_types import SpaceType
from .base import AsyncBaseRepository


class SpaceTypeRepository(AsyncBaseRepository[SpaceType]):
    """Repository for space types."""

    def __init__(self, session: AsyncSession) -> None:
        super().__init__(session, SpaceType)

    async def get_by_name(self, type_name: str) -> Optional[SpaceType]:
        """Get a space type by name, case-insensitively."""
        stmt = select(SpaceType).where(func.lower(SpaceType.type_name) == type_name.strip().lower())
        result = await self.session.execute(stmt)
        return result.scalars().first()

    async def list_by_name(self, type_name: Optional[str] = None) -> List[SpaceType]:
        """List space types ordered by name, optionally filtered by a name substring."""
        stmt = select(SpaceType)
        if type_name:
            stmt = stmt.where(SpaceType.type_name.ilike(f"%{type_name}%"))
        stmt = stmt.order_by(SpaceType.type_name)
        result = await self.session.execute(stmt)
        return list(result.scalars().all())

    async def search(self, term: str) -> List[SpaceType]:
        """Match ``term`` against name and description, case-insensitively."""
        pattern = f"%{term}%"
        stmt = (
            select(SpaceType)
            .where(
                or_(
                    SpaceType.type_name.ilike(pattern),
                    SpaceType.description.ilike(pattern),
                )
            )
            .order_by(SpaceType.type_name)
        )
        result = await self.session.execute(stmt)
        return list(result.scalars().all())
