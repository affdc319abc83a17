"""
Space type service.
"""

from __future__ import annotations

from typing import List, Optional

from sqlalchemy.ext.asyncio import AsyncSession

from coworkspace.core.database.entities.space_types import SpaceType
from coworkspace.core.database.entities.spaces import Space
from coworkspace.core.database.repositories import SpaceRepository, SpaceTypeRepository
from coworkspace.core.errors import BadRequestError, ConflictError, NotFoundError, translate_errors
from coworkspace.core.logging_config import get_logger
from coworkspace.core.models.io.space_types import SpaceTypeCreate, SpaceTypeDeleteCheck, SpaceTypeUpdate

logger = get_logger(__name__)


def _in_use_message(spaces_count: int) -> str:
    return f"Cannot delete space type: it is used by {spaces_count} spaces"


class SpaceTypeService:
    """Service for the catalogue of space types."""

    def __init__(self, session: AsyncSession):
        self.session = session
        self.space_types = SpaceTypeRepository(session)
        self.spaces = SpaceRepository(session)

    @translate_errors("Failed to list space types")
    async def list_space_types(self, type_name: Optional[str] = None) -> List[SpaceType]:
        return await self.space_types.list_by_name(type_name)

    @translate_errors("Failed to search space types")
    async def search(self, term: Optional[str]) -> List[SpaceType]:
        if term is None or not term.strip():
            raise BadRequestError("A search term is required")
        return await self.space_types.search(term.strip())

    @translate_errors("Failed to load space type")
    async def get_space_type(self, space_type_id: int) -> SpaceType:
        space_type = await self.space_types.get_by_id(space_type_id)
        if space_type is None:
            raise NotFoundError("Space type")
        return space_type

    @translate_errors("Failed to list spaces of space type")
    async def list_spaces(self, space_type_id: int) -> List[Space]:
        await self.get_space_type(space_type_id)
        return await self.spaces.list_by_type(space_type_id)

    @translate_errors("Failed to check space type usage")
    async def can_delete(self, space_type_id: int) -> SpaceTypeDeleteCheck:
        await self.get_space_type(space_type_id)
        spaces_count = await self.spaces.count_by_type(space_type_id)
        if spaces_count > 0:
            return SpaceTypeDeleteCheck(
                can_delete=False, spaces_count=spaces_count, message=_in_use_message(spaces_count)
            )
        return SpaceTypeDeleteCheck(can_delete=True, spaces_count=0, message="Space type can be deleted")

    @translate_errors("Failed to create space type")
    async def create_space_type(self, data: SpaceTypeCreate) -> SpaceType:
        type_name = data.type_name.strip()
        if await self.space_types.get_by_name(type_name) is not None:
            raise ConflictError(f"Space type '{type_name}' already exists")
        space_type = SpaceType(type_name=type_name, description=data.description)
        space_type = await self.space_types.create(space_type)
        logger.info(f"Space type {space_type.id} '{type_name}' created")
        return space_type

    @translate_errors("Failed to update space type")
    async def update_space_type(self, space_type_id: int, data: SpaceTypeUpdate) -> SpaceType:
        space_type = await self.get_space_type(space_type_id)
        changes = data.model_dump(exclude_unset=True)
        if not changes:
            raise BadRequestError("No valid fields provided for the update")

        if changes.get("type_name") is not None:
            type_name = changes["type_name"].strip()
            existing = await self.space_types.get_by_name(type_name)
            if existing is not None and existing.id != space_type_id:
                raise ConflictError(f"Space type '{type_name}' already exists")
            changes["type_name"] = type_name
        elif "type_name" in changes:
            raise BadRequestError("Space type name cannot be empty")

        for key, value in changes.items():
            setattr(space_type, key, value)
        return await self.space_types.update(space_type)

    @translate_errors("Failed to delete space type")
    async def delete_space_type(self, space_type_id: int) -> None:
        await self.get_space_type(space_type_id)
        spaces_count = await self.spaces.count_by_type(space_type_id)
        if spaces_count > 0:
            raise ConflictError(_in_use_message(spaces_count))
        await self.space_types.delete(space_type_id)
        logger.info(f"Space type {space_type_id} deleted")
