"""
Location service.

Business rules for locations: who may create, edit, transfer or delete them,
and the checks on the referenced manager account.
"""

from __future__ import annotations

from typing import List, Optional

from sqlalchemy.ext.asyncio import AsyncSession

from coworkspace.core.database.entities.locations import Location
from coworkspace.core.database.entities.spaces import Space
from coworkspace.core.database.entities.users import User
from coworkspace.core.database.repositories import (
    BookingRepository,
    LocationRepository,
    SpaceRepository,
    UserRepository,
)
from coworkspace.core.errors import BadRequestError, ConflictError, ForbiddenError, NotFoundError, translate_errors
from coworkspace.core.logging_config import get_logger
from coworkspace.core.models.domain.enums import UserRole
from coworkspace.core.models.io.locations import (
    LocationCreate,
    LocationStatistics,
    LocationTransfer,
    LocationUpdate,
)

from .access import ensure_can_manage_location, ensure_manager_account, is_admin

logger = get_logger(__name__)


class LocationService:
    """Service for location management."""

    def __init__(self, session: AsyncSession):
        self.session = session
        self.locations = LocationRepository(session)
        self.users = UserRepository(session)
        self.spaces = SpaceRepository(session)
        self.bookings = BookingRepository(session)

    @translate_errors("Failed to list locations")
    async def list_locations(
        self,
        city: Optional[str] = None,
        manager_id: Optional[int] = None,
        name: Optional[str] = None,
    ) -> List[Location]:
        return await self.locations.search(city=city, manager_id=manager_id, name=name)

    @translate_errors("Failed to load location")
    async def get_location(self, location_id: int) -> Location:
        location = await self.locations.get_by_id(location_id)
        if location is None:
            raise NotFoundError("Location")
        return location

    @translate_errors("Failed to load location statistics")
    async def get_statistics(self, location_id: int) -> LocationStatistics:
        await self.get_location(location_id)
        return LocationStatistics(
            spaces_count=await self.spaces.count_by_location(location_id),
            bookings_count=await self.bookings.count_for_location(location_id),
        )

    @translate_errors("Failed to list location spaces")
    async def list_spaces(self, location_id: int) -> List[Space]:
        await self.get_location(location_id)
        return await self.spaces.search(location_id=location_id)

    @translate_errors("Failed to create location")
    async def create_location(self, data: LocationCreate, current_user: User) -> Location:
        """
        Create a location.

        Admins may assign any manager (or none). Managers may only create
        locations they manage themselves; the manager defaults to them.
        """
        manager_id = data.manager_id
        if current_user.role == UserRole.manager:
            if manager_id is None:
                manager_id = current_user.id
            elif manager_id != current_user.id:
                raise ForbiddenError("Managers can only create locations they manage themselves")
        elif not is_admin(current_user):
            raise ForbiddenError("You do not have permission to create locations")

        if manager_id is not None:
            ensure_manager_account(await self.users.get_by_id(manager_id))

        location = Location.model_validate(data.model_dump(exclude={"manager_id"}) | {"manager_id": manager_id})
        location = await self.locations.create(location)
        logger.info(f"Location {location.id} '{location.location_name}' created by user {current_user.id}")
        return location

    @translate_errors("Failed to update location")
    async def update_location(self, location_id: int, data: LocationUpdate, current_user: User) -> Location:
        location = await self.get_location(location_id)
        ensure_can_manage_location(current_user, location, "edit")

        changes = data.model_dump(exclude_unset=True)
        if not changes:
            raise BadRequestError("No valid fields provided for the update")

        new_manager_id = changes.get("manager_id")
        if "manager_id" in changes and new_manager_id != location.manager_id:
            if not is_admin(current_user):
                raise ForbiddenError("Only administrators can change the manager of a location")
            if new_manager_id is not None:
                ensure_manager_account(await self.users.get_by_id(new_manager_id))

        for key, value in changes.items():
            setattr(location, key, value)
        return await self.locations.update(location)

    @translate_errors("Failed to transfer location")
    async def transfer_location(self, location_id: int, data: LocationTransfer, current_user: User) -> Location:
        """Hand a location over to another manager (admins only)."""
        if not is_admin(current_user):
            raise ForbiddenError("Only administrators can transfer locations")
        location = await self.get_location(location_id)
        ensure_manager_account(await self.users.get_by_id(data.manager_id))
        if location.manager_id == data.manager_id:
            raise BadRequestError("The location is already managed by this user")

        previous = location.manager_id
        location.manager_id = data.manager_id
        location = await self.locations.update(location)
        logger.info(f"Location {location_id} transferred from manager {previous} to {data.manager_id}")
        return location

    @translate_errors("Failed to delete location")
    async def delete_location(self, location_id: int, current_user: User) -> None:
        if not is_admin(current_user):
            raise ForbiddenError("Only administrators can delete locations")
        await self.get_location(location_id)

        spaces_count = await self.spaces.count_by_location(location_id)
        if spaces_count > 0:
            raise ConflictError(f"Cannot delete location: it has {spaces_count} spaces")

        await self.locations.delete(location_id)
        logger.info(f"Location {location_id} deleted by user {current_user.id}")
