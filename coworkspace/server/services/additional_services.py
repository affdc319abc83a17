"""
Additional service catalogue.

Extras (projector, catering, parking) that spaces may offer and bookings may
select. Prices are flat amounts added to the booking total.
"""

from __future__ import annotations

from typing import List

from sqlalchemy.ext.asyncio import AsyncSession

from coworkspace.core.database.entities.additional_services import AdditionalService
from coworkspace.core.database.entities.spaces import Space
from coworkspace.core.database.repositories import AdditionalServiceRepository, SpaceRepository
from coworkspace.core.errors import BadRequestError, ConflictError, NotFoundError, translate_errors
from coworkspace.core.logging_config import get_logger
from coworkspace.core.models.io.additional_services import AdditionalServiceCreate, AdditionalServiceUpdate

logger = get_logger(__name__)


class AdditionalServiceService:
    """Service for the additional service catalogue."""

    def __init__(self, session: AsyncSession):
        self.session = session
        self.services = AdditionalServiceRepository(session)
        self.spaces = SpaceRepository(session)

    @translate_errors("Failed to list additional services")
    async def list_services(self, include_inactive: bool = False) -> List[AdditionalService]:
        return await self.services.list_services(include_inactive=include_inactive)

    @translate_errors("Failed to load additional service")
    async def get_service(self, service_id: int) -> AdditionalService:
        service = await self.services.get_by_id(service_id)
        if service is None:
            raise NotFoundError("Additional service")
        return service

    @translate_errors("Failed to list spaces of additional service")
    async def list_spaces(self, service_id: int) -> List[Space]:
        await self.get_service(service_id)
        return await self.spaces.list_by_service(service_id)

    @translate_errors("Failed to create additional service")
    async def create_service(self, data: AdditionalServiceCreate) -> AdditionalService:
        service_name = data.service_name.strip()
        if not service_name:
            raise BadRequestError("Service name cannot be empty")
        if await self.services.get_by_name(service_name) is not None:
            raise ConflictError(f"Additional service '{service_name}' already exists")

        service = AdditionalService(
            service_name=service_name,
            description=data.description,
            price=data.price,
            is_active=data.is_active,
        )
        service = await self.services.create(service)
        logger.info(f"Additional service {service.id} '{service_name}' created")
        return service

    @translate_errors("Failed to update additional service")
    async def update_service(self, service_id: int, data: AdditionalServiceUpdate) -> AdditionalService:
        service = await self.get_service(service_id)
        changes = data.model_dump(exclude_unset=True, exclude_none=True)
        if not changes:
            raise BadRequestError("No valid fields provided for the update")

        if "service_name" in changes:
            service_name = changes["service_name"].strip()
            if not service_name:
                raise BadRequestError("Service name cannot be empty")
            existing = await self.services.get_by_name(service_name)
            if existing is not None and existing.id != service_id:
                raise ConflictError(f"Additional service '{service_name}' already exists")
            changes["service_name"] = service_name

        for key, value in changes.items():
            setattr(service, key, value)
        return await self.services.update(service)

    @translate_errors("Failed to delete additional service")
    async def delete_service(self, service_id: int) -> None:
        await self.get_service(service_id)
        links = await self.spaces.count_service_links(service_id)
        if links > 0:
            raise ConflictError(f"Cannot delete additional service: it is offered by {links} spaces")
        await self.services.delete(service_id)
        logger.info(f"Additional service {service_id} deleted")
