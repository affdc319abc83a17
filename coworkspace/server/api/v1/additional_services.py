"""
API endpoints for the additional service catalogue.
"""

from __future__ import annotations

from fastapi import APIRouter, status

from coworkspace.core.models.io.additional_services import (
    AdditionalServiceCreate,
    AdditionalServiceRead,
    AdditionalServiceUpdate,
)
from coworkspace.core.models.io.spaces import SpaceRead
from coworkspace.server import responses
from coworkspace.server.services.deps import AdditionalServiceServiceDep, AdminUser

router = APIRouter(tags=["additional-services"])


@router.get(
    "",
    summary="List Additional Services",
    description="List the active additional services, or every service with `include_inactive=true`.",
)
async def list_additional_services(service: AdditionalServiceServiceDep, include_inactive: bool = False):
    services = await service.list_services(include_inactive=include_inactive)
    return responses.collection("services", services, AdditionalServiceRead)


@router.get(
    "/{service_id}",
    summary="Get Additional Service",
    responses={404: {"description": "Service not found"}},
)
async def get_additional_service(service_id: int, service: AdditionalServiceServiceDep):
    found = await service.get_service(service_id)
    return responses.single("service", found, AdditionalServiceRead)


@router.get(
    "/{service_id}/spaces",
    summary="List Spaces Offering Service",
    responses={404: {"description": "Service not found"}},
)
async def list_service_spaces(service_id: int, service: AdditionalServiceServiceDep):
    spaces = await service.list_spaces(service_id)
    return responses.collection("spaces", spaces, SpaceRead)


@router.post(
    "",
    status_code=status.HTTP_201_CREATED,
    summary="Create Additional Service",
    responses={201: {"description": "Service created"}, 409: {"description": "Name already taken"}},
)
async def create_additional_service(
    data: AdditionalServiceCreate, admin: AdminUser, service: AdditionalServiceServiceDep
):
    """
    Create an additional service.

    - **service_name**: Unique, 1-100 characters.
    - **price**: Flat amount added to a booking, at least 0.
    - **is_active**: Inactive services cannot be selected for bookings.
    """
    created = await service.create_service(data)
    return responses.single("service", created, AdditionalServiceRead)


@router.patch(
    "/{service_id}",
    summary="Update Additional Service",
    responses={404: {"description": "Service not found"}, 409: {"description": "Name already taken"}},
)
async def update_additional_service(
    service_id: int, data: AdditionalServiceUpdate, admin: AdminUser, service: AdditionalServiceServiceDep
):
    updated = await service.update_service(service_id, data)
    return responses.single("service", updated, AdditionalServiceRead)


@router.delete(
    "/{service_id}",
    summary="Delete Additional Service",
    responses={404: {"description": "Service not found"}, 409: {"description": "Service offered by spaces"}},
)
async def delete_additional_service(service_id: int, admin: AdminUser, service: AdditionalServiceServiceDep):
    await service.delete_service(service_id)
    return responses.message("Additional service deleted successfully")
