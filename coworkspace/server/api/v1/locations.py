"""
API endpoints for locations.

Reading is public. Administrators manage every location; managers create and
edit the locations they manage.
"""

from __future__ import annotations

from typing import Optional

from fastapi import APIRouter, status

from coworkspace.core.models.io.locations import (
    LocationCreate,
    LocationRead,
    LocationTransfer,
    LocationUpdate,
)
from coworkspace.core.models.io.spaces import SpaceRead
from coworkspace.server import responses
from coworkspace.server.services.deps import AdminUser, LocationServiceDep, StaffUser

router = APIRouter(tags=["locations"])


@router.get(
    "",
    summary="List Locations",
    description="List locations ordered by city and name, with optional filters.",
    response_description="The matching locations.",
)
async def list_locations(
    service: LocationServiceDep,
    city: Optional[str] = None,
    manager_id: Optional[int] = None,
    name: Optional[str] = None,
):
    """
    List locations.

    - **city**: Exact city name, case-insensitive.
    - **manager_id**: Only locations managed by this user.
    - **name**: Substring of the location name, case-insensitive.
    """
    locations = await service.list_locations(city=city, manager_id=manager_id, name=name)
    return responses.collection("locations", locations, LocationRead)


@router.get(
    "/{location_id}",
    summary="Get Location",
    responses={404: {"description": "Location not found"}},
)
async def get_location(location_id: int, service: LocationServiceDep):
    location = await service.get_location(location_id)
    return responses.single("location", location, LocationRead)


@router.get(
    "/{location_id}/details",
    summary="Get Location Details",
    description="Retrieve a location together with its space and booking counts.",
    responses={404: {"description": "Location not found"}},
)
async def get_location_details(location_id: int, service: LocationServiceDep):
    location = await service.get_location(location_id)
    statistics = await service.get_statistics(location_id)
    data = LocationRead.model_validate(location).model_dump(mode="json")
    data["statistics"] = statistics.model_dump()
    return {"status": "success", "data": {"location": data}}


@router.get(
    "/{location_id}/spaces",
    summary="List Location Spaces",
    responses={404: {"description": "Location not found"}},
)
async def list_location_spaces(location_id: int, service: LocationServiceDep):
    spaces = await service.list_spaces(location_id)
    return responses.collection("spaces", spaces, SpaceRead)


@router.post(
    "",
    status_code=status.HTTP_201_CREATED,
    summary="Create Location",
    description="Create a location. Managers can only create locations they manage themselves.",
    responses={
        201: {"description": "Location created"},
        403: {"description": "Not allowed"},
        404: {"description": "Manager not found"},
    },
)
async def create_location(data: LocationCreate, user: StaffUser, service: LocationServiceDep):
    """
    Create a location.

    - **location_name**: Display name of the site.
    - **address** / **city**: Where the site is.
    - **manager_id**: Managing user; must hold the manager or admin role. Defaults to the caller for managers.
    """
    location = await service.create_location(data, user)
    return responses.single("location", location, LocationRead)


@router.patch(
    "/{location_id}",
    summary="Update Location",
    description="Update a location. Allowed for administrators and the location's manager.",
    responses={403: {"description": "Not allowed"}, 404: {"description": "Location not found"}},
)
async def update_location(location_id: int, data: LocationUpdate, user: StaffUser, service: LocationServiceDep):
    location = await service.update_location(location_id, data, user)
    return responses.single("location", location, LocationRead)


@router.post(
    "/{location_id}/transfer",
    summary="Transfer Location",
    description="Hand a location over to another manager. Administrators only.",
    responses={400: {"description": "Invalid target manager"}, 404: {"description": "Location or manager not found"}},
)
async def transfer_location(location_id: int, data: LocationTransfer, admin: AdminUser, service: LocationServiceDep):
    location = await service.transfer_location(location_id, data, admin)
    return responses.single("location", location, LocationRead)


@router.delete(
    "/{location_id}",
    summary="Delete Location",
    description="Delete a location without spaces. Administrators only.",
    responses={404: {"description": "Location not found"}, 409: {"description": "The location still has spaces"}},
)
async def delete_location(location_id: int, admin: AdminUser, service: LocationServiceDep):
    await service.delete_location(location_id, admin)
    return responses.message("Location deleted successfully")
