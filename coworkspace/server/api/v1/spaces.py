"""
API endpoints for spaces.

Besides CRUD this exposes the hourly slot view of a day, price quotes and
the additional services a space offers. Writes are allowed for
administrators and the manager of the space's location.
"""

from __future__ import annotations

from datetime import date
from typing import Annotated, List, Optional

from fastapi import APIRouter, Query, status

from coworkspace.core.models.domain.enums import SpaceStatus
from coworkspace.core.models.io.additional_services import AdditionalServiceRead
from coworkspace.core.models.io.spaces import SpaceCreate, SpaceRead, SpaceUpdate
from coworkspace.core.scheduling import parse_time
from coworkspace.server import responses
from coworkspace.server.services.deps import SpaceServiceDep, StaffUser

router = APIRouter(tags=["spaces"])


@router.get(
    "",
    summary="List Spaces",
    description="List spaces ordered by location and name, with optional filters.",
    response_description="The matching spaces.",
)
async def list_spaces(
    service: SpaceServiceDep,
    location_id: Optional[int] = None,
    space_type_id: Optional[int] = None,
    city: Optional[str] = None,
    min_capacity: Optional[int] = None,
    max_price_hour: Optional[float] = None,
    name: Optional[str] = None,
    status: Optional[SpaceStatus] = None,
):
    """
    List spaces.

    - **location_id** / **space_type_id**: Only spaces of this location or type.
    - **city**: City of the location, case-insensitive.
    - **min_capacity**: Capacity at least this value.
    - **max_price_hour**: Hourly rate at most this value.
    - **name**: Substring of the space name.
    - **status**: `active`, `inactive` or `maintenance`.
    """
    spaces = await service.list_spaces(
        location_id=location_id,
        space_type_id=space_type_id,
        city=city,
        min_capacity=min_capacity,
        max_price_hour=max_price_hour,
        name=name,
        status=status,
    )
    return responses.collection("spaces", spaces, SpaceRead)


@router.get(
    "/{space_id}",
    summary="Get Space",
    responses={404: {"description": "Space not found"}},
)
async def get_space(space_id: int, service: SpaceServiceDep):
    space = await service.get_space(space_id)
    return responses.single("space", space, SpaceRead)


@router.post(
    "",
    status_code=status.HTTP_201_CREATED,
    summary="Create Space",
    description="Create a space in a location. Allowed for administrators and the location's manager.",
    responses={
        201: {"description": "Space created"},
        403: {"description": "Not allowed"},
        404: {"description": "Location, space type or service not found"},
    },
)
async def create_space(data: SpaceCreate, user: StaffUser, service: SpaceServiceDep):
    """
    Create a space.

    - **location_id** / **space_type_id**: Must exist.
    - **capacity**, **price_per_hour**, **price_per_day**: Sizing and rates.
    - **opening_time** / **closing_time**: `HH:MM`, opening before closing (default 09:00-18:00).
    - **available_days**: ISO weekdays, 1 = Monday (default Monday to Friday).
    - **service_ids**: Additional services offered by the space.
    """
    space = await service.create_space(data, user)
    return responses.single("space", space, SpaceRead)


@router.patch(
    "/{space_id}",
    summary="Update Space",
    responses={403: {"description": "Not allowed"}, 404: {"description": "Space not found"}},
)
async def update_space(space_id: int, data: SpaceUpdate, user: StaffUser, service: SpaceServiceDep):
    space = await service.update_space(space_id, data, user)
    return responses.single("space", space, SpaceRead)


@router.delete(
    "/{space_id}",
    summary="Delete Space",
    responses={404: {"description": "Space not found"}, 409: {"description": "The space has active bookings"}},
)
async def delete_space(space_id: int, user: StaffUser, service: SpaceServiceDep):
    await service.delete_space(space_id, user)
    return responses.message("Space deleted successfully")


@router.get(
    "/{space_id}/slots",
    summary="List Available Slots",
    description="Hourly slots of a space for one date, each marked free or taken.",
    responses={404: {"description": "Space not found"}},
)
async def list_available_slots(
    space_id: int,
    service: SpaceServiceDep,
    booking_date: Annotated[date, Query(alias="date", description="Date to inspect, YYYY-MM-DD")],
):
    slots = await service.available_slots(space_id, booking_date)
    return responses.payload(slots)


@router.get(
    "/{space_id}/price",
    summary="Quote Price",
    description="Price a prospective booking, optionally with additional services.",
    responses={400: {"description": "Invalid window or services"}, 404: {"description": "Space not found"}},
)
async def quote_price(
    space_id: int,
    service: SpaceServiceDep,
    booking_date: Annotated[date, Query(alias="date")],
    start_time: str,
    end_time: str,
    service_ids: Annotated[Optional[List[int]], Query()] = None,
):
    quote = await service.quote_price(
        space_id, booking_date, parse_time(start_time), parse_time(end_time), service_ids or []
    )
    return responses.single("quote", quote)


@router.get(
    "/{space_id}/services",
    summary="List Space Services",
    responses={404: {"description": "Space not found"}},
)
async def list_space_services(space_id: int, service: SpaceServiceDep):
    services = await service.list_services(space_id)
    return responses.collection("services", services, AdditionalServiceRead)


@router.post(
    "/{space_id}/services/{service_id}",
    status_code=status.HTTP_201_CREATED,
    summary="Add Service to Space",
    responses={404: {"description": "Space or service not found"}, 409: {"description": "Already associated"}},
)
async def add_space_service(space_id: int, service_id: int, user: StaffUser, service: SpaceServiceDep):
    await service.add_service(space_id, service_id, user)
    return responses.message("Service added to space successfully")


@router.delete(
    "/{space_id}/services/{service_id}",
    summary="Remove Service from Space",
    responses={404: {"description": "Association not found"}},
)
async def remove_space_service(space_id: int, service_id: int, user: StaffUser, service: SpaceServiceDep):
    await service.remove_service(space_id, service_id, user)
    return responses.message("Service removed from space successfully")
