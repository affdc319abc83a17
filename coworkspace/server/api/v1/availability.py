"""
API endpoints for availability blocks.

Blocks open or close a window of one date for a space. Listing and checking
are public; writes are for administrators and the space's manager.
"""

from __future__ import annotations

from datetime import date
from typing import Annotated

from fastapi import APIRouter, Query, status

from coworkspace.core.models.io.availability import (
    AvailabilityCreate,
    AvailabilityGenerate,
    AvailabilityRead,
    AvailabilityUpdate,
)
from coworkspace.core.scheduling import parse_time
from coworkspace.server import responses
from coworkspace.server.services.deps import AvailabilityServiceDep, StaffUser

router = APIRouter(tags=["availability"])


@router.get(
    "",
    summary="List Availability",
    description="List the blocks of a space between two dates, inclusive.",
    responses={400: {"description": "Invalid date range"}, 404: {"description": "Space not found"}},
)
async def list_availability(
    service: AvailabilityServiceDep,
    space_id: int,
    start_date: date,
    end_date: date,
):
    """
    List availability blocks.

    - **space_id**: Space to inspect.
    - **start_date** / **end_date**: Inclusive range, start not after end.
    """
    blocks = await service.list_availability(space_id, start_date, end_date)
    return responses.collection("availability", blocks, AvailabilityRead)


@router.get(
    "/check",
    summary="Check Availability",
    description="Report whether a booking for the window would be accepted, and why not.",
    responses={404: {"description": "Space not found"}},
)
async def check_availability(
    service: AvailabilityServiceDep,
    space_id: int,
    booking_date: Annotated[date, Query(alias="date")],
    start_time: str,
    end_time: str,
):
    result = await service.check(space_id, booking_date, parse_time(start_time), parse_time(end_time))
    return responses.payload(result)


@router.get(
    "/{availability_id}",
    summary="Get Availability",
    responses={404: {"description": "Availability not found"}},
)
async def get_availability(availability_id: int, service: AvailabilityServiceDep):
    block = await service.get_availability(availability_id)
    return responses.single("availability", block, AvailabilityRead)


@router.post(
    "",
    status_code=status.HTTP_201_CREATED,
    summary="Create Availability",
    responses={
        201: {"description": "Block created"},
        400: {"description": "Start not before end"},
        409: {"description": "Overlaps an existing block"},
    },
)
async def create_availability(data: AvailabilityCreate, user: StaffUser, service: AvailabilityServiceDep):
    """
    Create an availability block.

    - **availability_date**: Date of the block.
    - **start_time** / **end_time**: `HH:MM`, start before end.
    - **is_available**: False closes the window for bookings.
    - **reason**: Optional note, e.g. maintenance.
    """
    block = await service.create_availability(data, user)
    return responses.single("availability", block, AvailabilityRead)


@router.post(
    "/generate",
    status_code=status.HTTP_201_CREATED,
    summary="Generate Availability",
    description="Create one open block per day of a date range, skipping excluded weekdays and existing blocks.",
    responses={400: {"description": "Invalid range"}, 409: {"description": "A day overlaps an existing block"}},
)
async def generate_availability(data: AvailabilityGenerate, user: StaffUser, service: AvailabilityServiceDep):
    blocks = await service.generate(data, user)
    return responses.collection("availability", blocks, AvailabilityRead)


@router.patch(
    "/{availability_id}",
    summary="Update Availability",
    responses={404: {"description": "Availability not found"}, 409: {"description": "Overlaps another block"}},
)
async def update_availability(
    availability_id: int, data: AvailabilityUpdate, user: StaffUser, service: AvailabilityServiceDep
):
    block = await service.update_availability(availability_id, data, user)
    return responses.single("availability", block, AvailabilityRead)


@router.delete(
    "/{availability_id}",
    summary="Delete Availability",
    responses={404: {"description": "Availability not found"}, 409: {"description": "Overlaps active bookings"}},
)
async def delete_availability(availability_id: int, user: StaffUser, service: AvailabilityServiceDep):
    await service.delete_availability(availability_id, user)
    return responses.message("Availability deleted successfully")
