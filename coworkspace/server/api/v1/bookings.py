"""
API endpoints for bookings.

Every endpoint requires authentication. What a caller sees and may change
depends on their role: users work on their own bookings, managers on the
bookings in the locations they manage, administrators on all of them.
"""

from __future__ import annotations

from datetime import date
from typing import Annotated, Optional

from fastapi import APIRouter, Query, status

from coworkspace.core.models.domain.enums import BookingStatus, PaymentStatus
from coworkspace.core.models.io.bookings import (
    BookingCreate,
    BookingStatusUpdate,
    BookingUpdate,
    PaymentStatusUpdate,
)
from coworkspace.core.scheduling import parse_time
from coworkspace.server import responses
from coworkspace.server.services.deps import (
    AvailabilityServiceDep,
    BookingServiceDep,
    CurrentUser,
    StaffUser,
)

router = APIRouter(tags=["bookings"])


@router.post(
    "",
    status_code=status.HTTP_201_CREATED,
    summary="Create Booking",
    description="Book a space for a window of one date, optionally with additional services.",
    response_description="The created booking with its computed price.",
    responses={
        201: {"description": "Booking created"},
        400: {"description": "Space inactive, closed that day, outside opening hours or invalid services"},
        403: {"description": "Not allowed to book for this user"},
        404: {"description": "Space not found"},
        409: {"description": "The window is unavailable or already booked"},
    },
)
async def create_booking(data: BookingCreate, user: CurrentUser, service: BookingServiceDep):
    """
    Create a booking.

    - **space_id**: Space to book; must be active.
    - **booking_date**: Today or later, on one of the space's open weekdays.
    - **start_time** / **end_time**: `HH:MM` inside the opening hours.
    - **user_id**: Booking owner; managers and admins may book for others.
    - **service_ids**: Additional services offered by the space.
    """
    booking = await service.create_booking(data, user)
    return responses.single("booking", booking)


@router.get(
    "",
    summary="List Bookings",
    description="List the bookings visible to the caller, newest first.",
)
async def list_bookings(
    user: CurrentUser,
    service: BookingServiceDep,
    status: Optional[BookingStatus] = None,
    payment_status: Optional[PaymentStatus] = None,
    space_id: Optional[int] = None,
    from_date: Optional[date] = None,
    to_date: Optional[date] = None,
):
    """
    List bookings.

    - **status** / **payment_status**: Only bookings in this state.
    - **space_id**: Only bookings of this space.
    - **from_date** / **to_date**: Inclusive date range.
    """
    bookings = await service.list_bookings(
        user,
        status=status,
        payment_status=payment_status,
        space_id=space_id,
        from_date=from_date,
        to_date=to_date,
    )
    return responses.collection("bookings", bookings)


@router.get(
    "/dashboard",
    summary="Booking Dashboard",
    description="Counts per status, revenue, hours and the most recent bookings. Managers see their locations only.",
    responses={403: {"description": "Not a manager of any location"}},
)
async def booking_dashboard(user: StaffUser, service: BookingServiceDep):
    dashboard = await service.dashboard(user)
    return responses.payload(dashboard)


@router.get(
    "/check-availability",
    summary="Check Booking Availability",
    description="Report whether a booking for the window would be accepted.",
    responses={404: {"description": "Space not found"}},
)
async def check_booking_availability(
    user: CurrentUser,
    service: AvailabilityServiceDep,
    space_id: int,
    booking_date: Annotated[date, Query(alias="date")],
    start_time: str,
    end_time: str,
):
    result = await service.check(space_id, booking_date, parse_time(start_time), parse_time(end_time))
    return responses.payload(result)


@router.get(
    "/{booking_id}",
    summary="Get Booking",
    responses={403: {"description": "Not allowed"}, 404: {"description": "Booking not found"}},
)
async def get_booking(booking_id: int, user: CurrentUser, service: BookingServiceDep):
    booking = await service.get_booking(booking_id, user)
    return responses.single("booking", await service.to_read(booking))


@router.patch(
    "/{booking_id}",
    summary="Update Booking",
    description="Move a booking, edit its notes or change its status within the allowed transitions.",
    responses={
        400: {"description": "Invalid change"},
        403: {"description": "Not allowed"},
        409: {"description": "The new window is unavailable or already booked"},
    },
)
async def update_booking(booking_id: int, data: BookingUpdate, user: CurrentUser, service: BookingServiceDep):
    booking = await service.update_booking(booking_id, data, user)
    return responses.single("booking", booking)


@router.patch(
    "/{booking_id}/status",
    summary="Update Booking Status",
    description="Confirm, complete or cancel a booking. Managers and administrators only.",
    responses={400: {"description": "Transition not allowed"}, 403: {"description": "Not allowed"}},
)
async def update_booking_status(
    booking_id: int, data: BookingStatusUpdate, user: StaffUser, service: BookingServiceDep
):
    booking = await service.update_status(booking_id, data.status, user)
    return responses.single("booking", booking)


@router.patch(
    "/{booking_id}/payment-status",
    summary="Update Payment Status",
    description="Record the payment state of a booking. Managers and administrators only.",
    responses={400: {"description": "Refund of an unpaid booking"}, 403: {"description": "Not allowed"}},
)
async def update_payment_status(
    booking_id: int, data: PaymentStatusUpdate, user: StaffUser, service: BookingServiceDep
):
    booking = await service.update_payment_status(booking_id, data.payment_status, user)
    return responses.single("booking", booking)


@router.delete(
    "/{booking_id}",
    summary="Delete Booking",
    description="Delete a booking. Confirmed bookings can only be deleted by administrators.",
    responses={403: {"description": "Not allowed"}, 404: {"description": "Booking not found"}},
)
async def delete_booking(booking_id: int, user: CurrentUser, service: BookingServiceDep):
    await service.delete_booking(booking_id, user)
    return responses.message("Booking deleted successfully")
