"""
API endpoints for payments.

Every endpoint requires authentication. Users pay and see the payments of
their own bookings; managers see and settle the payments made in the
locations they manage; administrators see everything and may delete
payments.
"""

from __future__ import annotations

from datetime import date
from typing import Optional

from fastapi import APIRouter, status

from coworkspace.core.models.domain.enums import PaymentMethod, PaymentStatus
from coworkspace.core.models.io.payments import PaymentCreate, PaymentRead, PaymentStatusChange
from coworkspace.server import responses
from coworkspace.server.services.deps import AdminUser, CurrentUser, PaymentServiceDep, StaffUser

router = APIRouter(tags=["payments"])


@router.post(
    "",
    status_code=status.HTTP_201_CREATED,
    summary="Pay Booking",
    description="Record the payment of a booking. The amount must equal the booking total.",
    responses={
        201: {"description": "Payment recorded"},
        400: {"description": "Booking cancelled or amount does not match the total"},
        403: {"description": "Not allowed to pay this booking"},
        404: {"description": "Booking not found"},
        409: {"description": "The booking is already paid or has a payment in progress"},
    },
)
async def create_payment(data: PaymentCreate, user: CurrentUser, service: PaymentServiceDep):
    """
    Pay a booking.

    - **booking_id**: Booking to pay; must not be cancelled.
    - **amount**: Defaults to the booking total.
    - **method**: `credit_card`, `paypal`, `bank_transfer` or `cash`.
    """
    payment = await service.create_payment(data, user)
    return responses.single("payment", payment, PaymentRead)


@router.get(
    "",
    summary="List Payments",
    description="List the payments visible to the caller, newest first.",
)
async def list_payments(
    user: CurrentUser,
    service: PaymentServiceDep,
    status: Optional[PaymentStatus] = None,
    method: Optional[PaymentMethod] = None,
    booking_id: Optional[int] = None,
    from_date: Optional[date] = None,
    to_date: Optional[date] = None,
):
    payments = await service.list_payments(
        user,
        status=status,
        method=method,
        booking_id=booking_id,
        from_date=from_date,
        to_date=to_date,
    )
    return responses.collection("payments", payments, PaymentRead)


@router.get(
    "/stats",
    summary="Payment Statistics",
    description="Counts per status and method, revenue and monthly revenue. Managers see their locations only.",
    responses={403: {"description": "Not a manager of any location"}},
)
async def payment_statistics(
    user: StaffUser,
    service: PaymentServiceDep,
    from_date: Optional[date] = None,
    to_date: Optional[date] = None,
):
    stats = await service.statistics(user, from_date=from_date, to_date=to_date)
    return responses.payload(stats)


@router.get(
    "/can-pay/{booking_id}",
    summary="Check Booking Payment",
    description="Report whether a booking can be paid now and the amount due.",
    responses={403: {"description": "Not allowed"}, 404: {"description": "Booking not found"}},
)
async def can_pay_booking(booking_id: int, user: CurrentUser, service: PaymentServiceDep):
    result = await service.can_pay(booking_id, user)
    return responses.payload(result)


@router.get(
    "/{payment_id}",
    summary="Get Payment",
    responses={403: {"description": "Not allowed"}, 404: {"description": "Payment not found"}},
)
async def get_payment(payment_id: int, user: CurrentUser, service: PaymentServiceDep):
    payment = await service.get_payment(payment_id, user)
    return responses.single("payment", payment, PaymentRead)


@router.patch(
    "/{payment_id}/status",
    summary="Update Payment Status",
    description="Complete, fail or refund a payment. The booking's payment status follows.",
    responses={400: {"description": "Transition not allowed"}, 403: {"description": "Not allowed"}},
)
async def update_payment_status(
    payment_id: int, data: PaymentStatusChange, user: StaffUser, service: PaymentServiceDep
):
    payment = await service.update_status(payment_id, data, user)
    return responses.single("payment", payment, PaymentRead)


@router.delete(
    "/{payment_id}",
    summary="Delete Payment",
    description="Delete a payment. Administrators only.",
    responses={403: {"description": "Not allowed"}, 404: {"description": "Payment not found"}},
)
async def delete_payment(payment_id: int, user: AdminUser, service: PaymentServiceDep):
    await service.delete_payment(payment_id, user)
    return responses.message("Payment deleted successfully")
