"""Booking price calculation."""

from __future__ import annotations

from typing import Iterable

# A booking of this many hours is charged at the daily rate.
HOURS_PER_BOOKING_DAY = 8


def calculate_booking_price(total_hours: float, price_per_hour: float, price_per_day: float) -> float:
    """
    Price a booking of ``total_hours`` hours.

    Below :data:`HOURS_PER_BOOKING_DAY` hours the hourly rate applies. From
    there on every full block of ``HOURS_PER_BOOKING_DAY`` hours is charged
    at the daily rate and the remainder at the hourly rate.

    Negative inputs price to ``0.0``.
    """
    if total_hours < 0 or price_per_hour < 0 or price_per_day < 0:
        return 0.0

    if total_hours >= HOURS_PER_BOOKING_DAY:
        full_days, remaining_hours = divmod(total_hours, HOURS_PER_BOOKING_DAY)
        price = full_days * price_per_day + remaining_hours * price_per_hour
    else:
        price = total_hours * price_per_hour
    return round(price, 2)


def sum_service_prices(prices: Iterable[float]) -> float:
    return round(sum(prices), 2)


def calculate_total(base_price: float, services_cost: float) -> float:
    return round(base_price + services_cost, 2)
