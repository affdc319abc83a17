"""
Time-window rules shared by availability blocks, bookings and slot listings.

Times are wall-clock ``HH:MM`` strings, always zero-padded 24h, so plain
string comparison orders them correctly. Intervals are half-open
``[start, end)``: two windows that only touch at a boundary are adjacent,
not overlapping.

Weekdays use ISO numbering (1 = Monday ... 7 = Sunday).
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from datetime import date, timedelta
from typing import Iterable, Iterator, List, Optional, Tuple

from .errors import BadRequestError

_TIME_RE = re.compile(r"^([01]?\d|2[0-3]):([0-5]\d)(?::[0-5]\d)?$")

DAY_NAMES = {
    1: "Monday",
    2: "Tuesday",
    3: "Wednesday",
    4: "Thursday",
    5: "Friday",
    6: "Saturday",
    7: "Sunday",
}

DEFAULT_SLOT_MINUTES = 60


def normalize_time(value: str) -> str:
    """Return ``value`` as a zero-padded ``HH:MM`` string.

    Accepts ``H:MM``, ``HH:MM`` and ``HH:MM:SS`` (seconds are dropped).

    Raises:
        ValueError: if ``value`` is not a valid 24h time.
    """
    match = _TIME_RE.match(value.strip()) if isinstance(value, str) else None
    if match is None:
        raise ValueError(f"Invalid time '{value}': use the HH:MM format")
    return f"{int(match.group(1)):02d}:{match.group(2)}"


def parse_time(value: str) -> str:
    """Like :func:`normalize_time`, but raise :class:`BadRequestError` for request input."""
    try:
        return normalize_time(value)
    except ValueError as e:
        raise BadRequestError(str(e)) from e


def overlaps(start_a: str, end_a: str, start_b: str, end_b: str) -> bool:
    """Return True when ``[start_a, end_a)`` and ``[start_b, end_b)`` share an instant."""
    return start_a < end_b and end_a > start_b


def validate_time_range(start_time: str, end_time: str) -> None:
    """Raise :class:`BadRequestError` unless ``start_time`` precedes ``end_time``."""
    if start_time >= end_time:
        raise BadRequestError("Start time must be earlier than end time")


def validate_date_range(start_date: date, end_date: date) -> None:
    """Raise :class:`BadRequestError` when ``start_date`` falls after ``end_date``."""
    if start_date > end_date:
        raise BadRequestError("Start date must not be later than end date")


def validate_available_days(days: Iterable[int]) -> List[int]:
    """Return the sorted, de-duplicated ISO weekdays in ``days``.

    Raises:
        ValueError: if ``days`` is empty or holds a value outside 1..7.
    """
    unique = sorted(set(days))
    if not unique:
        raise ValueError("At least one weekday must be selected")
    invalid = [day for day in unique if day not in DAY_NAMES]
    if invalid:
        raise ValueError(f"Invalid weekdays {invalid}: allowed values are 1-7 (1 = Monday)")
    return unique


def day_name(iso_weekday: int) -> str:
    return DAY_NAMES.get(iso_weekday, "Unknown")


def to_minutes(value: str) -> int:
    hours, minutes = value.split(":")[:2]
    return int(hours) * 60 + int(minutes)


def from_minutes(minutes: int) -> str:
    return f"{minutes // 60:02d}:{minutes % 60:02d}"


def duration_hours(start_time: str, end_time: str) -> float:
    """Hours between two times on the same day, rounded to 2 decimals."""
    return round((to_minutes(end_time) - to_minutes(start_time)) / 60, 2)


def iter_dates(start_date: date, end_date: date) -> Iterator[date]:
    """Yield every date from ``start_date`` to ``end_date`` inclusive."""
    current = start_date
    while current <= end_date:
        yield current
        current += timedelta(days=1)


def hourly_slots(
    opening_time: str, closing_time: str, slot_minutes: int = DEFAULT_SLOT_MINUTES
) -> List[Tuple[str, str]]:
    """Split the opening hours into consecutive slots; the last one stops at closing time."""
    opening = to_minutes(opening_time)
    closing = to_minutes(closing_time)
    slots = []
    for minutes in range(opening, closing, slot_minutes):
        slots.append((from_minutes(minutes), from_minutes(min(minutes + slot_minutes, closing))))
    return slots


@dataclass(frozen=True)
class ScheduleViolation:
    """Why a requested window does not fit a space's weekly schedule."""

    reason: str
    message: str


def check_schedule(
    opening_time: str,
    closing_time: str,
    available_days: Iterable[int],
    booking_date: date,
    start_time: str,
    end_time: str,
) -> Optional[ScheduleViolation]:
    """Check a window against a space's open weekdays and opening hours.

    The weekday is checked first; the window must then start at or after
    ``opening_time`` and end at or before ``closing_time``.

    Returns:
        ``None`` when the window fits, otherwise the first violation found.
    """
    weekday = booking_date.isoweekday()
    if weekday not in set(available_days):
        return ScheduleViolation(
            reason="day_not_available",
            message=f"The space is not available on {day_name(weekday)}",
        )
    if start_time < opening_time or end_time > closing_time:
        return ScheduleViolation(
            reason="outside_opening_hours",
            message=f"Requested time {start_time}-{end_time} is outside the opening hours "
            f"{opening_time}-{closing_time}",
        )
    return None
