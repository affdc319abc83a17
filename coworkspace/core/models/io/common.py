"""
Shared field types for the I/O schemas.
"""

from __future__ import annotations

from typing import Annotated, List

from pydantic import AfterValidator, Field

from coworkspace.core.scheduling import normalize_time, validate_available_days

# Wall-clock time normalized to zero-padded HH:MM.
TimeStr = Annotated[
    str,
    AfterValidator(normalize_time),
    Field(description="Wall-clock time, HH:MM (24h)", examples=["09:00"]),
]

# Non-empty list of ISO weekdays (1 = Monday ... 7 = Sunday), sorted and unique.
Weekdays = Annotated[
    List[int],
    AfterValidator(validate_available_days),
    Field(description="ISO weekdays, 1 = Monday ... 7 = Sunday", examples=[[1, 2, 3, 4, 5]]),
]

EMAIL_PATTERN = r"^[A-Za-z0-9._%+-]+@[A-Za-z0-9.-]+\.[A-Za-z]{2,}$"
