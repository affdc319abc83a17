"""
Location I/O models for API requests and responses.
"""

from __future__ import annotations

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class LocationRead(BaseModel):
    """Schema for reading a location from the API."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    location_name: str
    address: str
    city: str
    description: Optional[str] = None
    manager_id: Optional[int] = None
    created_at: datetime
    updated_at: datetime


class LocationCreate(BaseModel):
    """Schema for creating a location."""

    location_name: str = Field(min_length=1, max_length=255, description="Display name of the site")
    address: str = Field(min_length=1, max_length=255, description="Street address")
    city: str = Field(min_length=1, max_length=100, description="City")
    description: Optional[str] = Field(default=None, max_length=1000)
    manager_id: Optional[int] = Field(default=None, description="Managing user; defaults to the caller for managers")


class LocationUpdate(BaseModel):
    """Schema for a partial location update."""

    location_name: Optional[str] = Field(default=None, min_length=1, max_length=255)
    address: Optional[str] = Field(default=None, min_length=1, max_length=255)
    city: Optional[str] = Field(default=None, min_length=1, max_length=100)
    description: Optional[str] = Field(default=None, max_length=1000)
    manager_id: Optional[int] = None


class LocationTransfer(BaseModel):
    """Schema for handing a location over to another manager."""

    manager_id: int = Field(description="User that will manage the location")


class LocationStatistics(BaseModel):
    """Aggregate figures shown with a location's details."""

    spaces_count: int
    bookings_count: int
