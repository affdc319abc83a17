"""
Additional service I/O models for API requests and responses.
"""

from __future__ import annotations

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field


class AdditionalServiceRead(BaseModel):
    """Schema for reading an additional service from the API."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    service_name: str
    description: Optional[str] = None
    price: float
    is_active: bool
    created_at: datetime
    updated_at: datetime


class AdditionalServiceCreate(BaseModel):
    """Schema for creating an additional service."""

    service_name: str = Field(min_length=1, max_length=100, description="Unique service name")
    description: Optional[str] = Field(default=None, max_length=1000)
    price: float = Field(ge=0, description="Flat price added to a booking")
    is_active: bool = True


class AdditionalServiceUpdate(BaseModel):
    """Schema for a partial additional service update."""

    service_name: Optional[str] = Field(default=None, min_length=1, max_length=100)
    description: Optional[str] = Field(default=None, max_length=1000)
    price: Optional[float] = Field(default=None, ge=0)
    is_active: Optional[bool] = None
