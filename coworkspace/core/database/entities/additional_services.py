"""
Additional service entity: optional paid add-ons such as Wi-Fi or catering.

Table: additional_services
"""

from __future__ import annotations

from datetime import datetime
from typing import Optional

from sqlalchemy import DateTime
from sqlmodel import Field

from ..base import Base, utc_now


class AdditionalServiceBase(Base):
    """Base fields for an additional service."""

    service_name: str = Field(max_length=100, unique=True, index=True, description="Unique service name")
    description: Optional[str] = Field(default=None, description="What the service includes")
    price: float = Field(ge=0, description="Flat price added to a booking")
    is_active: bool = Field(default=True, description="Whether the service can be selected")


class AdditionalService(AdditionalServiceBase, table=True):
    """Persistent additional service.

    Table: additional_services
    """

    __tablename__ = "additional_services"
    __table_args__ = ({"extend_existing": True},)

    id: Optional[int] = Field(default=None, primary_key=True)

    created_at: datetime = Field(default_factory=utc_now, sa_type=DateTime(timezone=True))
    updated_at: datetime = Field(
        default_factory=utc_now, sa_type=DateTime(timezone=True), sa_column_kwargs={"onupdate": utc_now}
    )
