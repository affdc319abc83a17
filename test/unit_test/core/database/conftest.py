"""Test configuration for database unit tests.

This module provides common fixtures for testing the database layer with an
in-memory SQLite database.
"""

from __future__ import annotations

from types import SimpleNamespace
from typing import AsyncGenerator

import pytest
import pytest_asyncio
from sqlalchemy.ext.asyncio import AsyncSession, create_async_engine
from sqlmodel import SQLModel
from sqlmodel.pool import StaticPool

from coworkspace.core.database.entities import Location, Space, SpaceType, User
from coworkspace.core.database.utils import create_sessionmaker
from coworkspace.core.models.domain.enums import UserRole


@pytest_asyncio.fixture(scope="function")
async def in_memory_engine() -> AsyncGenerator:
    """Create in-memory SQLite engine for testing."""
    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:",
        echo=False,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )

    async with engine.begin() as conn:
        await conn.run_sync(SQLModel.metadata.create_all)

    try:
        yield engine
    finally:
        await engine.dispose()


@pytest_asyncio.fixture(scope="function")
async def in_memory_session(in_memory_engine) -> AsyncGenerator[AsyncSession, None]:
    """Create in-memory SQLite session for testing."""
    async with create_sessionmaker(in_memory_engine)() as session:
        yield session


@pytest.fixture(scope="function")
def sample_user_data() -> dict:
    """Sample user data for testing."""
    return {
        "name": "Maria",
        "surname": "Costa",
        "email": "maria.costa@example.com",
        "role": UserRole.user,
        "password_hash": "$2b$04$notarealhashnotarealhashnotarealhashnotarealhash",
    }


@pytest.fixture(scope="function")
def sample_space_data() -> dict:
    """Sample space fields, without the location and type keys."""
    return {
        "space_name": "Focus Room",
        "capacity": 4,
        "price_per_hour": 10.0,
        "price_per_day": 60.0,
        "opening_time": "08:00",
        "closing_time": "18:00",
        "available_days": [1, 2, 3, 4, 5],
    }


@pytest_asyncio.fixture(scope="function")
async def seeded(in_memory_session: AsyncSession, sample_user_data: dict, sample_space_data: dict) -> SimpleNamespace:
    """A manager, a user, a location, a space type and a space."""
    session = in_memory_session
    manager = User(**{**sample_user_data, "email": "manager@example.com", "role": UserRole.manager})
    member = User(**sample_user_data)
    session.add_all([manager, member])
    await session.commit()

    location = Location(location_name="Central", address="1 Square", city="Lisbon", manager_id=manager.id)
    space_type = SpaceType(type_name="Meeting Room")
    session.add_all([location, space_type])
    await session.commit()

    space = Space(location_id=location.id, space_type_id=space_type.id, **sample_space_data)
    session.add(space)
    await session.commit()

    return SimpleNamespace(manager=manager, member=member, location=location, space_type=space_type, space=space)
