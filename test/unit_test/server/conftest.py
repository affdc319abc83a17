import itertools
from datetime import date, timedelta
from types import SimpleNamespace
from typing import AsyncGenerator

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, create_async_engine
from sqlmodel import SQLModel
from sqlmodel.pool import StaticPool

from coworkspace.core.database.utils import create_sessionmaker
from coworkspace.core.models.domain.enums import UserRole
from coworkspace.core.security import create_access_token, hash_password

# Use in-memory SQLite for testing
# Note: We use check_same_thread=False for SQLite with async
TEST_DATABASE_URL = "sqlite+aiosqlite:///:memory:"

DEFAULT_PASSWORD = "Passw0rd123"

_emails = itertools.count(1)


def upcoming_weekday(iso_weekday: int) -> date:
    """A date one to two weeks ahead falling on ``iso_weekday`` (1 = Monday)."""
    today = date.today()
    return today + timedelta(days=7 + (iso_weekday - today.isoweekday()) % 7)


@pytest.fixture(name="next_weekday")
def next_weekday_fixture():
    return upcoming_weekday


@pytest_asyncio.fixture
async def test_engine():
    """Create a fresh database for each test."""
    import coworkspace.core.database.entities  # noqa: F401

    engine = create_async_engine(
        TEST_DATABASE_URL,
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    async with engine.begin() as conn:
        await conn.run_sync(SQLModel.metadata.create_all)

    yield engine

    await engine.dispose()


@pytest.fixture
def session_maker(test_engine):
    return create_sessionmaker(test_engine)


@pytest_asyncio.fixture(name="session")
async def session_fixture(session_maker) -> AsyncGenerator[AsyncSession, None]:
    """Session used by tests to seed data."""
    async with session_maker() as session:
        yield session


@pytest_asyncio.fixture(name="client")
async def client_fixture(session_maker) -> AsyncGenerator[AsyncClient, None]:
    """Async HTTP client; every request gets its own session on the test database."""
    from coworkspace.core.database import get_session
    from coworkspace.server.main import app

    async def get_session_override() -> AsyncGenerator[AsyncSession, None]:
        async with session_maker() as session:
            yield session

    app.dependency_overrides[get_session] = get_session_override

    # ASGITransport does not run the lifespan, so init_db is never called here.
    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://localhost") as client:
        yield client

    app.dependency_overrides.clear()


@pytest.fixture
def make_user(session: AsyncSession):
    """Factory creating a user straight in the database and issuing its token."""
    from coworkspace.core.database.entities.users import User

    async def _make_user(role: UserRole = UserRole.user, email: str | None = None, password: str = DEFAULT_PASSWORD):
        user = User(
            name="Test",
            surname=role.value.capitalize(),
            email=email or f"{role.value}{next(_emails)}@example.com",
            role=role,
            password_hash=hash_password(password),
        )
        session.add(user)
        await session.commit()
        await session.refresh(user)
        token = create_access_token(user.id, user.role.value, user.email)
        return SimpleNamespace(
            id=user.id,
            email=user.email,
            role=user.role,
            token=token,
            headers={"Authorization": f"Bearer {token}"},
        )

    return _make_user


@pytest_asyncio.fixture
async def admin(make_user):
    return await make_user(UserRole.admin)


@pytest_asyncio.fixture
async def manager(make_user):
    return await make_user(UserRole.manager)


@pytest_asyncio.fixture
async def member(make_user):
    return await make_user(UserRole.user)


@pytest.fixture
def make_space(session: AsyncSession):
    """Factory creating a location, a space type and a space.

    The default space opens 08:00-18:00 Monday to Friday, at 10/hour and 60/day.
    """
    from coworkspace.core.database.entities import Location, Space, SpaceType

    counter = itertools.count(1)

    async def _make_space(manager_id: int | None = None, location_id: int | None = None, **overrides):
        n = next(counter)
        if location_id is None:
            location = Location(
                location_name=f"Hub {n}",
                address=f"{n} Main Street",
                city="Lisbon",
                manager_id=manager_id,
            )
            session.add(location)
            await session.commit()
            await session.refresh(location)
            location_id = location.id

        space_type = SpaceType(type_name=f"Desk type {n}", description="Hot desk")
        session.add(space_type)
        await session.commit()
        await session.refresh(space_type)

        fields = dict(
            location_id=location_id,
            space_type_id=space_type.id,
            space_name=f"Space {n}",
            capacity=4,
            price_per_hour=10.0,
            price_per_day=60.0,
            opening_time="08:00",
            closing_time="18:00",
            available_days=[1, 2, 3, 4, 5],
        )
        fields.update(overrides)
        space = Space(**fields)
        session.add(space)
        await session.commit()
        await session.refresh(space)
        return SimpleNamespace(id=space.id, location_id=location_id, space_type_id=space_type.id)

    return _make_space


@pytest.fixture
def make_service(session: AsyncSession):
    """Factory creating an additional service, optionally offered by a space."""
    from coworkspace.core.database.entities import AdditionalService, SpaceServiceLink

    counter = itertools.count(1)

    async def _make_service(space_id: int | None = None, price: float = 5.0, is_active: bool = True):
        service = AdditionalService(service_name=f"Extra {next(counter)}", price=price, is_active=is_active)
        session.add(service)
        await session.commit()
        await session.refresh(service)
        if space_id is not None:
            session.add(SpaceServiceLink(space_id=space_id, service_id=service.id))
            await session.commit()
        return service.id

    return _make_service
