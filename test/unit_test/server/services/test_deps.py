"""Unit tests for server services dependencies.

Tests verify the service dependency aliases, bearer token resolution and the
role guards built by ``require_roles``.
"""

from types import SimpleNamespace
from unittest.mock import AsyncMock, patch

import pytest
from fastapi.security import HTTPAuthorizationCredentials

from coworkspace.core.errors import ForbiddenError, UnauthorizedError
from coworkspace.core.models.domain.enums import UserRole
from coworkspace.core.security import create_access_token
from coworkspace.server.services import BookingService, SpaceService
from coworkspace.server.services.deps import (
    BookingServiceDep,
    SpaceServiceDep,
    get_booking_service,
    get_current_user,
    get_space_service,
    require_roles,
)


def _credentials(token: str) -> HTTPAuthorizationCredentials:
    return HTTPAuthorizationCredentials(scheme="Bearer", credentials=token)


class TestServiceDeps:
    """Service dependency aliases."""

    def test_booking_service_dep_uses_factory(self):
        depends_obj = BookingServiceDep.__metadata__[0]
        assert depends_obj.dependency == get_booking_service

    def test_space_service_dep_uses_factory(self):
        depends_obj = SpaceServiceDep.__metadata__[0]
        assert depends_obj.dependency == get_space_service

    def test_factories_bind_the_session(self):
        session = AsyncMock()

        booking_service = get_booking_service(session)
        space_service = get_space_service(session)

        assert isinstance(booking_service, BookingService)
        assert isinstance(space_service, SpaceService)
        assert booking_service.session is session


@pytest.mark.asyncio
class TestGetCurrentUser:
    """Bearer token resolution."""

    async def test_missing_credentials(self):
        with pytest.raises(UnauthorizedError, match="provide a bearer token"):
            await get_current_user(AsyncMock(), None)

    async def test_resolves_user(self):
        user = SimpleNamespace(id=7, role=UserRole.user)
        token = create_access_token(7, "user", "seven@example.com")

        with patch("coworkspace.server.services.deps.UserRepository") as repository:
            repository.return_value.get_by_id = AsyncMock(return_value=user)
            resolved = await get_current_user(AsyncMock(), _credentials(token))

        assert resolved is user
        repository.return_value.get_by_id.assert_awaited_once_with(7)

    async def test_unknown_user(self):
        token = create_access_token(8, "user", "eight@example.com")

        with patch("coworkspace.server.services.deps.UserRepository") as repository:
            repository.return_value.get_by_id = AsyncMock(return_value=None)
            with pytest.raises(UnauthorizedError, match="no longer exists"):
                await get_current_user(AsyncMock(), _credentials(token))

    async def test_invalid_token(self):
        with pytest.raises(UnauthorizedError):
            await get_current_user(AsyncMock(), _credentials("garbage"))


@pytest.mark.asyncio
class TestRequireRoles:
    """Role guards."""

    async def test_allows_listed_role(self):
        guard = require_roles(UserRole.manager, UserRole.admin)
        manager = SimpleNamespace(id=1, role=UserRole.manager)

        assert await guard(manager) is manager

    async def test_rejects_other_roles(self):
        guard = require_roles(UserRole.admin)

        with pytest.raises(ForbiddenError):
            await guard(SimpleNamespace(id=2, role=UserRole.user))
