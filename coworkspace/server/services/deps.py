"""
Request dependencies.

Provides the per-request database session, the authenticated user resolved
from the bearer token, role guards and one service instance per resource for
the API endpoints.
"""

from typing import Annotated, Callable, Optional

from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.ext.asyncio import AsyncSession

from coworkspace.core.database import get_session
from coworkspace.core.database.entities.users import User
from coworkspace.core.database.repositories import UserRepository
from coworkspace.core.errors import ForbiddenError, UnauthorizedError
from coworkspace.core.models.domain.enums import UserRole
from coworkspace.core.security import decode_access_token

from .additional_services import AdditionalServiceService
from .availability import AvailabilityService
from .bookings import BookingService
from .locations import LocationService
from .payments import PaymentService
from .space_types import SpaceTypeService
from .spaces import SpaceService
from .users import UserService

bearer_scheme = HTTPBearer(auto_error=False, description="Access token issued by /users/login")

SessionDep = Annotated[AsyncSession, Depends(get_session)]


async def get_current_user(
    session: SessionDep,
    credentials: Annotated[Optional[HTTPAuthorizationCredentials], Depends(bearer_scheme)],
) -> User:
    """Resolve the user owning the bearer token, or answer 401."""
    if credentials is None or not credentials.credentials:
        raise UnauthorizedError("Authentication required: provide a bearer token")

    claims = decode_access_token(credentials.credentials)
    try:
        user_id = int(claims["sub"])
    except (KeyError, TypeError, ValueError):
        raise UnauthorizedError("Invalid access token")

    user = await UserRepository(session).get_by_id(user_id)
    if user is None:
        raise UnauthorizedError("The user owning this token no longer exists")
    return user


CurrentUser = Annotated[User, Depends(get_current_user)]


def require_roles(*roles: UserRole) -> Callable:
    """Build a dependency that lets only users holding one of ``roles`` through."""

    async def dependency(user: CurrentUser) -> User:
        if user.role not in roles:
            raise ForbiddenError("You do not have permission to perform this action")
        return user

    return dependency


AdminUser = Annotated[User, Depends(require_roles(UserRole.admin))]
StaffUser = Annotated[User, Depends(require_roles(UserRole.manager, UserRole.admin))]


def get_user_service(session: SessionDep) -> UserService:
    return UserService(session)


def get_location_service(session: SessionDep) -> LocationService:
    return LocationService(session)


def get_space_type_service(session: SessionDep) -> SpaceTypeService:
    return SpaceTypeService(session)


def get_space_service(session: SessionDep) -> SpaceService:
    return SpaceService(session)


def get_availability_service(session: SessionDep) -> AvailabilityService:
    return AvailabilityService(session)


def get_additional_service_service(session: SessionDep) -> AdditionalServiceService:
    return AdditionalServiceService(session)


def get_booking_service(session: SessionDep) -> BookingService:
    return BookingService(session)


def get_payment_service(session: SessionDep) -> PaymentService:
    return PaymentService(session)


UserServiceDep = Annotated[UserService, Depends(get_user_service)]
LocationServiceDep = Annotated[LocationService, Depends(get_location_service)]
SpaceTypeServiceDep = Annotated[SpaceTypeService, Depends(get_space_type_service)]
SpaceServiceDep = Annotated[SpaceService, Depends(get_space_service)]
AvailabilityServiceDep = Annotated[AvailabilityService, Depends(get_availability_service)]
AdditionalServiceServiceDep = Annotated[AdditionalServiceService, Depends(get_additional_service_service)]
BookingServiceDep = Annotated[BookingService, Depends(get_booking_service)]
PaymentServiceDep = Annotated[PaymentService, Depends(get_payment_service)]
