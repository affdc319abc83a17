"""
Role-based access rules shared by the resource services.

Admins may manage everything. Managers may manage the locations assigned to
them, the spaces of those locations, and the bookings made in those spaces.
Plain users only own their bookings.
"""

from __future__ import annotations

from coworkspace.core.database.entities.locations import Location
from coworkspace.core.database.entities.users import User
from coworkspace.core.errors import BadRequestError, ForbiddenError, NotFoundError
from coworkspace.core.models.domain.enums import UserRole


def is_admin(user: User) -> bool:
    return user.role == UserRole.admin


def can_manage_location(user: User, location: Location) -> bool:
    """Admins manage every location; managers only the ones assigned to them."""
    if is_admin(user):
        return True
    return user.role == UserRole.manager and location.manager_id == user.id


def ensure_can_manage_location(user: User, location: Location, action: str = "manage") -> None:
    if not can_manage_location(user, location):
        raise ForbiddenError(f"You do not have permission to {action} this location")


def ensure_manager_account(manager: User | None) -> User:
    """Check that a user referenced as a location manager exists and holds a manager role."""
    if manager is None:
        raise NotFoundError("Manager")
    if manager.role not in (UserRole.manager, UserRole.admin):
        raise BadRequestError("The selected user does not have the manager role")
    return manager
