"""
User and authentication service.

Handles self-registration, login, profile maintenance and the admin-only
account operations. Issued tokens are PyJWT access tokens; passwords are
bcrypt hashes.
"""

from __future__ import annotations

from typing import List, Optional

from sqlalchemy.ext.asyncio import AsyncSession

from coworkspace.core.database.entities.users import User
from coworkspace.core.database.repositories import BookingRepository, LocationRepository, UserRepository
from coworkspace.core.errors import (
    BadRequestError,
    ConflictError,
    ForbiddenError,
    NotFoundError,
    UnauthorizedError,
    translate_errors,
)
from coworkspace.core.logging_config import get_logger
from coworkspace.core.models.domain.enums import UserRole
from coworkspace.core.models.io.users import (
    AuthResult,
    PasswordChange,
    ProfileUpdate,
    RoleUpdate,
    UserLogin,
    UserRead,
    UserRegister,
)
from coworkspace.core.security import (
    check_password_strength,
    create_access_token,
    hash_password,
    verify_password,
)

from .access import is_admin

logger = get_logger(__name__)


def issue_token(user: User) -> AuthResult:
    """Build the token response for an authenticated user."""
    token = create_access_token(user.id, user.role.value, user.email)
    return AuthResult(token=token, user=UserRead.model_validate(user))


class UserService:
    """Service for accounts and authentication."""

    def __init__(self, session: AsyncSession):
        self.session = session
        self.users = UserRepository(session)
        self.bookings = BookingRepository(session)
        self.locations = LocationRepository(session)

    @translate_errors("Failed to register user")
    async def register(self, data: UserRegister) -> AuthResult:
        """
        Create an account and log it in.

        The e-mail address is stored lower-cased and must not be taken yet.
        """
        check_password_strength(data.password)
        email = data.email.strip().lower()
        if await self.users.get_by_email(email) is not None:
            raise ConflictError("A user with this email already exists")

        user = User(
            name=data.name.strip(),
            surname=data.surname.strip(),
            email=email,
            role=UserRole(data.role),
            password_hash=hash_password(data.password),
        )
        user = await self.users.create(user)
        logger.info(f"Registered user {user.id} with role {user.role.value}")
        return issue_token(user)

    @translate_errors("Failed to log in")
    async def login(self, data: UserLogin) -> AuthResult:
        user = await self.users.get_by_email(data.email)
        if user is None or not verify_password(data.password, user.password_hash):
            logger.info(f"Failed login attempt for {data.email}")
            raise UnauthorizedError("Invalid email or password")
        return issue_token(user)

    @translate_errors("Failed to update profile")
    async def update_profile(self, user: User, data: ProfileUpdate) -> User:
        changes = data.model_dump(exclude_unset=True, exclude_none=True)
        if not changes:
            raise BadRequestError("No valid fields provided for the update")

        if "email" in changes:
            email = changes["email"].strip().lower()
            existing = await self.users.get_by_email(email)
            if existing is not None and existing.id != user.id:
                raise ConflictError("A user with this email already exists")
            changes["email"] = email

        for key, value in changes.items():
            setattr(user, key, value.strip() if isinstance(value, str) else value)
        return await self.users.update(user)

    @translate_errors("Failed to change password")
    async def change_password(self, user: User, data: PasswordChange) -> None:
        if not verify_password(data.current_password, user.password_hash):
            raise UnauthorizedError("Current password is incorrect")
        if data.current_password == data.new_password:
            raise BadRequestError("The new password must differ from the current one")
        check_password_strength(data.new_password)

        user.password_hash = hash_password(data.new_password)
        await self.users.update(user)
        logger.info(f"User {user.id} changed their password")

    @translate_errors("Failed to list users")
    async def list_users(self, role: Optional[UserRole] = None) -> List[User]:
        return await self.users.list_by_role(role)

    @translate_errors("Failed to load user")
    async def get_user(self, user_id: int, current_user: Optional[User] = None) -> User:
        if current_user is not None and not is_admin(current_user) and current_user.id != user_id:
            raise ForbiddenError("You can only view your own account")
        user = await self.users.get_by_id(user_id)
        if user is None:
            raise NotFoundError("User")
        return user

    @translate_errors("Failed to update role")
    async def update_role(self, user_id: int, data: RoleUpdate, current_user: User) -> User:
        user = await self.get_user(user_id)
        if user.id == current_user.id and data.role != UserRole.admin:
            raise BadRequestError("Administrators cannot remove their own admin role")
        user.role = data.role
        user = await self.users.update(user)
        logger.info(f"User {user_id} role set to {data.role.value} by user {current_user.id}")
        return user

    @translate_errors("Failed to delete user")
    async def delete_user(self, user_id: int, current_user: User) -> None:
        """Delete an account unless bookings or managed locations still reference it."""
        if user_id == current_user.id:
            raise BadRequestError("You cannot delete your own account")
        await self.get_user(user_id)

        bookings_count = await self.bookings.count_by_user(user_id)
        if bookings_count > 0:
            raise ConflictError(f"Cannot delete user: they have {bookings_count} bookings")
        locations_count = await self.locations.count_managed_by(user_id)
        if locations_count > 0:
            raise ConflictError(f"Cannot delete user: they manage {locations_count} locations")

        await self.users.delete(user_id)
        logger.info(f"User {user_id} deleted by user {current_user.id}")
