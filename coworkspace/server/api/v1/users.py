"""
API endpoints for accounts and authentication.

Registration and login are public and answer with an access token. Profile
endpoints act on the caller; listing, role changes and deletion are for
administrators.
"""

from __future__ import annotations

from typing import Optional

from fastapi import APIRouter, status

from coworkspace.core.logging_config import get_logger
from coworkspace.core.models.domain.enums import UserRole
from coworkspace.core.models.io.users import (
    PasswordChange,
    ProfileUpdate,
    RoleUpdate,
    UserLogin,
    UserRead,
    UserRegister,
)
from coworkspace.server import responses
from coworkspace.server.services.deps import AdminUser, CurrentUser, UserServiceDep

logger = get_logger(__name__)

router = APIRouter(tags=["users"])


@router.post(
    "/register",
    status_code=status.HTTP_201_CREATED,
    summary="Register",
    description="Create an account with the user or manager role and receive an access token.",
    response_description="The access token and the created user.",
    responses={
        201: {"description": "Account created"},
        400: {"description": "Invalid data or weak password"},
        409: {"description": "E-mail already registered"},
    },
)
async def register(data: UserRegister, service: UserServiceDep):
    """
    Register a new account.

    - **name** / **surname**: 2-100 characters each.
    - **email**: Unique e-mail address, stored lower-cased.
    - **password**: At least 8 characters with a letter and a digit.
    - **role**: `user` (default) or `manager`.
    """
    result = await service.register(data)
    return responses.payload(result)


@router.post(
    "/login",
    summary="Log In",
    description="Exchange e-mail and password for an access token.",
    response_description="The access token and the user.",
    responses={401: {"description": "Invalid credentials"}},
)
async def login(data: UserLogin, service: UserServiceDep):
    result = await service.login(data)
    return responses.payload(result)


@router.get(
    "/me",
    summary="Get Current User",
    description="Return the profile of the authenticated user.",
    responses={401: {"description": "Missing or invalid token"}},
)
async def get_me(user: CurrentUser):
    return responses.single("user", user, UserRead)


@router.patch(
    "/me",
    summary="Update Current User",
    description="Update the name, surname or e-mail of the authenticated user.",
    responses={409: {"description": "E-mail already registered"}},
)
async def update_me(data: ProfileUpdate, user: CurrentUser, service: UserServiceDep):
    updated = await service.update_profile(user, data)
    return responses.single("user", updated, UserRead)


@router.post(
    "/me/change-password",
    summary="Change Password",
    description="Verify the current password and set a new one.",
    responses={
        400: {"description": "Weak or unchanged password"},
        401: {"description": "Current password is incorrect"},
    },
)
async def change_password(data: PasswordChange, user: CurrentUser, service: UserServiceDep):
    await service.change_password(user, data)
    return responses.message("Password changed successfully")


@router.get(
    "",
    summary="List Users",
    description="List every account, optionally filtered by role. Administrators only.",
    responses={403: {"description": "Caller is not an administrator"}},
)
async def list_users(admin: AdminUser, service: UserServiceDep, role: Optional[UserRole] = None):
    """
    List users ordered by surname and name.

    - **role**: Optional role filter (`user`, `manager`, `admin`).
    """
    users = await service.list_users(role)
    return responses.collection("users", users, UserRead)


@router.get(
    "/{user_id}",
    summary="Get User",
    description="Retrieve an account. Administrators may read any account, other users only their own.",
    responses={403: {"description": "Not allowed"}, 404: {"description": "User not found"}},
)
async def get_user(user_id: int, user: CurrentUser, service: UserServiceDep):
    found = await service.get_user(user_id, current_user=user)
    return responses.single("user", found, UserRead)


@router.patch(
    "/{user_id}/role",
    summary="Change Role",
    description="Change the role of an account. Administrators only.",
    responses={404: {"description": "User not found"}},
)
async def update_role(user_id: int, data: RoleUpdate, admin: AdminUser, service: UserServiceDep):
    updated = await service.update_role(user_id, data, admin)
    return responses.single("user", updated, UserRead)


@router.delete(
    "/{user_id}",
    summary="Delete User",
    description="Delete an account that has no bookings and manages no location. Administrators only.",
    responses={
        404: {"description": "User not found"},
        409: {"description": "The account is still referenced"},
    },
)
async def delete_user(user_id: int, admin: AdminUser, service: UserServiceDep):
    await service.delete_user(user_id, admin)
    return responses.message("User deleted successfully")