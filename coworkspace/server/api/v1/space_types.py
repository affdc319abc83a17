"""
API endpoints for space types.

Reading and searching are public; writes are for administrators. A type in
use by spaces cannot be deleted.
"""

from __future__ import annotations

from typing import Optional

from fastapi import APIRouter, status

from coworkspace.core.models.io.space_types import SpaceTypeCreate, SpaceTypeRead, SpaceTypeUpdate
from coworkspace.core.models.io.spaces import SpaceRead
from coworkspace.server import responses
from coworkspace.server.services.deps import AdminUser, SpaceTypeServiceDep

router = APIRouter(tags=["space-types"])


@router.get(
    "",
    summary="List Space Types",
    description="List space types ordered by name, optionally filtered by a name substring.",
)
async def list_space_types(service: SpaceTypeServiceDep, type_name: Optional[str] = None):
    space_types = await service.list_space_types(type_name)
    return responses.collection("space_types", space_types, SpaceTypeRead)


@router.get(
    "/search",
    summary="Search Space Types",
    description="Match a term against the names and descriptions of space types.",
    responses={400: {"description": "Missing search term"}},
)
async def search_space_types(service: SpaceTypeServiceDep, q: Optional[str] = None):
    """
    Search space types.

    - **q**: Search term, required and non-blank.
    """
    space_types = await service.search(q)
    return responses.collection("space_types", space_types, SpaceTypeRead)


@router.get(
    "/{space_type_id}",
    summary="Get Space Type",
    responses={404: {"description": "Space type not found"}},
)
async def get_space_type(space_type_id: int, service: SpaceTypeServiceDep):
    space_type = await service.get_space_type(space_type_id)
    return responses.single("space_type", space_type, SpaceTypeRead)


@router.get(
    "/{space_type_id}/spaces",
    summary="List Spaces of Type",
    responses={404: {"description": "Space type not found"}},
)
async def list_space_type_spaces(space_type_id: int, service: SpaceTypeServiceDep):
    spaces = await service.list_spaces(space_type_id)
    return responses.collection("spaces", spaces, SpaceRead)


@router.get(
    "/{space_type_id}/can-delete",
    summary="Check Space Type Deletion",
    description="Report whether a space type can be deleted and how many spaces use it.",
    responses={404: {"description": "Space type not found"}},
)
async def can_delete_space_type(space_type_id: int, service: SpaceTypeServiceDep):
    report = await service.can_delete(space_type_id)
    return responses.payload(report)


@router.post(
    "",
    status_code=status.HTTP_201_CREATED,
    summary="Create Space Type",
    responses={
        201: {"description": "Space type created"},
        400: {"description": "Invalid name"},
        409: {"description": "Name already taken"},
    },
)
async def create_space_type(data: SpaceTypeCreate, admin: AdminUser, service: SpaceTypeServiceDep):
    """
    Create a space type.

    - **type_name**: Unique, 1-100 letters, digits, spaces, `-` or `_`.
    - **description**: Optional free text.
    """
    space_type = await service.create_space_type(data)
    return responses.single("space_type", space_type, SpaceTypeRead)


@router.patch(
    "/{space_type_id}",
    summary="Update Space Type",
    responses={404: {"description": "Space type not found"}, 409: {"description": "Name already taken"}},
)
async def update_space_type(
    space_type_id: int, data: SpaceTypeUpdate, admin: AdminUser, service: SpaceTypeServiceDep
):
    space_type = await service.update_space_type(space_type_id, data)
    return responses.single("space_type", space_type, SpaceTypeRead)


@router.delete(
    "/{space_type_id}",
    summary="Delete Space Type",
    responses={404: {"description": "Space type not found"}, 409: {"description": "Space type in use"}},
)
async def delete_space_type(space_type_id: int, admin: AdminUser, service: SpaceTypeServiceDep):
    await service.delete_space_type(space_type_id)
    return responses.message("Space type deleted successfully")
