import pytest
from httpx import AsyncClient

pytestmark = pytest.mark.asyncio

SPACE_TYPES = "/api/v1/space-types"


async def _create(client: AsyncClient, admin, type_name: str, description: str | None = None):
    response = await client.post(
        SPACE_TYPES, json={"type_name": type_name, "description": description}, headers=admin.headers
    )
    return response


class TestSpaceTypeCatalogue:
    """Admin-managed catalogue of space types."""

    async def test_create_and_read(self, client: AsyncClient, admin):
        created = await _create(client, admin, "Meeting Room", "Closed room for teams")

        assert created.status_code == 201
        space_type = created.json()["data"]["space_type"]
        fetched = await client.get(f"{SPACE_TYPES}/{space_type['id']}")
        assert fetched.json()["data"]["space_type"]["type_name"] == "Meeting Room"

    async def test_duplicate_name_is_conflict_regardless_of_case(self, client: AsyncClient, admin):
        await _create(client, admin, "Meeting Room")

        response = await _create(client, admin, "meeting room")

        assert response.status_code == 409
        assert response.json()["message"] == "Space type 'meeting room' already exists"

    async def test_name_with_symbols_is_rejected(self, client: AsyncClient, admin):
        response = await _create(client, admin, "Room #1!")

        assert response.status_code == 400
        assert response.json()["code"] == "VALIDATION_ERROR"

    async def test_only_admin_creates(self, client: AsyncClient, manager):
        response = await _create(client, manager, "Booth")

        assert response.status_code == 403

    async def test_update_to_taken_name_is_conflict(self, client: AsyncClient, admin):
        await _create(client, admin, "Booth")
        other = (await _create(client, admin, "Studio")).json()["data"]["space_type"]

        response = await client.patch(
            f"{SPACE_TYPES}/{other['id']}", json={"type_name": "BOOTH"}, headers=admin.headers
        )

        assert response.status_code == 409

    async def test_list_filter_and_search(self, client: AsyncClient, admin):
        await _create(client, admin, "Meeting Room", "For teams")
        await _create(client, admin, "Phone Booth", "Quiet calls")

        listed = await client.get(SPACE_TYPES, params={"type_name": "room"})
        searched = await client.get(f"{SPACE_TYPES}/search", params={"q": "quiet"})
        blank = await client.get(f"{SPACE_TYPES}/search", params={"q": "  "})

        assert [t["type_name"] for t in listed.json()["data"]["space_types"]] == ["Meeting Room"]
        assert [t["type_name"] for t in searched.json()["data"]["space_types"]] == ["Phone Booth"]
        assert blank.status_code == 400
        assert blank.json()["message"] == "A search term is required"


class TestSpaceTypeDeletion:
    """Space types in use cannot be deleted."""

    async def test_can_delete_reports_usage(self, client: AsyncClient, make_space):
        space = await make_space()

        response = await client.get(f"{SPACE_TYPES}/{space.space_type_id}/can-delete")

        assert response.status_code == 200
        assert response.json()["data"] == {
            "can_delete": False,
            "spaces_count": 1,
            "message": "Cannot delete space type: it is used by 1 spaces",
        }

    async def test_delete_in_use_is_conflict_with_count(self, client: AsyncClient, admin, make_space):
        space = await make_space()

        response = await client.delete(f"{SPACE_TYPES}/{space.space_type_id}", headers=admin.headers)

        assert response.status_code == 409
        assert response.json()["message"] == "Cannot delete space type: it is used by 1 spaces"

    async def test_delete_unused(self, client: AsyncClient, admin):
        space_type = (await _create(client, admin, "Lounge")).json()["data"]["space_type"]

        check = await client.get(f"{SPACE_TYPES}/{space_type['id']}/can-delete")
        response = await client.delete(f"{SPACE_TYPES}/{space_type['id']}", headers=admin.headers)

        assert check.json()["data"]["can_delete"] is True
        assert response.status_code == 200
        assert (await client.get(f"{SPACE_TYPES}/{space_type['id']}")).status_code == 404

    async def test_spaces_of_type(self, client: AsyncClient, make_space):
        space = await make_space()

        response = await client.get(f"{SPACE_TYPES}/{space.space_type_id}/spaces")

        assert [item["id"] for item in response.json()["data"]["spaces"]] == [space.id]
