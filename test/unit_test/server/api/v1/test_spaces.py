"""
Unit tests for the space endpoints: CRUD, slot view, price quotes and the
additional services a space offers.
"""

import pytest
from httpx import AsyncClient

pytestmark = pytest.mark.asyncio

SPACES = "/api/v1/spaces"


def _space_payload(location_id: int, space_type_id: int, **overrides):
    payload = {
        "location_id": location_id,
        "space_type_id": space_type_id,
        "space_name": "Corner Office",
        "capacity": 6,
        "price_per_hour": 15,
        "price_per_day": 90,
        "opening_time": "8:30",
        "closing_time": "17:00",
        "available_days": [5, 1, 3, 1],
    }
    payload.update(overrides)
    return payload


class TestSpaceCrud:
    """Creating, editing and deleting spaces."""

    async def test_manager_creates_space_in_own_location(
        self, client: AsyncClient, manager, make_space, make_service
    ):
        existing = await make_space(manager_id=manager.id)
        service_id = await make_service()

        response = await client.post(
            SPACES,
            json=_space_payload(existing.location_id, existing.space_type_id, service_ids=[service_id]),
            headers=manager.headers,
        )

        assert response.status_code == 201
        space = response.json()["data"]["space"]
        assert space["opening_time"] == "08:30"
        assert space["available_days"] == [1, 3, 5]
        assert space["status"] == "active"

        services = await client.get(f"{SPACES}/{space['id']}/services")
        assert [s["id"] for s in services.json()["data"]["services"]] == [service_id]

    async def test_manager_cannot_create_in_foreign_location(self, client: AsyncClient, manager, make_space):
        foreign = await make_space()

        response = await client.post(
            SPACES, json=_space_payload(foreign.location_id, foreign.space_type_id), headers=manager.headers
        )

        assert response.status_code == 403

    async def test_opening_after_closing_is_rejected(self, client: AsyncClient, admin, make_space):
        existing = await make_space()

        response = await client.post(
            SPACES,
            json=_space_payload(
                existing.location_id, existing.space_type_id, opening_time="18:00", closing_time="09:00"
            ),
            headers=admin.headers,
        )

        assert response.status_code == 400
        assert "Opening time must be earlier than closing time" in response.json()["message"]

    async def test_invalid_weekday_is_rejected(self, client: AsyncClient, admin, make_space):
        existing = await make_space()

        response = await client.post(
            SPACES,
            json=_space_payload(existing.location_id, existing.space_type_id, available_days=[0, 8]),
            headers=admin.headers,
        )

        assert response.status_code == 400

    async def test_unknown_space_type_is_404(self, client: AsyncClient, admin, make_space):
        existing = await make_space()

        response = await client.post(
            SPACES, json=_space_payload(existing.location_id, 999), headers=admin.headers
        )

        assert response.status_code == 404
        assert response.json()["message"] == "Space type not found"

    async def test_update_checks_merged_hours(self, client: AsyncClient, admin, make_space):
        space = await make_space()

        response = await client.patch(f"{SPACES}/{space.id}", json={"opening_time": "19:00"}, headers=admin.headers)

        assert response.status_code == 400

    async def test_update_status(self, client: AsyncClient, admin, make_space):
        space = await make_space()

        response = await client.patch(f"{SPACES}/{space.id}", json={"status": "maintenance"}, headers=admin.headers)

        assert response.status_code == 200
        assert response.json()["data"]["space"]["status"] == "maintenance"

    async def test_delete_with_active_booking_is_conflict(
        self, client: AsyncClient, admin, member, make_space, next_weekday
    ):
        space = await make_space()
        await client.post(
            "/api/v1/bookings",
            json={
                "space_id": space.id,
                "booking_date": next_weekday(1).isoformat(),
                "start_time": "09:00",
                "end_time": "10:00",
            },
            headers=member.headers,
        )

        response = await client.delete(f"{SPACES}/{space.id}", headers=admin.headers)

        assert response.status_code == 409
        assert response.json()["message"] == "Cannot delete space: it has 1 active bookings"

    async def test_delete_space_with_services(self, client: AsyncClient, admin, make_space, make_service):
        space = await make_space()
        await make_service(space_id=space.id)

        response = await client.delete(f"{SPACES}/{space.id}", headers=admin.headers)

        assert response.status_code == 200
        assert (await client.get(f"{SPACES}/{space.id}")).status_code == 404


class TestSpaceSearch:
    async def test_filters(self, client: AsyncClient, make_space):
        cheap = await make_space(price_per_hour=5.0, capacity=2)
        await make_space(price_per_hour=30.0, capacity=20)

        by_price = await client.get(SPACES, params={"max_price_hour": 10})
        by_capacity = await client.get(SPACES, params={"min_capacity": 10})
        by_city = await client.get(SPACES, params={"city": "LISBON"})
        by_location = await client.get(SPACES, params={"location_id": cheap.location_id})

        assert [s["id"] for s in by_price.json()["data"]["spaces"]] == [cheap.id]
        assert by_capacity.json()["results"] == 1
        assert by_city.json()["results"] == 2
        assert by_location.json()["results"] == 1


class TestAvailableSlots:
    """Hourly slot view of a day."""

    async def test_open_day_lists_hourly_slots(self, client: AsyncClient, member, make_space, next_weekday):
        space = await make_space()
        day = next_weekday(2)
        await client.post(
            "/api/v1/bookings",
            json={"space_id": space.id, "booking_date": day.isoformat(), "start_time": "10:00", "end_time": "12:00"},
            headers=member.headers,
        )

        response = await client.get(f"{SPACES}/{space.id}/slots", params={"date": day.isoformat()})

        assert response.status_code == 200
        data = response.json()["data"]
        assert data["available"] is True
        assert len(data["slots"]) == 10
        taken = [slot["start_time"] for slot in data["slots"] if not slot["available"]]
        assert taken == ["10:00", "11:00"]
        assert data["slots"][0] == {"start_time": "08:00", "end_time": "09:00", "available": True, "duration_minutes": 60}

    async def test_closed_day_has_no_slots(self, client: AsyncClient, make_space, next_weekday):
        space = await make_space()

        response = await client.get(f"{SPACES}/{space.id}/slots", params={"date": next_weekday(6).isoformat()})

        data = response.json()["data"]
        assert data["available"] is False
        assert data["reason"] == "day_not_available"
        assert data["slots"] == []

    async def test_inactive_space_has_no_slots(self, client: AsyncClient, make_space, next_weekday):
        space = await make_space(status="inactive")

        response = await client.get(f"{SPACES}/{space.id}/slots", params={"date": next_weekday(1).isoformat()})

        assert response.json()["data"]["reason"] == "space_not_active"


class TestPriceQuote:
    async def test_quote_with_services(self, client: AsyncClient, make_space, make_service, next_weekday):
        space = await make_space()
        service_id = await make_service(space_id=space.id, price=4.0)

        response = await client.get(
            f"{SPACES}/{space.id}/price",
            params={
                "date": next_weekday(1).isoformat(),
                "start_time": "09:00",
                "end_time": "18:00",
                "service_ids": [service_id],
            },
        )

        assert response.status_code == 200
        quote = response.json()["data"]["quote"]
        assert quote["total_hours"] == 9.0
        assert quote["base_price"] == 70.0
        assert quote["services_cost"] == 4.0
        assert quote["total_price"] == 74.0

    async def test_quote_rejects_bad_time(self, client: AsyncClient, make_space, next_weekday):
        space = await make_space()

        response = await client.get(
            f"{SPACES}/{space.id}/price",
            params={"date": next_weekday(1).isoformat(), "start_time": "25:00", "end_time": "26:00"},
        )

        assert response.status_code == 400


class TestSpaceServices:
    async def test_add_and_remove_service(self, client: AsyncClient, admin, make_space, make_service):
        space = await make_space()
        service_id = await make_service()
        url = f"{SPACES}/{space.id}/services/{service_id}"

        added = await client.post(url, headers=admin.headers)
        duplicate = await client.post(url, headers=admin.headers)
        removed = await client.delete(url, headers=admin.headers)
        missing = await client.delete(url, headers=admin.headers)

        assert added.status_code == 201
        assert duplicate.status_code == 409
        assert removed.status_code == 200
        assert missing.status_code == 404
        assert missing.json()["message"] == "The service is not associated with this space"

    async def test_add_unknown_service(self, client: AsyncClient, admin, make_space):
        space = await make_space()

        response = await client.post(f"{SPACES}/{space.id}/services/999", headers=admin.headers)

        assert response.status_code == 404
