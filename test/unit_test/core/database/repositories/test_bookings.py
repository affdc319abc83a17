"""Unit tests for BookingRepository against in-memory SQLite."""

from datetime import date

import pytest

from coworkspace.core.database.entities import AdditionalService, Booking, Space
from coworkspace.core.database.repositories.bookings import BookingRepository
from coworkspace.core.models.domain.enums import BookingStatus, PaymentStatus

# 2030-01-07 is a Monday.
BOOKING_DATE = date(2030, 1, 7)


async def _booking(session, seeded, start, end, status=BookingStatus.confirmed, **extra):
    fields = {
        "user_id": seeded.member.id,
        "space_id": seeded.space.id,
        "booking_date": BOOKING_DATE,
        "start_time": start,
        "end_time": end,
        "status": status,
        **extra,
    }
    return await BookingRepository(session).create(Booking(**fields))


@pytest.mark.asyncio
class TestFindOverlapping:
    async def test_overlapping_window_is_found(self, in_memory_session, seeded):
        existing = await _booking(in_memory_session, seeded, "09:00", "11:00")
        repo = BookingRepository(in_memory_session)

        found = await repo.find_overlapping(seeded.space.id, BOOKING_DATE, "10:00", "12:00")

        assert [b.id for b in found] == [existing.id]

    async def test_adjacent_window_is_free(self, in_memory_session, seeded):
        await _booking(in_memory_session, seeded, "09:00", "11:00")
        repo = BookingRepository(in_memory_session)

        assert await repo.find_overlapping(seeded.space.id, BOOKING_DATE, "11:00", "12:00") == []
        assert await repo.find_overlapping(seeded.space.id, BOOKING_DATE, "08:00", "09:00") == []

    async def test_cancelled_and_completed_do_not_block(self, in_memory_session, seeded):
        await _booking(in_memory_session, seeded, "09:00", "11:00", status=BookingStatus.cancelled)
        await _booking(in_memory_session, seeded, "09:00", "11:00", status=BookingStatus.completed)
        repo = BookingRepository(in_memory_session)

        assert await repo.find_overlapping(seeded.space.id, BOOKING_DATE, "09:00", "11:00") == []

    async def test_pending_blocks(self, in_memory_session, seeded):
        await _booking(in_memory_session, seeded, "09:00", "11:00", status=BookingStatus.pending)
        repo = BookingRepository(in_memory_session)

        assert len(await repo.find_overlapping(seeded.space.id, BOOKING_DATE, "10:30", "11:30")) == 1

    async def test_exclude_id_skips_the_booking_itself(self, in_memory_session, seeded):
        existing = await _booking(in_memory_session, seeded, "09:00", "11:00")
        repo = BookingRepository(in_memory_session)

        found = await repo.find_overlapping(
            seeded.space.id, BOOKING_DATE, "09:30", "10:30", exclude_id=existing.id
        )

        assert found == []

    async def test_other_date_and_space_are_ignored(self, in_memory_session, seeded):
        await _booking(in_memory_session, seeded, "09:00", "11:00")
        other_space = Space(
            location_id=seeded.location.id,
            space_type_id=seeded.space_type.id,
            space_name="Other",
            capacity=1,
            price_per_hour=5,
            price_per_day=30,
        )
        in_memory_session.add(other_space)
        await in_memory_session.commit()
        repo = BookingRepository(in_memory_session)

        assert await repo.find_overlapping(other_space.id, BOOKING_DATE, "09:00", "11:00") == []
        assert await repo.find_overlapping(seeded.space.id, date(2030, 1, 8), "09:00", "11:00") == []


@pytest.mark.asyncio
class TestListingAndStats:
    async def test_list_for_space_date_is_ordered_and_blocking_only(self, in_memory_session, seeded):
        await _booking(in_memory_session, seeded, "14:00", "15:00")
        await _booking(in_memory_session, seeded, "09:00", "10:00", status=BookingStatus.pending)
        await _booking(in_memory_session, seeded, "11:00", "12:00", status=BookingStatus.cancelled)
        repo = BookingRepository(in_memory_session)

        bookings = await repo.list_for_space_date(seeded.space.id, BOOKING_DATE)

        assert [(b.start_time, b.end_time) for b in bookings] == [("09:00", "10:00"), ("14:00", "15:00")]

    async def test_search_filters_by_user_and_location(self, in_memory_session, seeded):
        await _booking(in_memory_session, seeded, "09:00", "10:00")
        await _booking(in_memory_session, seeded, "10:00", "11:00", user_id=seeded.manager.id)
        repo = BookingRepository(in_memory_session)

        mine = await repo.search(user_id=seeded.member.id)
        at_location = await repo.search(location_ids=[seeded.location.id])
        elsewhere = await repo.search(location_ids=[])

        assert [b.user_id for b in mine] == [seeded.member.id]
        assert len(at_location) == 2
        assert elsewhere == []

    async def test_search_is_newest_first_and_limited(self, in_memory_session, seeded):
        await _booking(in_memory_session, seeded, "09:00", "10:00")
        await _booking(in_memory_session, seeded, "13:00", "14:00")
        await _booking(in_memory_session, seeded, "09:00", "10:00", booking_date=date(2030, 1, 8))
        repo = BookingRepository(in_memory_session)

        bookings = await repo.search(limit=2)

        assert [(b.booking_date, b.start_time) for b in bookings] == [
            (date(2030, 1, 8), "09:00"),
            (BOOKING_DATE, "13:00"),
        ]

    async def test_search_by_date_range(self, in_memory_session, seeded):
        await _booking(in_memory_session, seeded, "09:00", "10:00")
        await _booking(in_memory_session, seeded, "09:00", "10:00", booking_date=date(2030, 1, 9))
        repo = BookingRepository(in_memory_session)

        bookings = await repo.search(from_date=date(2030, 1, 8), to_date=date(2030, 1, 10))

        assert [b.booking_date for b in bookings] == [date(2030, 1, 9)]

    async def test_stats_exclude_cancelled_from_totals(self, in_memory_session, seeded):
        await _booking(in_memory_session, seeded, "09:00", "11:00", total_hours=2, total_price=20)
        await _booking(
            in_memory_session,
            seeded,
            "11:00",
            "12:00",
            status=BookingStatus.pending,
            total_hours=1,
            total_price=10.5,
        )
        await _booking(
            in_memory_session,
            seeded,
            "12:00",
            "16:00",
            status=BookingStatus.cancelled,
            total_hours=4,
            total_price=40,
        )
        repo = BookingRepository(in_memory_session)

        stats = await repo.stats()

        assert stats["total_bookings"] == 3
        assert stats["by_status"] == {"pending": 1, "confirmed": 1, "cancelled": 1, "completed": 0}
        assert stats["total_revenue"] == 30.5
        assert stats["total_hours"] == 3

    async def test_stats_on_empty_table(self, in_memory_session, seeded):
        stats = await BookingRepository(in_memory_session).stats(user_id=seeded.member.id)

        assert stats["total_bookings"] == 0
        assert stats["total_revenue"] == 0
        assert stats["total_hours"] == 0

    async def test_counts(self, in_memory_session, seeded):
        await _booking(in_memory_session, seeded, "09:00", "10:00")
        await _booking(in_memory_session, seeded, "10:00", "11:00", status=BookingStatus.completed)
        repo = BookingRepository(in_memory_session)

        assert await repo.count_active_for_space(seeded.space.id) == 1
        assert await repo.count_by_user(seeded.member.id) == 2
        assert await repo.count_for_location(seeded.location.id) == 2
        assert await repo.count({"payment_status": PaymentStatus.pending}) == 2


@pytest.mark.asyncio
class TestServiceLinks:
    async def test_add_list_and_remove(self, in_memory_session, seeded):
        wifi = AdditionalService(service_name="Wifi", price=2.5)
        coffee = AdditionalService(service_name="Coffee", price=4)
        in_memory_session.add_all([wifi, coffee])
        await in_memory_session.commit()
        booking = await _booking(in_memory_session, seeded, "09:00", "10:00")
        repo = BookingRepository(in_memory_session)

        await repo.add_service_links(booking.id, [coffee, wifi])
        await in_memory_session.commit()

        assert await repo.service_ids(booking.id) == sorted([wifi.id, coffee.id])

        await repo.remove_service_links(booking.id)
        await in_memory_session.commit()

        assert await repo.service_ids(booking.id) == []
