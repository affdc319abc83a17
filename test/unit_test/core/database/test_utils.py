"""Unit tests for the engine and schema helpers."""

import pytest
from sqlalchemy import inspect

from coworkspace.core.database.utils import create_all, create_engine, normalize_database_url


class TestNormalizeDatabaseUrl:
    @pytest.mark.parametrize(
        "url",
        [
            "postgres://u:p@db:5432/app",
            "postgresql://u:p@db:5432/app",
            "postgresql+psycopg2://u:p@db:5432/app",
            "postgresql+asyncpg://u:p@db:5432/app",
        ],
    )
    def test_postgres_urls_use_asyncpg(self, url):
        assert normalize_database_url(url) == "postgresql+asyncpg://u:p@db:5432/app"

    def test_sqlite_url_is_untouched(self):
        assert normalize_database_url("sqlite+aiosqlite:///:memory:") == "sqlite+aiosqlite:///:memory:"


@pytest.mark.asyncio
class TestCreateAll:
    async def test_creates_every_table(self):
        engine = create_engine("sqlite+aiosqlite:///:memory:")
        try:
            await create_all(engine)
            async with engine.connect() as conn:
                tables = await conn.run_sync(lambda sync_conn: inspect(sync_conn).get_table_names())
        finally:
            await engine.dispose()

        assert {"users", "spaces", "bookings", "availability", "booking_services"} <= set(tables)
