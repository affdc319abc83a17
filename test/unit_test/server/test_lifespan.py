"""
Unit tests for FastAPI application lifespan management.

Tests verify that the application startup creates the schema and that a
database failure on startup aborts the application.
"""

from unittest.mock import AsyncMock, patch

import pytest


@pytest.mark.asyncio
class TestLifespanStartup:
    """Test application startup lifespan events."""

    async def test_lifespan_startup_initializes_database(self):
        """Test that lifespan startup calls init_db once."""
        from fastapi import FastAPI

        from coworkspace.server.main import lifespan

        app = FastAPI()

        with patch("coworkspace.server.main.init_db", new_callable=AsyncMock) as mock_init_db:
            async with lifespan(app):
                mock_init_db.assert_awaited_once()

    async def test_lifespan_startup_propagates_database_errors(self):
        """The application must not start when the database is unreachable."""
        from fastapi import FastAPI

        from coworkspace.server.main import lifespan

        app = FastAPI()

        with patch(
            "coworkspace.server.main.init_db",
            new_callable=AsyncMock,
            side_effect=ConnectionError("database unreachable"),
        ):
            with pytest.raises(ConnectionError, match="database unreachable"):
                async with lifespan(app):
                    pass

    async def test_lifespan_shutdown_logs(self):
        """Shutdown runs after the application yields."""
        from fastapi import FastAPI

        from coworkspace.server.main import lifespan

        app = FastAPI()

        with (
            patch("coworkspace.server.main.init_db", new_callable=AsyncMock),
            patch("coworkspace.server.main.logger") as mock_logger,
        ):
            async with lifespan(app):
                pass

        messages = [call.args[0] for call in mock_logger.info.call_args_list]
        assert messages[-1] == "Shutting down Coworkspace API..."


class TestApplicationWiring:
    """Routers and documentation are mounted under the API prefix."""

    def test_routes_are_mounted(self):
        from coworkspace.server.main import app

        paths = {getattr(route, "path", None) for route in app.routes} | set(app.openapi()["paths"])

        assert "/health" in paths
        assert "/api/v1/payments" in paths
        assert "/api/v1/payments/can-pay/{booking_id}" in paths
        assert "/api/v1/bookings" in paths
        assert "/api/v1/spaces/{space_id}/slots" in paths
        assert "/api/v1/space-types/{space_type_id}/can-delete" in paths
        assert "/api/v1/availability/generate" in paths
        assert "/api/v1/docs" in paths
