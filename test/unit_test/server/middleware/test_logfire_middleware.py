"""
Unit tests for the request monitoring middleware.

This test suite covers:
- Request reporting through log_api_request
- The X-Process-Time header
- Slow request warnings
- Error propagation
"""

from unittest.mock import AsyncMock, MagicMock, patch

import pytest
from fastapi import Request
from starlette.responses import Response

from coworkspace.server.middleware.logfire_middleware import LogfireMiddleware

MODULE = "coworkspace.server.middleware.logfire_middleware"


def _request(method: str = "GET", path: str = "/api/v1/spaces"):
    request = AsyncMock(spec=Request)
    request.method = method
    request.url.path = path
    request.url.query = ""
    request.state = MagicMock()
    return request


class TestLogfireMiddlewareDispatch:
    """Test LogfireMiddleware.dispatch method."""

    @pytest.mark.asyncio
    async def test_middleware_reports_successful_request(self):
        async def call_next(request):
            return Response(content="ok", status_code=200)

        middleware = LogfireMiddleware(app=AsyncMock())

        with patch(f"{MODULE}.log_api_request") as mock_log:
            response = await middleware.dispatch(_request(), call_next)

        assert response.status_code == 200
        mock_log.assert_called_once()
        kwargs = mock_log.call_args[1]
        assert kwargs["method"] == "GET"
        assert kwargs["path"] == "/api/v1/spaces"
        assert kwargs["status_code"] == 200
        assert kwargs["duration_ms"] >= 0

    @pytest.mark.asyncio
    async def test_middleware_adds_process_time_header(self):
        async def call_next(request):
            return Response(content="created", status_code=201)

        middleware = LogfireMiddleware(app=AsyncMock())

        with patch(f"{MODULE}.log_api_request"):
            response = await middleware.dispatch(_request("POST", "/api/v1/bookings"), call_next)

        assert "X-Process-Time" in response.headers
        assert float(response.headers["X-Process-Time"]) >= 0

    @pytest.mark.asyncio
    async def test_middleware_warns_on_slow_request(self):
        async def call_next(request):
            return Response(status_code=200)

        middleware = LogfireMiddleware(app=AsyncMock())

        # Two perf_counter readings two seconds apart.
        with (
            patch(f"{MODULE}.log_api_request"),
            patch(f"{MODULE}.time.perf_counter", side_effect=[10.0, 12.0]),
            patch(f"{MODULE}.logger") as mock_logger,
        ):
            response = await middleware.dispatch(_request(), call_next)

        assert response.headers["X-Process-Time"] == "2000.00"
        mock_logger.warning.assert_called_once()
        assert "Slow API request" in mock_logger.warning.call_args[0][0]

    @pytest.mark.asyncio
    async def test_middleware_does_not_warn_on_fast_request(self):
        async def call_next(request):
            return Response(status_code=200)

        middleware = LogfireMiddleware(app=AsyncMock())

        with (
            patch(f"{MODULE}.log_api_request"),
            patch(f"{MODULE}.time.perf_counter", side_effect=[10.0, 10.05]),
            patch(f"{MODULE}.logger") as mock_logger,
        ):
            await middleware.dispatch(_request(), call_next)

        mock_logger.warning.assert_not_called()

    @pytest.mark.asyncio
    async def test_middleware_reports_and_reraises_errors(self):
        async def call_next(request):
            raise RuntimeError("downstream failure")

        middleware = LogfireMiddleware(app=AsyncMock())

        with (
            patch(f"{MODULE}.log_api_request") as mock_log,
            patch(f"{MODULE}.logger") as mock_logger,
        ):
            with pytest.raises(RuntimeError, match="downstream failure"):
                await middleware.dispatch(_request("DELETE", "/api/v1/spaces/1"), call_next)

        assert mock_log.call_args[1]["status_code"] == 500
        mock_logger.error.assert_called_once()
        assert mock_logger.error.call_args[1]["extra"]["error"] == "downstream failure"
