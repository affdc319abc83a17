"""
Monitoring and Tracing Configuration Module.

This module provides integration with Pydantic Logfire for monitoring and
tracing of the booking API, including:
- API endpoint tracing
- Database operation monitoring
- Booking lifecycle events
- Error tracking

The integration is opt-in: nothing is sent unless ``LOGFIRE_ENABLED`` is true
and ``LOGFIRE_TOKEN`` is set. Every helper degrades to a debug log line when
Logfire is not configured.
"""

import logging
from typing import Optional

import logfire
from fastapi import FastAPI

from coworkspace.server.core.config import settings

logger = logging.getLogger(__name__)

_logfire_configured = False


def is_logfire_configured() -> bool:
    """Return True once :func:`initialize_logfire` has configured Logfire."""
    return _logfire_configured


def initialize_logfire(app: FastAPI | None = None) -> None:
    """
    Initialize Pydantic Logfire for monitoring and tracing.

    Instruments SQLAlchemy and, when an application is given, FastAPI. The
    initialization is conditional on the ``LOGFIRE_ENABLED`` setting.

    Args:
        app: FastAPI application instance for FastAPI instrumentation (optional).
    """
    global _logfire_configured

    config = settings.logfire
    if not config.enabled:
        logger.info("Logfire monitoring is disabled. Set LOGFIRE_ENABLED=true to enable.")
        return

    if not config.token:
        logger.warning(
            "Logfire is enabled but LOGFIRE_TOKEN is not set. "
            "Monitoring will not work. Set LOGFIRE_TOKEN to enable Logfire."
        )
        return

    logfire.configure(
        token=config.token,
        service_name=config.service_name,
        service_version=config.service_version,
        environment=config.environment,
    )
    _logfire_configured = True

    if config.trace_sqlalchemy:
        try:
            logfire.instrument_sqlalchemy()
            logger.info("Logfire: SQLAlchemy instrumentation enabled")
        except Exception as e:
            logger.warning(f"Failed to instrument SQLAlchemy: {e}")

    if config.trace_fastapi and app is not None:
        try:
            logfire.instrument_fastapi(app=app)
            logger.info("Logfire: FastAPI instrumentation enabled")
        except Exception as e:
            logger.warning(f"Failed to instrument FastAPI: {e}")

    logger.info(
        f"Logfire monitoring initialized: "
        f"project={config.project_name}, "
        f"environment={config.environment}, "
        f"service={config.service_name}"
    )


def log_api_request(method: str, path: str, status_code: int, duration_ms: float) -> None:
    """
    Log an API request with performance metrics.

    Args:
        method: HTTP method
        path: Request path
        status_code: HTTP status code
        duration_ms: Request duration in milliseconds
    """
    if not _logfire_configured:
        logger.debug(f"{method} {path} -> {status_code} ({duration_ms:.2f}ms)")
        return
    logfire.info(
        "API request completed",
        method=method,
        path=path,
        status_code=status_code,
        duration_ms=duration_ms,
    )


def log_booking_event(event: str, booking_id: int, space_id: int, user_id: int, status: str) -> None:
    """
    Log a booking lifecycle event (created, updated, status change, deleted).

    Args:
        event: Short event name, e.g. ``"booking.created"``
        booking_id: The booking identifier
        space_id: The booked space
        user_id: The booking owner
        status: Booking status after the event
    """
    if not _logfire_configured:
        logger.debug(f"{event}: booking={booking_id} space={space_id} user={user_id} status={status}")
        return
    logfire.info(
        "Booking event",
        booking_event=event,
        booking_id=booking_id,
        space_id=space_id,
        user_id=user_id,
        status=status,
    )


def log_payment_event(event: str, payment_id: int, booking_id: int, amount: float, status: str) -> None:
    """Log a payment event (created, status change, deleted)."""
    if not _logfire_configured:
        logger.debug(f"{event}: payment={payment_id} booking={booking_id} amount={amount} status={status}")
        return
    logfire.info(
        "Payment event",
        payment_event=event,
        payment_id=payment_id,
        booking_id=booking_id,
        amount=amount,
        status=status,
    )


def log_error(error_type: str, error_message: str, context: Optional[dict] = None) -> None:
    """
    Log an error with context for debugging.

    Args:
        error_type: Type of error
        error_message: Error message
        context: Additional context dictionary
    """
    if not _logfire_configured:
        logger.debug(f"{error_type}: {error_message}")
        return
    logfire.error(f"{error_type}: {error_message}", **(context or {}))
