"""
Main Application Entry Point.

This module initializes the FastAPI application, configures middleware (CORS,
request monitoring) and exception handlers, and includes all API routers.
"""

from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from coworkspace.core.database import init_db
from coworkspace.core.logging_config import get_logger, setup_logging
from coworkspace.core.monitoring import initialize_logfire

from .api.v1 import (
    additional_services,
    availability,
    bookings,
    health,
    locations,
    payments,
    space_types,
    spaces,
    users,
)
from .core import constant
from .core.config import settings
from .exception_handlers import setup_exception_handlers
from .middleware import LogfireMiddleware

# Initialize logging
setup_logging()
logger = get_logger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Manage application lifespan events.

    Creates missing tables on startup. The server refuses to start when the
    database cannot be reached.
    """
    logger.info("Starting up Coworkspace API...")
    await init_db()
    logger.info("Database initialized successfully")

    yield

    logger.info("Shutting down Coworkspace API...")


app = FastAPI(
    title=constant.PROJECT_NAME,
    description="""
    Coworkspace API

    Manage locations, space types, spaces, availability windows and additional
    services, and book spaces by the hour or by the day.
    """,
    version=constant.VERSION,
    openapi_url=f"{constant.API_V1_STR}/openapi.json",
    docs_url=f"{constant.API_V1_STR}/docs",
    redoc_url=f"{constant.API_V1_STR}/redoc",
    lifespan=lifespan,
)

initialize_logfire(app)

cors = settings.cors
app.add_middleware(
    CORSMiddleware,
    allow_origins=cors.origins,
    allow_credentials=cors.allow_credentials,
    allow_methods=cors.allow_methods,
    allow_headers=cors.allow_headers,
)
app.add_middleware(LogfireMiddleware)

setup_exception_handlers(app)

app.include_router(health.router, tags=["health"])
app.include_router(users.router, prefix=f"{constant.API_V1_STR}/users")
app.include_router(locations.router, prefix=f"{constant.API_V1_STR}/locations")
app.include_router(space_types.router, prefix=f"{constant.API_V1_STR}/space-types")
app.include_router(spaces.router, prefix=f"{constant.API_V1_STR}/spaces")
app.include_router(availability.router, prefix=f"{constant.API_V1_STR}/availability")
app.include_router(additional_services.router, prefix=f"{constant.API_V1_STR}/additional-services")
app.include_router(bookings.router, prefix=f"{constant.API_V1_STR}/bookings")
app.include_router(payments.router, prefix=f"{constant.API_V1_STR}/payments")
