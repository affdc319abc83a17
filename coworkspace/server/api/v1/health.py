"""
Liveness and version endpoints.

``/health`` also runs a trivial query so that load balancers and orchestrators notice a
lost database connection; it answers 503 when the query fails.
"""

from fastapi import APIRouter
from fastapi.responses import JSONResponse
from sqlalchemy import text
from sqlalchemy.exc import SQLAlchemyError

from coworkspace.core.logging_config import get_logger
from coworkspace.server.core import constant
from coworkspace.server.services.deps import SessionDep

logger = get_logger(__name__)

router = APIRouter()


@router.get(
    "/health",
    summary="Health Check",
    description="Report whether the API server and its database are reachable.",
    response_description="Status object.",
)
async def health_check(session: SessionDep):
    try:
        await session.execute(text("SELECT 1"))
    except SQLAlchemyError as exc:
        logger.error(f"Health check failed, database unreachable: {exc}")
        return JSONResponse(status_code=503, content={"status": "error", "database": "unavailable"})
    return {"status": "ok", "database": "ok"}


@router.get(
    "/version",
    summary="Get Version",
    response_description="Version object.",
)
async def version():
    """API release and response schema version."""
    return {"version": constant.VERSION, "schema_version": constant.SCHEMA_VERSION}
