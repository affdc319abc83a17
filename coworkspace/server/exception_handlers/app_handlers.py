"""
Handlers rendering known errors into the JSON error envelope.

``{"status": "fail" | "error", "message": ..., "code": ...}``; request
validation failures answer 400 and add an ``errors`` list.
"""

from typing import Any, Dict, List

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException

from coworkspace.core.errors import CoworkspaceError
from coworkspace.core.logging_config import get_logger

from .global_handler import global_exception_handler

logger = get_logger(__name__)

_HTTP_CODES = {
    400: "VALIDATION_ERROR",
    401: "UNAUTHORIZED",
    403: "FORBIDDEN",
    404: "NOT_FOUND",
    405: "METHOD_NOT_ALLOWED",
    409: "CONFLICT",
}


def error_body(status_code: int, message: str, code: str) -> Dict[str, Any]:
    return {
        "status": "fail" if status_code < 500 else "error",
        "message": message,
        "code": code,
    }


async def domain_error_handler(request: Request, exc: CoworkspaceError) -> JSONResponse:
    if exc.status_code >= 500:
        logger.error(f"{request.method} {request.url.path} failed: {exc.message}", exc_info=exc)
    else:
        logger.info(f"{request.method} {request.url.path} -> {exc.status_code} {exc.code}: {exc.message}")
    return JSONResponse(status_code=exc.status_code, content=error_body(exc.status_code, exc.message, exc.code))


async def http_exception_handler(request: Request, exc: StarletteHTTPException) -> JSONResponse:
    code = _HTTP_CODES.get(exc.status_code, "HTTP_ERROR" if exc.status_code < 500 else "INTERNAL_ERROR")
    return JSONResponse(
        status_code=exc.status_code,
        content=error_body(exc.status_code, str(exc.detail), code),
        headers=getattr(exc, "headers", None),
    )


def _describe(errors: List[Dict[str, Any]]) -> List[Dict[str, str]]:
    described = []
    for error in errors:
        location = [str(part) for part in error.get("loc", ()) if part not in ("body", "query", "path")]
        described.append(
            {
                "field": ".".join(location),
                "message": str(error.get("msg", "")),
                "type": str(error.get("type", "")),
            }
        )
    return described


async def validation_exception_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    errors = _describe(exc.errors())
    message = "; ".join(f"{e['field']}: {e['message']}" if e["field"] else e["message"] for e in errors)
    body = error_body(400, message or "Invalid request", "VALIDATION_ERROR")
    body["errors"] = errors
    return JSONResponse(status_code=400, content=body)


def setup_exception_handlers(app: FastAPI) -> None:
    """
    Register exception handlers with the FastAPI application.

    Args:
        app: The FastAPI application instance
    """
    app.add_exception_handler(CoworkspaceError, domain_error_handler)
    app.add_exception_handler(StarletteHTTPException, http_exception_handler)
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(Exception, global_exception_handler)
    logger.debug("Exception handlers registered successfully")
