"""Domain error types for the booking platform.

Every error carries the HTTP status it maps to and a stable machine-readable
code. Services raise them; the server's exception handlers render them into
the JSON error envelope.
"""

from __future__ import annotations

import functools
from typing import Any, Awaitable, Callable, Optional, TypeVar

from sqlalchemy.exc import IntegrityError, SQLAlchemyError

from coworkspace.core.logging_config import get_logger

logger = get_logger(__name__)

F = TypeVar("F", bound=Callable[..., Awaitable[Any]])


class CoworkspaceError(Exception):
    """Base error for all domain exceptions."""

    status_code: int = 500
    code: str = "INTERNAL_ERROR"

    def __init__(self, message: str, details: Optional[Any] = None) -> None:
        super().__init__(message)
        self.message = message
        self.details = details

    @property
    def status(self) -> str:
        """``fail`` for client errors, ``error`` for server errors."""
        return "fail" if 400 <= self.status_code < 500 else "error"


class BadRequestError(CoworkspaceError):
    """Raised for missing or malformed input and broken business rules."""

    status_code = 400
    code = "VALIDATION_ERROR"


class UnauthorizedError(CoworkspaceError):
    """Raised when the caller is not authenticated."""

    status_code = 401
    code = "UNAUTHORIZED"

    def __init__(self, message: str = "Authentication required") -> None:
        super().__init__(message)


class ForbiddenError(CoworkspaceError):
    """Raised when the caller's role does not allow the operation."""

    status_code = 403
    code = "FORBIDDEN"

    def __init__(self, message: str = "You do not have permission to perform this action") -> None:
        super().__init__(message)


class NotFoundError(CoworkspaceError):
    """Raised when a referenced entity does not exist."""

    status_code = 404
    code = "NOT_FOUND"

    def __init__(self, resource: str, message: Optional[str] = None) -> None:
        super().__init__(message or f"{resource} not found")
        self.resource = resource


class ConflictError(CoworkspaceError):
    """Raised for duplicates, overlapping time ranges and blocked deletions."""

    status_code = 409
    code = "CONFLICT"


class InternalError(CoworkspaceError):
    """Raised when a lower layer fails in a way the caller cannot fix."""

    status_code = 500
    code = "INTERNAL_ERROR"


def translate_errors(message: str) -> Callable[[F], F]:
    """Wrap a service coroutine so database failures surface as domain errors.

    Domain errors pass through untouched. Integrity violations become
    :class:`ConflictError`; any other SQLAlchemy error becomes
    :class:`InternalError` carrying ``message``. The owning service's session
    (``self.session``) is rolled back before re-raising.
    """

    def decorator(func: F) -> F:
        @functools.wraps(func)
        async def wrapper(self, *args: Any, **kwargs: Any) -> Any:
            try:
                return await func(self, *args, **kwargs)
            except CoworkspaceError:
                raise
            except IntegrityError as exc:
                await self.session.rollback()
                logger.warning(f"{message}: integrity violation: {exc.orig}")
                raise ConflictError(f"{message}: conflicting data") from exc
            except SQLAlchemyError as exc:
                await self.session.rollback()
                logger.error(f"{message}: {exc}", exc_info=True)
                raise InternalError(message) from exc

        return wrapper  # type: ignore[return-value]

    return decorator
