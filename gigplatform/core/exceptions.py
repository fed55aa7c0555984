"""
gigplatform/core/exceptions.py

Domain Errors
Typed failures raised by the service layer and a FastAPI handler that
renders them as a standard error response:
- ValidationError (422), ForbiddenError (403), NotFoundError (404)
- PreconditionFailedError (400), InvalidTransitionError (409), ConflictError (409)
- StorageError (500)
"""

import logging

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse

logger = logging.getLogger(__name__)


class GigPlatformError(Exception):
    """Base class for all domain failures. Carries the HTTP status it maps to."""

    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR
    kind: str = "error"

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class ValidationError(GigPlatformError):
    """Malformed input or reference to missing category/location."""

    status_code = status.HTTP_422_UNPROCESSABLE_ENTITY
    kind = "validation_error"


class ForbiddenError(GigPlatformError):
    """Actor's role or ownership does not permit the action."""

    status_code = status.HTTP_403_FORBIDDEN
    kind = "forbidden"


class NotFoundError(GigPlatformError):
    status_code = status.HTTP_404_NOT_FOUND
    kind = "not_found"


class PreconditionFailedError(GigPlatformError):
    """Actor is allowed but a required state (e.g. verification) is not met."""

    status_code = status.HTTP_400_BAD_REQUEST
    kind = "precondition_failed"


class InvalidTransitionError(GigPlatformError):
    """The gig is not in a state from which the requested action is legal."""

    status_code = status.HTTP_409_CONFLICT
    kind = "invalid_transition"


class ConflictError(GigPlatformError):
    status_code = status.HTTP_409_CONFLICT
    kind = "conflict"


class StorageError(GigPlatformError):
    """Persistence failure unrelated to domain rules."""

    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    kind = "storage_error"


# ---------------------------------------------------
# Exception Handler Registration
# ---------------------------------------------------
async def domain_error_handler(request: Request, exc: Exception) -> JSONResponse:
    """Render a GigPlatformError as {"detail": ..., "error": ...}."""
    assert isinstance(exc, GigPlatformError)
    if exc.status_code >= 500:
        logger.error(f"[ERROR] {request.method} {request.url.path} -> {exc.kind}: {exc.message}")
    else:
        logger.info(f"[ERROR] {request.method} {request.url.path} -> {exc.kind}: {exc.message}")
    return JSONResponse(
        status_code=exc.status_code,
        content={"detail": exc.message, "error": exc.kind},
    )


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(GigPlatformError, domain_error_handler)
