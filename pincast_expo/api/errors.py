"""
API error handling and exception mapping.

Domain errors carry a stable ``code``; this module maps each code to an HTTP
status and renders the shared ``ErrorResponse`` body.
"""

from fastapi import HTTPException, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from pincast_expo.api.schemas.base import ErrorResponse
from pincast_expo.domain.clock import utcnow
from pincast_expo.domain.exceptions import (
    ConflictError,
    DomainError,
    ForbiddenError,
    InvalidArgumentError,
    InvalidTransitionError,
    NotFoundError,
    StorageError,
    UnauthenticatedError,
)
from pincast_expo.infra.config.logging_config import get_logger

logger = get_logger("api.errors")

STATUS_BY_CODE = {
    InvalidArgumentError.code: status.HTTP_400_BAD_REQUEST,
    UnauthenticatedError.code: status.HTTP_401_UNAUTHORIZED,
    ForbiddenError.code: status.HTTP_403_FORBIDDEN,
    NotFoundError.code: status.HTTP_404_NOT_FOUND,
    InvalidTransitionError.code: status.HTTP_400_BAD_REQUEST,
    ConflictError.code: status.HTTP_409_CONFLICT,
    StorageError.code: status.HTTP_503_SERVICE_UNAVAILABLE,
}


def error_response(status_code: int, code: str, detail: str, headers=None) -> JSONResponse:
    body = ErrorResponse(error=code, detail=detail, timestamp=utcnow())
    return JSONResponse(
        status_code=status_code,
        content=body.model_dump(mode="json"),
        headers=headers,
    )


async def domain_error_handler(request: Request, exc: DomainError) -> JSONResponse:
    """Map a domain error to its HTTP status."""
    status_code = STATUS_BY_CODE.get(exc.code, status.HTTP_500_INTERNAL_SERVER_ERROR)
    if status_code >= 500:
        logger.error("api.domain_error", code=exc.code, detail=exc.message)
    else:
        logger.warning("api.domain_error", code=exc.code, detail=exc.message)

    headers = None
    if status_code == status.HTTP_401_UNAUTHORIZED:
        headers = {"WWW-Authenticate": "Bearer"}
    return error_response(status_code, exc.code, exc.message, headers=headers)


async def validation_error_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    """Request bodies and parameters that fail validation are bad arguments."""
    formatted_errors = []
    for error in exc.errors():
        location = " -> ".join(str(loc) for loc in error["loc"])
        formatted_errors.append(f"{location}: {error['msg']}")

    logger.warning("api.validation_error", errors=formatted_errors)
    return error_response(
        status.HTTP_400_BAD_REQUEST,
        InvalidArgumentError.code,
        "Validation failed: " + "; ".join(formatted_errors),
    )


async def http_exception_handler(request: Request, exc: HTTPException) -> JSONResponse:
    logger.warning("api.http_exception", status_code=exc.status_code, detail=exc.detail)
    return error_response(
        exc.status_code,
        f"HTTP_{exc.status_code}",
        str(exc.detail),
        headers=getattr(exc, "headers", None),
    )


async def general_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    logger.exception("api.unexpected_error", error_type=type(exc).__name__)
    return error_response(
        status.HTTP_500_INTERNAL_SERVER_ERROR,
        "INTERNAL_SERVER_ERROR",
        "An unexpected error occurred. Please try again later.",
    )


def setup_error_handlers(app) -> None:
    app.add_exception_handler(DomainError, domain_error_handler)
    app.add_exception_handler(RequestValidationError, validation_error_handler)
    app.add_exception_handler(HTTPException, http_exception_handler)
    app.add_exception_handler(Exception, general_exception_handler)
