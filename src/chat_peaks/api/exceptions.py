"""Exception handlers mapping domain errors to HTTP responses."""

from typing import Any, Dict, Optional

from fastapi import FastAPI, Request, status
from fastapi.responses import JSONResponse
from structlog import get_logger

from ..domain.exceptions import (
    DomainException,
    EntityNotFoundError,
    InvalidInputError,
    UpstreamUnavailableError,
)

logger = get_logger()

# Most specific first; a subclass must precede its base
STATUS_BY_EXCEPTION: list[tuple[type[DomainException], int, str]] = [
    (EntityNotFoundError, status.HTTP_404_NOT_FOUND, "NOT_FOUND"),
    (InvalidInputError, status.HTTP_422_UNPROCESSABLE_ENTITY, "INVALID_INPUT"),
    (UpstreamUnavailableError, status.HTTP_502_BAD_GATEWAY, "UPSTREAM_UNAVAILABLE"),
]


def create_error_response(
    status_code: int,
    message: str,
    error_code: str = "ERROR",
    details: Optional[Dict[str, Any]] = None,
) -> Dict[str, Any]:
    """Create standardized error response format.

    Args:
        status_code: HTTP status code
        message: Error message
        error_code: Application-specific error code
        details: Additional error details

    Returns:
        Dict: Standardized error response
    """
    response = {
        "error": {"code": error_code, "message": message, "status_code": status_code},
        "success": False,
    }

    if details:
        response["error"]["details"] = details

    return response


async def domain_exception_handler(
    request: Request, exc: DomainException
) -> JSONResponse:
    """Handle domain exceptions raised by the analysis service."""
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    error_code = "INTERNAL_ERROR"
    for exc_type, code, name in STATUS_BY_EXCEPTION:
        if isinstance(exc, exc_type):
            status_code, error_code = code, name
            break

    logger.warning(
        "Request failed",
        path=request.url.path,
        status_code=status_code,
        error_type=type(exc).__name__,
        error=exc.message,
    )

    return JSONResponse(
        status_code=status_code,
        content=create_error_response(
            status_code=status_code,
            message=exc.message,
            error_code=error_code,
            details=exc.context.to_dict(),
        ),
    )


def setup_exception_handlers(app: FastAPI) -> None:
    """Register exception handlers on the app."""
    app.add_exception_handler(DomainException, domain_exception_handler)
