"""
Exception handlers for FastAPI application.

Domain exceptions raised by entities and use cases are translated here into
JSON error bodies of the form {"error": code, "message": ..., "details": {...}}.
"""

import logging

from fastapi import FastAPI, HTTPException, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from app.core.domain import (
    AuthorizationException,
    BusinessRuleViolationException,
    DomainException,
    DuplicateEntityException,
    EntityNotFoundException,
    InsufficientStockException,
    IntegrationException,
    InvalidOperationException,
    InvalidTransitionException,
    ValidationException,
)

logger = logging.getLogger(__name__)

# Most specific class first; the first isinstance match wins
DOMAIN_STATUS_CODES: tuple[tuple[type[DomainException], int], ...] = (
    (EntityNotFoundException, status.HTTP_404_NOT_FOUND),
    (AuthorizationException, status.HTTP_403_FORBIDDEN),
    (InvalidTransitionException, status.HTTP_409_CONFLICT),
    (InvalidOperationException, status.HTTP_409_CONFLICT),
    (DuplicateEntityException, status.HTTP_409_CONFLICT),
    (IntegrationException, status.HTTP_502_BAD_GATEWAY),
    (InsufficientStockException, status.HTTP_422_UNPROCESSABLE_ENTITY),
    (BusinessRuleViolationException, status.HTTP_422_UNPROCESSABLE_ENTITY),
    (ValidationException, status.HTTP_422_UNPROCESSABLE_ENTITY),
)


def status_code_for(exc: DomainException) -> int:
    for exc_type, code in DOMAIN_STATUS_CODES:
        if isinstance(exc, exc_type):
            return code
    return status.HTTP_400_BAD_REQUEST


async def domain_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Translate a DomainException into its HTTP status and JSON body."""
    if not isinstance(exc, DomainException):
        return await global_exception_handler(request, exc)

    status_code = status_code_for(exc)
    if status_code >= 500:
        logger.error(f"{request.method} {request.url.path} failed upstream: {exc.message}")
    else:
        logger.warning(f"{request.method} {request.url.path} -> {status_code} {exc.code}: {exc.message}")

    return JSONResponse(status_code=status_code, content=exc.to_dict())


async def http_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Handle HTTPException with consistent response format."""
    http_exc = exc if isinstance(exc, HTTPException) else HTTPException(status_code=500, detail=str(exc))
    return JSONResponse(
        status_code=http_exc.status_code,
        content={
            "error": "HTTP_ERROR",
            "message": http_exc.detail,
            "details": {},
        },
        headers=http_exc.headers,
    )


async def validation_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Handle request validation errors with detailed error messages."""
    if not isinstance(exc, RequestValidationError):
        return JSONResponse(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            content={"error": "VALIDATION_ERROR", "message": str(exc), "details": {}},
        )

    errors = [
        {
            "field": ".".join(str(loc) for loc in error["loc"]),
            "message": error["msg"],
            "type": error["type"],
        }
        for error in exc.errors()
    ]

    logger.warning(f"Validation error on {request.url.path}: {errors}")

    return JSONResponse(
        status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
        content={
            "error": "VALIDATION_ERROR",
            "message": "Validation error",
            "details": {"errors": errors},
        },
    )


async def global_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """
    Handle all unhandled exceptions.

    Logs the full exception with traceback and returns a safe error response.
    """
    logger.error(
        f"Unhandled exception on {request.method} {request.url.path}: {exc!s}",
        exc_info=True,
    )

    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={
            "error": "INTERNAL_ERROR",
            "message": "Internal server error",
            "details": {},
        },
    )


def register_exception_handlers(app: FastAPI) -> None:
    """
    Register all exception handlers with the FastAPI application.

    Args:
        app: FastAPI application instance
    """
    app.add_exception_handler(DomainException, domain_exception_handler)
    app.add_exception_handler(HTTPException, http_exception_handler)
    app.add_exception_handler(RequestValidationError, validation_exception_handler)
    app.add_exception_handler(Exception, global_exception_handler)

    logger.info("Exception handlers registered")
