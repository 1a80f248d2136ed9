"""Error handlers mapping swarm failures onto HTTP responses."""

import logging
from typing import Union

from fastapi import HTTPException, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from pydantic import ValidationError

from ..core.config import settings
from ..errors import ProviderError, SchedulingDeadlock, SwarmError


logger = logging.getLogger(__name__)


async def validation_exception_handler(
    request: Request,
    exc: Union[RequestValidationError, ValidationError]
) -> JSONResponse:
    """
    Handle Pydantic validation errors with detailed error messages.

    Args:
        request: FastAPI request
        exc: Validation error

    Returns:
        JSON response with validation error details
    """
    errors = []

    for error in exc.errors():
        field_path = " → ".join(str(x) for x in error["loc"] if x != "body")
        errors.append({
            "field": field_path,
            "message": error["msg"],
            "type": error["type"],
        })

    logger.warning(f"Validation error on {request.url.path}: {errors}")

    return JSONResponse(
        status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
        content={
            "error": "Validation Error",
            "message": "The request data failed validation",
            "details": errors
        }
    )


async def provider_exception_handler(request: Request, exc: ProviderError) -> JSONResponse:
    """
    Handle failures of the text-generation provider.

    Args:
        request: FastAPI request
        exc: Provider error

    Returns:
        502 JSON response naming the model that failed
    """
    logger.error(f"Provider error on {request.url.path}: {exc}", exc_info=True)

    return JSONResponse(
        status_code=status.HTTP_502_BAD_GATEWAY,
        content={
            "error": "Provider Error",
            "message": "The language model provider failed to generate a response",
            "details": {
                "model": exc.model,
                "reason": str(exc) if settings.DEBUG else None,
            }
        }
    )


async def swarm_exception_handler(request: Request, exc: SwarmError) -> JSONResponse:
    """Handle swarm errors that are not provider failures."""
    logger.error(f"Swarm error on {request.url.path}: {exc}", exc_info=True)

    details = None
    if isinstance(exc, SchedulingDeadlock):
        details = {"unscheduled": exc.unscheduled}
    elif settings.DEBUG:
        details = str(exc)

    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={
            "error": "Generation Error",
            "message": str(exc) if isinstance(exc, SchedulingDeadlock) else "PRD generation failed",
            "details": details
        }
    )


async def generic_exception_handler(
    request: Request,
    exc: Exception
) -> JSONResponse:
    """
    Handle all other unhandled exceptions.

    Args:
        request: FastAPI request
        exc: Unhandled exception

    Returns:
        JSON response with error message
    """
    logger.error(
        f"Unhandled exception on {request.url.path}: {exc}",
        exc_info=True
    )

    return JSONResponse(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
        content={
            "error": "Internal Server Error",
            "message": "An unexpected error occurred",
            "details": str(exc) if settings.DEBUG else "Please contact support if this persists"
        }
    )


async def http_exception_handler(request: Request, exc: HTTPException) -> JSONResponse:
    """Handle HTTP exceptions with the same body shape as the other handlers."""
    detail = exc.detail
    return JSONResponse(
        status_code=exc.status_code,
        content={
            "error": detail if isinstance(detail, str) else detail.get("error", "Error"),
            "message": detail if isinstance(detail, str) else detail.get("message", ""),
            "details": detail if isinstance(detail, dict) else None
        },
        headers=getattr(exc, "headers", None),
    )
