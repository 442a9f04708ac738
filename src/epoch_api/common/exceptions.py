"""Centralized FastAPI exception handlers with structured logging."""

from __future__ import annotations

import logging

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException

from epoch_api.engine.errors import BatchRequestError, ConversionError
from epoch_api.features.conversions.exceptions import ConversionRequestError
from epoch_api.settings import Settings, get_settings

from .logging import log_context
from .middleware import cors_headers

_UNHANDLED_LOGGER = logging.getLogger("epoch_api.errors")
_HTTP_LOGGER = logging.getLogger("epoch_api.http")

INTERNAL_ERROR_MESSAGE = "Internal server error"
INVALID_BODY_MESSAGE = "Invalid request body. Required fields: type, values (array)"
INVALID_PARAMETERS_MESSAGE = "Invalid request parameters"


def _error_response(status_code: int, message: str, headers: dict[str, str] | None = None) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"error": message}, headers=headers)


def _settings_for(request: Request) -> Settings:
    return getattr(request.app.state, "settings", None) or get_settings()


async def unhandled_exception_handler(request: Request, exc: Exception) -> JSONResponse:
    """Catch-all handler for unexpected exceptions.

    Registered as the ``Exception`` handler. Ensures that any unhandled error
    results in:

    * a JSON error response with HTTP 500 and a generic message, and
    * a structured ERROR log including a stack trace.

    This handler runs outside the middleware stack, so CORS headers are added
    here directly.
    """
    _UNHANDLED_LOGGER.exception(
        "unhandled_exception",
        extra=log_context(
            path=str(request.url.path),
            method=request.method,
            exception_type=type(exc).__name__,
            detail=str(exc),
        ),
    )

    return _error_response(
        status.HTTP_500_INTERNAL_SERVER_ERROR,
        INTERNAL_ERROR_MESSAGE,
        headers=cors_headers(_settings_for(request)),
    )


async def conversion_error_handler(
    request: Request,
    exc: ConversionError | BatchRequestError | ConversionRequestError,
) -> JSONResponse:
    """Expected client errors: 400 with the reason echoed back."""

    _HTTP_LOGGER.debug(
        "conversion.rejected",
        extra=log_context(
            path=str(request.url.path),
            method=request.method,
            exception_type=type(exc).__name__,
            reason=exc.reason,
        ),
    )
    return _error_response(status.HTTP_400_BAD_REQUEST, exc.reason)


async def request_validation_error_handler(
    request: Request,
    exc: RequestValidationError,
) -> JSONResponse:
    """Malformed JSON or wrongly-typed fields are structural 400s."""

    from_body = any((error.get("loc") or ("",))[0] == "body" for error in exc.errors())
    _HTTP_LOGGER.debug(
        "request.validation_failed",
        extra=log_context(
            path=str(request.url.path),
            method=request.method,
            error_count=len(exc.errors()),
        ),
    )
    message = INVALID_BODY_MESSAGE if from_body else INVALID_PARAMETERS_MESSAGE
    return _error_response(status.HTTP_400_BAD_REQUEST, message)


async def http_exception_handler(request: Request, exc: HTTPException) -> JSONResponse:
    """Handler for HTTPException instances (404, 405, ...).

    4xx responses are returned without logging. 5xx responses are logged at
    ERROR level.
    """
    if exc.status_code >= 500:
        _HTTP_LOGGER.error(
            "http_exception",
            extra=log_context(
                path=str(request.url.path),
                method=request.method,
                status_code=exc.status_code,
                detail=exc.detail,
            ),
        )

    return JSONResponse(
        status_code=exc.status_code,
        content={"error": str(exc.detail)},
        headers=getattr(exc, "headers", None),
    )


def register_exception_handlers(app: FastAPI) -> None:
    app.add_exception_handler(ConversionError, conversion_error_handler)
    app.add_exception_handler(BatchRequestError, conversion_error_handler)
    app.add_exception_handler(ConversionRequestError, conversion_error_handler)
    app.add_exception_handler(RequestValidationError, request_validation_error_handler)
    app.add_exception_handler(HTTPException, http_exception_handler)
    app.add_exception_handler(Exception, unhandled_exception_handler)


__all__ = [
    "conversion_error_handler",
    "http_exception_handler",
    "register_exception_handlers",
    "request_validation_error_handler",
    "unhandled_exception_handler",
]
