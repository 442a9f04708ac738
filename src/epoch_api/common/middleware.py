"""Request middleware: correlation IDs, request logs and CORS."""

from __future__ import annotations

import logging
import time
from uuid import uuid4

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.responses import Response
from starlette.types import ASGIApp

from epoch_api.settings import Settings

from .logging import bind_request_context, clear_request_context, log_context

logger = logging.getLogger("epoch_api.request")

REQUEST_ID_HEADER = "X-Request-ID"
CORS_ALLOW_METHODS = ("GET", "POST", "OPTIONS")
CORS_ALLOW_HEADERS = ("Content-Type",)


def cors_headers(settings: Settings) -> dict[str, str]:
    """Wildcard CORS headers, or nothing when origins are restricted."""

    if "*" not in settings.server_cors_origins:
        return {}
    return {
        "Access-Control-Allow-Origin": "*",
        "Access-Control-Allow-Methods": ", ".join(CORS_ALLOW_METHODS),
        "Access-Control-Allow-Headers": ", ".join(CORS_ALLOW_HEADERS),
    }


class RequestContextMiddleware(BaseHTTPMiddleware):
    """Bind a correlation ID, log each request once, and stamp fixed headers."""

    def __init__(self, app: ASGIApp, *, extra_headers: dict[str, str] | None = None) -> None:
        super().__init__(app)
        self._extra_headers = dict(extra_headers or {})

    async def dispatch(self, request: Request, call_next: RequestResponseEndpoint) -> Response:
        correlation_id = request.headers.get(REQUEST_ID_HEADER) or uuid4().hex
        request.state.correlation_id = correlation_id
        bind_request_context(correlation_id)
        started = time.perf_counter()
        try:
            response = await call_next(request)
        except Exception:
            # The exception handler logs the traceback; this records the request.
            logger.error("request.error", extra=self._context(request, started, None))
            raise
        else:
            logger.info("request.complete", extra=self._context(request, started, response.status_code))
        finally:
            clear_request_context()

        response.headers[REQUEST_ID_HEADER] = correlation_id
        for name, value in self._extra_headers.items():
            response.headers.setdefault(name, value)
        return response

    @staticmethod
    def _context(request: Request, started: float, status_code: int | None) -> dict[str, object]:
        return log_context(
            method=request.method,
            path=request.url.path,
            status_code=status_code,
            duration_ms=round((time.perf_counter() - started) * 1000.0, 2),
        )


def register_middleware(app: FastAPI, settings: Settings) -> None:
    """Install CORS handling inside the request context middleware."""

    if settings.server_cors_origins:
        app.add_middleware(
            CORSMiddleware,
            allow_origins=list(settings.server_cors_origins),
            allow_credentials=False,
            allow_methods=list(CORS_ALLOW_METHODS),
            allow_headers=list(CORS_ALLOW_HEADERS),
        )
    app.add_middleware(RequestContextMiddleware, extra_headers=cors_headers(settings))


__all__ = ["RequestContextMiddleware", "cors_headers", "register_middleware"]
