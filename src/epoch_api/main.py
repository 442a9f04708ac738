"""Application factory for the Epoch HTTP API.

Uvicorn loads ``epoch_api.main:create_app`` with ``factory=True``, so settings
are read when the server starts rather than at import time.
"""

from __future__ import annotations

from typing import Any

from fastapi import FastAPI

from .common.exceptions import register_exception_handlers
from .common.logging import setup_logging
from .common.middleware import register_middleware
from .lifecycles import create_application_lifespan
from .routers import api_router
from .settings import Settings, get_settings

API_PREFIX = "/api"


def _docs_options(settings: Settings) -> dict[str, Any]:
    if settings.api_docs_enabled:
        return {
            "docs_url": settings.docs_url,
            "redoc_url": settings.redoc_url,
            "openapi_url": settings.openapi_url,
        }
    return {"docs_url": None, "redoc_url": None, "openapi_url": None}


def create_app(settings: Settings | None = None) -> FastAPI:
    """Build the FastAPI application around one explicit ``Settings`` object."""

    settings = settings or get_settings()
    setup_logging(settings)

    app = FastAPI(
        title=settings.app_name,
        version=settings.app_version,
        lifespan=create_application_lifespan(settings=settings),
        **_docs_options(settings),
    )
    app.state.settings = settings
    # Route dependencies see the same settings the app was built with.
    app.dependency_overrides[get_settings] = lambda: settings

    register_middleware(app, settings)
    register_exception_handlers(app)
    app.include_router(api_router, prefix=API_PREFIX)
    return app


__all__ = ["API_PREFIX", "create_app"]
