"""FastAPI lifespan helpers for the Epoch application."""

from __future__ import annotations

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI
from starlette.types import Lifespan

from epoch_api.common.logging import log_context
from epoch_api.settings import Settings

logger = logging.getLogger(__name__)


def create_application_lifespan(*, settings: Settings) -> Lifespan[FastAPI]:
    """Return a lifespan that logs startup and shutdown with the active config."""

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        logger.info(
            "epoch_api.startup",
            extra=log_context(
                timezone=settings.default_timezone,
                format_spec=settings.default_format,
                batch_max_values=settings.batch_max_values,
                batch_workers=settings.batch_workers,
            ),
        )
        yield
        logger.info("epoch_api.shutdown")

    return lifespan


__all__ = ["create_application_lifespan"]
