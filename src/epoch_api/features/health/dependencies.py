"""FastAPI dependencies for the health module."""

from __future__ import annotations

from typing import Annotated

from fastapi import Depends

from epoch_api.settings import Settings, get_settings

from .service import HealthService


def get_health_service(settings: Annotated[Settings, Depends(get_settings)]) -> HealthService:
    return HealthService(settings=settings)
