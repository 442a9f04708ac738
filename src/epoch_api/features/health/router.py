"""Liveness route."""

from __future__ import annotations

from typing import Annotated

from fastapi import APIRouter, Depends

from .dependencies import get_health_service
from .schemas import HealthCheckResponse
from .service import HealthService

router = APIRouter()


@router.get(
    "",
    response_model=HealthCheckResponse,
    response_model_exclude_none=True,
    summary="Service health status",
)
async def read_health(service: Annotated[HealthService, Depends(get_health_service)]) -> HealthCheckResponse:
    return service.status()
