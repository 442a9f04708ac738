"""Pydantic schemas for the health module."""

from __future__ import annotations

from datetime import datetime
from typing import Literal

from pydantic import Field

from epoch_api.common.schema import BaseSchema

ComponentState = Literal["available", "degraded"]


class ComponentHealth(BaseSchema):
    name: str
    status: ComponentState
    detail: str | None = None


class HealthCheckResponse(BaseSchema):
    """Body of ``GET /api/health``.

    ``status`` stays ``ok`` while the process can answer requests; a degraded
    component only narrows what can be converted.
    """

    status: Literal["ok"] = "ok"
    timestamp: datetime = Field(..., description="UTC time the check ran.")
    default_timezone: str = Field(..., description="Zone used when a request names none.")
    components: list[ComponentHealth] = Field(default_factory=list)
