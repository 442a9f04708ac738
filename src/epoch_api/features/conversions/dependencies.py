"""FastAPI dependencies for the conversions module."""

from __future__ import annotations

from typing import Annotated

from fastapi import Depends

from epoch_api.settings import Settings, get_settings

from .service import ConversionService


def get_conversion_service(
    settings: Annotated[Settings, Depends(get_settings)],
) -> ConversionService:
    return ConversionService(settings=settings)


__all__ = ["get_conversion_service"]
