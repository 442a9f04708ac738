"""API router composition for the Epoch FastAPI application."""

from __future__ import annotations

from fastapi import APIRouter

from .features.conversions.router import router as conversions_router
from .features.health.router import router as health_router

api_router = APIRouter()
api_router.include_router(health_router, prefix="/health", tags=["health"])
api_router.include_router(conversions_router)

__all__ = ["api_router"]
