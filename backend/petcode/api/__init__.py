"""API router modules."""

from fastapi import APIRouter

from petcode.core.config import Settings

from .v1 import router as api_v1_router


def build_api_router(settings: Settings) -> APIRouter:
    """Mount the versioned API under the configured prefix."""
    api_router = APIRouter()
    api_router.include_router(api_v1_router, prefix=settings.api_v1_prefix)
    return api_router


__all__ = ["build_api_router"]
