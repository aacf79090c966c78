"""Health check endpoints."""

from datetime import UTC, datetime
from typing import Annotated

from fastapi import APIRouter, Depends

from petcode.api.deps import get_context
from petcode.core.context import AppContext

router = APIRouter()


@router.get("", summary="Service health status")
async def healthcheck(
    context: Annotated[AppContext, Depends(get_context)],
) -> dict[str, str]:
    """Return application health metadata."""
    settings = context.settings
    return {
        "status": "ok",
        "service": settings.app_name,
        "timestamp": datetime.now(UTC).isoformat(),
        "environment": settings.app_env,
        "identity_provider": context.identity.name,
        "photo_storage": "enabled" if context.photos is not None else "disabled",
    }
