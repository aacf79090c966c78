"""Public emergency profile served to whoever scans a QR tag."""

from __future__ import annotations

from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.ext.asyncio import AsyncSession

from petcode.api import deps
from petcode.api.rate_limits import PUBLIC_RATE_DEP
from petcode.schemas.public import PublicProfileRead
from petcode.services import public_profile_service

router = APIRouter()


@router.get(
    "/pets/{slug}",
    response_model=PublicProfileRead,
    summary="Public pet profile",
    dependencies=[PUBLIC_RATE_DEP],
)
async def read_public_profile(
    slug: str,
    session: Annotated[AsyncSession, Depends(deps.get_db_session)],
) -> PublicProfileRead:
    """Return the emergency view of a pet. No authentication required."""
    profile = await public_profile_service.get_public_profile(session, slug)
    if profile is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND, detail="Profile not found"
        )
    return profile
