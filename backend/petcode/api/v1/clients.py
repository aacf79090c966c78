"""Client profile API."""

from __future__ import annotations

from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from petcode.api import deps
from petcode.models.client import Client
from petcode.schemas.client import ClientRead, ClientUpdate
from petcode.services import client_service

router = APIRouter()


@router.get("/me", response_model=ClientRead, summary="Get my profile")
async def read_my_profile(
    current_client: Annotated[Client, Depends(deps.get_current_client)],
) -> ClientRead:
    return ClientRead.model_validate(current_client)


@router.put("/me", response_model=ClientRead, summary="Update my profile")
async def update_my_profile(
    payload: ClientUpdate,
    session: Annotated[AsyncSession, Depends(deps.get_db_session)],
    current_client: Annotated[Client, Depends(deps.get_current_client)],
) -> ClientRead:
    """Replace contact and shipping details. Existing orders keep their snapshot."""
    try:
        client = await client_service.update_client(
            session,
            client=current_client,
            **payload.model_dump(exclude_none=True),
        )
    except IntegrityError as exc:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST, detail="Unable to update profile"
        ) from exc
    return ClientRead.model_validate(client)
