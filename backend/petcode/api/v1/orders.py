"""QR order API for owners."""

from __future__ import annotations

import uuid
from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.ext.asyncio import AsyncSession

from petcode.api import deps
from petcode.models.client import Client
from petcode.schemas.order import OrderAddressUpdate, OrderRead
from petcode.services import order_service
from petcode.services.errors import AddressLockedError, NotFoundError

router = APIRouter()


@router.get("", response_model=list[OrderRead], summary="List my QR orders")
async def list_orders(
    session: Annotated[AsyncSession, Depends(deps.get_db_session)],
    current_client: Annotated[Client, Depends(deps.get_current_client)],
) -> list[OrderRead]:
    """Return the caller's QR orders, newest first."""
    orders = await order_service.list_client_orders(
        session, client_id=current_client.id
    )
    return [OrderRead.model_validate(order) for order in orders]


@router.put(
    "/{order_id}/address",
    response_model=OrderRead,
    summary="Change the shipping address of a pending order",
)
async def update_order_address(
    order_id: uuid.UUID,
    payload: OrderAddressUpdate,
    session: Annotated[AsyncSession, Depends(deps.get_db_session)],
    current_client: Annotated[Client, Depends(deps.get_current_client)],
) -> OrderRead:
    try:
        order = await order_service.get_client_order(
            session, client_id=current_client.id, order_id=order_id
        )
        order = await order_service.update_order_address(
            session, order=order, **payload.model_dump()
        )
    except NotFoundError as exc:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND, detail="Order not found"
        ) from exc
    except AddressLockedError as exc:
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT, detail=str(exc)
        ) from exc
    return OrderRead.model_validate(order)
