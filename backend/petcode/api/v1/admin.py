"""Fulfillment dashboard and maintenance API for administrators."""

from __future__ import annotations

import uuid
from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, Query, Response, status
from sqlalchemy.ext.asyncio import AsyncSession

from petcode.api import deps
from petcode.core.context import AppContext
from petcode.models.client import Client
from petcode.models.qr_order import OrderStatus, QROrder
from petcode.schemas.order import (
    AdminOrderRead,
    OrderRead,
    OrderStats,
    OrderStatusUpdate,
)
from petcode.services import migration_service, order_service
from petcode.services.image_service import render_qr_png
from petcode.services.slug_service import slugify_name
from petcode.services.errors import (
    InvalidTransitionError,
    NotFoundError,
    SlugAllocationError,
)

router = APIRouter()


def _admin_row(order: QROrder, context: AppContext) -> AdminOrderRead:
    return AdminOrderRead(
        **OrderRead.model_validate(order).model_dump(),
        public_url=context.settings.public_url_for(order.profile_url),
    )


@router.get("/orders", response_model=list[AdminOrderRead], summary="List all orders")
async def list_all_orders(
    context: Annotated[AppContext, Depends(deps.get_context)],
    session: Annotated[AsyncSession, Depends(deps.get_db_session)],
    _: Annotated[Client, Depends(deps.get_current_admin)],
    status_filter: OrderStatus | None = Query(default=None, alias="status"),
) -> list[AdminOrderRead]:
    """Return every QR order, newest first, with the URL to print on the tag."""
    orders = await order_service.list_orders(session, status=status_filter)
    return [_admin_row(order, context) for order in orders]


@router.get("/orders/stats", response_model=OrderStats, summary="Order counts")
async def order_stats(
    session: Annotated[AsyncSession, Depends(deps.get_db_session)],
    _: Annotated[Client, Depends(deps.get_current_admin)],
) -> OrderStats:
    counts = await order_service.count_by_status(session)
    return OrderStats(
        total=sum(counts.values()),
        **{order_status.value: total for order_status, total in counts.items()},
    )


@router.patch(
    "/orders/{order_id}/status",
    response_model=AdminOrderRead,
    summary="Change order status",
)
async def change_order_status(
    order_id: uuid.UUID,
    payload: OrderStatusUpdate,
    context: Annotated[AppContext, Depends(deps.get_context)],
    session: Annotated[AsyncSession, Depends(deps.get_db_session)],
    current_admin: Annotated[Client, Depends(deps.get_current_admin)],
) -> AdminOrderRead:
    """Move an order along pendiente, impreso, enviado or cancel it."""
    try:
        order = await order_service.get_order(session, order_id=order_id)
        order = await order_service.update_order_status(
            session,
            order=order,
            status=payload.status,
            actor=current_admin,
            policy=context.settings.order_status_policy,
        )
    except NotFoundError as exc:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND, detail="Order not found"
        ) from exc
    except InvalidTransitionError as exc:
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT, detail=str(exc)
        ) from exc
    return _admin_row(order, context)


@router.get(
    "/orders/{order_id}/qr.png",
    response_class=Response,
    responses={200: {"content": {"image/png": {}}}},
    summary="Printable QR code",
)
async def download_order_qr(
    order_id: uuid.UUID,
    context: Annotated[AppContext, Depends(deps.get_context)],
    session: Annotated[AsyncSession, Depends(deps.get_db_session)],
    _: Annotated[Client, Depends(deps.get_current_admin)],
    size: int = Query(default=512, ge=128, le=2048),
) -> Response:
    """Render the public profile URL of an order as a PNG QR code for the tag."""
    try:
        order = await order_service.get_order(session, order_id=order_id)
    except NotFoundError as exc:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND, detail="Order not found"
        ) from exc
    png = render_qr_png(context.settings.public_url_for(order.profile_url), size)
    filename = f"qr-{slugify_name(order.pet_name) or order.profile_url}.png"
    return Response(
        content=png,
        media_type="image/png",
        headers={"Content-Disposition": f'attachment; filename="{filename}"'},
    )


@router.post("/maintenance/backfill", summary="Run data backfills")
async def run_backfills(
    context: Annotated[AppContext, Depends(deps.get_context)],
    session: Annotated[AsyncSession, Depends(deps.get_db_session)],
    _: Annotated[Client, Depends(deps.get_current_admin)],
) -> dict[str, int]:
    """Fill lost-flag defaults and replace name-derived public slugs."""
    settings = context.settings
    defaults = await migration_service.migrate_pet_defaults(session)
    try:
        slugs = await migration_service.migrate_legacy_slugs(
            session,
            slug_length=settings.profile_slug_length,
            slug_attempts=settings.profile_slug_max_attempts,
        )
    except SlugAllocationError as exc:
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE, detail=str(exc)
        ) from exc
    return {"pet_defaults": defaults, "legacy_slugs": slugs}
