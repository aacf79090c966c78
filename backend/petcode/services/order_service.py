"""QR order fulfillment service helpers."""

from __future__ import annotations

import logging
import uuid
from typing import Literal

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from petcode.models.client import Client
from petcode.models.mixins import utcnow
from petcode.models.qr_order import OrderStatus, QROrder
from petcode.services import audit_service
from petcode.services.errors import (
    AddressLockedError,
    InvalidTransitionError,
    NotFoundError,
)
from petcode.services.listing import fetch_newest_first

logger = logging.getLogger(__name__)

StatusPolicy = Literal["forward_only", "open"]

# State machine transition map
ORDER_TRANSITIONS: dict[OrderStatus, frozenset[OrderStatus]] = {
    OrderStatus.PENDIENTE: frozenset({OrderStatus.IMPRESO, OrderStatus.CANCELADO}),
    OrderStatus.IMPRESO: frozenset({OrderStatus.ENVIADO, OrderStatus.CANCELADO}),
    OrderStatus.ENVIADO: frozenset(),  # Terminal
    OrderStatus.CANCELADO: frozenset(),  # Terminal
}


def can_transition(
    current: OrderStatus,
    target: OrderStatus,
    *,
    policy: StatusPolicy = "forward_only",
) -> bool:
    """Return whether an order may move from ``current`` to ``target``."""
    if current == target or policy == "open":
        return True
    return target in ORDER_TRANSITIONS[current]


def is_address_editable(order: QROrder) -> bool:
    """Shipping address may only change before the tag is printed."""
    return order.status == OrderStatus.PENDIENTE


async def list_client_orders(
    session: AsyncSession, *, client_id: uuid.UUID
) -> list[QROrder]:
    """Return a client's orders, newest first."""
    stmt = select(QROrder).where(QROrder.client_id == client_id)
    return await fetch_newest_first(session, stmt, QROrder)


async def list_orders(
    session: AsyncSession, *, status: OrderStatus | None = None
) -> list[QROrder]:
    """Return every order, newest first, optionally filtered by status."""
    stmt = select(QROrder)
    if status is not None:
        stmt = stmt.where(QROrder.status == status)
    return await fetch_newest_first(session, stmt, QROrder)


async def count_by_status(session: AsyncSession) -> dict[OrderStatus, int]:
    """Return the number of orders in each status, zero-filled."""
    result = await session.execute(
        select(QROrder.status, func.count(QROrder.id)).group_by(QROrder.status)
    )
    counts = {status: 0 for status in OrderStatus}
    for status, total in result.all():
        counts[OrderStatus(status)] = total
    return counts


async def get_order(session: AsyncSession, *, order_id: uuid.UUID) -> QROrder:
    order = await session.get(QROrder, order_id)
    if order is None:
        raise NotFoundError("Order not found")
    return order


async def get_client_order(
    session: AsyncSession, *, client_id: uuid.UUID, order_id: uuid.UUID
) -> QROrder:
    """Return an order owned by the client or raise ``NotFoundError``."""
    order = await get_order(session, order_id=order_id)
    if order.client_id != client_id:
        raise NotFoundError("Order not found")
    return order


async def update_order_status(
    session: AsyncSession,
    *,
    order: QROrder,
    status: OrderStatus,
    actor: Client,
    policy: StatusPolicy = "forward_only",
) -> QROrder:
    """Move an order through the fulfillment pipeline."""
    current = OrderStatus(order.status)
    if current == status:
        return order
    if not can_transition(current, status, policy=policy):
        raise InvalidTransitionError(
            f"Cannot transition from {current.value} to {status.value}"
        )

    order.status = status
    order.updated_at = utcnow()
    session.add(order)
    await audit_service.record_event(
        session,
        event_type="order.status_changed",
        client_id=actor.id,
        description=f"{current.value} -> {status.value}",
        payload={"order_id": str(order.id), "from": current.value, "to": status.value},
        commit=False,
    )
    await session.commit()
    await session.refresh(order)
    logger.info("Order %s moved %s -> %s", order.id, current.value, status.value)
    return order


async def update_order_address(
    session: AsyncSession,
    *,
    order: QROrder,
    address: str,
    city: str,
    postal_code: str,
    country: str,
) -> QROrder:
    """Replace the shipping address of a pending order."""
    if not is_address_editable(order):
        raise AddressLockedError(
            f"Address can no longer be changed (order is {OrderStatus(order.status).value})"
        )

    order.client_address = address
    order.client_city = city
    order.client_postal_code = postal_code
    order.client_country = country
    order.updated_at = utcnow()
    session.add(order)
    await audit_service.record_event(
        session,
        event_type="order.address_changed",
        client_id=order.client_id,
        payload={"order_id": str(order.id)},
        commit=False,
    )
    await session.commit()
    await session.refresh(order)
    return order
