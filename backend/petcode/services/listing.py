"""Newest-first listing with an in-memory fallback."""

from __future__ import annotations

import logging
from collections.abc import Iterable
from datetime import UTC, datetime
from typing import TypeVar

from sqlalchemy.exc import OperationalError
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.sql import Select

from petcode.models.pet_profile import PetProfile
from petcode.models.qr_order import QROrder

logger = logging.getLogger(__name__)

T = TypeVar("T", PetProfile, QROrder)


def _as_utc(value: datetime) -> datetime:
    # SQLite hands back naive values for timezone-aware columns.
    if value.tzinfo is None:
        return value.replace(tzinfo=UTC)
    return value.astimezone(UTC)


def sort_newest_first(rows: Iterable[T]) -> list[T]:
    """Sort by ``(created_at, id)`` descending, mirroring the SQL ordering."""
    return sorted(rows, key=lambda row: (_as_utc(row.created_at), row.id), reverse=True)


async def fetch_newest_first(
    session: AsyncSession, stmt: Select[tuple[T]], model: type[T]
) -> list[T]:
    """Run ``stmt`` ordered newest first.

    When the ordered query cannot be served (e.g. a missing composite index on
    a managed store) the unordered query is run and sorted in memory with the
    same key. Lost connections are not retried; if the unordered query fails
    too its error propagates.
    """
    ordered = stmt.order_by(model.created_at.desc(), model.id.desc())
    try:
        result = await session.execute(ordered)
    except OperationalError as exc:
        if exc.connection_invalidated:
            raise
        await session.rollback()
        result = await session.execute(stmt)
        logger.warning(
            "Ordered %s query failed but the plain query succeeded; "
            "check the (created_at, id) index. Sorting in memory: %s",
            model.__tablename__,
            exc.orig,
        )
        return sort_newest_first(result.scalars().unique().all())
    return list(result.scalars().unique().all())
