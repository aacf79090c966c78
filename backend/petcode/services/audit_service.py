"""Helper utilities for recording audit events."""

from __future__ import annotations

import uuid
from typing import Any

from sqlalchemy.ext.asyncio import AsyncSession

from petcode.models.audit_event import AuditEvent


async def record_event(
    session: AsyncSession,
    *,
    event_type: str,
    client_id: uuid.UUID | None = None,
    description: str | None = None,
    payload: dict[str, Any] | None = None,
    commit: bool = True,
) -> AuditEvent:
    """Persist an audit event and return it.

    With ``commit=False`` the event joins the caller's pending transaction.
    """
    event = AuditEvent(
        client_id=client_id,
        event_type=event_type,
        description=description,
        payload=payload,
    )
    session.add(event)
    if commit:
        await session.commit()
        await session.refresh(event)
    return event
