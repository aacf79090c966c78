"""Client (owner) service helpers."""
from __future__ import annotations

import logging

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from petcode.integrations import IdentityClaims
from petcode.models.client import Client, ClientRole
from petcode.services.errors import NotFoundError

logger = logging.getLogger(__name__)


def _split_display_name(display_name: str) -> tuple[str, str]:
    first, _, last = display_name.strip().partition(" ")
    # Token claims are not length checked; keep them within the name columns.
    return first[:120], last.strip()[:120]


async def get_client_by_user_id(session: AsyncSession, user_id: str) -> Client | None:
    """Return the client linked to an identity subject, if any."""
    result = await session.execute(select(Client).where(Client.user_id == user_id))
    return result.scalar_one_or_none()


async def get_client_by_email(session: AsyncSession, email: str) -> Client | None:
    result = await session.execute(
        select(Client).where(Client.email == email.strip().lower())
    )
    return result.scalars().first()


async def get_or_create_client(
    session: AsyncSession, claims: IdentityClaims
) -> Client:
    """Return the caller's client, creating it on first sign-in."""
    existing = await get_client_by_user_id(session, claims.subject)
    if existing is not None:
        return existing

    first_name, last_name = _split_display_name(claims.display_name)
    client = Client(
        user_id=claims.subject,
        email=claims.email.strip().lower(),
        first_name=first_name,
        last_name=last_name,
        role=ClientRole.USER,
    )
    session.add(client)
    try:
        await session.commit()
    except IntegrityError:
        # A concurrent sign-in for the same subject won the insert.
        await session.rollback()
        existing = await get_client_by_user_id(session, claims.subject)
        if existing is None:
            raise
        return existing
    await session.refresh(client)
    logger.info("Created client %s for identity subject", client.id)
    return client


async def update_client(
    session: AsyncSession,
    *,
    client: Client,
    first_name: str | None = None,
    last_name: str | None = None,
    email: str | None = None,
    phone: str | None = None,
    address: str | None = None,
    city: str | None = None,
    postal_code: str | None = None,
    country: str | None = None,
) -> Client:
    """Apply profile changes to a client. Existing order snapshots are untouched."""
    if first_name is not None:
        client.first_name = first_name
    if last_name is not None:
        client.last_name = last_name
    if email is not None:
        client.email = email.lower()
    if phone is not None:
        client.phone = phone
    if address is not None:
        client.address = address
    if city is not None:
        client.city = city
    if postal_code is not None:
        client.postal_code = postal_code
    if country is not None:
        client.country = country

    session.add(client)
    try:
        await session.commit()
    except IntegrityError:
        await session.rollback()
        raise
    await session.refresh(client)
    return client


async def set_client_role(
    session: AsyncSession, *, email: str, role: ClientRole
) -> Client:
    """Change the role of the client registered with ``email``."""
    client = await get_client_by_email(session, email)
    if client is None:
        raise NotFoundError(f"No client registered with {email}")
    client.role = role
    await session.commit()
    await session.refresh(client)
    return client
