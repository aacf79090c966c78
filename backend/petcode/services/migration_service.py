"""One-off data backfills for pet profiles."""

from __future__ import annotations

import logging

from sqlalchemy import or_, select, update
from sqlalchemy.ext.asyncio import AsyncSession

from petcode.models.mixins import utcnow
from petcode.models.pet_profile import PetProfile
from petcode.models.qr_order import QROrder
from petcode.services import audit_service
from petcode.services.slug_service import (
    PROFILE_SLUG_LENGTH,
    allocate_public_slug,
    is_legacy_slug,
)

logger = logging.getLogger(__name__)


async def migrate_pet_defaults(session: AsyncSession) -> int:
    """Fill ``is_lost``/``owner_message`` on profiles created before they existed."""
    result = await session.execute(
        select(PetProfile).where(
            or_(PetProfile.is_lost.is_(None), PetProfile.owner_message.is_(None))
        )
    )
    pets = list(result.scalars().all())
    for pet in pets:
        if pet.is_lost is None:
            pet.is_lost = False
        if pet.owner_message is None:
            pet.owner_message = ""
        pet.updated_at = utcnow()
    if pets:
        await audit_service.record_event(
            session,
            event_type="migration.pet_defaults",
            payload={"updated": len(pets)},
            commit=False,
        )
    await session.commit()
    logger.info("Backfilled lost-flag defaults on %s pet(s)", len(pets))
    return len(pets)


async def migrate_legacy_slugs(
    session: AsyncSession,
    *,
    slug_length: int = PROFILE_SLUG_LENGTH,
    slug_attempts: int = 5,
) -> int:
    """Replace name-derived slugs with random ones, keeping orders in step."""
    result = await session.execute(select(PetProfile))
    migrated = 0
    for pet in result.scalars().all():
        if not is_legacy_slug(pet.profile_url, pet.pet_name):
            continue
        new_slug = await allocate_public_slug(
            session, length=slug_length, max_attempts=slug_attempts
        )
        pet.profile_url = new_slug
        pet.updated_at = utcnow()
        await session.execute(
            update(QROrder)
            .where(QROrder.pet_profile_id == pet.id)
            .values(profile_url=new_slug, updated_at=utcnow())
            .execution_options(synchronize_session="evaluate")
        )
        migrated += 1
    if migrated:
        await audit_service.record_event(
            session,
            event_type="migration.legacy_slugs",
            payload={"updated": migrated},
            commit=False,
        )
    await session.commit()
    logger.info("Replaced %s legacy public slug(s)", migrated)
    return migrated
