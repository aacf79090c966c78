"""Public emergency profile projection."""

from __future__ import annotations

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession
from sqlalchemy.orm import selectinload

from petcode.models.client import Client
from petcode.models.pet_profile import PetProfile
from petcode.schemas.public import PublicProfileRead


def emergency_message_for(pet_name: str) -> str:
    return f"¡{pet_name} se perdió! Por favor contacta inmediatamente."


def project_public_profile(pet: PetProfile, owner: Client) -> PublicProfileRead:
    """Build the read-only view served to whoever scans the QR tag."""
    is_lost = bool(pet.is_lost)
    return PublicProfileRead(
        pet_name=pet.pet_name,
        breed=pet.breed,
        age=pet.age,
        photo=pet.photo_optimized or pet.photo,
        contact_phone=owner.phone,
        owner_name=owner.display_name,
        emergency_message=emergency_message_for(pet.pet_name) if is_lost else "",
        vaccinations=pet.vaccinations,
        observations=pet.observations,
        is_lost=is_lost,
        owner_message=(pet.owner_message or "") if is_lost else "",
    )


async def get_public_profile(
    session: AsyncSession, slug: str
) -> PublicProfileRead | None:
    """Resolve a slug to its public projection; ``None`` when no active pet matches."""
    result = await session.execute(
        select(PetProfile)
        .options(selectinload(PetProfile.client))
        .where(PetProfile.profile_url == slug, PetProfile.is_active.is_(True))
    )
    pet = result.scalar_one_or_none()
    if pet is None:
        return None
    return project_public_profile(pet, pet.client)
