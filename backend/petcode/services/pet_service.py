"""Pet profile lifecycle service helpers."""

from __future__ import annotations

import logging
import uuid

from sqlalchemy import select, update
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from petcode.models.client import Client
from petcode.models.mixins import utcnow
from petcode.models.pet_profile import PetProfile
from petcode.models.qr_order import OrderStatus, QROrder
from petcode.services import audit_service
from petcode.services.errors import NotFoundError, ProfileIncompleteError
from petcode.services.listing import fetch_newest_first
from petcode.services.photo_service import PhotoStorage, try_upload_pet_photo
from petcode.services.slug_service import PROFILE_SLUG_LENGTH, allocate_public_slug

logger = logging.getLogger(__name__)


async def list_client_pets(
    session: AsyncSession, *, client_id: uuid.UUID
) -> list[PetProfile]:
    """Return a client's pets, newest first."""
    stmt = select(PetProfile).where(PetProfile.client_id == client_id)
    return await fetch_newest_first(session, stmt, PetProfile)


async def get_client_pet(
    session: AsyncSession, *, client_id: uuid.UUID, pet_id: uuid.UUID
) -> PetProfile:
    """Return a pet owned by the client or raise ``NotFoundError``."""
    pet = await session.get(PetProfile, pet_id)
    if pet is None or pet.client_id != client_id:
        raise NotFoundError("Pet not found")
    return pet


def _order_for(client: Client, pet: PetProfile) -> QROrder:
    return QROrder(
        client_id=client.id,
        pet_profile_id=pet.id,
        client_email=client.email,
        client_first_name=client.first_name,
        client_last_name=client.last_name,
        client_phone=client.phone,
        client_address=client.address,
        client_city=client.city,
        client_postal_code=client.postal_code,
        client_country=client.country,
        pet_name=pet.pet_name,
        profile_url=pet.profile_url,
        status=OrderStatus.PENDIENTE,
    )


async def create_pet_profile(
    session: AsyncSession,
    *,
    client: Client,
    pet_name: str,
    breed: str,
    age: str,
    vaccinations: str,
    observations: str = "",
    photo_data: bytes | None = None,
    photo_content_type: str | None = None,
    photos: PhotoStorage | None = None,
    slug_length: int = PROFILE_SLUG_LENGTH,
    slug_attempts: int = 5,
) -> tuple[PetProfile, QROrder]:
    """Register a pet and its QR order in a single transaction.

    The photo is optional and best effort: a failed upload leaves both photo
    fields empty instead of aborting the registration.
    """
    if not client.is_profile_complete:
        raise ProfileIncompleteError(
            "Complete your contact and shipping details before adding a pet"
        )

    uploaded = try_upload_pet_photo(
        photos, photo_data, photo_content_type, client_id=client.id
    )
    slug = await allocate_public_slug(
        session, length=slug_length, max_attempts=slug_attempts
    )

    pet = PetProfile(
        id=uuid.uuid4(),
        client_id=client.id,
        pet_name=pet_name,
        breed=breed,
        age=age,
        vaccinations=vaccinations,
        observations=observations,
        photo=uploaded.url if uploaded else "",
        photo_optimized=uploaded.optimized_url if uploaded else "",
        profile_url=slug,
        is_active=True,
        is_lost=False,
        owner_message="",
    )
    order = _order_for(client, pet)
    session.add_all([pet, order])
    try:
        await session.commit()
    except IntegrityError:
        await session.rollback()
        raise
    await session.refresh(pet)
    await session.refresh(order)
    logger.info("Registered pet %s with QR order %s", pet.id, order.id)
    return pet, order


async def propagate_pet_name(
    session: AsyncSession, *, pet_id: uuid.UUID, pet_name: str
) -> int:
    """Copy ``pet_name`` onto every order of the pet whose copy differs.

    Returns the number of orders rewritten; zero when already in sync. Does
    not commit.
    """
    result = await session.execute(
        update(QROrder)
        .where(QROrder.pet_profile_id == pet_id, QROrder.pet_name != pet_name)
        .values(pet_name=pet_name, updated_at=utcnow())
        .execution_options(synchronize_session="evaluate")
    )
    return result.rowcount or 0


async def update_pet_profile(
    session: AsyncSession,
    *,
    pet: PetProfile,
    pet_name: str | None = None,
    breed: str | None = None,
    age: str | None = None,
    vaccinations: str | None = None,
    observations: str | None = None,
    owner_message: str | None = None,
    photo_data: bytes | None = None,
    photo_content_type: str | None = None,
    photos: PhotoStorage | None = None,
) -> PetProfile:
    """Apply a partial update; a name change is propagated to the pet's orders."""
    uploaded = try_upload_pet_photo(
        photos, photo_data, photo_content_type, client_id=pet.client_id
    )
    if uploaded is not None:
        pet.photo = uploaded.url
        pet.photo_optimized = uploaded.optimized_url

    if pet_name is not None:
        pet.pet_name = pet_name
    if breed is not None:
        pet.breed = breed
    if age is not None:
        pet.age = age
    if vaccinations is not None:
        pet.vaccinations = vaccinations
    if observations is not None:
        pet.observations = observations
    if owner_message is not None:
        pet.owner_message = owner_message
    pet.updated_at = utcnow()

    session.add(pet)
    try:
        if pet_name is not None:
            synced = await propagate_pet_name(
                session, pet_id=pet.id, pet_name=pet_name
            )
            if synced:
                logger.info("Renamed pet %s on %s QR order(s)", pet.id, synced)
        await session.commit()
    except IntegrityError:
        await session.rollback()
        raise
    await session.refresh(pet)
    return pet


async def set_lost_status(
    session: AsyncSession, *, pet: PetProfile, is_lost: bool
) -> PetProfile:
    """Flag a pet as lost or back home. The owner message is left as is."""
    pet.is_lost = is_lost
    pet.updated_at = utcnow()
    session.add(pet)
    await audit_service.record_event(
        session,
        event_type="pet.lost" if is_lost else "pet.found",
        client_id=pet.client_id,
        payload={"pet_id": str(pet.id)},
        commit=False,
    )
    await session.commit()
    await session.refresh(pet)
    return pet


async def set_owner_message(
    session: AsyncSession, *, pet: PetProfile, owner_message: str
) -> PetProfile:
    """Store the free-text message shown on the public page while lost."""
    pet.owner_message = owner_message
    pet.updated_at = utcnow()
    session.add(pet)
    await session.commit()
    await session.refresh(pet)
    return pet
