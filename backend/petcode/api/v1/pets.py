"""Pet profile API."""

from __future__ import annotations

import uuid
from typing import Annotated

from fastapi import APIRouter, Depends, File, Form, HTTPException, UploadFile, status
from fastapi.exceptions import RequestValidationError
from pydantic import ValidationError
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from petcode.api import deps
from petcode.core.context import AppContext
from petcode.models.client import Client
from petcode.models.pet_profile import PetProfile
from petcode.schemas.order import OrderRead
from petcode.schemas.pet import (
    PetCreate,
    PetLostUpdate,
    PetOwnerMessageUpdate,
    PetRead,
    PetRegistrationRead,
    PetUpdate,
)
from petcode.services import pet_service
from petcode.services.errors import (
    NotFoundError,
    ProfileIncompleteError,
    SlugAllocationError,
)

router = APIRouter()


def _photo_limit(context: AppContext) -> int:
    if context.photos is not None:
        return context.photos.max_bytes
    return context.settings.photo_max_bytes


async def _read_photo(
    photo: UploadFile | None, limit: int
) -> tuple[bytes | None, str | None]:
    """Read at most ``limit + 1`` bytes of an upload.

    An oversized photo comes back one byte over the limit, which the photo
    store rejects as too large without the rest being buffered.
    """
    if photo is None:
        return None, None
    data = await photo.read(limit + 1)
    if not data:
        return None, None
    return data, photo.content_type


async def _owned_pet(
    session: AsyncSession, client: Client, pet_id: uuid.UUID
) -> PetProfile:
    try:
        return await pet_service.get_client_pet(
            session, client_id=client.id, pet_id=pet_id
        )
    except NotFoundError as exc:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND, detail="Pet not found"
        ) from exc


@router.get("", response_model=list[PetRead], summary="List my pets")
async def list_pets(
    session: Annotated[AsyncSession, Depends(deps.get_db_session)],
    current_client: Annotated[Client, Depends(deps.get_current_client)],
) -> list[PetRead]:
    """Return the caller's pets, newest first."""
    pets = await pet_service.list_client_pets(session, client_id=current_client.id)
    return [PetRead.model_validate(pet) for pet in pets]


@router.post(
    "",
    response_model=PetRegistrationRead,
    status_code=status.HTTP_201_CREATED,
    summary="Register pet",
)
async def create_pet(
    context: Annotated[AppContext, Depends(deps.get_context)],
    session: Annotated[AsyncSession, Depends(deps.get_db_session)],
    current_client: Annotated[Client, Depends(deps.get_current_client)],
    pet_name: Annotated[str, Form()],
    breed: Annotated[str, Form()],
    age: Annotated[str, Form()],
    vaccinations: Annotated[str, Form()],
    observations: Annotated[str, Form()] = "",
    photo: Annotated[UploadFile | None, File()] = None,
) -> PetRegistrationRead:
    """Create a pet profile and its pending QR order.

    The photo is optional; a rejected photo does not block the registration.
    """
    try:
        payload = PetCreate(
            pet_name=pet_name,
            breed=breed,
            age=age,
            vaccinations=vaccinations,
            observations=observations,
        )
    except ValidationError as exc:
        raise RequestValidationError(exc.errors()) from exc

    photo_data, photo_type = await _read_photo(photo, _photo_limit(context))
    settings = context.settings
    try:
        pet, order = await pet_service.create_pet_profile(
            session,
            client=current_client,
            **payload.model_dump(),
            photo_data=photo_data,
            photo_content_type=photo_type,
            photos=context.photos,
            slug_length=settings.profile_slug_length,
            slug_attempts=settings.profile_slug_max_attempts,
        )
    except ProfileIncompleteError as exc:
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT, detail=str(exc)
        ) from exc
    except SlugAllocationError as exc:
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE, detail=str(exc)
        ) from exc
    except IntegrityError as exc:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST, detail="Unable to create pet"
        ) from exc

    return PetRegistrationRead(
        pet=PetRead.model_validate(pet),
        order=OrderRead.model_validate(order),
        public_url=settings.public_url_for(pet.profile_url),
    )


@router.get("/{pet_id}", response_model=PetRead, summary="Get pet")
async def get_pet(
    pet_id: uuid.UUID,
    session: Annotated[AsyncSession, Depends(deps.get_db_session)],
    current_client: Annotated[Client, Depends(deps.get_current_client)],
) -> PetRead:
    pet = await _owned_pet(session, current_client, pet_id)
    return PetRead.model_validate(pet)


@router.patch("/{pet_id}", response_model=PetRead, summary="Update pet")
async def update_pet(
    pet_id: uuid.UUID,
    context: Annotated[AppContext, Depends(deps.get_context)],
    session: Annotated[AsyncSession, Depends(deps.get_db_session)],
    current_client: Annotated[Client, Depends(deps.get_current_client)],
    pet_name: Annotated[str | None, Form()] = None,
    breed: Annotated[str | None, Form()] = None,
    age: Annotated[str | None, Form()] = None,
    vaccinations: Annotated[str | None, Form()] = None,
    observations: Annotated[str | None, Form()] = None,
    owner_message: Annotated[str | None, Form()] = None,
    photo: Annotated[UploadFile | None, File()] = None,
) -> PetRead:
    """Edit a pet. A new name is copied onto the pet's QR orders."""
    try:
        payload = PetUpdate(
            pet_name=pet_name,
            breed=breed,
            age=age,
            vaccinations=vaccinations,
            observations=observations,
            owner_message=owner_message,
        )
    except ValidationError as exc:
        raise RequestValidationError(exc.errors()) from exc

    pet = await _owned_pet(session, current_client, pet_id)
    photo_data, photo_type = await _read_photo(photo, _photo_limit(context))
    try:
        pet = await pet_service.update_pet_profile(
            session,
            pet=pet,
            **payload.model_dump(),
            photo_data=photo_data,
            photo_content_type=photo_type,
            photos=context.photos,
        )
    except IntegrityError as exc:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST, detail="Unable to update pet"
        ) from exc
    return PetRead.model_validate(pet)


@router.put("/{pet_id}/lost", response_model=PetRead, summary="Mark pet lost or found")
async def set_pet_lost(
    pet_id: uuid.UUID,
    payload: PetLostUpdate,
    session: Annotated[AsyncSession, Depends(deps.get_db_session)],
    current_client: Annotated[Client, Depends(deps.get_current_client)],
) -> PetRead:
    pet = await _owned_pet(session, current_client, pet_id)
    pet = await pet_service.set_lost_status(session, pet=pet, is_lost=payload.is_lost)
    return PetRead.model_validate(pet)


@router.put(
    "/{pet_id}/owner-message",
    response_model=PetRead,
    summary="Set the message shown while lost",
)
async def set_pet_owner_message(
    pet_id: uuid.UUID,
    payload: PetOwnerMessageUpdate,
    session: Annotated[AsyncSession, Depends(deps.get_db_session)],
    current_client: Annotated[Client, Depends(deps.get_current_client)],
) -> PetRead:
    pet = await _owned_pet(session, current_client, pet_id)
    pet = await pet_service.set_owner_message(
        session, pet=pet, owner_message=payload.owner_message
    )
    return PetRead.model_validate(pet)
