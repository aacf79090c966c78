"""Pydantic schemas for pet profiles."""

from __future__ import annotations

import uuid
from datetime import datetime
from typing import Annotated

from pydantic import BaseModel, ConfigDict, Field, StringConstraints, field_validator

from petcode.schemas.order import OrderRead

RequiredText = Annotated[
    str, StringConstraints(strip_whitespace=True, min_length=1, max_length=120)
]
OptionalText = Annotated[str, StringConstraints(strip_whitespace=True, max_length=4000)]


class PetCreate(BaseModel):
    """Pet registration form fields."""

    pet_name: RequiredText
    breed: RequiredText
    age: Annotated[str, StringConstraints(strip_whitespace=True, min_length=1, max_length=64)]
    vaccinations: Annotated[
        str, StringConstraints(strip_whitespace=True, min_length=1, max_length=4000)
    ]
    observations: OptionalText = ""


class PetUpdate(BaseModel):
    """Mutable pet fields; omitted fields are left unchanged."""

    pet_name: RequiredText | None = None
    breed: RequiredText | None = None
    age: Annotated[
        str, StringConstraints(strip_whitespace=True, min_length=1, max_length=64)
    ] | None = None
    vaccinations: OptionalText | None = None
    observations: OptionalText | None = None
    owner_message: OptionalText | None = None


class PetLostUpdate(BaseModel):
    """Lost/found toggle."""

    is_lost: bool


class PetOwnerMessageUpdate(BaseModel):
    """Message shown on the public page while the pet is lost."""

    owner_message: OptionalText


class PetRead(BaseModel):
    """Serialized pet representation for its owner."""

    id: uuid.UUID
    client_id: uuid.UUID
    pet_name: str
    breed: str
    age: str
    vaccinations: str
    observations: str
    photo: str
    photo_optimized: str
    profile_url: str
    is_active: bool
    is_lost: bool = False
    owner_message: str = ""
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(from_attributes=True)

    @field_validator("is_lost", mode="before")
    @classmethod
    def _default_lost(cls, value: bool | None) -> bool:
        return bool(value)

    @field_validator("owner_message", mode="before")
    @classmethod
    def _default_message(cls, value: str | None) -> str:
        return value or ""


class PetRegistrationRead(BaseModel):
    """A freshly registered pet together with its QR order."""

    pet: PetRead
    order: OrderRead
    public_url: str = Field(description="URL encoded in the QR tag")
