"""Schema for the public emergency profile."""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict


class PublicProfileRead(BaseModel):
    """What anyone holding the QR slug may see.

    Deliberately carries no owner email, address or internal identifiers.
    """

    pet_name: str
    breed: str
    age: str
    photo: str
    contact_phone: str
    owner_name: str
    emergency_message: str
    vaccinations: str
    observations: str
    is_lost: bool
    owner_message: str

    model_config = ConfigDict(extra="forbid")
