"""Pydantic schemas for client profiles."""

from __future__ import annotations

import uuid
from datetime import datetime
from typing import Annotated

from pydantic import BaseModel, ConfigDict, EmailStr, StringConstraints

from petcode.models.client import ClientRole

# Upper bounds match the column widths in models/client.py.
Name = Annotated[
    str, StringConstraints(strip_whitespace=True, min_length=1, max_length=120)
]
ShortText = Annotated[
    str, StringConstraints(strip_whitespace=True, min_length=1, max_length=32)
]
AddressText = Annotated[
    str, StringConstraints(strip_whitespace=True, min_length=1, max_length=255)
]


class ClientRead(BaseModel):
    """Serialized client representation for its owner."""

    id: uuid.UUID
    email: str
    first_name: str
    last_name: str
    phone: str
    address: str
    city: str
    postal_code: str
    country: str
    role: ClientRole
    is_profile_complete: bool
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(from_attributes=True)


class ClientUpdate(BaseModel):
    """Profile form; every contact and shipping field is required."""

    first_name: Name
    last_name: Name
    phone: ShortText
    address: AddressText
    city: Name
    postal_code: ShortText
    country: Name
    email: EmailStr | None = None
