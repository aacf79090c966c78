"""Pydantic schemas for QR orders."""

from __future__ import annotations

import uuid
from datetime import datetime
from typing import Annotated

from pydantic import BaseModel, ConfigDict, StringConstraints

from petcode.models.qr_order import OrderStatus

AddressText = Annotated[
    str, StringConstraints(strip_whitespace=True, min_length=1, max_length=255)
]
PlaceText = Annotated[
    str, StringConstraints(strip_whitespace=True, min_length=1, max_length=120)
]
PostalCode = Annotated[
    str, StringConstraints(strip_whitespace=True, min_length=1, max_length=32)
]


class OrderRead(BaseModel):
    """Serialized QR order."""

    id: uuid.UUID
    client_id: uuid.UUID
    pet_profile_id: uuid.UUID
    client_email: str
    client_first_name: str
    client_last_name: str
    client_phone: str
    client_address: str
    client_city: str
    client_postal_code: str
    client_country: str
    pet_name: str
    profile_url: str
    status: OrderStatus
    address_editable: bool
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(from_attributes=True)


class AdminOrderRead(OrderRead):
    """Order row for the fulfillment dashboard."""

    public_url: str


class OrderAddressUpdate(BaseModel):
    """Full shipping address; partial updates are not accepted."""

    address: AddressText
    city: PlaceText
    postal_code: PostalCode
    country: PlaceText


class OrderStatusUpdate(BaseModel):
    """Target status for an order."""

    status: OrderStatus


class OrderStats(BaseModel):
    """Order counts per status."""

    total: int
    pendiente: int
    impreso: int
    enviado: int
    cancelado: int
