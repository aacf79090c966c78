"""Schema exports."""

from petcode.schemas.auth import DevTokenRequest, SessionRead, Token
from petcode.schemas.client import ClientRead, ClientUpdate
from petcode.schemas.order import (
    AdminOrderRead,
    OrderAddressUpdate,
    OrderRead,
    OrderStats,
    OrderStatusUpdate,
)
from petcode.schemas.pet import (
    PetCreate,
    PetLostUpdate,
    PetOwnerMessageUpdate,
    PetRead,
    PetRegistrationRead,
    PetUpdate,
)
from petcode.schemas.public import PublicProfileRead

__all__ = [
    "AdminOrderRead",
    "ClientRead",
    "ClientUpdate",
    "DevTokenRequest",
    "OrderAddressUpdate",
    "OrderRead",
    "OrderStats",
    "OrderStatusUpdate",
    "PetCreate",
    "PetLostUpdate",
    "PetOwnerMessageUpdate",
    "PetRead",
    "PetRegistrationRead",
    "PetUpdate",
    "PublicProfileRead",
    "SessionRead",
    "Token",
]
