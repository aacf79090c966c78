"""ORM models package export."""

from petcode.models.audit_event import AuditEvent
from petcode.models.client import Client, ClientRole
from petcode.models.pet_profile import PetProfile
from petcode.models.qr_order import OrderStatus, QROrder

__all__ = [
    "AuditEvent",
    "Client",
    "ClientRole",
    "OrderStatus",
    "PetProfile",
    "QROrder",
]
