"""Service layer exports."""
from petcode.services import (
    audit_service,
    client_service,
    migration_service,
    order_service,
    pet_service,
    public_profile_service,
    slug_service,
)

__all__ = [
    "audit_service",
    "client_service",
    "migration_service",
    "order_service",
    "pet_service",
    "public_profile_service",
    "slug_service",
]
