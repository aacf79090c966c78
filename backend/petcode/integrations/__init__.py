"""Integration shortcuts."""

from .identity import (
    DevIdentityProvider,
    IdentityClaims,
    IdentityError,
    IdentityProvider,
    JWTIdentityProvider,
    build_identity_provider,
)
from .s3_client import S3Client, S3ClientError, StoredObject, build_s3_client

__all__ = [
    "DevIdentityProvider",
    "IdentityClaims",
    "IdentityError",
    "IdentityProvider",
    "JWTIdentityProvider",
    "S3Client",
    "S3ClientError",
    "StoredObject",
    "build_identity_provider",
    "build_s3_client",
]
