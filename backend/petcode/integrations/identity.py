"""Identity provider adapters.

The registry never authenticates people itself: a provider verifies the
bearer token presented by the browser and yields a stable subject plus the
profile fields used to seed a new client record.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import timedelta
from typing import Protocol

from jose import JWTError

from petcode.core.config import Settings
from petcode.core.security import create_identity_token, decode_identity_token

logger = logging.getLogger(__name__)


class IdentityError(RuntimeError):
    """Raised when a token cannot be verified."""


@dataclass(frozen=True)
class IdentityClaims:
    """Verified identity of the caller."""

    subject: str
    email: str = ""
    display_name: str = ""


class IdentityProvider(Protocol):
    name: str

    def verify(self, token: str) -> IdentityClaims: ...


class JWTIdentityProvider:
    """Verifies HS/RS signed tokens issued by an external identity service."""

    name = "jwt"

    def __init__(
        self,
        *,
        secret: str,
        algorithm: str = "HS256",
        issuer: str | None = None,
        audience: str | None = None,
    ) -> None:
        self._secret = secret
        self._algorithm = algorithm
        self._issuer = issuer
        self._audience = audience

    def verify(self, token: str) -> IdentityClaims:
        try:
            payload = decode_identity_token(
                token,
                secret=self._secret,
                algorithm=self._algorithm,
                issuer=self._issuer,
                audience=self._audience,
            )
        except JWTError as exc:
            raise IdentityError("Invalid identity token") from exc

        subject = payload.get("sub")
        if not subject or not isinstance(subject, str):
            raise IdentityError("Identity token has no subject")
        return IdentityClaims(
            subject=subject,
            email=str(payload.get("email") or ""),
            display_name=str(payload.get("name") or ""),
        )


class DevIdentityProvider(JWTIdentityProvider):
    """Self-signing provider for local development when no identity service exists."""

    name = "dev"

    def __init__(self, *, secret: str, expire_minutes: int = 60) -> None:
        super().__init__(secret=secret, algorithm="HS256")
        self._expires = timedelta(minutes=expire_minutes)

    def issue(self, subject: str, *, email: str = "", display_name: str = "") -> str:
        logger.info("Issuing development identity token for %s", subject)
        return create_identity_token(
            subject,
            secret=self._secret,
            algorithm=self._algorithm,
            expires_delta=self._expires,
            email=email,
            name=display_name,
        )


def build_identity_provider(settings: Settings) -> IdentityProvider:
    """Return the provider selected by ``IDENTITY_PROVIDER``."""
    if settings.identity_provider == "dev":
        return DevIdentityProvider(
            secret=settings.secret_key,
            expire_minutes=settings.access_token_expire_minutes,
        )
    return JWTIdentityProvider(
        secret=settings.identity_jwt_secret,
        algorithm=settings.identity_jwt_algorithm,
        issuer=settings.identity_issuer,
        audience=settings.identity_audience,
    )
