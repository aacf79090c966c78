"""JWT helpers for identity tokens."""

from datetime import UTC, datetime, timedelta
from typing import Any

from jose import jwt


def create_identity_token(
    subject: str,
    *,
    secret: str,
    algorithm: str,
    expires_delta: timedelta,
    issuer: str | None = None,
    audience: str | None = None,
    **extra: Any,
) -> str:
    """Create a signed JWT carrying an identity subject."""
    expire = datetime.now(UTC) + expires_delta
    claims: dict[str, Any] = {"sub": subject, "exp": expire}
    if issuer:
        claims["iss"] = issuer
    if audience:
        claims["aud"] = audience
    claims.update(extra)
    return jwt.encode(claims, secret, algorithm=algorithm)


def decode_identity_token(
    token: str,
    *,
    secret: str,
    algorithm: str,
    issuer: str | None = None,
    audience: str | None = None,
) -> dict[str, Any]:
    """Decode a JWT token, raising JWTError on failure."""
    return jwt.decode(
        token,
        secret,
        algorithms=[algorithm],
        issuer=issuer,
        audience=audience,
        options={"verify_aud": audience is not None},
    )
