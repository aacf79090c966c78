"""Role helper for explicit authorization checks."""

from __future__ import annotations

from fastapi import HTTPException, status

from petcode.models.client import Client


def require_admin(client: Client) -> None:
    """Raise HTTP 403 unless the client is an administrator."""

    if not client.is_admin:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Insufficient permissions",
        )


__all__ = ["require_admin"]
