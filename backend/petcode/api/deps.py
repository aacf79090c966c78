"""Common API dependencies."""

from __future__ import annotations

from collections.abc import AsyncGenerator
from typing import Annotated

from fastapi import Depends, HTTPException, Request, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.ext.asyncio import AsyncSession

from petcode.core.context import AppContext
from petcode.integrations import IdentityClaims, IdentityError
from petcode.models.client import Client
from petcode.security.permissions import require_admin
from petcode.services import client_service

bearer_scheme = HTTPBearer(auto_error=False)


def get_context(request: Request) -> AppContext:
    """Return the application context built by ``create_app``."""
    return request.app.state.context


async def get_db_session(
    context: Annotated[AppContext, Depends(get_context)],
) -> AsyncGenerator[AsyncSession, None]:
    """Provide an async database session."""
    async with context.sessionmaker() as session:
        yield session


async def get_identity_claims(
    context: Annotated[AppContext, Depends(get_context)],
    credentials: Annotated[
        HTTPAuthorizationCredentials | None, Depends(bearer_scheme)
    ],
) -> IdentityClaims:
    """Verify the bearer token with the configured identity provider."""
    credentials_exception = HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail="Could not validate credentials",
        headers={"WWW-Authenticate": "Bearer"},
    )
    if credentials is None or credentials.scheme.lower() != "bearer":
        raise credentials_exception
    try:
        return context.identity.verify(credentials.credentials)
    except IdentityError as exc:
        raise credentials_exception from exc


async def get_current_client(
    claims: Annotated[IdentityClaims, Depends(get_identity_claims)],
    session: Annotated[AsyncSession, Depends(get_db_session)],
) -> Client:
    """Return the caller's client record, creating it on first sign-in."""
    return await client_service.get_or_create_client(session, claims)


async def get_current_admin(
    current_client: Annotated[Client, Depends(get_current_client)],
) -> Client:
    """Ensure the caller holds the admin role."""
    require_admin(current_client)
    return current_client
