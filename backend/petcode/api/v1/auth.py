"""Session endpoints.

Sign-in itself happens at the external identity provider; these routes turn a
verified identity into a client record.
"""

from __future__ import annotations

from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, status

from petcode.api.deps import get_context, get_current_client
from petcode.api.rate_limits import DEFAULT_RATE_DEP
from petcode.core.context import AppContext
from petcode.integrations import DevIdentityProvider
from petcode.models.client import Client
from petcode.schemas.auth import DevTokenRequest, SessionRead, Token
from petcode.schemas.client import ClientRead

router = APIRouter()


@router.post(
    "/session",
    response_model=SessionRead,
    summary="Start or restore a session",
    dependencies=[DEFAULT_RATE_DEP],
)
async def start_session(
    context: Annotated[AppContext, Depends(get_context)],
    current_client: Annotated[Client, Depends(get_current_client)],
) -> SessionRead:
    """Return the caller's client, creating an empty profile on first sign-in."""
    return SessionRead(
        client=ClientRead.model_validate(current_client),
        identity_provider=context.identity.name,
    )


@router.post(
    "/dev-token",
    response_model=Token,
    summary="Issue a development identity token",
    dependencies=[DEFAULT_RATE_DEP],
)
async def issue_dev_token(
    payload: DevTokenRequest,
    context: Annotated[AppContext, Depends(get_context)],
) -> Token:
    """Mint a token for any identity. Only available with the dev provider."""
    provider = context.identity
    if not isinstance(provider, DevIdentityProvider):
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Not Found")
    token = provider.issue(
        payload.subject,
        email=str(payload.email),
        display_name=payload.display_name,
    )
    return Token(access_token=token)
