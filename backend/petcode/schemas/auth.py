"""Authentication schemas."""

from __future__ import annotations

from pydantic import BaseModel, EmailStr, Field

from petcode.schemas.client import ClientRead


class SessionRead(BaseModel):
    """Result of a sign-in or session restoration check."""

    client: ClientRead
    identity_provider: str


class DevTokenRequest(BaseModel):
    """Identity to impersonate with the development provider."""

    subject: str = Field(min_length=1, max_length=128)
    email: EmailStr
    display_name: str = ""


class Token(BaseModel):
    """Bearer token payload."""

    access_token: str
    token_type: str = "bearer"
