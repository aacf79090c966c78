"""Integration tests for sign-in and the client profile."""

from __future__ import annotations

from datetime import timedelta
from typing import Any

import pytest
from httpx import AsyncClient

from petcode.core.security import create_identity_token

pytestmark = pytest.mark.asyncio

PROFILE = {
    "first_name": "Lucia",
    "last_name": "Fernandez",
    "phone": "+34 600 123 456",
    "address": "Calle Mayor 1",
    "city": "Madrid",
    "postal_code": "28013",
    "country": "España",
}


async def test_first_session_creates_empty_client(app_context: dict[str, Any]) -> None:
    client: AsyncClient = app_context["client"]
    headers = app_context["auth_headers"](
        "uid-42", email="Ana@Example.com", display_name="Ana Maria Lopez"
    )

    response = await client.post("/api/v1/auth/session", headers=headers)
    assert response.status_code == 200
    payload = response.json()
    assert payload["identity_provider"] == "dev"
    created = payload["client"]
    assert created["email"] == "ana@example.com"
    assert created["first_name"] == "Ana"
    assert created["last_name"] == "Maria Lopez"
    assert created["role"] == "user"
    assert created["phone"] == ""
    assert created["is_profile_complete"] is False

    again = await client.post("/api/v1/auth/session", headers=headers)
    assert again.status_code == 200
    assert again.json()["client"]["id"] == created["id"]


async def test_missing_or_invalid_token_is_rejected(app_context: dict[str, Any]) -> None:
    client: AsyncClient = app_context["client"]

    response = await client.get("/api/v1/clients/me")
    assert response.status_code == 401
    assert response.headers["www-authenticate"] == "Bearer"

    response = await client.get(
        "/api/v1/clients/me", headers={"Authorization": "Bearer not-a-token"}
    )
    assert response.status_code == 401

    forged = create_identity_token(
        "uid-1",
        secret="some-other-secret",
        algorithm="HS256",
        expires_delta=timedelta(minutes=5),
    )
    response = await client.get(
        "/api/v1/clients/me", headers={"Authorization": f"Bearer {forged}"}
    )
    assert response.status_code == 401


async def test_dev_token_endpoint_issues_usable_token(
    app_context: dict[str, Any],
) -> None:
    client: AsyncClient = app_context["client"]

    response = await client.post(
        "/api/v1/auth/dev-token",
        json={"subject": "dev-1", "email": "dev@example.com", "display_name": "Dev"},
    )
    assert response.status_code == 200
    token = response.json()["access_token"]
    assert response.json()["token_type"] == "bearer"

    me = await client.get(
        "/api/v1/clients/me", headers={"Authorization": f"Bearer {token}"}
    )
    assert me.status_code == 200
    assert me.json()["email"] == "dev@example.com"


async def test_dev_token_unavailable_with_jwt_provider(
    app_context: dict[str, Any],
) -> None:
    from petcode.integrations import JWTIdentityProvider

    client: AsyncClient = app_context["client"]
    app_context["context"].identity = JWTIdentityProvider(secret="test-secret-key")

    response = await client.post(
        "/api/v1/auth/dev-token",
        json={"subject": "dev-1", "email": "dev@example.com"},
    )
    assert response.status_code == 404


async def test_profile_update_requires_every_field(app_context: dict[str, Any]) -> None:
    client: AsyncClient = app_context["client"]
    sign_in = app_context["sign_in"]
    headers = await sign_in(complete=False)

    incomplete = {
        "first_name": "Lucia",
        "last_name": "Fernandez",
        "phone": "   ",
        "address": "Calle Mayor 1",
        "city": "Madrid",
        "postal_code": "28013",
        "country": "España",
    }
    response = await client.put("/api/v1/clients/me", json=incomplete, headers=headers)
    assert response.status_code == 422

    incomplete.pop("phone")
    response = await client.put("/api/v1/clients/me", json=incomplete, headers=headers)
    assert response.status_code == 422

    incomplete["phone"] = "600123456"
    response = await client.put("/api/v1/clients/me", json=incomplete, headers=headers)
    assert response.status_code == 200
    assert response.json()["is_profile_complete"] is True


async def test_profile_change_leaves_existing_order_snapshot(
    app_context: dict[str, Any],
) -> None:
    client: AsyncClient = app_context["client"]
    headers = await app_context["sign_in"]()
    registered = await app_context["register_pet"](headers)
    assert registered["order"]["client_city"] == "Madrid"

    moved = {
        "first_name": "Lucia",
        "last_name": "Fernandez",
        "phone": "+34 600 123 456",
        "address": "Avenida Diagonal 200",
        "city": "Barcelona",
        "postal_code": "08018",
        "country": "España",
    }
    response = await client.put("/api/v1/clients/me", json=moved, headers=headers)
    assert response.status_code == 200
    assert response.json()["city"] == "Barcelona"

    orders = await client.get("/api/v1/orders", headers=headers)
    assert orders.status_code == 200
    assert orders.json()[0]["client_city"] == "Madrid"
    assert orders.json()[0]["client_address"] == "Calle Mayor 1"


@pytest.mark.parametrize(
    ("field", "value"),
    [
        ("phone", "1" * 33),
        ("postal_code", "9" * 33),
        ("city", "M" * 121),
        ("address", "Calle " + "x" * 250),
    ],
)
async def test_profile_fields_longer_than_columns_are_rejected(
    app_context: dict[str, Any], field: str, value: str
) -> None:
    client: AsyncClient = app_context["client"]
    headers = await app_context["sign_in"](complete=False)

    response = await client.put(
        "/api/v1/clients/me", json={**PROFILE, field: value}, headers=headers
    )
    assert response.status_code == 422

    me = await client.get("/api/v1/clients/me", headers=headers)
    assert me.json()["is_profile_complete"] is False


async def test_long_display_name_is_clipped_to_name_columns(
    app_context: dict[str, Any],
) -> None:
    client: AsyncClient = app_context["client"]
    headers = app_context["auth_headers"](
        "uid-long", email="long@example.com", display_name=f"{'A' * 200} {'B' * 200}"
    )

    response = await client.post("/api/v1/auth/session", headers=headers)
    assert response.status_code == 200
    created = response.json()["client"]
    assert created["first_name"] == "A" * 120
    assert created["last_name"] == "B" * 120
