"""Integration tests for pet registration and the owner side of QR orders."""

from __future__ import annotations

import uuid
from typing import Any

import pytest
from httpx import AsyncClient
from sqlalchemy import select

from petcode.models import QROrder
from petcode.services import pet_service
from petcode.services.slug_service import (
    PROFILE_SLUG_ALPHABET,
    is_legacy_slug,
    slugify_name,
)

pytestmark = pytest.mark.asyncio


async def test_registration_creates_pet_and_pending_order(
    app_context: dict[str, Any],
) -> None:
    headers = await app_context["sign_in"]()
    registered = await app_context["register_pet"](headers, "Rex")

    pet = registered["pet"]
    order = registered["order"]
    slug = pet["profile_url"]
    assert len(slug) == 12
    assert set(slug) <= set(PROFILE_SLUG_ALPHABET)
    assert pet["is_lost"] is False
    assert pet["owner_message"] == ""
    assert pet["is_active"] is True
    assert pet["photo"] == ""

    assert order["status"] == "pendiente"
    assert order["address_editable"] is True
    assert order["pet_profile_id"] == pet["id"]
    assert order["pet_name"] == "Rex"
    assert order["profile_url"] == slug
    assert order["client_email"] == "owner@example.com"
    assert order["client_first_name"] == "Lucia"
    assert order["client_postal_code"] == "28013"
    assert registered["public_url"] == f"http://localhost:5173/mascota/{slug}"


async def test_registration_requires_complete_profile(
    app_context: dict[str, Any],
) -> None:
    client: AsyncClient = app_context["client"]
    headers = await app_context["sign_in"](complete=False)

    response = await client.post(
        "/api/v1/pets",
        data={"pet_name": "Rex", "breed": "Labrador", "age": "3", "vaccinations": "Rabia"},
        headers=headers,
    )
    assert response.status_code == 409

    pets = await client.get("/api/v1/pets", headers=headers)
    assert pets.json() == []
    orders = await client.get("/api/v1/orders", headers=headers)
    assert orders.json() == []


async def test_registration_validates_required_fields(
    app_context: dict[str, Any],
) -> None:
    client: AsyncClient = app_context["client"]
    headers = await app_context["sign_in"]()

    response = await client.post(
        "/api/v1/pets",
        data={"pet_name": "  ", "breed": "Labrador", "age": "3", "vaccinations": "Rabia"},
        headers=headers,
    )
    assert response.status_code == 422

    response = await client.post(
        "/api/v1/pets",
        data={"pet_name": "Rex", "breed": "Labrador", "age": "3"},
        headers=headers,
    )
    assert response.status_code == 422


async def test_rename_reaches_order_and_lost_flag_shows_publicly(
    app_context: dict[str, Any],
) -> None:
    client: AsyncClient = app_context["client"]
    headers = await app_context["sign_in"]()
    admin_headers = await app_context["sign_in_admin"]()
    registered = await app_context["register_pet"](headers, "Rex")
    pet_id = registered["pet"]["id"]
    order_id = registered["order"]["id"]
    slug = registered["pet"]["profile_url"]

    renamed = await client.patch(
        f"/api/v1/pets/{pet_id}", data={"pet_name": "Max"}, headers=headers
    )
    assert renamed.status_code == 200
    assert renamed.json()["pet_name"] == "Max"
    assert renamed.json()["breed"] == "Labrador"
    assert renamed.json()["profile_url"] == slug

    orders = (await client.get("/api/v1/orders", headers=headers)).json()
    assert orders[0]["pet_name"] == "Max"

    printed = await client.patch(
        f"/api/v1/admin/orders/{order_id}/status",
        json={"status": "impreso"},
        headers=admin_headers,
    )
    assert printed.status_code == 200
    assert printed.json()["status"] == "impreso"

    locked = await client.put(
        f"/api/v1/orders/{order_id}/address",
        json={
            "address": "Gran Via 5",
            "city": "Madrid",
            "postal_code": "28004",
            "country": "España",
        },
        headers=headers,
    )
    assert locked.status_code == 409

    lost = await client.put(
        f"/api/v1/pets/{pet_id}/lost", json={"is_lost": True}, headers=headers
    )
    assert lost.status_code == 200
    assert lost.json()["is_lost"] is True

    public = await client.get(f"/api/v1/public/pets/{slug}")
    assert public.status_code == 200
    body = public.json()
    assert body["pet_name"] == "Max"
    assert body["is_lost"] is True
    assert body["emergency_message"] == "¡Max se perdió! Por favor contacta inmediatamente."

    reverted = await client.patch(
        f"/api/v1/admin/orders/{order_id}/status",
        json={"status": "pendiente"},
        headers=admin_headers,
    )
    assert reverted.status_code == 409
    orders = (await client.get("/api/v1/orders", headers=headers)).json()
    assert orders[0]["status"] == "impreso"
    assert orders[0]["address_editable"] is False


async def test_pending_order_address_can_change(app_context: dict[str, Any]) -> None:
    client: AsyncClient = app_context["client"]
    headers = await app_context["sign_in"]()
    registered = await app_context["register_pet"](headers)
    order_id = registered["order"]["id"]

    response = await client.put(
        f"/api/v1/orders/{order_id}/address",
        json={
            "address": "Gran Via 5",
            "city": "Madrid",
            "postal_code": "28004",
            "country": "España",
        },
        headers=headers,
    )
    assert response.status_code == 200
    assert response.json()["client_address"] == "Gran Via 5"
    assert response.json()["client_postal_code"] == "28004"
    assert response.json()["status"] == "pendiente"

    partial = await client.put(
        f"/api/v1/orders/{order_id}/address",
        json={"address": "Gran Via 6"},
        headers=headers,
    )
    assert partial.status_code == 422


async def test_owners_cannot_touch_each_others_records(
    app_context: dict[str, Any],
) -> None:
    client: AsyncClient = app_context["client"]
    owner = await app_context["sign_in"]("owner-1", email="one@example.com")
    other = await app_context["sign_in"]("owner-2", email="two@example.com")
    registered = await app_context["register_pet"](owner)
    pet_id = registered["pet"]["id"]
    order_id = registered["order"]["id"]

    assert (await client.get(f"/api/v1/pets/{pet_id}", headers=other)).status_code == 404
    response = await client.put(
        f"/api/v1/pets/{pet_id}/lost", json={"is_lost": True}, headers=other
    )
    assert response.status_code == 404
    response = await client.put(
        f"/api/v1/orders/{order_id}/address",
        json={"address": "X", "city": "Y", "postal_code": "1", "country": "Z"},
        headers=other,
    )
    assert response.status_code == 404
    assert (await client.get("/api/v1/pets", headers=other)).json() == []
    response = await client.get(f"/api/v1/pets/{uuid.uuid4()}", headers=owner)
    assert response.status_code == 404


async def test_lost_toggle_keeps_owner_message(app_context: dict[str, Any]) -> None:
    client: AsyncClient = app_context["client"]
    headers = await app_context["sign_in"]()
    registered = await app_context["register_pet"](headers, "Luna")
    pet_id = registered["pet"]["id"]

    response = await client.put(
        f"/api/v1/pets/{pet_id}/owner-message",
        json={"owner_message": "Llevaba collar rojo"},
        headers=headers,
    )
    assert response.status_code == 200

    for flag in (True, False, True):
        response = await client.put(
            f"/api/v1/pets/{pet_id}/lost", json={"is_lost": flag}, headers=headers
        )
        assert response.status_code == 200
        assert response.json()["is_lost"] is flag
        assert response.json()["owner_message"] == "Llevaba collar rojo"


async def test_name_propagation_is_idempotent_and_scoped(
    app_context: dict[str, Any],
) -> None:
    headers = await app_context["sign_in"]()
    first = await app_context["register_pet"](headers, "Rex")
    second = await app_context["register_pet"](headers, "Luna")
    first_id = uuid.UUID(first["pet"]["id"])

    async with app_context["sessionmaker"]() as session:
        assert await pet_service.propagate_pet_name(
            session, pet_id=first_id, pet_name="Rex"
        ) == 0
        assert await pet_service.propagate_pet_name(
            session, pet_id=first_id, pet_name="Max"
        ) == 1
        await session.commit()
        assert await pet_service.propagate_pet_name(
            session, pet_id=first_id, pet_name="Max"
        ) == 0

        result = await session.execute(select(QROrder))
        names = {str(order.pet_profile_id): order.pet_name for order in result.scalars()}
    assert names[first["pet"]["id"]] == "Max"
    assert names[second["pet"]["id"]] == "Luna"


async def test_update_without_name_leaves_orders(app_context: dict[str, Any]) -> None:
    client: AsyncClient = app_context["client"]
    headers = await app_context["sign_in"]()
    registered = await app_context["register_pet"](headers, "Rex")
    pet_id = registered["pet"]["id"]

    response = await client.patch(
        f"/api/v1/pets/{pet_id}",
        data={"breed": "Mestizo"},
        headers=headers,
    )
    assert response.status_code == 200
    assert response.json()["breed"] == "Mestizo"
    assert response.json()["pet_name"] == "Rex"

    orders = (await client.get("/api/v1/orders", headers=headers)).json()
    assert orders[0]["pet_name"] == "Rex"


@pytest.mark.parametrize(
    ("field", "value"),
    [
        ("postal_code", "9" * 200),
        ("city", "M" * 121),
        ("country", "E" * 121),
        ("address", "Gran Via " + "5" * 250),
    ],
)
async def test_order_address_longer_than_columns_is_rejected(
    app_context: dict[str, Any], field: str, value: str
) -> None:
    client: AsyncClient = app_context["client"]
    headers = await app_context["sign_in"]()
    registered = await app_context["register_pet"](headers)
    order_id = registered["order"]["id"]
    address = {
        "address": "Gran Via 5",
        "city": "Madrid",
        "postal_code": "28004",
        "country": "España",
    }

    response = await client.put(
        f"/api/v1/orders/{order_id}/address",
        json={**address, field: value},
        headers=headers,
    )
    assert response.status_code == 422

    orders = (await client.get("/api/v1/orders", headers=headers)).json()
    assert orders[0]["client_address"] == "Calle Mayor 1"
    assert orders[0]["client_postal_code"] == "28013"


async def test_pets_with_the_same_name_get_unrelated_slugs(
    app_context: dict[str, Any],
) -> None:
    headers = await app_context["sign_in"]()
    first = await app_context["register_pet"](headers, "Bartholomew")
    second = await app_context["register_pet"](headers, "Bartholomew")

    slugs = [first["pet"]["profile_url"], second["pet"]["profile_url"]]
    assert slugs[0] != slugs[1]
    name_part = slugify_name("Bartholomew")
    assert len(name_part) > 1
    for slug in slugs:
        assert name_part not in slug
        assert not is_legacy_slug(slug, "Bartholomew")
    assert first["order"]["profile_url"] == slugs[0]
    assert second["order"]["profile_url"] == slugs[1]
