"""Test fixtures for the PetCode backend."""
from __future__ import annotations

import os
import tempfile
from collections.abc import AsyncIterator
from pathlib import Path
from typing import Any

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import create_async_engine

os.environ.setdefault("SECRET_KEY", "test-secret-key")
os.environ.setdefault("DATABASE_URL", "sqlite+aiosqlite:///./test.db")
os.environ["IDENTITY_PROVIDER"] = "dev"
os.environ["S3_BUCKET"] = "petcode-test"
os.environ.setdefault("S3_STORAGE_ROOT", tempfile.mkdtemp(prefix="petcode-storage-"))
os.environ.pop("REDIS_URL", None)

from petcode.core.config import Settings, get_settings
from petcode.db.base import Base
from petcode.db.session import dispose_engine
from petcode.integrations import DevIdentityProvider
from petcode.main import create_app
from petcode.models import ClientRole
from petcode.services import client_service

COMPLETE_PROFILE = {
    "first_name": "Lucia",
    "last_name": "Fernandez",
    "phone": "+34 600 123 456",
    "address": "Calle Mayor 1",
    "city": "Madrid",
    "postal_code": "28013",
    "country": "España",
}


@pytest.fixture(scope="session")
def db_url(tmp_path_factory: pytest.TempPathFactory) -> str:
    """Provide a temporary SQLite database URL for the test session."""
    db_path = tmp_path_factory.mktemp("db") / "test.db"
    return f"sqlite+aiosqlite:///{db_path}"


@pytest_asyncio.fixture()
async def reset_database(
    db_url: str, tmp_path: Path
) -> AsyncIterator[Settings]:
    """Drop and recreate the database schema for an isolated test."""
    os.environ["DATABASE_URL"] = db_url
    os.environ["S3_STORAGE_ROOT"] = str(tmp_path / "storage")
    get_settings.cache_clear()
    settings = get_settings()

    await dispose_engine(db_url)
    engine = create_async_engine(db_url, future=True)
    async with engine.begin() as connection:
        await connection.run_sync(Base.metadata.drop_all)
        await connection.run_sync(Base.metadata.create_all)
    await engine.dispose()
    yield settings
    await dispose_engine(db_url)


@pytest_asyncio.fixture()
async def app_context(reset_database: Settings) -> AsyncIterator[dict[str, Any]]:
    """Yield an async client plus helpers to sign owners and admins in."""
    app = create_app(reset_database)
    context = app.state.context
    identity = context.identity
    assert isinstance(identity, DevIdentityProvider)

    def auth_headers(
        subject: str, *, email: str = "", display_name: str = ""
    ) -> dict[str, str]:
        token = identity.issue(subject, email=email, display_name=display_name)
        return {"Authorization": f"Bearer {token}"}

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://test") as client:

        async def sign_in(
            subject: str = "owner-1",
            *,
            email: str = "owner@example.com",
            complete: bool = True,
            profile: dict[str, str] | None = None,
        ) -> dict[str, str]:
            headers = auth_headers(subject, email=email, display_name="Lucia Fernandez")
            response = await client.post("/api/v1/auth/session", headers=headers)
            assert response.status_code == 200, response.text
            if complete:
                response = await client.put(
                    "/api/v1/clients/me",
                    json=profile or COMPLETE_PROFILE,
                    headers=headers,
                )
                assert response.status_code == 200, response.text
            return headers

        async def sign_in_admin(
            subject: str = "admin-1", *, email: str = "admin@example.com"
        ) -> dict[str, str]:
            headers = await sign_in(subject, email=email)
            async with context.sessionmaker() as session:
                await client_service.set_client_role(
                    session, email=email, role=ClientRole.ADMIN
                )
            return headers

        async def register_pet(
            headers: dict[str, str], pet_name: str = "Rex", **fields: Any
        ) -> dict[str, Any]:
            form = {
                "pet_name": pet_name,
                "breed": "Labrador",
                "age": "3",
                "vaccinations": "Rabia 2024",
                "observations": "Alérgico al pollo",
            }
            form.update(fields)
            response = await client.post("/api/v1/pets", data=form, headers=headers)
            assert response.status_code == 201, response.text
            return response.json()

        yield {
            "app": app,
            "client": client,
            "context": context,
            "settings": reset_database,
            "sessionmaker": context.sessionmaker,
            "auth_headers": auth_headers,
            "sign_in": sign_in,
            "sign_in_admin": sign_in_admin,
            "register_pet": register_pet,
        }
