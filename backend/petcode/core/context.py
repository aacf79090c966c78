"""Explicitly constructed application context.

Holds the handles every request needs (database sessions, identity
verification, photo storage). Built once per application instance and
stored on ``app.state.context``.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from petcode.core.config import Settings
from petcode.db.session import get_sessionmaker
from petcode.integrations import (
    IdentityProvider,
    S3ClientError,
    build_identity_provider,
    build_s3_client,
)
from petcode.services.photo_service import PhotoStorage

logger = logging.getLogger(__name__)


@dataclass
class AppContext:
    """Per-application collaborators."""

    settings: Settings
    sessionmaker: async_sessionmaker[AsyncSession]
    identity: IdentityProvider
    photos: PhotoStorage | None = None


def build_context(settings: Settings) -> AppContext:
    """Create the context from settings; storage is optional."""
    photos: PhotoStorage | None = None
    try:
        photos = PhotoStorage.from_settings(build_s3_client(settings), settings)
    except S3ClientError as exc:
        logger.warning("Photo storage disabled: %s", exc)
    return AppContext(
        settings=settings,
        sessionmaker=get_sessionmaker(settings.database_url),
        identity=build_identity_provider(settings),
        photos=photos,
    )
