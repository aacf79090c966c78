"""Public profile slug generation."""

from __future__ import annotations

import logging
import re
import secrets
import string

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from petcode.models.pet_profile import PetProfile
from petcode.services.errors import SlugAllocationError

logger = logging.getLogger(__name__)

PROFILE_SLUG_ALPHABET = string.ascii_lowercase + string.digits
PROFILE_SLUG_LENGTH = 12

_NON_SLUG_CHARS = re.compile(r"[^a-z0-9\s]")
_WHITESPACE = re.compile(r"\s+")


def generate_public_slug(length: int = PROFILE_SLUG_LENGTH) -> str:
    """Return a random lowercase alphanumeric token.

    The slug is the only credential guarding an owner's phone number, so it is
    drawn from ``secrets`` and never derived from pet data.
    """
    return "".join(secrets.choice(PROFILE_SLUG_ALPHABET) for _ in range(length))


def slugify_name(name: str) -> str:
    """Normalise a pet name the way name-derived slugs used to be built."""
    cleaned = _NON_SLUG_CHARS.sub("", name.lower()).strip()
    return _WHITESPACE.sub("-", cleaned)


def is_legacy_slug(slug: str, pet_name: str) -> bool:
    """Return True when ``slug`` was built from the pet name."""
    normalised = slugify_name(pet_name)
    if not normalised:
        return False
    return slug == normalised or slug.startswith(f"{normalised}-")


async def slug_exists(session: AsyncSession, slug: str) -> bool:
    result = await session.execute(
        select(PetProfile.id).where(PetProfile.profile_url == slug).limit(1)
    )
    return result.scalar_one_or_none() is not None


async def allocate_public_slug(
    session: AsyncSession,
    *,
    length: int = PROFILE_SLUG_LENGTH,
    max_attempts: int = 5,
) -> str:
    """Generate a slug that no pet profile uses yet."""
    for attempt in range(1, max_attempts + 1):
        candidate = generate_public_slug(length)
        if not await slug_exists(session, candidate):
            return candidate
        logger.warning("Public slug collision on attempt %s", attempt)
    raise SlugAllocationError("Failed to generate a unique public profile slug")
