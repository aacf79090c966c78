"""Run the pet profile data backfills against the configured database."""

from __future__ import annotations

import argparse
import asyncio

from petcode.core.config import get_settings
from petcode.db.session import get_sessionmaker
from petcode.services import migration_service


async def run(*, defaults: bool, slugs: bool) -> None:
    settings = get_settings()
    sessionmaker = get_sessionmaker(settings.database_url)
    async with sessionmaker() as session:
        if defaults:
            updated = await migration_service.migrate_pet_defaults(session)
            print(f"Lost-flag defaults filled on {updated} pet(s)")
        if slugs:
            updated = await migration_service.migrate_legacy_slugs(
                session,
                slug_length=settings.profile_slug_length,
                slug_attempts=settings.profile_slug_max_attempts,
            )
            print(f"Legacy public slugs replaced on {updated} pet(s)")


def main() -> None:
    parser = argparse.ArgumentParser(description="Backfill pet profile data")
    parser.add_argument(
        "--only",
        choices=("defaults", "slugs"),
        default=None,
        help="Run a single backfill instead of both",
    )
    args = parser.parse_args()
    asyncio.run(
        run(
            defaults=args.only in (None, "defaults"),
            slugs=args.only in (None, "slugs"),
        )
    )


if __name__ == "__main__":
    main()
