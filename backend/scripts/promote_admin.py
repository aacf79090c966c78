"""Grant or revoke the admin role for a registered client."""

from __future__ import annotations

import argparse
import asyncio

from petcode.core.config import get_settings
from petcode.db.session import get_sessionmaker
from petcode.models.client import ClientRole
from petcode.services import client_service
from petcode.services.errors import NotFoundError


async def promote(email: str, *, role: ClientRole) -> int:
    settings = get_settings()
    sessionmaker = get_sessionmaker(settings.database_url)
    async with sessionmaker() as session:
        try:
            client = await client_service.set_client_role(
                session, email=email, role=role
            )
        except NotFoundError as exc:
            print(exc)
            return 1
    print(f"{client.email} is now {client.role.value}")
    return 0


def main() -> None:
    parser = argparse.ArgumentParser(description="Change a client's role")
    parser.add_argument("email", help="Email the client signed in with")
    parser.add_argument(
        "--revoke", action="store_true", help="Demote the client back to user"
    )
    args = parser.parse_args()
    role = ClientRole.USER if args.revoke else ClientRole.ADMIN
    raise SystemExit(asyncio.run(promote(args.email, role=role)))


if __name__ == "__main__":
    main()
