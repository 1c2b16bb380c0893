#!/usr/bin/env python3
"""
Print a signed access token for an existing user.

Useful for scripts and integrations that call the admin API without
going through ``/api/auth/login``.  The token is signed with the
configured ``SECRET_KEY`` and must be sent as ``Authorization: Bearer <token>``.

Usage:
    python create_token.py --email admin@example.com --days 365
"""

import argparse
import asyncio
import sys

from conference_api.app.core.config import settings
from conference_api.app.core.security import create_access_token
from conference_api.app.services.user_service import UserService
from conference_api.app.storage import build_store


async def issue_token(email: str, days: int) -> str:
    store = build_store(settings)
    store.init()
    try:
        user = await UserService(store).get_by_email(email)
    finally:
        store.close()
    if user is None:
        raise SystemExit(f"No user with email {email}")
    return create_access_token(
        {"sub": user["id"], "email": user["email"]},
        secret_key=settings.secret_key,
        expires_delta=days * 24 * 60 * 60,
    )


def main(argv=None) -> int:
    parser = argparse.ArgumentParser(description="Issue an access token for a user.")
    parser.add_argument("--email", required=True, help="Email of an existing user")
    parser.add_argument("--days", type=int, default=365, help="Token lifetime in days (default: 365)")
    args = parser.parse_args(argv)
    print(asyncio.run(issue_token(args.email, args.days)))
    return 0


if __name__ == "__main__":
    sys.exit(main())
