#!/usr/bin/env python3
"""
Reset a user's password in the configured record store.

This script DOES NOT read or reveal any existing passwords.  It stores
a new PBKDF2-HMAC-SHA256 hash (format "salthex$hashhex") for the given
email.  The store is selected by the same environment variables as the
API (``STORAGE_BACKEND``, ``DATA_DIR``, ``DATABASE_URL``, ``MONGO_URL``).

Usage:
    python reset_password.py --email admin@example.com --password "NewStrongPass!234"
    python reset_password.py --email editor@example.com --create --role editor

If --password is omitted, you will be prompted to enter it securely.
"""

import argparse
import asyncio
import getpass
import sys

from conference_api.app.core.config import settings
from conference_api.app.core.errors import ConferenceError
from conference_api.app.services.user_service import UserService
from conference_api.app.storage import build_store


async def reset(email: str, password: str, create: bool, role: str) -> str:
    store = build_store(settings)
    store.init()
    try:
        users = UserService(store)
        if await users.get_by_email(email) is None:
            if not create:
                raise SystemExit(f"No user with email {email} (use --create to add one)")
            await users.create_user(email, password, role=role)
            return "created"
        await users.set_password(email, password)
        return "updated"
    finally:
        store.close()


def main(argv=None) -> int:
    parser = argparse.ArgumentParser(description="Reset a user's password.")
    parser.add_argument("--email", required=True, help="User email")
    parser.add_argument("--password", help="New password (prompted if omitted)")
    parser.add_argument("--create", action="store_true", help="Create the user if it does not exist")
    parser.add_argument("--role", default="admin", choices=["admin", "editor"], help="Role for a created user")
    args = parser.parse_args(argv)

    password = args.password
    if not password:
        password = getpass.getpass("New password: ")
        if password != getpass.getpass("Repeat password: "):
            print("Passwords do not match", file=sys.stderr)
            return 1
    if not password:
        print("Password must not be empty", file=sys.stderr)
        return 1

    try:
        outcome = asyncio.run(reset(args.email, password, args.create, args.role))
    except ConferenceError as exc:
        print(f"Error: {exc}", file=sys.stderr)
        return 1
    print(f"Password {outcome} for {args.email}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
