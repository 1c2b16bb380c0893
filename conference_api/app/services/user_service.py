"""
Business logic for administrator accounts.

Users live in the ``users`` collection of the active record store.
Only salted PBKDF2 hashes are stored; ``authenticate`` compares in
constant time and refuses deactivated accounts.
"""

import logging
from typing import Optional

from ..core.errors import DuplicateRecordError, RecordNotFoundError
from ..core.security import hash_password, verify_password
from ..schemas.common import normalize_email
from ..schemas.user import UserRecord
from ..storage.base import Record, RecordStore
from .validation import to_document, validate_payload

logger = logging.getLogger(__name__)

COLLECTION = "users"


class UserService:
    """Service for creating users, checking credentials and resetting passwords."""

    def __init__(self, store: RecordStore):
        self.store = store

    async def get_by_email(self, email: str) -> Optional[Record]:
        normalized = normalize_email(email)
        if not normalized:
            return None
        return self.store.find_one_ignore_case(COLLECTION, "email", normalized)

    async def create_user(self, email: str, password: str, role: str = "admin") -> Record:
        """Create a user with a hashed password.

        Raises ``DuplicateRecordError`` if the email is taken and
        ``RecordValidationError`` for an invalid email or role.
        """
        user = validate_payload(
            UserRecord,
            {"email": email, "passwordHash": hash_password(password), "role": role},
        )
        document = to_document(user)
        if await self.get_by_email(document["email"]) is not None:
            raise DuplicateRecordError("User already exists")
        record = self.store.insert(COLLECTION, document)
        logger.info("Created %s user %s", record["role"], record["email"])
        return record

    async def authenticate(self, email: str, password: str) -> Optional[Record]:
        """Return the user if the credentials are valid and the account is active."""
        user = await self.get_by_email(email)
        if user is None or not verify_password(password, user.get("passwordHash", "")):
            logger.warning("Failed login attempt for %s", email)
            return None
        if not user.get("isActive", True):
            logger.warning("Login attempt for disabled account %s", email)
            return None
        return user

    async def set_password(self, email: str, password: str) -> Record:
        user = await self.get_by_email(email)
        if user is None:
            raise RecordNotFoundError("User not found")
        return self.store.update(COLLECTION, user["id"], {"passwordHash": hash_password(password)})

    async def set_active(self, email: str, active: bool) -> Record:
        user = await self.get_by_email(email)
        if user is None:
            raise RecordNotFoundError("User not found")
        return self.store.update(COLLECTION, user["id"], {"isActive": active})

    async def upgrade_legacy_passwords(self) -> int:
        """Hash plaintext ``password`` fields left by older installations.

        The plaintext value is cleared once its hash is stored.  Returns
        the number of accounts upgraded.
        """
        upgraded = 0
        for user in self.store.find(COLLECTION):
            plaintext = user.get("password")
            if user.get("passwordHash") or not isinstance(plaintext, str) or not plaintext:
                continue
            self.store.update(COLLECTION, user["id"], {"passwordHash": hash_password(plaintext), "password": None})
            logger.warning("Replaced plaintext password of %s with a hash", user.get("email"))
            upgraded += 1
        return upgraded

    async def ensure_admin(self, email: str, password: str) -> Optional[Record]:
        """Create the configured administrator unless it already exists.

        An existing account without a usable password hash gets one
        from ``password``.  Does nothing when no password is configured.
        """
        if not password:
            return None
        existing = await self.get_by_email(email)
        if existing is not None:
            if not existing.get("passwordHash"):
                logger.warning("Admin account %s had no password hash; setting the configured password", email)
                return self.store.update(COLLECTION, existing["id"], {"passwordHash": hash_password(password)})
            return existing
        return await self.create_user(email, password, role="admin")
