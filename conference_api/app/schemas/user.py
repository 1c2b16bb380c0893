"""
Pydantic models for administrator accounts and authentication.

Passwords only ever appear in ``LoginRequest``; stored users carry a
salted ``password_hash`` which is never included in API responses.
"""

from typing import Annotated, Literal

from pydantic import BaseModel, BeforeValidator

from .common import CamelModel, Email, normalize_email


UserRole = Literal["admin", "editor"]


class UserRecord(CamelModel):
    """Shape of a user document in the ``users`` collection."""

    email: Email
    password_hash: str
    role: UserRole = "admin"
    is_active: bool = True


class UserRead(CamelModel):
    """Schema for reading a user from the API."""

    id: str
    email: str
    role: UserRole = "admin"
    is_active: bool = True


class LoginRequest(BaseModel):
    email: Annotated[str, BeforeValidator(normalize_email)]
    password: str


class LoginResponse(BaseModel):
    access_token: str
    token_type: str = "bearer"
    user: UserRead
