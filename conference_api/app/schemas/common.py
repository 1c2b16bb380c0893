"""
Shared schema building blocks.

``CamelModel`` maps snake_case attributes to camelCase JSON keys and
accepts either form on input.  The annotated string types trim
surrounding whitespace; ``NonEmptyStr`` additionally rejects strings
that are empty after trimming.  Email types are trimmed and lowercased
before their format is checked, so uniqueness checks always compare
normalised addresses.
"""

from typing import Annotated, Any, Optional

from pydantic import BaseModel, BeforeValidator, EmailStr, StringConstraints
from pydantic.alias_generators import to_camel


def normalize_email(value: Any) -> Optional[Any]:
    """Trim and lowercase an email address.

    Empty strings become ``None`` so optional email fields can be
    cleared by sending ``""``.
    """
    if isinstance(value, str):
        value = value.strip().lower()
        return value or None
    return value


NonEmptyStr = Annotated[str, StringConstraints(strip_whitespace=True, min_length=1)]
TrimmedStr = Annotated[str, StringConstraints(strip_whitespace=True)]
Email = Annotated[EmailStr, BeforeValidator(normalize_email)]
OptionalEmail = Annotated[Optional[EmailStr], BeforeValidator(normalize_email)]


class CamelModel(BaseModel):
    model_config = {
        "alias_generator": to_camel,
        "populate_by_name": True,
    }


class RecordMeta(CamelModel):
    """Server-assigned fields present on every stored record."""

    id: str
    created_at: Optional[str] = None
    updated_at: Optional[str] = None
