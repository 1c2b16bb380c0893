"""
Payload validation.

Runs raw request payloads through the pydantic schemas and reports
every violated constraint at once as a list of ``{"field", "message"}``
items wrapped in ``RecordValidationError``.  Required fields get the
same human-readable messages the registration form shows.
"""

from typing import Any, Dict, List, Optional, Type, TypeVar

from pydantic import BaseModel, ValidationError

from ..core.errors import RecordValidationError

M = TypeVar("M", bound=BaseModel)

FIELD_MESSAGES = {
    "firstName": "First name is required",
    "lastName": "Last name is required",
    "email": "Valid email is required",
    "affiliation": "Affiliation is required",
    "country": "Country is required",
    "registrationType": "Invalid registration type",
    "key": "Key is required",
    "content": "Content is required",
    "name": "Name is required",
    "status": "Invalid status",
    "password": "Password is required",
}


def _field_name(loc: tuple) -> str:
    return ".".join(str(part) for part in loc) or "body"


def collect_errors(exc: ValidationError) -> List[Dict[str, str]]:
    """Convert a pydantic ``ValidationError`` into field error items.

    Only the first error per field is kept; pydantic may report
    several for one field (e.g. every member of a union).
    """
    errors: List[Dict[str, str]] = []
    seen = set()
    for err in exc.errors():
        field = _field_name(err.get("loc", ()))
        if field in seen:
            continue
        seen.add(field)
        errors.append({"field": field, "message": FIELD_MESSAGES.get(field, err.get("msg", "Invalid value"))})
    return errors


def _require_object(payload: Any) -> Dict[str, Any]:
    if not isinstance(payload, dict):
        raise RecordValidationError([{"field": "body", "message": "Expected a JSON object"}])
    return payload


def validate_payload(model: Type[M], payload: Any) -> M:
    """Validate ``payload`` against ``model`` and return the model instance.

    Raises
    ------
    RecordValidationError
        With one item per invalid field if validation fails.
    """
    try:
        return model.model_validate(_require_object(payload))
    except ValidationError as exc:
        raise RecordValidationError(collect_errors(exc)) from exc


def to_document(instance: BaseModel, exclude_unset: bool = False) -> Dict[str, Any]:
    """Dump a validated model as a camelCase JSON-compatible dict."""
    return instance.model_dump(by_alias=True, exclude_unset=exclude_unset, mode="json")


def validate_patch(model: Type[BaseModel], payload: Any, full_model: Optional[Type[BaseModel]] = None) -> Dict[str, Any]:
    """Validate a partial update and return only the fields that were sent.

    When ``full_model`` is given, sending ``null`` for one of its fields
    that does not default to ``None`` is rejected, so a patch cannot
    blank out a required field or a flag.
    """
    patch = to_document(validate_payload(model, payload), exclude_unset=True)
    if full_model is None:
        return patch
    errors = []
    for name, info in full_model.model_fields.items():
        alias = info.alias or name
        if alias in patch and patch[alias] is None and info.default is not None:
            errors.append({"field": alias, "message": FIELD_MESSAGES.get(alias, "Field cannot be null")})
    if errors:
        raise RecordValidationError(errors)
    return patch
