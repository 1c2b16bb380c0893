"""
Translation of domain exceptions into HTTP errors.

Handlers catch ``CLIENT_ERRORS`` around service calls and re-raise
them through ``to_http_exception``.  ``StorageError`` is not part
of ``CLIENT_ERRORS``; it propagates to the application-level
handler, which logs it and answers with a generic 500.
"""

from typing import Any, Dict, List

from fastapi import HTTPException, status

from ..core.errors import (
    ConferenceError,
    DuplicateRecordError,
    RecordNotFoundError,
    RecordValidationError,
)

CLIENT_ERRORS = (RecordValidationError, DuplicateRecordError, RecordNotFoundError)


def validation_detail(errors: List[Dict[str, str]]) -> Dict[str, Any]:
    return {"message": "Validation failed", "errors": errors}


def to_http_exception(exc: ConferenceError) -> HTTPException:
    if isinstance(exc, RecordValidationError):
        return HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=validation_detail(exc.errors))
    if isinstance(exc, DuplicateRecordError):
        return HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc))
    if isinstance(exc, RecordNotFoundError):
        return HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(exc))
    return HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="Server error")
