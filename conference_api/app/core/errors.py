"""
Domain exceptions shared by the storage, service and API layers.

Services raise these; endpoint handlers translate them into HTTP
responses.  ``StorageError`` is the only one that is not handled
locally: it propagates to the application's exception handler and is
reported to clients as a generic server error.
"""

from typing import Dict, List


class ConferenceError(Exception):
    """Base class for all application errors."""


class RecordValidationError(ConferenceError):
    """A payload violated one or more field constraints.

    ``errors`` holds one ``{"field": ..., "message": ...}`` item per
    violation so that clients can display every problem at once.
    """

    def __init__(self, errors: List[Dict[str, str]]):
        self.errors = errors
        super().__init__("; ".join(f"{e['field']}: {e['message']}" for e in errors))


class DuplicateRecordError(ConferenceError):
    """A uniqueness constraint (registration email, content key) was violated."""


class RecordNotFoundError(ConferenceError):
    """The requested record does not exist."""


class StorageError(ConferenceError):
    """The backing store failed to read or write."""
