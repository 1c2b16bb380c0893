"""
Record store interface.

A ``RecordStore`` persists plain ``dict`` records grouped into named
collections (``content``, ``speakers``, ``registrations``, ``users``).
Records use the camelCase field names of the public API, carry a
string ``id`` and ``createdAt``/``updatedAt`` timestamps assigned by
the store.  All backends implement the same contract so that services
never need to know which one is active.
"""

import re
import uuid
from abc import ABC, abstractmethod
from contextlib import contextmanager
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Any, Dict, Iterator, List, Optional, Tuple, Type

from ..core.errors import StorageError


Record = Dict[str, Any]
SortSpec = List[Tuple[str, int]]

ASCENDING = 1
DESCENDING = -1

# Server-managed fields that a patch is never allowed to overwrite.
PROTECTED_FIELDS = frozenset({"id", "_id", "createdAt"})

_NAME_RE = re.compile(r"^[A-Za-z_][A-Za-z0-9_]*$")


@dataclass
class QuerySpec:
    """Equality filters, ordering and slicing applied by ``find``.

    ``sort`` is a list of ``(field, direction)`` pairs where direction
    is ``ASCENDING`` or ``DESCENDING``; the first pair is the primary
    key.  ``limit`` of ``None`` means no limit.
    """

    filters: Dict[str, Any] = field(default_factory=dict)
    sort: SortSpec = field(default_factory=list)
    skip: int = 0
    limit: Optional[int] = None


def utc_now() -> str:
    """Current UTC time as an ISO‑8601 string with millisecond precision."""
    return datetime.now(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z")


def new_id() -> str:
    return uuid.uuid4().hex


def check_name(name: str) -> str:
    """Reject collection and field names that are not plain identifiers.

    Names end up in file paths and SQL JSON paths, so anything other
    than letters, digits and underscores is refused.
    """
    if not _NAME_RE.match(name):
        raise ValueError(f"Invalid name: {name!r}")
    return name


@contextmanager
def storage_errors(action: str, *exc_types: Type[BaseException]) -> Iterator[None]:
    """Re-raise backend exceptions of ``exc_types`` as ``StorageError``."""
    try:
        yield
    except exc_types as exc:
        raise StorageError(f"{action} failed: {exc}") from exc


class RecordStore(ABC):
    """Abstract persistence interface shared by all backends."""

    #: Short backend name reported by the health endpoint.
    name = "abstract"

    def init(self) -> None:
        """Prepare the backend (create schema, indexes, directories)."""

    def close(self) -> None:
        """Release backend resources."""

    @abstractmethod
    def find(self, collection: str, query: Optional[QuerySpec] = None) -> List[Record]:
        """Return the records matching ``query`` in order.

        An empty result is an empty list, never an error.
        """

    @abstractmethod
    def find_one(self, collection: str, filters: Dict[str, Any]) -> Optional[Record]:
        """Return the first record whose fields equal ``filters`` or ``None``."""

    def get(self, collection: str, record_id: str) -> Optional[Record]:
        return self.find_one(collection, {"id": record_id})

    def find_one_ignore_case(self, collection: str, field_name: str, value: str) -> Optional[Record]:
        """Return the first record whose string ``field_name`` equals ``value`` ignoring case.

        Records written by older versions of the site may hold
        addresses exactly as they were typed, so uniqueness checks on
        emails go through this lookup rather than ``find_one``.
        """
        wanted = value.lower()
        for record in self.find(collection):
            stored = record.get(field_name)
            if isinstance(stored, str) and stored.lower() == wanted:
                return record
        return None

    @abstractmethod
    def insert(self, collection: str, record: Record) -> Record:
        """Store a new record and return it with ``id`` and timestamps."""

    @abstractmethod
    def update(self, collection: str, record_id: str, patch: Record) -> Optional[Record]:
        """Merge ``patch`` into a stored record.

        Returns the updated record, or ``None`` when ``record_id`` is
        unknown (in which case nothing is written).
        """

    @abstractmethod
    def delete(self, collection: str, record_id: str) -> bool:
        """Physically remove a record.  Returns ``False`` if it did not exist."""

    def count(self, collection: str, filters: Optional[Dict[str, Any]] = None) -> int:
        return len(self.find(collection, QuerySpec(filters=dict(filters or {}))))

    @staticmethod
    def _clean_patch(patch: Record) -> Record:
        return {k: v for k, v in patch.items() if k not in PROTECTED_FIELDS}

    @staticmethod
    def _new_record(record: Record) -> Record:
        now = utc_now()
        stored = {k: v for k, v in record.items() if k not in PROTECTED_FIELDS}
        stored["id"] = new_id()
        stored["createdAt"] = now
        stored["updatedAt"] = now
        return stored
