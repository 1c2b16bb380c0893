"""
Query construction and pagination.

Handlers pass raw query parameters here; ``build_filters`` keeps only
the fields each collection allows filtering on, and public listings
are always restricted to published records whatever the caller asked
for.  ``paginate`` slices a filtered collection into pages.
"""

import math
from dataclasses import dataclass, field
from typing import Any, Dict, List, Mapping, Optional

from ..core.errors import RecordValidationError
from ..storage.base import ASCENDING, DESCENDING, QuerySpec, Record, RecordStore, SortSpec

DEFAULT_PAGE = 1
DEFAULT_LIMIT = 20

FILTER_FIELDS = {
    "content": {"category", "key", "type", "isPublished"},
    "speakers": {"talkType", "isKeynote", "isPublished"},
    "registrations": {"status", "registrationType", "paymentStatus"},
}

DEFAULT_SORT: Dict[str, SortSpec] = {
    "content": [("order", ASCENDING)],
    "speakers": [("order", ASCENDING), ("name", ASCENDING)],
    "registrations": [("submittedAt", DESCENDING)],
}


def build_filters(collection: str, params: Optional[Mapping[str, Any]] = None, public: bool = False) -> Dict[str, Any]:
    """Build an equality filter from request parameters.

    ``None`` and empty-string values are dropped.  Parameters that the
    collection does not declare as filterable raise
    ``RecordValidationError``.  With ``public=True`` the result always
    contains ``isPublished: True``.
    """
    allowed = FILTER_FIELDS.get(collection, set())
    filters: Dict[str, Any] = {}
    errors = []
    for name, value in (params or {}).items():
        if value is None or value == "":
            continue
        if name not in allowed:
            errors.append({"field": name, "message": "Filtering on this field is not supported"})
            continue
        filters[name] = value
    if errors:
        raise RecordValidationError(errors)
    if public:
        filters["isPublished"] = True
    return filters


def build_query(
    collection: str,
    params: Optional[Mapping[str, Any]] = None,
    public: bool = False,
    sort: Optional[SortSpec] = None,
) -> QuerySpec:
    return QuerySpec(
        filters=build_filters(collection, params, public=public),
        sort=list(sort if sort is not None else DEFAULT_SORT.get(collection, [])),
    )


@dataclass
class Page:
    items: List[Record] = field(default_factory=list)
    total: int = 0
    page: int = DEFAULT_PAGE
    limit: int = DEFAULT_LIMIT
    total_pages: int = 0


def paginate(
    store: RecordStore,
    collection: str,
    filters: Optional[Dict[str, Any]] = None,
    sort: Optional[SortSpec] = None,
    page: int = DEFAULT_PAGE,
    limit: int = DEFAULT_LIMIT,
) -> Page:
    """Return one page of a filtered, ordered collection.

    ``total_pages`` is ``ceil(total / limit)``; asking for a page past
    the end yields an empty ``items`` list rather than an error.
    """
    errors = []
    if page < 1:
        errors.append({"field": "page", "message": "Page must be at least 1"})
    if limit < 1:
        errors.append({"field": "limit", "message": "Limit must be at least 1"})
    if errors:
        raise RecordValidationError(errors)
    filters = dict(filters or {})
    total = store.count(collection, filters)
    items = store.find(
        collection,
        QuerySpec(
            filters=filters,
            sort=list(sort if sort is not None else DEFAULT_SORT.get(collection, [])),
            skip=(page - 1) * limit,
            limit=limit,
        ),
    )
    return Page(items=items, total=total, page=page, limit=limit, total_pages=math.ceil(total / limit))
