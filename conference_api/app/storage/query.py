"""
In-process evaluation of ``QuerySpec`` objects.

Backends that cannot delegate filtering to a database engine (the
JSON file store, and the SQLite store for ordering) use these pure
functions.  None of them mutate their input.
"""

from typing import Any, Dict, Iterable, List

from .base import QuerySpec, Record, SortSpec


def matches(record: Record, filters: Dict[str, Any]) -> bool:
    """True if every filtered field of ``record`` equals the filter value."""
    for name, expected in filters.items():
        actual = record.get(name)
        # Keep True from matching 1 and False from matching 0.
        if isinstance(expected, bool) or isinstance(actual, bool):
            if actual is not expected:
                return False
        elif actual != expected:
            return False
    return True


def sort_records(records: Iterable[Record], sort: SortSpec) -> List[Record]:
    """Stable multi-key sort; records missing a key go last for that key."""
    result = list(records)
    for name, direction in reversed(sort):
        present = [r for r in result if r.get(name) is not None]
        missing = [r for r in result if r.get(name) is None]
        present.sort(key=lambda r: r[name], reverse=direction < 0)
        result = present + missing
    return result


def apply_query(records: Iterable[Record], query: QuerySpec) -> List[Record]:
    """Filter, sort and slice ``records`` according to ``query``."""
    selected = [r for r in records if matches(r, query.filters)]
    if query.sort:
        selected = sort_records(selected, query.sort)
    start = max(query.skip, 0)
    if query.limit is None:
        return selected[start:]
    return selected[start:start + query.limit]
