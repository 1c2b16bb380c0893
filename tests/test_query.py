import pytest

from conference_api.app.core.errors import RecordValidationError
from conference_api.app.services.query import build_filters, build_query, paginate
from conference_api.app.storage.base import ASCENDING, DESCENDING, QuerySpec
from conference_api.app.storage.query import apply_query, matches, sort_records


RECORDS = [
    {"id": "a", "name": "Chen", "order": 2, "isPublished": True, "category": "home"},
    {"id": "b", "name": "Abe", "order": 1, "isPublished": False, "category": "venue"},
    {"id": "c", "name": "Baker", "order": 1, "isPublished": True, "category": "home"},
    {"id": "d", "name": "Diaz", "isPublished": True, "category": "home"},
]


def test_matches_requires_every_filter():
    assert matches(RECORDS[0], {"category": "home", "isPublished": True})
    assert not matches(RECORDS[1], {"category": "home", "isPublished": True})
    assert matches(RECORDS[0], {})


def test_matches_does_not_confuse_booleans_and_integers():
    assert not matches({"order": 1}, {"order": True})
    assert not matches({"isPublished": True}, {"isPublished": 1})
    assert not matches({"order": 0}, {"order": False})


def test_sort_records_multiple_keys_with_missing_values_last():
    ordered = sort_records(RECORDS, [("order", ASCENDING), ("name", ASCENDING)])
    assert [r["id"] for r in ordered] == ["b", "c", "a", "d"]


def test_sort_records_descending_keeps_missing_last():
    ordered = sort_records(RECORDS, [("order", DESCENDING)])
    assert [r["id"] for r in ordered] == ["a", "b", "c", "d"]


def test_sort_records_does_not_mutate_input():
    snapshot = [r["id"] for r in RECORDS]
    sort_records(RECORDS, [("name", ASCENDING)])
    assert [r["id"] for r in RECORDS] == snapshot


def test_apply_query_filters_sorts_and_slices():
    query = QuerySpec(filters={"isPublished": True}, sort=[("name", ASCENDING)], skip=1, limit=1)
    assert [r["id"] for r in apply_query(RECORDS, query)] == ["a"]


def test_apply_query_skip_past_end_is_empty():
    assert apply_query(RECORDS, QuerySpec(skip=10)) == []


def test_build_filters_public_always_restricts_to_published():
    filters = build_filters("content", {"category": "home", "isPublished": False}, public=True)
    assert filters == {"category": "home", "isPublished": True}


def test_build_filters_drops_empty_values():
    assert build_filters("content", {"category": "", "key": None}) == {}


def test_build_filters_rejects_undeclared_fields():
    with pytest.raises(RecordValidationError) as excinfo:
        build_filters("content", {"passwordHash": "x"})
    assert excinfo.value.errors[0]["field"] == "passwordHash"


def test_build_query_uses_collection_default_sort():
    query = build_query("speakers", {"talkType": "invited"}, public=True)
    assert query.filters == {"talkType": "invited", "isPublished": True}
    assert query.sort == [("order", ASCENDING), ("name", ASCENDING)]


def test_paginate_last_partial_page(store):
    for index in range(45):
        store.insert("registrations", {"email": f"person{index}@example.org", "status": "pending", "submittedAt": f"2025-01-01T00:00:{index:02d}.000Z"})
    page = paginate(store, "registrations", page=3, limit=20)
    assert page.total == 45
    assert page.total_pages == 3
    assert len(page.items) == 5
    # Newest first: the last page holds the five oldest submissions.
    assert page.items[-1]["email"] == "person0@example.org"


def test_paginate_beyond_last_page_is_empty(store):
    store.insert("registrations", {"email": "solo@example.org", "status": "pending"})
    page = paginate(store, "registrations", page=5, limit=20)
    assert page.items == []
    assert page.total == 1
    assert page.total_pages == 1


@pytest.mark.parametrize("page,limit", [(0, 20), (1, 0)])
def test_paginate_rejects_non_positive_bounds(store, page, limit):
    with pytest.raises(RecordValidationError):
        paginate(store, "registrations", page=page, limit=limit)
