from datetime import datetime

import pytest
from bson.objectid import ObjectId
from fastapi.testclient import TestClient
from pymongo import ASCENDING, DESCENDING
from pymongo.errors import DuplicateKeyError, ServerSelectionTimeoutError

from conference_api.app.core.errors import DuplicateRecordError, StorageError
from conference_api.app.main import create_app
from conference_api.app.storage.base import QuerySpec
from conference_api.app.storage.mongo_store import MongoRecordStore, to_mongo_filter, to_record


@pytest.fixture
def collection(mocker):
    return mocker.MagicMock()


@pytest.fixture
def mongo_store(mocker, collection):
    client = mocker.MagicMock()
    db = client.__getitem__.return_value
    db.__getitem__.return_value = collection
    return MongoRecordStore(db_name="conference_test", client=client)


def test_to_record_exposes_object_id_as_string():
    oid = ObjectId()
    assert to_record({"_id": oid, "name": "Amy"}) == {"id": str(oid), "name": "Amy"}
    assert to_record(None) is None


def test_to_mongo_filter_translates_id():
    oid = ObjectId()
    assert to_mongo_filter({"id": str(oid), "isPublished": True}) == {"_id": oid, "isPublished": True}


def test_to_mongo_filter_invalid_id_matches_nothing():
    assert to_mongo_filter({"id": "not-an-object-id"}) is None


def test_find_delegates_sort_skip_and_limit(mongo_store, collection):
    cursor = collection.find.return_value
    cursor.sort.return_value = cursor
    cursor.skip.return_value = cursor
    cursor.limit.return_value = cursor
    oid = ObjectId()
    cursor.__iter__.return_value = iter([{"_id": oid, "name": "Amy"}])

    query = QuerySpec(filters={"talkType": "invited"}, sort=[("order", 1), ("name", -1)], skip=20, limit=10)
    result = mongo_store.find("speakers", query)

    collection.find.assert_called_once_with({"talkType": "invited"})
    cursor.sort.assert_called_once_with([("order", ASCENDING), ("name", DESCENDING)])
    cursor.skip.assert_called_once_with(20)
    cursor.limit.assert_called_once_with(10)
    assert result == [{"id": str(oid), "name": "Amy"}]


def test_find_with_invalid_id_skips_the_server(mongo_store, collection):
    assert mongo_store.find("speakers", QuerySpec(filters={"id": "bogus"})) == []
    assert mongo_store.get("speakers", "bogus") is None
    collection.find.assert_not_called()
    collection.find_one.assert_not_called()


def test_insert_returns_record_with_string_id(mongo_store, collection):
    oid = ObjectId()
    collection.insert_one.return_value.inserted_id = oid
    record = mongo_store.insert("content", {"key": "welcome", "content": "Hi", "id": "forged"})
    stored = collection.insert_one.call_args.args[0]
    assert "id" not in stored
    assert record["id"] == str(oid)
    assert record["key"] == "welcome"
    assert record["createdAt"] == record["updatedAt"]


def test_insert_duplicate_key_becomes_duplicate_record_error(mongo_store, collection):
    collection.insert_one.side_effect = DuplicateKeyError("E11000 duplicate key")
    with pytest.raises(DuplicateRecordError):
        mongo_store.insert("content", {"key": "welcome", "content": "Hi"})


def test_server_errors_become_storage_errors(mongo_store, collection):
    collection.count_documents.side_effect = ServerSelectionTimeoutError("no servers")
    with pytest.raises(StorageError):
        mongo_store.count("registrations", {"status": "pending"})


def test_update_uses_set_and_protects_server_fields(mongo_store, collection):
    oid = ObjectId()
    collection.find_one_and_update.return_value = {"_id": oid, "status": "approved"}
    record = mongo_store.update("registrations", str(oid), {"status": "approved", "createdAt": "1970"})
    mongo_filter, update = collection.find_one_and_update.call_args.args
    assert mongo_filter == {"_id": oid}
    assert update["$set"]["status"] == "approved"
    assert "createdAt" not in update["$set"]
    assert "updatedAt" in update["$set"]
    assert record == {"id": str(oid), "status": "approved"}


def test_update_unknown_id_returns_none(mongo_store, collection):
    collection.find_one_and_update.return_value = None
    assert mongo_store.update("registrations", str(ObjectId()), {"status": "approved"}) is None


def test_delete_reports_whether_a_document_was_removed(mongo_store, collection):
    collection.delete_one.return_value.deleted_count = 0
    assert mongo_store.delete("content", str(ObjectId())) is False
    collection.delete_one.return_value.deleted_count = 1
    assert mongo_store.delete("content", str(ObjectId())) is True
    assert mongo_store.delete("content", "bogus") is False


def test_init_creates_unique_key_index(mongo_store, collection):
    mongo_store.init()
    collection.create_index.assert_called_once_with("key", unique=True)


def _mongoose_content(oid):
    return {
        "_id": oid,
        "key": "welcome",
        "title": "Welcome",
        "content": "<p>Hi</p>",
        "type": "html",
        "category": "home",
        "isPublished": True,
        "order": 0,
        "metadata": {"editedAt": datetime(2025, 5, 2, 8, 30)},
        "createdAt": datetime(2025, 5, 1),
        "updatedAt": datetime(2025, 5, 2, 8, 30, 15, 250000),
        "__v": 0,
    }


def test_to_record_converts_mongoose_document():
    oid = ObjectId()
    session = ObjectId()
    record = to_record({**_mongoose_content(oid), "sessionId": session, "links": [session]})
    assert record["id"] == str(oid)
    assert record["createdAt"] == "2025-05-01T00:00:00.000Z"
    assert record["updatedAt"] == "2025-05-02T08:30:15.250Z"
    assert record["metadata"] == {"editedAt": "2025-05-02T08:30:00.000Z"}
    assert record["sessionId"] == str(session)
    assert record["links"] == [str(session)]
    assert "__v" not in record
    assert "_id" not in record


def test_public_content_served_from_mongoose_documents(settings, mongo_store, collection):
    oid = ObjectId()
    cursor = collection.find.return_value
    cursor.sort.return_value = cursor
    cursor.__iter__.return_value = [_mongoose_content(oid)]
    settings.admin_password = ""

    with TestClient(create_app(settings, mongo_store)) as client:
        response = client.get("/api/content")

    assert response.status_code == 200
    body = response.json()
    assert body[0]["id"] == str(oid)
    assert body[0]["createdAt"] == "2025-05-01T00:00:00.000Z"


def test_find_one_ignore_case_uses_anchored_regex(mongo_store, collection):
    oid = ObjectId()
    collection.find_one.return_value = {"_id": oid, "email": "Ada@Example.org"}
    record = mongo_store.find_one_ignore_case("registrations", "email", "ada+test@example.org")
    collection.find_one.assert_called_once_with(
        {"email": {"$regex": r"^ada\+test@example\.org$", "$options": "i"}}
    )
    assert record == {"id": str(oid), "email": "Ada@Example.org"}
