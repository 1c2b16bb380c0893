"""
Document-database record store backed by MongoDB.

Each record collection maps to a MongoDB collection of the same name.
Filtering, ordering, skipping and limiting are delegated to the
server.  MongoDB's ``_id`` (an ``ObjectId``) is exposed to callers as
the string ``id`` field, so records look the same as those of the
file-based backends.  Documents written by mongoose carry BSON dates
and ``ObjectId`` references; ``to_record`` turns those into ISO-8601
strings and plain string ids.
"""

import logging
import re
from datetime import datetime, timezone
from typing import Any, Dict, List, Optional

from bson.errors import InvalidId
from bson.objectid import ObjectId
from pymongo import ASCENDING, DESCENDING, MongoClient, ReturnDocument
from pymongo.errors import DuplicateKeyError, PyMongoError

from ..core.errors import DuplicateRecordError
from .base import QuerySpec, Record, RecordStore, check_name, storage_errors, utc_now

logger = logging.getLogger(__name__)

# Unique indexes created by ``init``: collection -> field.
UNIQUE_FIELDS = {"content": "key"}


def to_plain(value: Any) -> Any:
    """Convert BSON values (dates, ObjectIds) nested in ``value`` to JSON types."""
    if isinstance(value, ObjectId):
        return str(value)
    if isinstance(value, datetime):
        # pymongo returns naive datetimes that are in UTC.
        if value.tzinfo is None:
            value = value.replace(tzinfo=timezone.utc)
        return value.astimezone(timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z")
    if isinstance(value, dict):
        return {k: to_plain(v) for k, v in value.items()}
    if isinstance(value, list):
        return [to_plain(v) for v in value]
    return value


def to_record(doc: Optional[Dict[str, Any]]) -> Optional[Record]:
    """Convert a MongoDB document into an API record (``_id`` -> ``id``)."""
    if not doc:
        return None
    record = dict(doc)
    _id = record.pop("_id", None)
    # mongoose's version key is bookkeeping, not record data.
    record.pop("__v", None)
    record = to_plain(record)
    if _id is not None:
        record["id"] = str(_id)
    return record


def to_mongo_filter(filters: Dict[str, Any]) -> Optional[Dict[str, Any]]:
    """Translate equality filters into a MongoDB query document.

    Returns ``None`` when the filter names an ``id`` that cannot be an
    ``ObjectId``; such a query can match nothing.
    """
    query: Dict[str, Any] = {}
    for name, value in filters.items():
        if name == "id":
            try:
                query["_id"] = ObjectId(str(value))
            except (InvalidId, TypeError):
                return None
        else:
            query[check_name(name)] = value
    return query


class MongoRecordStore(RecordStore):
    """Store records in MongoDB collections via pymongo."""

    name = "mongo"

    def __init__(self, url: str = "mongodb://localhost:27017", db_name: str = "conference", client: Optional[MongoClient] = None):
        # MongoClient connects lazily, so constructing the store never blocks.
        self._client = client if client is not None else MongoClient(url)
        self._db = self._client[db_name]

    def init(self) -> None:
        with storage_errors("Creating indexes", PyMongoError):
            for collection, field_name in UNIQUE_FIELDS.items():
                self._db[collection].create_index(field_name, unique=True)
        logger.info("Using MongoDB store %s", self._db.name)

    def close(self) -> None:
        self._client.close()

    def find(self, collection: str, query: Optional[QuerySpec] = None) -> List[Record]:
        query = query or QuerySpec()
        mongo_filter = to_mongo_filter(query.filters)
        if mongo_filter is None:
            return []
        with storage_errors(f"Querying {collection}", PyMongoError):
            cursor = self._db[check_name(collection)].find(mongo_filter)
            if query.sort:
                cursor = cursor.sort([(name, ASCENDING if direction > 0 else DESCENDING) for name, direction in query.sort])
            if query.skip:
                cursor = cursor.skip(query.skip)
            if query.limit is not None:
                cursor = cursor.limit(query.limit)
            return [to_record(doc) for doc in cursor]

    def find_one(self, collection: str, filters: Dict[str, Any]) -> Optional[Record]:
        mongo_filter = to_mongo_filter(filters)
        if mongo_filter is None:
            return None
        with storage_errors(f"Querying {collection}", PyMongoError):
            return to_record(self._db[check_name(collection)].find_one(mongo_filter))

    def find_one_ignore_case(self, collection: str, field_name: str, value: str) -> Optional[Record]:
        mongo_filter = {check_name(field_name): {"$regex": f"^{re.escape(value)}$", "$options": "i"}}
        with storage_errors(f"Querying {collection}", PyMongoError):
            return to_record(self._db[check_name(collection)].find_one(mongo_filter))

    def count(self, collection: str, filters: Optional[Dict[str, Any]] = None) -> int:
        mongo_filter = to_mongo_filter(filters or {})
        if mongo_filter is None:
            return 0
        with storage_errors(f"Counting {collection}", PyMongoError):
            return self._db[check_name(collection)].count_documents(mongo_filter)

    def insert(self, collection: str, record: Record) -> Record:
        doc = self._new_record(record)
        doc.pop("id")
        with storage_errors(f"Inserting into {collection}", PyMongoError):
            try:
                result = self._db[check_name(collection)].insert_one(doc)
            except DuplicateKeyError as exc:
                raise DuplicateRecordError(f"Duplicate value in {collection}") from exc
        doc["_id"] = result.inserted_id
        return to_record(doc)

    def update(self, collection: str, record_id: str, patch: Record) -> Optional[Record]:
        mongo_filter = to_mongo_filter({"id": record_id})
        if mongo_filter is None:
            return None
        changes = {**self._clean_patch(patch), "updatedAt": utc_now()}
        with storage_errors(f"Updating {collection}", PyMongoError):
            try:
                doc = self._db[check_name(collection)].find_one_and_update(
                    mongo_filter,
                    {"$set": changes},
                    return_document=ReturnDocument.AFTER,
                )
            except DuplicateKeyError as exc:
                raise DuplicateRecordError(f"Duplicate value in {collection}") from exc
        return to_record(doc)

    def delete(self, collection: str, record_id: str) -> bool:
        mongo_filter = to_mongo_filter({"id": record_id})
        if mongo_filter is None:
            return False
        with storage_errors(f"Deleting from {collection}", PyMongoError):
            result = self._db[check_name(collection)].delete_one(mongo_filter)
        return result.deleted_count == 1
