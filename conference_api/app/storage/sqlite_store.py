"""
Keyed-table record store backed by SQLite.

Every record is one row of the ``records`` table keyed by
``(collection, id)``; the document is stored as JSON text.  Writes
touch a single row, and equality filters are evaluated by SQLite via
``json_extract`` so only matching rows are decoded.  Ordering and
slicing reuse the in-process query helpers so that all file-based
backends order records identically.
"""

import json
import logging
import sqlite3
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple, Union

from ..core.db import get_connection, get_cursor, init_db
from .base import QuerySpec, Record, RecordStore, check_name, storage_errors, utc_now
from .query import apply_query

logger = logging.getLogger(__name__)


def _where(collection: str, filters: Dict[str, Any]) -> Tuple[str, list]:
    clauses = ["collection = ?"]
    params: list = [check_name(collection)]
    for name, value in filters.items():
        column = "id" if name == "id" else f"json_extract(data, '$.{check_name(name)}')"
        if value is None:
            clauses.append(f"{column} IS NULL")
            continue
        clauses.append(f"{column} = ?")
        if isinstance(value, bool):
            value = int(value)
        params.append(value)
    return " AND ".join(clauses), params


class SQLiteRecordStore(RecordStore):
    """Store records as JSON documents in a single SQLite table."""

    name = "sqlite"

    def __init__(self, db_path: Union[str, Path]):
        self._db_path = Path(db_path)

    def init(self) -> None:
        with storage_errors("Initialising database", sqlite3.Error, OSError):
            version = init_db(self._db_path)
        logger.info("Using SQLite store %s (schema version %s)", self._db_path, version)

    def find(self, collection: str, query: Optional[QuerySpec] = None) -> List[Record]:
        query = query or QuerySpec()
        where, params = _where(collection, query.filters)
        with storage_errors(f"Querying {collection}", sqlite3.Error):
            conn = get_connection(self._db_path)
            try:
                rows = conn.execute(
                    f"SELECT data FROM records WHERE {where} ORDER BY created_at, rowid",
                    params,
                ).fetchall()
            finally:
                conn.close()
        records = [json.loads(row["data"]) for row in rows]
        return apply_query(records, QuerySpec(sort=query.sort, skip=query.skip, limit=query.limit))

    def find_one(self, collection: str, filters: Dict[str, Any]) -> Optional[Record]:
        where, params = _where(collection, filters)
        with storage_errors(f"Querying {collection}", sqlite3.Error):
            conn = get_connection(self._db_path)
            try:
                row = conn.execute(
                    f"SELECT data FROM records WHERE {where} ORDER BY created_at, rowid LIMIT 1",
                    params,
                ).fetchone()
            finally:
                conn.close()
        return json.loads(row["data"]) if row else None

    def find_one_ignore_case(self, collection: str, field_name: str, value: str) -> Optional[Record]:
        column = f"json_extract(data, '$.{check_name(field_name)}')"
        with storage_errors(f"Querying {collection}", sqlite3.Error):
            conn = get_connection(self._db_path)
            try:
                row = conn.execute(
                    f"SELECT data FROM records WHERE collection = ? AND lower({column}) = ? "
                    "ORDER BY created_at, rowid LIMIT 1",
                    (check_name(collection), value.lower()),
                ).fetchone()
            finally:
                conn.close()
        return json.loads(row["data"]) if row else None

    def count(self, collection: str, filters: Optional[Dict[str, Any]] = None) -> int:
        where, params = _where(collection, filters or {})
        with storage_errors(f"Counting {collection}", sqlite3.Error):
            conn = get_connection(self._db_path)
            try:
                return conn.execute(f"SELECT COUNT(*) FROM records WHERE {where}", params).fetchone()[0]
            finally:
                conn.close()

    def insert(self, collection: str, record: Record) -> Record:
        stored = self._new_record(record)
        with storage_errors(f"Inserting into {collection}", sqlite3.Error):
            with get_cursor(self._db_path) as cursor:
                cursor.execute(
                    "INSERT INTO records (collection, id, data, created_at, updated_at) VALUES (?, ?, ?, ?, ?)",
                    (
                        check_name(collection),
                        stored["id"],
                        json.dumps(stored, ensure_ascii=False),
                        stored["createdAt"],
                        stored["updatedAt"],
                    ),
                )
        return stored

    def update(self, collection: str, record_id: str, patch: Record) -> Optional[Record]:
        with storage_errors(f"Updating {collection}", sqlite3.Error):
            with get_cursor(self._db_path) as cursor:
                # Take the write lock before reading so the merge is atomic.
                cursor.execute("BEGIN IMMEDIATE")
                row = cursor.execute(
                    "SELECT data FROM records WHERE collection = ? AND id = ?",
                    (check_name(collection), record_id),
                ).fetchone()
                if row is None:
                    return None
                updated = {**json.loads(row["data"]), **self._clean_patch(patch), "updatedAt": utc_now()}
                cursor.execute(
                    "UPDATE records SET data = ?, updated_at = ? WHERE collection = ? AND id = ?",
                    (json.dumps(updated, ensure_ascii=False), updated["updatedAt"], collection, record_id),
                )
        return updated

    def delete(self, collection: str, record_id: str) -> bool:
        with storage_errors(f"Deleting from {collection}", sqlite3.Error):
            with get_cursor(self._db_path) as cursor:
                cursor.execute(
                    "DELETE FROM records WHERE collection = ? AND id = ?",
                    (check_name(collection), record_id),
                )
                return cursor.rowcount > 0
