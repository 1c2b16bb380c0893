"""
Flat-file record store.

Each collection is one JSON array in ``<data_dir>/<collection>.json``,
which keeps the on-disk format of existing conference data
directories.  Every write re-serialises the whole collection, so this
backend suits the small collections of a single conference site.

Writes hold a per-collection lock for the whole read-modify-write
cycle and replace the file atomically through a temporary file in
the same directory.
"""

import json
import logging
import os
import tempfile
import threading
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

from ..core.errors import StorageError
from .base import QuerySpec, Record, RecordStore, check_name, storage_errors, utc_now
from .query import apply_query, matches

logger = logging.getLogger(__name__)


class JsonFileRecordStore(RecordStore):
    """Store collections as JSON arrays on disk."""

    name = "json"

    def __init__(self, data_dir: Union[str, Path]):
        self._data_dir = Path(data_dir)
        self._locks: Dict[str, threading.RLock] = {}
        self._locks_guard = threading.Lock()

    @property
    def data_dir(self) -> Path:
        return self._data_dir

    def init(self) -> None:
        with storage_errors("Creating data directory", OSError):
            self._data_dir.mkdir(parents=True, exist_ok=True)
        logger.info("Using JSON file store in %s", self._data_dir)

    # ------------------------------------------------------------------
    # Private helpers
    # ------------------------------------------------------------------
    def _lock(self, collection: str) -> threading.RLock:
        with self._locks_guard:
            lock = self._locks.get(collection)
            if lock is None:
                lock = self._locks[collection] = threading.RLock()
            return lock

    def _path(self, collection: str) -> Path:
        return self._data_dir / f"{check_name(collection)}.json"

    def _read(self, collection: str) -> List[Record]:
        path = self._path(collection)
        if not path.exists():
            return []
        with storage_errors(f"Reading {path.name}", OSError):
            text = path.read_text(encoding="utf-8")
        try:
            data = json.loads(text) if text.strip() else []
        except json.JSONDecodeError as exc:
            raise StorageError(f"Corrupt collection file {path}") from exc
        if not isinstance(data, list):
            raise StorageError(f"Collection file {path} does not hold a JSON array")
        return data

    def _write(self, collection: str, records: List[Record]) -> None:
        path = self._path(collection)
        with storage_errors(f"Writing {path.name}", OSError):
            path.parent.mkdir(parents=True, exist_ok=True)
            fd, tmp_name = tempfile.mkstemp(dir=path.parent, prefix=f".{path.name}.", suffix=".tmp")
            try:
                with os.fdopen(fd, "w", encoding="utf-8") as fh:
                    json.dump(records, fh, indent=2, ensure_ascii=False)
                    fh.flush()
                    os.fsync(fh.fileno())
                os.replace(tmp_name, path)
            except BaseException:
                if os.path.exists(tmp_name):
                    os.unlink(tmp_name)
                raise

    # ------------------------------------------------------------------
    # Read operations
    # ------------------------------------------------------------------
    def find(self, collection: str, query: Optional[QuerySpec] = None) -> List[Record]:
        with self._lock(collection):
            records = self._read(collection)
        return apply_query(records, query or QuerySpec())

    def find_one(self, collection: str, filters: Dict[str, Any]) -> Optional[Record]:
        with self._lock(collection):
            records = self._read(collection)
        for record in records:
            if matches(record, filters):
                return record
        return None

    # ------------------------------------------------------------------
    # Write operations
    # ------------------------------------------------------------------
    def insert(self, collection: str, record: Record) -> Record:
        stored = self._new_record(record)
        with self._lock(collection):
            records = self._read(collection)
            records.append(stored)
            self._write(collection, records)
        return dict(stored)

    def update(self, collection: str, record_id: str, patch: Record) -> Optional[Record]:
        with self._lock(collection):
            records = self._read(collection)
            for index, record in enumerate(records):
                if record.get("id") == record_id:
                    updated = {**record, **self._clean_patch(patch), "updatedAt": utc_now()}
                    records[index] = updated
                    self._write(collection, records)
                    return dict(updated)
        return None

    def delete(self, collection: str, record_id: str) -> bool:
        with self._lock(collection):
            records = self._read(collection)
            remaining = [r for r in records if r.get("id") != record_id]
            if len(remaining) == len(records):
                return False
            self._write(collection, remaining)
        return True
