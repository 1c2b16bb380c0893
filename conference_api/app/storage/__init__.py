"""
Persistence backends.

``build_store`` turns the configured ``storage_backend`` into a
``RecordStore`` instance.  It is called once by ``create_app``; the
rest of the application only sees the ``RecordStore`` interface.
"""

from ..core.config import Settings, resolve_path
from .base import ASCENDING, DESCENDING, QuerySpec, Record, RecordStore
from .json_store import JsonFileRecordStore
from .sqlite_store import SQLiteRecordStore

__all__ = [
    "ASCENDING",
    "DESCENDING",
    "QuerySpec",
    "Record",
    "RecordStore",
    "JsonFileRecordStore",
    "SQLiteRecordStore",
    "build_store",
]


def build_store(settings: Settings) -> RecordStore:
    """Create the record store selected by ``settings.storage_backend``.

    Raises ``ValueError`` for an unknown backend name.  The MongoDB
    backend is imported lazily so pymongo is only loaded when used.
    """
    backend = settings.storage_backend.lower()
    if backend == "json":
        return JsonFileRecordStore(resolve_path(settings.data_dir))
    if backend == "sqlite":
        return SQLiteRecordStore(resolve_path(settings.database_url))
    if backend == "mongo":
        from .mongo_store import MongoRecordStore

        return MongoRecordStore(settings.mongo_url, settings.mongo_db_name)
    raise ValueError(f"Unknown storage backend: {settings.storage_backend!r}")
