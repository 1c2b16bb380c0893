"""
SQLite database integration and simple migration system.

This module provides functions for obtaining a database connection
(``get_connection``), a cursor context manager (``get_cursor``) and
``init_db`` which applies migrations when the keyed-table store
starts.  Records of every collection live in one ``records`` table,
one row per record, with the document itself stored as JSON text.

The migration mechanism stores applied migration versions in the
``migrations`` table and executes new migrations in order.
"""

import sqlite3
from contextlib import contextmanager
from pathlib import Path
from typing import Iterator, Union


MIGRATIONS: list[tuple[int, str]] = [
    # Migration 1: keyed record table
    (
        1,
        """
        CREATE TABLE IF NOT EXISTS records (
            collection TEXT NOT NULL,
            id TEXT NOT NULL,
            data TEXT NOT NULL,
            created_at TEXT NOT NULL,
            updated_at TEXT NOT NULL,
            PRIMARY KEY (collection, id)
        );
        """,
    ),
    # Migration 2: speed up the unique lookups done on every submission
    # and login.
    (
        2,
        """
        CREATE INDEX IF NOT EXISTS idx_records_email
            ON records(collection, json_extract(data, '$.email'));
        CREATE INDEX IF NOT EXISTS idx_records_key
            ON records(collection, json_extract(data, '$.key'));
        """,
    ),
    # Migration 3: case-insensitive email lookups.
    (
        3,
        """
        CREATE INDEX IF NOT EXISTS idx_records_email_ci
            ON records(collection, lower(json_extract(data, '$.email')));
        """,
    ),
]


def get_connection(db_path: Union[str, Path]) -> sqlite3.Connection:
    """Create and return a new SQLite connection.

    The connection uses a row factory to access columns by name.
    Values are returned as stored; the JSON documents are decoded by
    the store itself.
    """
    conn = sqlite3.connect(str(db_path))
    conn.row_factory = sqlite3.Row
    return conn


@contextmanager
def get_cursor(db_path: Union[str, Path]) -> Iterator[sqlite3.Cursor]:
    """Context manager that yields a cursor and closes the connection on exit.

    The transaction is committed when the block completes and rolled
    back when it raises.
    """
    conn = get_connection(db_path)
    try:
        yield conn.cursor()
        conn.commit()
    except Exception:
        conn.rollback()
        raise
    finally:
        conn.close()


def init_db(db_path: Union[str, Path]) -> int:
    """Initialise the database and apply pending migrations.

    Creates the parent directory and the ``migrations`` table if they
    do not exist, checks the current schema version, and applies any
    newer entries of ``MIGRATIONS``.  Returns the resulting schema
    version.
    """
    Path(db_path).parent.mkdir(parents=True, exist_ok=True)
    with get_cursor(db_path) as cursor:
        cursor.execute(
            "CREATE TABLE IF NOT EXISTS migrations (version INTEGER PRIMARY KEY)"
        )
        cursor.execute("SELECT MAX(version) as version FROM migrations")
        row = cursor.fetchone()
        current_version = row["version"] if row and row["version"] is not None else 0

        for version, sql in MIGRATIONS:
            if version > current_version:
                cursor.executescript(sql)
                cursor.execute(
                    "INSERT INTO migrations (version) VALUES (?)", (version,)
                )
                current_version = version
    return current_version
