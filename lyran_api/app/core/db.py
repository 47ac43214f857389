"""
SQLite database integration and simple migration system.

This module provides ``get_connection`` for opening a connection to
the booking database, a ``get_cursor`` context manager, and
``init_db`` which applies migrations on application start.  Applied
migration versions are recorded in the ``migrations`` table and new
ones are executed in order.

Timestamps of booking windows are stored as ISO 8601 strings without
an offset (venue local time), so lexical comparison in SQL matches
chronological order.
"""

import os
import sqlite3
from contextlib import contextmanager
from pathlib import Path
from typing import Iterator


MIGRATIONS: list[tuple[int, str]] = [
    # Migration 1: bookings table
    (
        1,
        """
        CREATE TABLE IF NOT EXISTS bookings (
            id INTEGER PRIMARY KEY AUTOINCREMENT,
            resource_type TEXT NOT NULL,
            start_at TEXT NOT NULL,
            end_at TEXT NOT NULL,
            slots INTEGER NOT NULL DEFAULT 1,
            customer_name TEXT NOT NULL,
            customer_phone TEXT NOT NULL,
            customer_email TEXT,
            age_confirmed INTEGER NOT NULL DEFAULT 0,
            price_ore INTEGER NOT NULL DEFAULT 0,
            status TEXT NOT NULL,
            swish_ref TEXT,
            created_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP
        );
        """,
    ),
    # Migration 2: availability lookups filter by resource and start time
    (
        2,
        """
        CREATE INDEX IF NOT EXISTS idx_bookings_resource_start ON bookings(resource_type, start_at);
        """,
    ),
]


def get_database_path(database_url: str) -> str:
    """Compute the path to the SQLite database file.

    Absolute paths are used directly; relative ones are resolved
    against the project root.
    """
    if os.path.isabs(database_url):
        return database_url
    base_dir = Path(__file__).resolve().parent.parent.parent.parent
    return str((base_dir / database_url).resolve())


def get_connection(database_url: str) -> sqlite3.Connection:
    """Create and return a new SQLite connection with ``Row`` results."""
    conn = sqlite3.connect(get_database_path(database_url))
    conn.row_factory = sqlite3.Row
    return conn


@contextmanager
def get_cursor(database_url: str) -> Iterator[sqlite3.Cursor]:
    """Yield a cursor, committing on success and always closing."""
    conn = get_connection(database_url)
    try:
        yield conn.cursor()
        conn.commit()
    finally:
        conn.close()


def init_db(database_url: str) -> int:
    """Create the database if needed and apply pending migrations.

    Returns the schema version after migration.  To change the schema,
    append a new entry to ``MIGRATIONS`` with the next version number.
    """
    with get_cursor(database_url) as cursor:
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
