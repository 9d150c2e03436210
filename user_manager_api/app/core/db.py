"""
SQLite database integration and simple migration system.

This module provides functions for obtaining a database connection
(``get_connection``) and applying migrations on application start
(``init_db``).  The ``users`` table enforces the uniqueness of email
addresses through a ``UNIQUE`` constraint, so concurrent writers are
serialized by SQLite itself rather than by locks in this process.

The migration mechanism stores applied migration versions in the
``migrations`` table and executes new migrations in order.
"""

import logging
import os
import sqlite3
from contextlib import contextmanager
from pathlib import Path
from typing import Iterator

from .config import settings
from .errors import StoreConnectionError

logger = logging.getLogger(__name__)

SQLITE_URL_PREFIX = "sqlite:///"

MIGRATIONS: list[tuple[int, str]] = [
    (
        1,
        """
        CREATE TABLE IF NOT EXISTS users (
            id INTEGER PRIMARY KEY AUTOINCREMENT,
            name TEXT NOT NULL,
            email TEXT NOT NULL UNIQUE
        );
        """,
    ),
]


def get_database_path() -> str:
    """Compute the path to the SQLite database file.

    ``settings.database_url`` may be a plain path or a ``sqlite:///``
    URL.  Absolute paths are used directly, relative ones are resolved
    against the project root.
    """
    db_url = settings.database_url
    if db_url.startswith(SQLITE_URL_PREFIX):
        db_url = db_url[len(SQLITE_URL_PREFIX):]
    if os.path.isabs(db_url):
        return db_url
    base_dir = Path(__file__).resolve().parent.parent.parent  # user_manager_api/
    return str((base_dir / db_url).resolve())


def get_connection() -> sqlite3.Connection:
    """Create and return a new SQLite connection.

    Rows are returned as ``sqlite3.Row`` so columns can be accessed by
    name.
    """
    conn = sqlite3.connect(get_database_path())
    conn.row_factory = sqlite3.Row
    return conn


@contextmanager
def get_cursor() -> Iterator[sqlite3.Cursor]:
    """Context manager that yields a cursor and closes the connection on exit."""
    conn = get_connection()
    try:
        yield conn.cursor()
        conn.commit()
    finally:
        conn.close()


def init_db() -> None:
    """Connect to the database and apply pending migrations.

    Raises
    ------
    StoreConnectionError
        If the database cannot be opened or migrated.  Callers treat
        this as fatal.
    """
    db_path = get_database_path()
    try:
        with get_cursor() as cursor:
            cursor.execute(
                "CREATE TABLE IF NOT EXISTS migrations (version INTEGER PRIMARY KEY)"
            )
            cursor.execute("SELECT MAX(version) AS version FROM migrations")
            row = cursor.fetchone()
            current_version = row["version"] if row and row["version"] is not None else 0

            for version, sql in MIGRATIONS:
                if version > current_version:
                    cursor.executescript(sql)
                    cursor.execute(
                        "INSERT INTO migrations (version) VALUES (?)", (version,)
                    )
                    current_version = version
    except sqlite3.Error as exc:
        logger.error("Could not connect to database %s: %s", db_path, exc)
        raise StoreConnectionError(f"Could not connect to database: {exc}") from exc
    logger.info("Connected DB: %s (schema version %s)", db_path, current_version)
