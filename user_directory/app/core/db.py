"""
SQLite database integration and simple migration system.

This module provides functions for obtaining a database connection
(``get_connection``) and applying migrations on application start
(``init_db``).  The migration mechanism stores applied migration
versions in the ``migrations`` table and executes new migrations in
order.
"""

import logging
import os
import sqlite3
from pathlib import Path

from .config import settings

logger = logging.getLogger(__name__)

MIGRATIONS: list[tuple[int, str]] = [
    # Migration 1: users table
    (
        1,
        """
        CREATE TABLE IF NOT EXISTS users (
            id INTEGER PRIMARY KEY AUTOINCREMENT,
            name TEXT NOT NULL,
            email TEXT NOT NULL,
            password TEXT NOT NULL,
            created_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP
        );
        """,
    ),
]


def get_database_path() -> str:
    """Compute the path to the SQLite database file.

    If ``settings.database_url`` is an absolute path, use it directly.
    Otherwise resolve it relative to the project root.
    """
    db_url = settings.database_url
    if os.path.isabs(db_url):
        return db_url
    base_dir = Path(__file__).resolve().parent.parent.parent.parent
    return str((base_dir / db_url).resolve())


def get_connection() -> sqlite3.Connection:
    """Create and return a new SQLite connection.

    Rows are returned as ``sqlite3.Row`` objects so columns can be
    accessed by name.
    """
    conn = sqlite3.connect(get_database_path())
    conn.row_factory = sqlite3.Row
    return conn


def init_db() -> None:
    """Initialise the database and apply pending migrations.

    Creates the ``migrations`` table if it does not exist, checks the
    current schema version, and applies any newer entries of
    ``MIGRATIONS``.  To change the schema, append a migration with an
    incremented version number.
    """
    conn = get_connection()
    try:
        cursor = conn.cursor()
        cursor.execute(
            "CREATE TABLE IF NOT EXISTS migrations ("
            "version INTEGER PRIMARY KEY, "
            "applied_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP)"
        )
        row = cursor.execute("SELECT MAX(version) AS version FROM migrations").fetchone()
        current = row["version"] or 0
        for version, script in MIGRATIONS:
            if version <= current:
                continue
            cursor.executescript(script)
            cursor.execute("INSERT INTO migrations (version) VALUES (?)", (version,))
            logger.info("Applied migration %s", version)
        conn.commit()
    finally:
        conn.close()
