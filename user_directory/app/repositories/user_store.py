"""
Record stores for users.

``UserStore`` is the narrow interface the service layer depends on:
create a record, list every record, delete one by id, and find records
whose ``name`` or ``email`` contains a substring.  Two implementations
ship with the service:

* ``SQLiteUserStore`` keeps users in the SQLite database configured in
  ``core.config`` and is what the running application uses.
* ``InMemoryUserStore`` keeps users in a dict and is handy for tests
  and for embedding the service logic without a database.

Substring lookups are case-insensitive and fully parameterised; the
search text is never interpolated into SQL.
"""

from __future__ import annotations

import itertools
import logging
import sqlite3
from abc import ABC, abstractmethod
from datetime import datetime, timezone
from typing import Any, Dict, List

from user_directory.app.core.db import get_connection
from user_directory.app.core.exceptions import StoreError

logger = logging.getLogger(__name__)

SEARCHABLE_FIELDS = ("name", "email")

# SQLite INTEGER PRIMARY KEY range.
MIN_ID = -(2 ** 63)
MAX_ID = 2 ** 63 - 1


def _check_field(field: str) -> None:
    if field not in SEARCHABLE_FIELDS:
        raise ValueError(f"Field {field!r} is not searchable")


def _casefold(value: Any) -> Any:
    return value.casefold() if isinstance(value, str) else value


class UserStore(ABC):
    """Contract between the service layer and user persistence."""

    @abstractmethod
    def create(self, fields: Dict[str, Any]) -> int:
        """Persist a new user and return its newly assigned id."""

    @abstractmethod
    def list_all(self) -> List[Dict[str, Any]]:
        """Return every stored user, ordered by id."""

    @abstractmethod
    def delete_by_id(self, user_id: int) -> bool:
        """Hard-delete a user.  Returns ``False`` if no such id exists."""

    @abstractmethod
    def find_by_substring(self, field: str, substring: str) -> List[Dict[str, Any]]:
        """Return users whose ``field`` contains ``substring``, ignoring case."""


class SQLiteUserStore(UserStore):
    """User store backed by the ``users`` table.

    Every call opens its own connection and closes it before
    returning.  ``sqlite3.Error`` is re-raised as ``StoreError``.
    """

    def _connect(self) -> sqlite3.Connection:
        conn = get_connection()
        conn.create_function("casefold", 1, _casefold, deterministic=True)
        return conn

    def create(self, fields: Dict[str, Any]) -> int:
        try:
            conn = self._connect()
            try:
                cursor = conn.cursor()
                cursor.execute(
                    "INSERT INTO users (name, email, password) VALUES (?, ?, ?)",
                    (fields["name"], fields["email"], fields["password"]),
                )
                conn.commit()
                return cursor.lastrowid
            finally:
                conn.close()
        except sqlite3.Error as e:
            logger.error("Failed to insert user: %s", e)
            raise StoreError("Failed to create user") from e

    def list_all(self) -> List[Dict[str, Any]]:
        try:
            conn = self._connect()
            try:
                rows = conn.execute(
                    "SELECT id, name, email, password, created_at FROM users ORDER BY id"
                ).fetchall()
                return [dict(row) for row in rows]
            finally:
                conn.close()
        except sqlite3.Error as e:
            logger.error("Failed to list users: %s", e)
            raise StoreError("Failed to list users") from e

    def delete_by_id(self, user_id: int) -> bool:
        if not MIN_ID <= user_id <= MAX_ID:
            # Cannot be bound by sqlite3, and no row can have it.
            return False
        try:
            conn = self._connect()
            try:
                cursor = conn.execute("DELETE FROM users WHERE id = ?", (user_id,))
                conn.commit()
                return cursor.rowcount > 0
            finally:
                conn.close()
        except sqlite3.Error as e:
            logger.error("Failed to delete user %s: %s", user_id, e)
            raise StoreError("Failed to delete user") from e

    def find_by_substring(self, field: str, substring: str) -> List[Dict[str, Any]]:
        _check_field(field)
        try:
            conn = self._connect()
            try:
                # ``field`` is whitelisted above; only the needle is bound.
                rows = conn.execute(
                    f"SELECT id, name, email, password, created_at FROM users "
                    f"WHERE instr(casefold({field}), ?) > 0 ORDER BY id",
                    (substring.casefold(),),
                ).fetchall()
                return [dict(row) for row in rows]
            finally:
                conn.close()
        except sqlite3.Error as e:
            logger.error("Failed to search users by %s: %s", field, e)
            raise StoreError("Failed to search users") from e


class InMemoryUserStore(UserStore):
    """Dictionary backed store.  Ids come from a counter and are never reused."""

    def __init__(self) -> None:
        self._rows: Dict[int, Dict[str, Any]] = {}
        self._ids = itertools.count(1)

    def create(self, fields: Dict[str, Any]) -> int:
        user_id = next(self._ids)
        self._rows[user_id] = {
            "id": user_id,
            "name": fields["name"],
            "email": fields["email"],
            "password": fields["password"],
            "created_at": datetime.now(timezone.utc).strftime("%Y-%m-%d %H:%M:%S"),
        }
        return user_id

    def list_all(self) -> List[Dict[str, Any]]:
        return [dict(row) for _, row in sorted(self._rows.items())]

    def delete_by_id(self, user_id: int) -> bool:
        return self._rows.pop(user_id, None) is not None

    def find_by_substring(self, field: str, substring: str) -> List[Dict[str, Any]]:
        _check_field(field)
        needle = substring.casefold()
        return [row for row in self.list_all() if needle in row[field].casefold()]
