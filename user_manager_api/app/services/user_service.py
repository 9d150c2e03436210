"""
Business logic for users.

``UserService`` is the user store: it validates input with
``validate_user`` and reads and writes the ``users`` table defined in
``core.db``.  Each operation opens its own connection and issues at
most one write.  Uniqueness of email addresses is left to the
``UNIQUE`` constraint of the table; a violation is reported as a
``ValidationError``.
"""

import logging
import sqlite3
from typing import Any, List, Optional

from user_manager_api.app.core.db import get_connection
from user_manager_api.app.core.errors import NotFoundError, ValidationError
from user_manager_api.app.schemas.user import UserRead
from user_manager_api.app.services.validation import EMAIL_TAKEN, validate_user

logger = logging.getLogger(__name__)

USER_NOT_FOUND = "User not found"

# Largest value a SQLite INTEGER PRIMARY KEY can hold.
MAX_USER_ID = 2**63 - 1


class UserService:
    """Service class for managing user records."""

    @classmethod
    async def create_user(cls, name: Optional[str], email: Optional[str]) -> UserRead:
        """Insert a new user and return it with its assigned ``id``.

        Raises ``ValidationError`` if the fields break the schema or the
        email is already taken.
        """
        result = validate_user(name, email)
        if not result.ok:
            raise ValidationError(result.reason)
        conn = get_connection()
        try:
            cursor = conn.cursor()
            try:
                cursor.execute(
                    "INSERT INTO users (name, email) VALUES (?, ?)",
                    (result.name, result.email),
                )
            except sqlite3.IntegrityError as exc:
                conn.rollback()
                raise ValidationError(EMAIL_TAKEN) from exc
            user_id = cursor.lastrowid
            conn.commit()
            logger.info("Created user %s", user_id)
            return UserRead(id=user_id, name=result.name, email=result.email)
        finally:
            conn.close()

    @classmethod
    async def list_users(cls) -> List[UserRead]:
        """Return all users in insertion order."""
        conn = get_connection()
        try:
            rows = conn.execute("SELECT id, name, email FROM users ORDER BY id").fetchall()
            return [cls._row_to_user_read(row) for row in rows]
        finally:
            conn.close()

    @classmethod
    async def update_user(cls, user_id: Any, name: Optional[str], email: Optional[str]) -> UserRead:
        """Replace the name and email of an existing user.

        The ``id`` never changes.  Raises ``NotFoundError`` if the user
        does not exist and ``ValidationError`` under the same rules as
        ``create_user``; the user's own current email does not count as
        a duplicate.
        """
        parsed_id = cls._parse_id(user_id)
        if parsed_id is None:
            raise NotFoundError(USER_NOT_FOUND)
        conn = get_connection()
        try:
            cursor = conn.cursor()
            row = cursor.execute("SELECT id FROM users WHERE id = ?", (parsed_id,)).fetchone()
            if row is None:
                raise NotFoundError(USER_NOT_FOUND)
            result = validate_user(name, email)
            if not result.ok:
                raise ValidationError(result.reason)
            try:
                cursor.execute(
                    "UPDATE users SET name = ?, email = ? WHERE id = ?",
                    (result.name, result.email, parsed_id),
                )
            except sqlite3.IntegrityError as exc:
                conn.rollback()
                raise ValidationError(EMAIL_TAKEN) from exc
            if cursor.rowcount == 0:
                # Deleted by another request between the lookup and the update.
                conn.rollback()
                raise NotFoundError(USER_NOT_FOUND)
            conn.commit()
            logger.info("Updated user %s", parsed_id)
            return UserRead(id=parsed_id, name=result.name, email=result.email)
        finally:
            conn.close()

    @classmethod
    async def delete_user(cls, user_id: Any) -> None:
        """Permanently delete a user; raises ``NotFoundError`` if absent."""
        parsed_id = cls._parse_id(user_id)
        if parsed_id is None:
            raise NotFoundError(USER_NOT_FOUND)
        conn = get_connection()
        try:
            cursor = conn.cursor()
            cursor.execute("DELETE FROM users WHERE id = ?", (parsed_id,))
            affected = cursor.rowcount
            conn.commit()
        finally:
            conn.close()
        if not affected:
            raise NotFoundError(USER_NOT_FOUND)
        logger.info("Deleted user %s", parsed_id)

    @staticmethod
    def _parse_id(user_id: Any) -> Optional[int]:
        """Return ``user_id`` as an int, or ``None`` if it cannot name a stored user.

        Only plain ints and strings of ASCII digits are accepted, and the
        value must fit in a SQLite ``INTEGER`` primary key.
        """
        if isinstance(user_id, bool):
            return None
        if isinstance(user_id, int):
            parsed = user_id
        elif isinstance(user_id, str) and user_id.isascii() and user_id.isdigit():
            parsed = int(user_id)
        else:
            return None
        return parsed if 1 <= parsed <= MAX_USER_ID else None

    @staticmethod
    def _row_to_user_read(row: sqlite3.Row) -> UserRead:
        """Convert a database row to a ``UserRead`` schema instance."""
        return UserRead(id=row["id"], name=row["name"], email=row["email"])
