"""
Service layer for contacts.

``ContactService`` implements listing (search, sort, paginate), lookup,
creation, full and partial updates and deletion on top of a
``Database``.  Each call opens one connection and runs its statements
sequentially on it; nothing is cached between calls.

Email uniqueness is checked up front so the common duplicate case gets
a clear validation error, but the UNIQUE constraint on the column is
what actually guarantees it: a constraint violation on write is
reported as the same duplicate‑email error.

All queries use parameterized statements.  Column names that end up in
SQL text (sort field, updated columns) come from fixed whitelists.
"""

from __future__ import annotations

import logging
import math
import sqlite3
from contextlib import contextmanager
from typing import Any, Iterator, Mapping, Optional

from contact_store_api.app.core.db import Database
from contact_store_api.app.core.errors import (
    DatastoreError,
    DuplicateEmailError,
    NoValidFieldsError,
    NotFoundError,
    ValidationError,
)
from contact_store_api.app.schemas.contact import (
    ContactDeleted,
    ContactList,
    ContactRead,
    Pagination,
)
from contact_store_api.app.services.validation import (
    CONTACT_FIELDS,
    normalize_contact,
    validate_contact,
    validate_partial,
)

logger = logging.getLogger(__name__)

SORT_FIELDS = {"name", "email", "phone", "created_at"}
DEFAULT_SORT_FIELD = "name"

# AUTOINCREMENT rowids are always in 1..2**63-1
MAX_CONTACT_ID = 2**63 - 1


def _like_pattern(search: str) -> str:
    """Build a LIKE pattern matching ``search`` literally as a substring."""
    escaped = search.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")
    return f"%{escaped}%"


class ContactService:
    """CRUD operations for the ``contacts`` table."""

    def __init__(self, db: Database) -> None:
        self.db = db

    @contextmanager
    def _cursor(self) -> Iterator[sqlite3.Cursor]:
        """Yield a cursor, translating driver errors into service errors."""
        try:
            with self.db.get_cursor() as cursor:
                yield cursor
        except sqlite3.IntegrityError as exc:
            if "contacts.email" in str(exc):
                logger.info("Email uniqueness constraint rejected a write")
                raise DuplicateEmailError() from exc
            raise DatastoreError(str(exc)) from exc
        except sqlite3.Error as exc:
            raise DatastoreError(str(exc)) from exc

    @staticmethod
    def _fetch(cursor: sqlite3.Cursor, contact_id: int) -> Optional[sqlite3.Row]:
        if not 1 <= contact_id <= MAX_CONTACT_ID:
            return None
        return cursor.execute("SELECT * FROM contacts WHERE id = ?", (contact_id,)).fetchone()

    @staticmethod
    def _email_taken(cursor: sqlite3.Cursor, email: str, exclude_id: Optional[int] = None) -> bool:
        if exclude_id is None:
            row = cursor.execute("SELECT id FROM contacts WHERE email = ?", (email,)).fetchone()
        else:
            row = cursor.execute(
                "SELECT id FROM contacts WHERE email = ? AND id != ?",
                (email, exclude_id),
            ).fetchone()
        return row is not None

    async def list_contacts(
        self,
        search: Optional[str] = None,
        sort_by: Optional[str] = None,
        order: Optional[str] = None,
        page: int = 1,
        limit: int = 10,
    ) -> ContactList:
        """Return one page of contacts with pagination metadata.

        ``search`` matches name, email or phone as a case‑insensitive
        substring.  Unknown ``sort_by`` values fall back to ``name``;
        any ``order`` other than ``desc`` sorts ascending.  ``total``
        counts the contacts matching ``search``, not the whole table.
        """
        sort_field = sort_by if sort_by in SORT_FIELDS else DEFAULT_SORT_FIELD
        sort_order = "DESC" if order and order.lower() == "desc" else "ASC"

        where = ""
        params: list[Any] = []
        if search:
            where = " WHERE name LIKE ? ESCAPE '\\' OR email LIKE ? ESCAPE '\\' OR phone LIKE ? ESCAPE '\\'"
            pattern = _like_pattern(search)
            params.extend([pattern, pattern, pattern])

        offset = (page - 1) * limit
        with self._cursor() as cursor:
            rows = cursor.execute(
                f"SELECT * FROM contacts{where} ORDER BY {sort_field} {sort_order}, id ASC LIMIT ? OFFSET ?",
                (*params, limit, offset),
            ).fetchall()
            total = cursor.execute(
                f"SELECT COUNT(*) AS total FROM contacts{where}",
                params,
            ).fetchone()["total"]

        return ContactList(
            data=[self._row_to_contact(row) for row in rows],
            pagination=Pagination(
                total=total,
                page=page,
                limit=limit,
                total_pages=math.ceil(total / limit),
            ),
        )

    async def get_contact(self, contact_id: int) -> ContactRead:
        with self._cursor() as cursor:
            row = self._fetch(cursor, contact_id)
        if row is None:
            raise NotFoundError()
        return self._row_to_contact(row)

    async def create_contact(self, data: Mapping[str, Any]) -> ContactRead:
        """Validate, normalize and insert a contact; return the stored row."""
        errors = validate_contact(data)
        if errors:
            raise ValidationError(errors)
        fields = normalize_contact({field: data[field] for field in CONTACT_FIELDS})

        with self._cursor() as cursor:
            if self._email_taken(cursor, fields["email"]):
                logger.info("Rejected contact with duplicate email")
                raise DuplicateEmailError()
            cursor.execute(
                "INSERT INTO contacts (name, email, phone) VALUES (?, ?, ?)",
                (fields["name"], fields["email"], fields["phone"]),
            )
            contact_id = cursor.lastrowid
            row = self._fetch(cursor, contact_id)
        logger.info("Created contact %s", contact_id)
        return self._row_to_contact(row)

    async def replace_contact(self, contact_id: int, data: Mapping[str, Any]) -> ContactRead:
        """Overwrite name, email and phone of an existing contact.

        The replacement is validated before the contact is looked up, so
        an invalid body is rejected with 400 even for an unknown id.
        """
        errors = validate_contact(data)
        if errors:
            raise ValidationError(errors)
        fields = normalize_contact({field: data[field] for field in CONTACT_FIELDS})

        with self._cursor() as cursor:
            if self._fetch(cursor, contact_id) is None:
                raise NotFoundError()
            if self._email_taken(cursor, fields["email"], exclude_id=contact_id):
                logger.info("Rejected update of contact %s with duplicate email", contact_id)
                raise DuplicateEmailError()
            cursor.execute(
                """
                UPDATE contacts
                SET name = ?, email = ?, phone = ?, updated_at = CURRENT_TIMESTAMP
                WHERE id = ?
                """,
                (fields["name"], fields["email"], fields["phone"], contact_id),
            )
            row = self._fetch(cursor, contact_id)
        logger.info("Updated contact %s", contact_id)
        return self._row_to_contact(row)

    async def patch_contact(self, contact_id: int, updates: Mapping[str, Any]) -> ContactRead:
        """Update only the supplied contact fields.

        Keys other than ``name``, ``email`` and ``phone`` are ignored.
        The remaining fields go through the same per‑field rules,
        normalization and email uniqueness check as a full update.
        """
        with self._cursor() as cursor:
            if self._fetch(cursor, contact_id) is None:
                raise NotFoundError()

            supplied = {field: updates[field] for field in CONTACT_FIELDS if field in updates}
            if not supplied:
                raise NoValidFieldsError()
            errors = validate_partial(supplied)
            if errors:
                raise ValidationError(errors)
            fields = normalize_contact(supplied)

            if "email" in fields and self._email_taken(cursor, fields["email"], exclude_id=contact_id):
                logger.info("Rejected patch of contact %s with duplicate email", contact_id)
                raise DuplicateEmailError()

            assignments = ", ".join(f"{field} = ?" for field in fields)
            cursor.execute(
                f"UPDATE contacts SET {assignments}, updated_at = CURRENT_TIMESTAMP WHERE id = ?",
                (*fields.values(), contact_id),
            )
            row = self._fetch(cursor, contact_id)
        logger.info("Patched contact %s (%s)", contact_id, ", ".join(fields))
        return self._row_to_contact(row)

    async def delete_contact(self, contact_id: int) -> ContactDeleted:
        with self._cursor() as cursor:
            if self._fetch(cursor, contact_id) is None:
                raise NotFoundError()
            cursor.execute("DELETE FROM contacts WHERE id = ?", (contact_id,))
        logger.info("Deleted contact %s", contact_id)
        return ContactDeleted(id=contact_id)

    @staticmethod
    def _row_to_contact(row: sqlite3.Row) -> ContactRead:
        """Convert a database row to a ContactRead schema instance."""
        return ContactRead(
            id=row["id"],
            name=row["name"],
            email=row["email"],
            phone=row["phone"],
            created_at=row["created_at"],
            updated_at=row["updated_at"],
        )
