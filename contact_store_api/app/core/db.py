"""
SQLite database integration.

The ``Database`` object owns the location of the SQLite file and
hands out short‑lived connections: every service call opens its own
connection and closes it when done.  The application factory builds a
single ``Database`` and injects it into the routes, so tests can point
each app at a separate file.

``init_schema`` creates the ``contacts`` table idempotently.  The
UNIQUE constraint on ``email`` is what keeps the data correct when two
requests race past the application‑level duplicate check.
"""

import logging
import os
import sqlite3
from contextlib import contextmanager
from pathlib import Path
from typing import Iterator

logger = logging.getLogger(__name__)

SCHEMA = """
CREATE TABLE IF NOT EXISTS contacts (
    id INTEGER PRIMARY KEY AUTOINCREMENT,
    name VARCHAR(120) NOT NULL,
    email VARCHAR(200) NOT NULL UNIQUE,
    phone VARCHAR(25) NOT NULL,
    created_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP,
    updated_at TIMESTAMP DEFAULT CURRENT_TIMESTAMP
);
"""


def resolve_database_path(database_url: str) -> str:
    """Compute the path to the SQLite database file.

    Absolute paths are used as is; relative paths are resolved against
    the project root (the directory containing ``contact_store_api``).
    """
    if os.path.isabs(database_url):
        return database_url
    base_dir = Path(__file__).resolve().parent.parent.parent.parent
    return str((base_dir / database_url).resolve())


class Database:
    """Handle to a file‑backed SQLite database."""

    def __init__(self, database_url: str) -> None:
        self.path = resolve_database_path(database_url)

    def get_connection(self) -> sqlite3.Connection:
        """Create and return a new SQLite connection.

        Rows are returned as ``sqlite3.Row`` so columns can be accessed
        by name.  Timestamps are left as the strings SQLite stores.
        """
        conn = sqlite3.connect(self.path)
        conn.row_factory = sqlite3.Row
        return conn

    @contextmanager
    def get_cursor(self) -> Iterator[sqlite3.Cursor]:
        """Yield a cursor, commit on success and always close the connection."""
        conn = self.get_connection()
        try:
            yield conn.cursor()
            conn.commit()
        finally:
            conn.close()

    def init_schema(self) -> None:
        """Create the ``contacts`` table if it does not exist yet."""
        with self.get_cursor() as cursor:
            cursor.executescript(SCHEMA)
        logger.info("Contacts table ready at %s", self.path)
