"""SQLite access for RenoBoard Core.

Everything that touches the database goes through a Core. A Core wraps
one connection and exposes the credential store as ``core.users``; it never
reaches for Flask's request context.

Routes open an atomic Core per request:

    with get_core(database_path, atomic=True) as core:
        user = core.users.find_by_email(email)
    # committed here, or rolled back if the block raised

Failing to open the database raises DatabaseError; no sqlite3 exception
escapes this package.
"""

import logging
import sqlite3
from pathlib import Path
from typing import TYPE_CHECKING

from ..config import settings
from ..exceptions import DatabaseError

logger = logging.getLogger(__name__)

SCHEMA_PATH = Path(__file__).parent.parent / "schema" / "schema.sql"


if TYPE_CHECKING:
    from .users import UserOperations


class Core:
    """
    One connection plus the table operations that run on it.

    An atomic Core is a context manager that commits or rolls back and then
    closes its connection. A plain Core leaves commit() to the caller and
    closes when close() is called or the object is collected.
    """

    def __init__(self, connection: sqlite3.Connection, atomic: bool = False):
        self._conn = connection
        self._atomic = atomic
        self._users = None

    @property
    def users(self) -> "UserOperations":
        """Credential store bound to this Core's connection."""
        if self._users is None:
            from .users import UserOperations
            self._users = UserOperations(self._conn)
        return self._users

    def commit(self) -> None:
        self._conn.commit()

    def close(self) -> None:
        self._conn.close()

    def __enter__(self) -> "Core":
        if not self._atomic:
            raise RuntimeError(
                "Only an atomic Core can be used in a with block; "
                "open it with get_core(atomic=True)"
            )
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        try:
            if exc_type is None:
                self._conn.commit()
            else:
                self._conn.rollback()
        finally:
            self._conn.close()

    def __del__(self):
        conn = getattr(self, "_conn", None)
        if conn is not None:
            try:
                conn.close()
            except Exception:
                # already closed, or interpreter shutting down
                pass


def _create_connection(database_path: str) -> sqlite3.Connection:
    """Open the database file, creating its directory if needed.

    Raises:
        DatabaseError: If the file cannot be opened
    """
    try:
        db_path = Path(database_path)
        db_path.parent.mkdir(parents=True, exist_ok=True)

        # Writes open with BEGIN IMMEDIATE so concurrent writers queue on the
        # busy timeout rather than failing a SHARED -> RESERVED lock upgrade
        conn = sqlite3.connect(str(db_path), isolation_level="IMMEDIATE")
        conn.row_factory = sqlite3.Row
        conn.execute("PRAGMA foreign_keys = ON")
    except (sqlite3.Error, OSError) as e:
        logger.error(f"Failed to open database at {database_path}: {e}")
        raise DatabaseError(
            "Database unavailable",
            {"database_path": database_path}
        ) from e
    return conn


def get_core(database_path: str | None = None, atomic: bool = False) -> Core:
    """
    Open a Core on the given database (settings.database_path by default).

    Pass atomic=True to get a Core that must be used in a with block.
    """
    conn = _create_connection(database_path or settings.database_path)
    return Core(conn, atomic=atomic)


# ============================================================================
# SCHEMA
# ============================================================================

def init_db(database_path: str | None = None):
    """Apply schema.sql to a database that has no _schema_metadata table yet."""
    db_path = Path(database_path or settings.database_path)
    db_path.parent.mkdir(parents=True, exist_ok=True)

    conn = sqlite3.connect(str(db_path))
    try:
        existing = conn.execute(
            "SELECT 1 FROM sqlite_master WHERE type = 'table' AND name = '_schema_metadata'"
        ).fetchone()
        if existing:
            return

        conn.executescript(SCHEMA_PATH.read_text())
        conn.commit()
    finally:
        conn.close()
