"""Credential store operations.

The users table holds one row per normalized email address. Uniqueness is
enforced by the UNIQUE index on users.email, not by application locking:
two concurrent inserts of the same email produce exactly one row and one
AlreadyExists.

IMPORT CONVENTION:
- Core accesses these through core.users property
- NO direct import needed when using Core API
"""

import sqlite3
from dataclasses import dataclass

from ..exceptions import AlreadyExists, DatabaseError
from ..utils import isodatetime


@dataclass(frozen=True)
class UserRecord:
    """A users row, including the password hash.

    Never serialized to clients; convert to UserResponse first.
    """

    id: int
    email: str
    password_hash: str
    created_at: str

    @classmethod
    def from_row(cls, row: sqlite3.Row) -> "UserRecord":
        return cls(
            id=row["id"],
            email=row["email"],
            password_hash=row["password_hash"],
            created_at=row["created_at"],
        )


def normalize_email(email: str) -> str:
    """Trim surrounding whitespace and lower-case an email address."""
    return email.strip().lower()


def _is_unique_violation(error: sqlite3.IntegrityError) -> bool:
    # Decided by the extended result code, never by message text
    return getattr(error, "sqlite_errorcode", None) in (
        sqlite3.SQLITE_CONSTRAINT_UNIQUE,
        sqlite3.SQLITE_CONSTRAINT_PRIMARYKEY,
    )


class UserOperations:
    """Credential store operations.

    Lookups take an already-normalized email. The request schemas apply
    normalize_email() when they parse a body.
    """

    def __init__(self, conn: sqlite3.Connection):
        """Initialize user operations with a database connection.

        Args:
            conn: SQLite connection with row_factory set to sqlite3.Row
        """
        self._conn = conn

    def find_by_email(self, email: str) -> UserRecord | None:
        """Get a user by normalized email, or None if no such account."""
        try:
            row = self._conn.execute(
                "SELECT id, email, password_hash, created_at FROM users WHERE email = ?",
                (email,)
            ).fetchone()
        except sqlite3.Error as e:
            raise DatabaseError("Failed to look up user") from e
        return UserRecord.from_row(row) if row else None

    def get_by_id(self, user_id: int) -> UserRecord | None:
        """Get a user by id, or None if no such account."""
        try:
            row = self._conn.execute(
                "SELECT id, email, password_hash, created_at FROM users WHERE id = ?",
                (user_id,)
            ).fetchone()
        except sqlite3.Error as e:
            raise DatabaseError("Failed to look up user") from e
        return UserRecord.from_row(row) if row else None

    def insert(self, email: str, password_hash: str) -> UserRecord:
        """Insert a new user in a single statement.

        Args:
            email: Normalized email address
            password_hash: Output of PasswordHasher.hash()

        Returns:
            The stored UserRecord with its assigned id

        Raises:
            AlreadyExists: If the email is already registered
            DatabaseError: On any other storage failure
        """
        created_at = isodatetime.now()
        try:
            cursor = self._conn.execute(
                """INSERT INTO users (email, password_hash, created_at)
                   VALUES (?, ?, ?)""",
                (email, password_hash, created_at)
            )
        except sqlite3.IntegrityError as e:
            if _is_unique_violation(e):
                raise AlreadyExists(
                    "An account with this email already exists"
                ) from e
            raise DatabaseError("Failed to create user") from e
        except sqlite3.Error as e:
            raise DatabaseError("Failed to create user") from e

        return UserRecord(
            id=cursor.lastrowid,
            email=email,
            password_hash=password_hash,
            created_at=created_at,
        )
