"""Password hashing and verification.

Uses bcrypt for password hashing with automatic salting and a configurable
work factor (12 by default). bcrypt only reads the first 72 bytes of its
input, so the UTF-8 encoded password is truncated to 72 bytes explicitly
on both hash and verify.
"""

import logging

import bcrypt

logger = logging.getLogger(__name__)

BCRYPT_MAX_BYTES = 72


def _encode(password: str) -> bytes:
    return password.encode("utf-8")[:BCRYPT_MAX_BYTES]


class PasswordHasher:
    """Salted one-way password hashing.

    Args:
        rounds: bcrypt cost factor (log2 of the iteration count)
    """

    def __init__(self, rounds: int = 12):
        self.rounds = rounds
        # verify_dummy() only compares against this; it never hashes
        self._dummy_hash = bcrypt.hashpw(
            b"renoboard-dummy-password", bcrypt.gensalt(rounds=rounds)
        )

    def hash(self, password: str) -> str:
        """Hash a password with a fresh salt.

        Returns:
            60-character bcrypt hash string ($2b$<rounds>$...)
        """
        salt = bcrypt.gensalt(rounds=self.rounds)
        return bcrypt.hashpw(_encode(password), salt).decode("utf-8")

    def verify(self, password: str, password_hash: str) -> bool:
        """Check a password against a stored hash.

        A mismatch is a normal False result. A malformed stored hash is
        logged and also reported as False so that callers surface it as
        invalid credentials.
        """
        try:
            return bcrypt.checkpw(_encode(password), password_hash.encode("utf-8"))
        except (ValueError, TypeError) as e:
            logger.warning(f"Stored password hash is malformed: {e}")
            return False

    def verify_dummy(self, password: str) -> bool:
        """Spend the same bcrypt effort as verify() and return False.

        Used when no account matches, so an unknown email and a wrong
        password take comparable time.
        """
        bcrypt.checkpw(_encode(password), self._dummy_hash)
        return False
