"""Exception hierarchy for RenoBoard Core.

Every error raised to a route handler derives from RenoBoardError and is
rendered by the error handlers in main.py as:

    {"error": {"type": "<class name>", "message": "...", "details": {...}}}

Token-level errors (TokenInvalid, TokenExpired) are internal to the auth
package. The auth gate converts them to AuthenticationError with a generic
message before they reach a client.
"""


class RenoBoardError(Exception):
    """Base exception for all RenoBoard errors."""

    status_code = 500

    def __init__(self, message: str, details: dict | None = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}


class ValidationError(RenoBoardError):
    """Caller-fixable input problem (HTTP 400)."""

    status_code = 400


class AuthenticationError(RenoBoardError):
    """Identity could not be established (HTTP 401)."""

    status_code = 401


class AlreadyExists(RenoBoardError):
    """Uniqueness conflict (HTTP 409)."""

    status_code = 409


class ConfigurationError(RenoBoardError):
    """Required configuration is missing, e.g. the signing secret."""


class DatabaseError(RenoBoardError):
    """Storage layer failure (unreachable database, unexpected driver error)."""


class TokenInvalid(RenoBoardError):
    """Token signature, structure or algorithm is not acceptable."""

    status_code = 401


class TokenExpired(TokenInvalid):
    """Token was well-formed and correctly signed but is past its expiry."""
