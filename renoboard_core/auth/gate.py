"""Per-request authentication gate.

Every protected request passes through the gate exactly once:

    no header          -> rejected (MISSING_HEADER)
    header present     -> extracted | rejected (MALFORMED_HEADER)
    token extracted    -> verified  | rejected (TOKEN_EXPIRED, TOKEN_INVALID)
    token verified     -> Identity(user_id, email)

Expected failures come back from check() as ordinary GateResult values.
Only operational defects (ConfigurationError when the signing secret is
missing) propagate as exceptions.

authenticate() is the HTTP-facing wrapper: it logs the precise failure
server-side and raises AuthenticationError carrying one generic message, so
a client cannot tell an expired token from a forged or malformed one.
No identities are cached between requests.
"""

import logging
from dataclasses import dataclass
from enum import Enum

from ..exceptions import AuthenticationError, TokenExpired, TokenInvalid
from .bearer import extract_bearer_token
from .token import TokenCodec

logger = logging.getLogger(__name__)

GENERIC_FAILURE_MESSAGE = "Invalid or expired token"


class GateFailure(str, Enum):
    """Why a request was rejected. Logged, never sent to the client."""

    MISSING_HEADER = "missing_header"
    MALFORMED_HEADER = "malformed_header"
    TOKEN_EXPIRED = "token_expired"
    TOKEN_INVALID = "token_invalid"


@dataclass(frozen=True)
class Identity:
    """Verified caller identity handed to route handlers."""

    user_id: int
    email: str

    def to_dict(self) -> dict:
        return {"userId": self.user_id, "email": self.email}


@dataclass(frozen=True)
class GateResult:
    """Outcome of one gate check: an identity or a failure, never both."""

    identity: Identity | None = None
    failure: GateFailure | None = None
    detail: str | None = None

    @property
    def ok(self) -> bool:
        return self.identity is not None


class AuthGate:
    """Turns a raw Authorization header into a verified Identity."""

    def __init__(self, codec: TokenCodec):
        self._codec = codec

    def check(self, header: str | None) -> GateResult:
        """
        Run bearer extraction then token verification.

        Args:
            header: Raw Authorization header value, or None if absent

        Returns:
            GateResult with identity on success, failure reason otherwise

        Raises:
            ConfigurationError: If the signing secret is unavailable
        """
        if header is None or not header.strip():
            return GateResult(failure=GateFailure.MISSING_HEADER)

        try:
            token = extract_bearer_token(header)
        except AuthenticationError as e:
            return GateResult(failure=GateFailure.MALFORMED_HEADER, detail=e.message)

        try:
            payload = self._codec.verify(token)
        except TokenExpired as e:
            return GateResult(failure=GateFailure.TOKEN_EXPIRED, detail=e.message)
        except TokenInvalid as e:
            return GateResult(failure=GateFailure.TOKEN_INVALID, detail=e.message)

        return GateResult(identity=Identity(user_id=payload.user_id, email=payload.email))

    def authenticate(self, header: str | None) -> Identity:
        """
        Establish the caller's identity or reject the request.

        Raises:
            AuthenticationError: On any gate failure, with a generic message
            ConfigurationError: If the signing secret is unavailable
        """
        result = self.check(header)
        if not result.ok:
            logger.warning(
                f"Authentication rejected ({result.failure.value}): {result.detail or '-'}"
            )
            raise AuthenticationError(GENERIC_FAILURE_MESSAGE)

        logger.debug(f"Authenticated user {result.identity.user_id}")
        return result.identity
