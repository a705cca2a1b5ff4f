"""Registration and login flows.

AuthService composes the password hasher, the token codec and the
credential store. Request data arrives already validated and normalized by
the request schemas, so every check here is one that needs I/O.

Expected outcomes are return values: verify_credentials() returns None for
an unknown email or a wrong password. register() and login() turn those
outcomes into the exceptions the HTTP layer renders.
"""

import logging

from ..db import Core
from ..db.users import UserRecord
from ..exceptions import AlreadyExists, AuthenticationError
from ..utils import isodatetime
from .passwords import PasswordHasher
from .schemas import AuthResponse, LoginRequest, RegisterRequest, UserResponse
from .token import TokenCodec

logger = logging.getLogger(__name__)

INVALID_CREDENTIALS_MESSAGE = "Invalid email or password"


def to_user_response(record: UserRecord) -> UserResponse:
    """Strip the password hash from a stored user."""
    return UserResponse(
        id=record.id,
        email=record.email,
        created_at=isodatetime.to_datetime(record.created_at),
    )


class AuthService:
    """Account registration, login and lookup."""

    def __init__(self, hasher: PasswordHasher, codec: TokenCodec):
        self.hasher = hasher
        self.codec = codec

    @classmethod
    def from_settings(cls, config) -> "AuthService":
        return cls(
            PasswordHasher(rounds=config.bcrypt_rounds),
            TokenCodec(config),
        )

    def _issue(self, record: UserRecord) -> AuthResponse:
        token = self.codec.issue(record.id, record.email)
        return AuthResponse(token=token, user=to_user_response(record))

    def register(self, core: Core, data: RegisterRequest) -> AuthResponse:
        """
        Create an account and issue its first token.

        Args:
            core: Atomic Core; the insert rolls back if token issuance fails
            data: Validated registration request (email already normalized)

        Raises:
            AlreadyExists: If the email is already registered, including when
                a concurrent registration wins the race to insert
            ConfigurationError: If the signing secret is unavailable
            DatabaseError: On storage failure
        """
        if core.users.find_by_email(data.email) is not None:
            logger.warning("Registration rejected: email already registered")
            raise AlreadyExists("An account with this email already exists")

        password_hash = self.hasher.hash(data.password)
        record = core.users.insert(data.email, password_hash)

        response = self._issue(record)
        logger.info(f"Account registered: user {record.id}")
        return response

    def verify_credentials(self, core: Core, email: str, password: str) -> UserRecord | None:
        """
        Check an email/password pair.

        Returns:
            The matching UserRecord, or None for an unknown email or a wrong
            password. Both branches run one bcrypt comparison.
        """
        record = core.users.find_by_email(email)
        if record is None:
            self.hasher.verify_dummy(password)
            logger.warning("Login failed: no account for submitted email")
            return None

        if not self.hasher.verify(password, record.password_hash):
            logger.warning(f"Login failed: wrong password for user {record.id}")
            return None

        return record

    def login(self, core: Core, data: LoginRequest) -> AuthResponse:
        """
        Authenticate and issue a token.

        Raises:
            AuthenticationError: With the same message whether the account
                is missing or the password is wrong
            ConfigurationError: If the signing secret is unavailable
            DatabaseError: On storage failure
        """
        record = self.verify_credentials(core, data.email, data.password)
        if record is None:
            raise AuthenticationError(INVALID_CREDENTIALS_MESSAGE)

        response = self._issue(record)
        logger.info(f"Successful login: user {record.id}")
        return response

    def get_user(self, core: Core, user_id: int) -> UserResponse | None:
        record = core.users.get_by_id(user_id)
        return to_user_response(record) if record else None
