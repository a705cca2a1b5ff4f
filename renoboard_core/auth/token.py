"""JWT session token issuance and verification.

Tokens are HS256-signed JWTs carrying the claim set:

    {"userId": 42, "email": "alice@example.com", "iat": 1760000000, "exp": 1760086400}

All timestamps are integer epoch seconds and every token lives exactly 24
hours. The algorithm is pinned: a token whose header names any other
algorithm, including "none", is rejected.

Tokens are stateless. Nothing is stored server-side, so changing the
signing secret invalidates every token issued before the change.
"""

import jwt

from ..config import Settings
from ..exceptions import TokenExpired, TokenInvalid
from ..utils import isodatetime
from .schemas import TokenPayload

ALGORITHM = "HS256"
LIFETIME_SECONDS = 24 * 60 * 60
REQUIRED_CLAIMS = ["userId", "email", "iat", "exp"]


class TokenCodec:
    """Signs and verifies session tokens with the configured secret.

    The secret is fetched through Settings.get_signing_secret() on every
    issue() and verify(), so an unconfigured secret raises
    ConfigurationError at use time.
    """

    def __init__(self, config: Settings):
        self._config = config

    @property
    def secret_length(self) -> int | None:
        secret = self._config.jwt_secret_key
        return len(secret) if secret else None

    def issue(self, user_id: int, email: str) -> str:
        """Issue a signed token for a user.

        Returns:
            Compact, URL-safe JWT string

        Raises:
            ConfigurationError: If the signing secret is unavailable
        """
        secret = self._config.get_signing_secret()
        issued_at = isodatetime.now_unix()
        payload = {
            "userId": user_id,
            "email": email,
            "iat": issued_at,
            "exp": issued_at + LIFETIME_SECONDS,
        }
        return jwt.encode(payload, secret, algorithm=ALGORITHM)

    def verify(self, token: str) -> TokenPayload:
        """Verify a token's signature and expiry and return its claims.

        Expiry is checked twice: by PyJWT's exp-claim handling and by an
        explicit comparison against the decoded exp. Both treat now >= exp
        as expired.

        Raises:
            ConfigurationError: If the signing secret is unavailable
            TokenExpired: If the token is past its expiry
            TokenInvalid: If the signature, structure, claims or algorithm
                are not acceptable
        """
        secret = self._config.get_signing_secret()
        try:
            claims = jwt.decode(
                token,
                secret,
                algorithms=[ALGORITHM],
                options={"require": REQUIRED_CLAIMS},
            )
        except jwt.ExpiredSignatureError as e:
            raise TokenExpired("Token has expired") from e
        except jwt.InvalidTokenError as e:
            raise TokenInvalid(f"Invalid token: {e}") from e

        try:
            payload = TokenPayload.model_validate(claims)
        except ValueError as e:
            raise TokenInvalid(f"Invalid token claims: {e}") from e

        if isodatetime.now_unix() >= payload.exp:
            raise TokenExpired("Token has expired")

        return payload
