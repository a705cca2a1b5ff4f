"""Authorization header parsing."""

from ..exceptions import AuthenticationError

BEARER_SCHEME = "Bearer"


def extract_bearer_token(header: str | None) -> str:
    """
    Extract the token from an `Authorization: Bearer <token>` header value.

    The header must split on whitespace into exactly two parts, the first
    being literally "Bearer" (case-sensitive).

    Args:
        header: Raw header value, or None when the header is absent

    Returns:
        The token string

    Raises:
        AuthenticationError: If the header is absent or not in Bearer form
    """
    if header is None or not header.strip():
        raise AuthenticationError(
            "Missing authorization header",
            {"code": "missing_header"}
        )

    parts = header.split()
    if len(parts) != 2:
        raise AuthenticationError(
            "Invalid authorization header format",
            {"code": "malformed_header"}
        )

    scheme, token = parts
    if scheme != BEARER_SCHEME:
        raise AuthenticationError(
            "Invalid authorization header format",
            {"code": "malformed_header"}
        )

    return token.strip()
