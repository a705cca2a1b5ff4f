"""Pydantic schemas for authentication requests and responses.

Request schemas normalize and validate input before any I/O happens. Each
rule raises its own human-readable message so the client learns exactly
which field to fix. Validation runs in field order (email, then password),
and within a field in the order the checks appear below.
"""

import re
from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic_core import PydanticCustomError

from ...db.users import normalize_email

# Basic local@domain.tld shape; deliverability is not checked
EMAIL_PATTERN = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")

PASSWORD_MIN_LENGTH = 8
PASSWORD_MAX_LENGTH = 128


def _invalid(message: str) -> PydanticCustomError:
    return PydanticCustomError("invalid_argument", message)


def _validate_email(value) -> str:
    if value is None:
        raise _invalid("Email is required")
    if not isinstance(value, str):
        raise _invalid("Email must be a string")
    email = normalize_email(value)
    if not email:
        raise _invalid("Email is required")
    if not EMAIL_PATTERN.match(email):
        raise _invalid("Invalid email format")
    return email


def _require_password(value) -> str:
    if value is None or value == "":
        raise _invalid("Password is required")
    if not isinstance(value, str):
        raise _invalid("Password must be a string")
    return value


# ============================================================================
# Request Schemas
# ============================================================================


class RegisterRequest(BaseModel):
    """Account registration request.

    The email is normalized (trimmed, lower-cased). The password must be
    8-128 characters and contain at least one letter and one digit.
    """

    model_config = ConfigDict(validate_default=True)

    email: str | None = None
    password: str | None = None

    @field_validator("email", mode="before")
    @classmethod
    def validate_email(cls, value) -> str:
        return _validate_email(value)

    @field_validator("password", mode="before")
    @classmethod
    def validate_password(cls, value) -> str:
        password = _require_password(value)
        if len(password) < PASSWORD_MIN_LENGTH:
            raise _invalid(
                f"Password must be at least {PASSWORD_MIN_LENGTH} characters long"
            )
        if len(password) > PASSWORD_MAX_LENGTH:
            raise _invalid(
                f"Password must be at most {PASSWORD_MAX_LENGTH} characters long"
            )
        if not any(c.isalpha() for c in password):
            raise _invalid("Password must contain at least one letter")
        if not any(c.isdigit() for c in password):
            raise _invalid("Password must contain at least one digit")
        return password


class LoginRequest(BaseModel):
    """Login request. Password strength is not re-checked here."""

    model_config = ConfigDict(validate_default=True)

    email: str | None = None
    password: str | None = None

    @field_validator("email", mode="before")
    @classmethod
    def validate_email(cls, value) -> str:
        return _validate_email(value)

    @field_validator("password", mode="before")
    @classmethod
    def validate_password(cls, value) -> str:
        return _require_password(value)


class ForgotPasswordRequest(BaseModel):
    """Password reset request."""

    model_config = ConfigDict(validate_default=True)

    email: str | None = None

    @field_validator("email", mode="before")
    @classmethod
    def validate_email(cls, value) -> str:
        return _validate_email(value)


# ============================================================================
# Response Schemas
# ============================================================================


class UserResponse(BaseModel):
    """User as returned to clients. Never carries the password hash."""

    model_config = ConfigDict(populate_by_name=True)

    id: int
    email: str
    created_at: datetime = Field(alias="createdAt")


class AuthResponse(BaseModel):
    """Successful registration or login."""

    token: str
    user: UserResponse


class MessageResponse(BaseModel):
    message: str


class AuthHealthResponse(BaseModel):
    """Authentication subsystem health. Reports the secret's length only."""

    model_config = ConfigDict(populate_by_name=True)

    status: str
    jwt_secret_configured: bool = Field(alias="jwtSecretConfigured")
    jwt_secret_length: int | None = Field(default=None, alias="jwtSecretLength")
    timestamp: str
    version: str
    message: str | None = None


# ============================================================================
# Token Schemas
# ============================================================================


class TokenPayload(BaseModel):
    """Signed claim set carried by a session token.

    Timestamps are integer epoch seconds. Strict types so that a token
    carrying e.g. a string userId is rejected rather than coerced.
    """

    model_config = ConfigDict(populate_by_name=True, strict=True)

    user_id: int = Field(alias="userId")
    email: str
    iat: int
    exp: int
