"""Authentication Pydantic schemas for API validation."""

from .auth import (
    AuthHealthResponse,
    AuthResponse,
    ForgotPasswordRequest,
    LoginRequest,
    MessageResponse,
    RegisterRequest,
    TokenPayload,
    UserResponse,
)

__all__ = [
    "AuthHealthResponse",
    "AuthResponse",
    "ForgotPasswordRequest",
    "LoginRequest",
    "MessageResponse",
    "RegisterRequest",
    "TokenPayload",
    "UserResponse",
]
