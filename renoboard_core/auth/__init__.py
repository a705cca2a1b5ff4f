"""Authentication module for RenoBoard Core.

This module provides authentication functionality:
- Schema validation for auth operations
- Password hashing and verification (bcrypt)
- JWT session token issuance and verification
- Bearer header parsing and the per-request auth gate
- Registration and login flows

Auth endpoints:
- POST /auth/register - Create account and return JWT token
- POST /auth/login - Authenticate and return JWT token
- POST /auth/logout - Stateless no-op
- GET /auth/me - Get current user info
- POST /auth/forgot-password - Password reset request
- GET /auth/health - Signing secret status
"""

from . import schemas
from .bearer import extract_bearer_token
from .gate import AuthGate, GateFailure, GateResult, Identity
from .passwords import PasswordHasher
from .service import AuthService
from .token import TokenCodec

__all__ = [
    "schemas",
    "extract_bearer_token",
    "AuthGate",
    "GateFailure",
    "GateResult",
    "Identity",
    "PasswordHasher",
    "AuthService",
    "TokenCodec",
]
