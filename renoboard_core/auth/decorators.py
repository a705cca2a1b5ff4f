"""Authentication decorator for protected endpoints.

    @auth_bp.get("/auth/me")
    @auth_required
    def me():
        identity = g.identity      # Identity(user_id, email)
        ...

The gate instance is built once by create_app() and read from
app.extensions; every request is verified independently.
"""

from functools import wraps

from flask import current_app, g, request

from .gate import AuthGate


def get_auth_gate() -> AuthGate:
    """Return the AuthGate configured for the current application."""
    return current_app.extensions["renoboard"]["auth_gate"]


def authenticate_request():
    """
    Run the auth gate for the current request.

    Stores the verified identity in flask.g:
    - g.identity: Identity(user_id, email)
    - g.user_id: User ID (int)
    - g.email: Email the token was issued for

    Raises:
        AuthenticationError: If the request carries no valid bearer token
        ConfigurationError: If the signing secret is unavailable
    """
    identity = get_auth_gate().authenticate(request.headers.get("Authorization"))
    g.identity = identity
    g.user_id = identity.user_id
    g.email = identity.email


def auth_required(f):
    """
    Decorator to require a valid bearer token for endpoint access.

    Raises:
        AuthenticationError: If no valid authentication provided
    """
    @wraps(f)
    def wrapper(*args, **kwargs):
        authenticate_request()
        return f(*args, **kwargs)

    return wrapper
