"""Shared test fixtures for renoboard-core."""

import os
import tempfile

# Module-level app in renoboard_core.main reads these on import
os.environ.setdefault(
    "RENOBOARD_DATABASE_PATH",
    os.path.join(tempfile.mkdtemp(prefix="renoboard-"), "renoboard.db")
)
os.environ.setdefault(
    "RENOBOARD_JWT_SECRET_KEY", "test-signing-secret-0123456789abcdefghijkl"
)
os.environ.setdefault("RENOBOARD_BCRYPT_ROUNDS", "4")

import jwt as pyjwt
import pytest

from renoboard_core.auth import AuthGate, AuthService, PasswordHasher, TokenCodec
from renoboard_core.config import Settings
from renoboard_core.db import get_core, init_db
from renoboard_core.main import create_app
from renoboard_core.utils import isodatetime

TEST_SECRET = "test-signing-secret-0123456789abcdefghijkl"
TEST_PASSWORD = "password123"


@pytest.fixture
def signing_secret():
    """The secret every test codec signs with."""
    return TEST_SECRET


@pytest.fixture
def test_settings(tmp_path):
    """Settings pointing at a fresh temp-file database."""
    return Settings(
        _env_file=None,
        database_path=str(tmp_path / "renoboard-test.db"),
        jwt_secret_key=TEST_SECRET,
        bcrypt_rounds=4,
    )


@pytest.fixture
def app(test_settings):
    """Flask app built from test settings."""
    app = create_app(test_settings)
    app.config["TESTING"] = True
    return app


@pytest.fixture
def client(app):
    """Create test client for API testing."""
    with app.test_client() as client:
        yield client


@pytest.fixture
def test_db(test_settings):
    """Initialized database; yields an autocommit Core."""
    init_db(test_settings.database_path)
    core = get_core(test_settings.database_path)
    yield core
    core.close()


@pytest.fixture
def codec(test_settings):
    return TokenCodec(test_settings)


@pytest.fixture
def codec_for():
    """Build a codec signing with the given secret (None for unconfigured)."""
    def make(secret):
        return TokenCodec(Settings(_env_file=None, jwt_secret_key=secret))

    return make


@pytest.fixture
def hasher():
    """Low-cost hasher to keep the suite fast."""
    return PasswordHasher(rounds=4)


@pytest.fixture
def auth_service(hasher, codec):
    return AuthService(hasher, codec)


@pytest.fixture
def gate(codec):
    return AuthGate(codec)


@pytest.fixture
def token_factory():
    """Build signed tokens with arbitrary claims.

    Claims default to a valid 24h token for user 1; names listed in omit
    are left out of the claim set.
    """
    def make(
        user_id=1,
        email="alice@example.com",
        iat=None,
        exp=None,
        secret=TEST_SECRET,
        algorithm="HS256",
        omit=(),
    ):
        now = isodatetime.now_unix()
        claims = {
            "userId": user_id,
            "email": email,
            "iat": now if iat is None else iat,
            "exp": now + 24 * 60 * 60 if exp is None else exp,
        }
        for name in omit:
            claims.pop(name)
        return pyjwt.encode(claims, secret, algorithm=algorithm)

    return make


@pytest.fixture
def expired_token(token_factory):
    """Token for user 1 that expired an hour ago."""
    now = isodatetime.now_unix()
    return token_factory(iat=now - 25 * 60 * 60, exp=now - 60 * 60)


@pytest.fixture
def registered_user(client):
    """Register alice@example.com through the API.

    Returns a tuple of (response_json, password).
    """
    response = client.post(
        "/auth/register",
        json={"email": "alice@example.com", "password": TEST_PASSWORD}
    )
    assert response.status_code == 201
    return response.get_json(), TEST_PASSWORD


@pytest.fixture
def auth_headers(registered_user):
    """Authorization header carrying the registered user's token."""
    body, _password = registered_user
    return {"Authorization": f"Bearer {body['token']}"}
