"""Tests for the @auth_required decorator.

A protected test route is added to the app fixture; the decorator must set
flask.g from the verified token and reject everything else with 401.
"""

import pytest
from flask import g, jsonify

from renoboard_core.auth.decorators import auth_required, get_auth_gate
from renoboard_core.auth.gate import GENERIC_FAILURE_MESSAGE


@pytest.fixture
def protected_client(app):
    @app.get("/test/protected")
    @auth_required
    def protected():
        return jsonify({
            "identity": g.identity.to_dict(),
            "user_id": g.user_id,
            "email": g.email,
        })

    with app.test_client() as client:
        yield client


class TestAuthRequired:
    """Tests for @auth_required."""

    def test_sets_identity_on_g(self, protected_client, token_factory):
        token = token_factory(user_id=7, email="bob@example.com")

        response = protected_client.get(
            "/test/protected", headers={"Authorization": f"Bearer {token}"}
        )

        assert response.status_code == 200
        assert response.get_json() == {
            "identity": {"userId": 7, "email": "bob@example.com"},
            "user_id": 7,
            "email": "bob@example.com",
        }

    def test_missing_header(self, protected_client):
        response = protected_client.get("/test/protected")

        assert response.status_code == 401
        assert response.get_json()["error"]["message"] == GENERIC_FAILURE_MESSAGE

    def test_expired_token(self, protected_client, expired_token):
        response = protected_client.get(
            "/test/protected", headers={"Authorization": f"Bearer {expired_token}"}
        )

        assert response.status_code == 401
        assert "details" not in response.get_json()["error"]

    def test_view_not_called_on_failure(self, app):
        calls = []

        @app.get("/test/counted")
        @auth_required
        def counted():
            calls.append(1)
            return jsonify({})

        with app.test_client() as client:
            client.get("/test/counted", headers={"Authorization": "Token abc"})

        assert calls == []

    def test_preserves_view_name(self):
        @auth_required
        def my_view():
            pass

        assert my_view.__name__ == "my_view"


def test_get_auth_gate_returns_app_gate(app):
    with app.app_context():
        assert get_auth_gate() is app.extensions["renoboard"]["auth_gate"]
