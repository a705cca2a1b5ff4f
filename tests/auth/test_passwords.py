"""Tests for password hashing and verification."""

import bcrypt
import pytest

from renoboard_core.auth.passwords import PasswordHasher


class TestHash:
    """Tests for PasswordHasher.hash."""

    def test_default_cost_factor_is_12(self):
        """Default hasher produces a 60-character $2b$12$ bcrypt hash."""
        hashed = PasswordHasher().hash("password123")

        assert isinstance(hashed, str)
        assert len(hashed) == 60
        assert hashed.startswith("$2b$12$")

    def test_configured_cost_factor(self, hasher):
        assert hasher.hash("password123").startswith("$2b$04$")

    def test_same_password_different_hashes(self, hasher):
        """Same password produces different hashes (fresh salt)."""
        hash1 = hasher.hash("password123")
        hash2 = hasher.hash("password123")

        assert hash1 != hash2
        assert hasher.verify("password123", hash1)
        assert hasher.verify("password123", hash2)

    def test_hash_is_not_plaintext(self, hasher):
        assert "password123" not in hasher.hash("password123")


class TestVerify:
    """Tests for PasswordHasher.verify."""

    def test_correct_password(self, hasher):
        hashed = hasher.hash("password123")
        assert hasher.verify("password123", hashed) is True

    def test_wrong_password(self, hasher):
        hashed = hasher.hash("password123")
        assert hasher.verify("password124", hashed) is False

    def test_empty_password(self, hasher):
        hashed = hasher.hash("password123")
        assert hasher.verify("", hashed) is False

    def test_unicode_password(self, hasher):
        """Non-ASCII passwords round-trip."""
        hashed = hasher.hash("pässwörd123🔒")
        assert hasher.verify("pässwörd123🔒", hashed) is True
        assert hasher.verify("passwort123", hashed) is False

    @pytest.mark.parametrize("stored", ["not-a-hash", "", "$2b$12$short"])
    def test_malformed_stored_hash_returns_false(self, hasher, stored):
        """A corrupted stored hash is reported as a mismatch, not an error."""
        assert hasher.verify("password123", stored) is False

    def test_long_password_truncated_to_72_bytes(self, hasher):
        """Passwords up to 128 characters hash; bcrypt reads the first 72 bytes."""
        password = "a1" * 64
        hashed = hasher.hash(password)

        assert hasher.verify(password, hashed) is True
        assert hasher.verify(password[:72] + "different", hashed) is True
        assert hasher.verify(password[:71], hashed) is False


class TestVerifyDummy:
    """Tests for PasswordHasher.verify_dummy."""

    def test_always_false(self, hasher):
        assert hasher.verify_dummy("password123") is False
        assert hasher.verify_dummy("") is False

    def test_dummy_hash_built_at_construction(self, hasher):
        """The throwaway hash exists before any lookup, at the hasher's cost."""
        assert hasher._dummy_hash.startswith(b"$2b$04$")

    def test_verify_dummy_never_hashes(self, hasher, monkeypatch):
        """Every call, including the first, costs one comparison only."""
        def fail_hashpw(*args):
            raise AssertionError("verify_dummy must not call hashpw")

        monkeypatch.setattr(bcrypt, "hashpw", fail_hashpw)

        assert hasher.verify_dummy("password123") is False
        assert hasher.verify_dummy("other-password1") is False
