"""
Tests for JWT verification and identity resolution.

WHY: Token problems of any kind (missing, expired, tampered, no subject)
must all collapse into "no identity", so the guard rejects them uniformly.
"""

import pytest
from datetime import timedelta
from jose import jwt

from proposal_desk.core.auth import create_access_token, verify_token
from proposal_desk.core.config import settings
from proposal_desk.core.deps import resolve_identity
from proposal_desk.core.exceptions import TokenExpiredError, TokenInvalidError
from proposal_desk.core.guard import Identity


class TestTokens:
    """Test token creation and verification."""

    def test_round_trip_keeps_subject(self):
        token = create_access_token({"sub": "user-a"})
        payload = verify_token(token)

        assert payload["sub"] == "user-a"
        assert "exp" in payload
        assert "iat" in payload

    def test_expired_token_rejected(self):
        token = create_access_token({"sub": "user-a"}, expires_delta=timedelta(seconds=-10))

        with pytest.raises(TokenExpiredError):
            verify_token(token)

    def test_wrong_signature_rejected(self):
        token = jwt.encode({"sub": "user-a"}, "not-the-secret", algorithm=settings.JWT_ALGORITHM)

        with pytest.raises(TokenInvalidError):
            verify_token(token)

    def test_garbage_rejected(self):
        with pytest.raises(TokenInvalidError):
            verify_token("not-a-jwt")


class TestResolveIdentity:
    """Tests for turning bearer tokens into identities."""

    def test_subject_becomes_identity(self):
        token = create_access_token({"sub": "user-a"})

        assert resolve_identity(token) == Identity(user_id="user-a")

    def test_legacy_user_id_claim_accepted(self):
        token = create_access_token({"user_id": 42})

        assert resolve_identity(token) == Identity(user_id="42")

    def test_token_without_subject_has_no_identity(self):
        token = create_access_token({"role": "CLIENT"})

        assert resolve_identity(token) is None

    def test_expired_token_has_no_identity(self):
        token = create_access_token({"sub": "user-a"}, expires_delta=timedelta(seconds=-10))

        assert resolve_identity(token) is None

    def test_invalid_token_has_no_identity(self):
        assert resolve_identity("not-a-jwt") is None
