"""Unit tests for JWTService."""

from datetime import datetime, timedelta, timezone

import jwt
import pytest

from sso.config import AuthSettings
from sso.domain.model import RegistrationState
from sso.domain.service import JWTService
from sso.domain.value import UserId
from sso.util.jwt import JWTError

SECRET = "unit-test-secret-long-enough-for-hs256"


@pytest.fixture
def service():
    return JWTService(AuthSettings(jwt_secret=SECRET))


class TestSessionTokens:
    """Tests for session token handling."""

    def test_round_trip(self, service):
        """Should verify a token it issued."""
        token = service.create_token(UserId(7), "alice")

        payload = service.verify_token(token)

        assert payload.user_id == 7
        assert payload.username == "alice"
        assert service.get_user_id_from_token(token) == 7

    def test_expired_token(self, service):
        """Should reject an expired token."""
        token = jwt.encode(
            {
                "user_id": 7,
                "username": "alice",
                "typ": "session",
                "exp": datetime.now(timezone.utc) - timedelta(minutes=1),
            },
            SECRET,
            algorithm="HS256",
        )

        with pytest.raises(JWTError, match="expired"):
            service.verify_token(token)
        assert service.get_user_id_from_token(token) is None

    def test_foreign_signature(self, service):
        """Should reject tokens signed with another secret."""
        other = JWTService(AuthSettings(jwt_secret="another-secret-long-enough-for-hs256"))
        token = other.create_token(UserId(7), "alice")

        with pytest.raises(JWTError):
            service.verify_token(token)

    def test_missing_token(self, service):
        """Should treat a missing cookie as anonymous."""
        assert service.get_user_id_from_token(None) is None
        assert service.get_user_id_from_token("") is None


class TestRegistrationTokens:
    """Tests for registration token handling."""

    def test_round_trip(self, service):
        """Should restore the pending registration."""
        token = service.create_registration_token(
            RegistrationState(user_id=UserId(3), xsolla_id="42")
        )

        registration = service.get_registration(token)

        assert registration == RegistrationState(user_id=UserId(3), xsolla_id="42")

    def test_tokens_are_not_interchangeable(self, service):
        """Should not accept one kind of token as the other."""
        session = service.create_token(UserId(3), "alice")
        registration = service.create_registration_token(
            RegistrationState(user_id=UserId(3), xsolla_id="42")
        )

        assert service.get_registration(session) is None
        with pytest.raises(JWTError):
            service.verify_token(registration)

    def test_garbage(self, service):
        """Should ignore malformed tokens."""
        assert service.get_registration("not-a-jwt") is None
        assert service.get_registration(None) is None
