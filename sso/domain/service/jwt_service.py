"""JWT token domain service."""

import logfire

from sso.config import AuthSettings
from sso.domain.model import RegistrationState
from sso.domain.value import UserId
from sso.util.jwt import (
    JWTError,
    TokenPayload,
    create_registration_token,
    create_token,
    verify_registration_token,
    verify_token,
)

from .base import Service


class JWTService(Service):
    """Domain service for session and registration tokens."""

    def __init__(self, auth_settings: AuthSettings) -> None:
        """Initialize JWT service.

        Args:
            auth_settings: Authentication settings
        """
        self.auth_settings = auth_settings

    def create_token(self, user_id: UserId, username: str) -> str:
        """Create session token for user.

        Args:
            user_id: Local user ID
            username: Local username

        Returns:
            JWT token string
        """
        with logfire.span("jwt_service.create_token", user_id=user_id):
            return create_token(user_id, username, self.auth_settings)

    def verify_token(self, token: str) -> TokenPayload:
        """Verify session token and extract payload.

        Raises:
            JWTError: If token is invalid or expired
        """
        with logfire.span("jwt_service.verify_token"):
            try:
                return verify_token(token, self.auth_settings)
            except JWTError as e:
                logfire.warn("Session token rejected", error=str(e))
                raise

    def get_user_id_from_token(self, token: str | None) -> UserId | None:
        """Extract user ID from a session token without raising.

        Returns:
            User ID if token is valid, None if token is missing or invalid
        """
        if not token:
            return None

        try:
            return UserId(self.verify_token(token).user_id)
        except JWTError:
            return None

    def create_registration_token(self, registration: RegistrationState) -> str:
        """Encode pending interstitial state."""
        return create_registration_token(
            registration.user_id, registration.xsolla_id, self.auth_settings
        )

    def get_registration(self, token: str | None) -> RegistrationState | None:
        """Decode pending interstitial state, None if missing or invalid."""
        if not token:
            return None

        try:
            payload = verify_registration_token(token, self.auth_settings)
        except JWTError as e:
            logfire.debug("Registration token rejected", error=str(e))
            return None

        return RegistrationState(
            user_id=UserId(payload.user_id), xsolla_id=payload.xsolla_id
        )
