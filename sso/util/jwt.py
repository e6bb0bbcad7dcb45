"""JWT token utilities.

Two kinds of token are issued: the session token stored in the
``auth_token`` cookie, and a short-lived registration token that carries
the pending interstitial state between the OAuth callback and the
data-completion step.
"""

from datetime import datetime, timedelta, timezone
from typing import Literal

import jwt
from pydantic import BaseModel

from sso.config import AuthSettings


class TokenPayload(BaseModel):
    """Session token payload."""

    user_id: int
    username: str
    typ: Literal["session"] = "session"
    exp: datetime


class RegistrationPayload(BaseModel):
    """Registration token payload."""

    user_id: int
    xsolla_id: str
    typ: Literal["registration"] = "registration"
    exp: datetime


class JWTError(Exception):
    """JWT-related error."""

    pass


def create_token(user_id: int, username: str, settings: AuthSettings) -> str:
    """Create a session token for the user.

    Args:
        user_id: Local user ID
        username: Local username
        settings: Authentication settings

    Returns:
        Encoded JWT token
    """
    expiry = datetime.now(timezone.utc) + timedelta(days=settings.jwt_expiry_days)

    payload = {
        "user_id": user_id,
        "username": username,
        "typ": "session",
        "exp": expiry,
    }

    return jwt.encode(payload, settings.jwt_secret, algorithm=settings.jwt_algorithm)


def create_registration_token(
    user_id: int, xsolla_id: str, settings: AuthSettings
) -> str:
    """Create a registration token for a pending interstitial."""
    expiry = datetime.now(timezone.utc) + timedelta(
        minutes=settings.registration_expiry_minutes
    )

    payload = {
        "user_id": user_id,
        "xsolla_id": xsolla_id,
        "typ": "registration",
        "exp": expiry,
    }

    return jwt.encode(payload, settings.jwt_secret, algorithm=settings.jwt_algorithm)


def _decode(token: str, settings: AuthSettings) -> dict:
    try:
        return jwt.decode(
            token, settings.jwt_secret, algorithms=[settings.jwt_algorithm]
        )
    except jwt.ExpiredSignatureError:
        raise JWTError("Token has expired")
    except jwt.InvalidTokenError:
        raise JWTError("Invalid token")


def verify_token(token: str, settings: AuthSettings) -> TokenPayload:
    """Verify and decode a session token.

    Args:
        token: JWT token to verify
        settings: Authentication settings

    Returns:
        Token payload if valid

    Raises:
        JWTError: If token is invalid, expired or not a session token
    """
    payload = _decode(token, settings)
    if payload.get("typ") != "session":
        raise JWTError("Not a session token")
    return TokenPayload(**payload)


def verify_registration_token(token: str, settings: AuthSettings) -> RegistrationPayload:
    """Verify and decode a registration token.

    Raises:
        JWTError: If token is invalid, expired or not a registration token
    """
    payload = _decode(token, settings)
    if payload.get("typ") != "registration":
        raise JWTError("Not a registration token")
    return RegistrationPayload(**payload)
