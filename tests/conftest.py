"""Test configuration and fixtures."""

import os

import logfire

# Settings are read from the environment when the container is built
os.environ.setdefault("ENVIRONMENT", "test")
os.environ.setdefault("XSOLLA__APP_ID", "test-app")
os.environ.setdefault("XSOLLA__SECRET", "test-secret-with-enough-bytes-for-hs256")
os.environ.setdefault("AUTH__JWT_SECRET", "test-jwt-secret-with-enough-bytes")

logfire.configure(send_to_logfire=False, console=False)

from sso.domain.value import ExternalIdentity  # noqa: E402


def make_identity(
    external_id: str = "42",
    email: str = "player@example.org",
    display_name: str = "Player One",
    avatar_url: str | None = "https://cdn.example.org/avatar.png",
) -> ExternalIdentity:
    """Helper to build a verified Xsolla identity for tests."""
    return ExternalIdentity(
        external_id=external_id,
        display_name=display_name,
        email=email,
        avatar_url=avatar_url,
        access_token=f"access-{external_id}",
        refresh_token=f"refresh-{external_id}",
    )
