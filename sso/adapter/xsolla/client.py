"""Xsolla Login OAuth 2.0 client implementation.

Authorization code flow: the user is sent to the Xsolla login page, the
callback receives a code, the code is exchanged for a JWT access token,
and the token's claims describe the Xsolla account.
"""

from urllib.parse import urlencode

import httpx
import jwt
import logfire

from sso.adapter.error import ProviderError
from sso.config import XsollaSettings
from sso.domain.service.auth_service import OAuthClient
from sso.domain.value import ExternalIdentity


class XsollaOAuthError(ProviderError):
    """Xsolla OAuth error."""

    pass


class XsollaOAuthClient(OAuthClient):
    """Base class for Xsolla OAuth clients.

    Provides type distinction for dependency injection.
    """

    pass


class RealXsollaOAuthClient(XsollaOAuthClient):
    """Xsolla OAuth 2.0 client.

    The access token returned by the token endpoint is a JWT signed with
    the project secret; it is verified with PyJWT before any claim is used.
    """

    def __init__(self, settings: XsollaSettings) -> None:
        """Initialize Xsolla OAuth client.

        Args:
            settings: Xsolla configuration (credentials, endpoints, callback)
        """
        self.settings = settings

        # Issued states, consumed on callback
        # In production, use Redis or similar for multi-process deployments
        self._pending_states: set[str] = set()

    async def initiate_authorization(self, state: str) -> str:
        """Build the Xsolla login URL.

        Args:
            state: State parameter for CSRF protection

        Returns:
            Authorization URL to redirect user to
        """
        self._pending_states.add(state)

        params = {
            "response_type": "code",
            "client_id": self.settings.app_id,
            "redirect_uri": self.settings.callback_url,
            "scope": self.settings.scope,
            "state": state,
        }

        logfire.info(
            "Xsolla OAuth authorization initiated",
            redirect_uri=self.settings.callback_url,
        )

        return f"{self.settings.authorize_url}?{urlencode(params)}"

    async def complete_authorization(self, code: str, state: str) -> ExternalIdentity:
        """Complete the Xsolla OAuth flow.

        Args:
            code: Authorization code from Xsolla callback
            state: State parameter for verification

        Returns:
            Identity built from the verified token claims

        Raises:
            XsollaOAuthError: If the state is unknown or any step fails
        """
        if state not in self._pending_states:
            raise XsollaOAuthError("Invalid or expired OAuth state")
        self._pending_states.discard(state)

        tokens = await self._exchange_code_for_token(code)
        access_token = tokens.get("access_token")
        if not access_token:
            raise XsollaOAuthError("Token response has no access_token")

        claims = self._decode_access_token(access_token)
        identity = self.identity_from_claims(
            claims, access_token, tokens.get("refresh_token")
        )

        logfire.info("Xsolla OAuth completed", xsolla_id=identity.external_id)
        return identity

    def identity_from_claims(
        self, claims: dict, access_token: str, refresh_token: str | None
    ) -> ExternalIdentity:
        """Build an identity from verified token claims.

        Accounts without an email get a placeholder address on the
        provider domain, which later triggers email collection.
        """
        external_id = str(claims["sub"])
        username = claims.get("username")

        email = claims.get("email")
        if not email:
            local_part = username or external_id
            email = f"{local_part}@{self.settings.placeholder_email_domain}"

        return ExternalIdentity(
            external_id=external_id,
            display_name=claims.get("name") or username or external_id,
            email=email,
            avatar_url=claims.get("picture"),
            access_token=access_token,
            refresh_token=refresh_token,
        )

    def _decode_access_token(self, access_token: str) -> dict:
        try:
            claims = jwt.decode(
                access_token,
                self.settings.secret,
                algorithms=[self.settings.jwt_algorithm],
                options={"verify_aud": False, "require": ["sub", "exp"]},
            )
        except jwt.ExpiredSignatureError:
            raise XsollaOAuthError("Xsolla access token has expired")
        except jwt.InvalidTokenError as e:
            logfire.error("Xsolla access token rejected", error=str(e))
            raise XsollaOAuthError(f"Invalid Xsolla access token: {e}")

        return claims

    async def _exchange_code_for_token(self, code: str) -> dict:
        """Exchange authorization code for tokens.

        Raises:
            XsollaOAuthError: If token exchange fails
        """
        data = {
            "grant_type": "authorization_code",
            "client_id": self.settings.app_id,
            "client_secret": self.settings.secret,
            "redirect_uri": self.settings.callback_url,
            "code": code,
        }

        try:
            async with httpx.AsyncClient() as client:
                response = await client.post(
                    self.settings.token_url,
                    data=data,
                    headers={"Content-Type": "application/x-www-form-urlencoded"},
                    timeout=30.0,
                )

                if response.status_code != 200:
                    logfire.error(
                        "Xsolla token exchange failed",
                        status_code=response.status_code,
                        error=response.text,
                    )
                    raise XsollaOAuthError(
                        f"Token exchange failed: {response.status_code}"
                    )

                return response.json()

        except httpx.HTTPError as e:
            logfire.error("Xsolla token exchange HTTP error", error=str(e))
            raise XsollaOAuthError(f"HTTP error during token exchange: {e}")


class MockXsollaOAuthClient(XsollaOAuthClient):
    """Mock Xsolla OAuth client for testing.

    Returns deterministic test data without making real API calls. The
    identity can be swapped per test through ``identity``.
    """

    def __init__(self, identity: ExternalIdentity | None = None):
        self.identity = identity or ExternalIdentity(
            external_id="42",
            display_name="Mock Xsolla User",
            email="mock@example.com",
            avatar_url="https://example.com/avatar.jpg",
            access_token="mock-access-token",
            refresh_token="mock-refresh-token",
        )

    async def initiate_authorization(self, state: str) -> str:
        """Return mock authorization URL."""
        return f"https://login.xsolla.com/api/oauth2/login?state={state}&mock=true"

    async def complete_authorization(self, code: str, state: str) -> ExternalIdentity:
        """Return the configured mock identity."""
        return self.identity
