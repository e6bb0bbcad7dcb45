"""Authentication domain service."""

import logfire

from sso.config import XsollaSettings
from sso.domain.value import ExternalIdentity, StrategyInfo
from sso.util.error import ConfigurationError

from .base import Service


class OAuthClient:
    """OAuth client interface for the identity provider."""

    async def initiate_authorization(self, state: str) -> str:
        """Initiate OAuth authorization flow.

        Args:
            state: State parameter for CSRF protection

        Returns:
            Authorization URL to redirect user to
        """
        raise NotImplementedError

    async def complete_authorization(self, code: str, state: str) -> ExternalIdentity:
        """Complete OAuth authorization flow.

        Args:
            code: Authorization code from OAuth callback
            state: State parameter for verification

        Returns:
            Verified external identity
        """
        raise NotImplementedError


class AuthService(Service):
    """Domain service for the Xsolla login strategy."""

    STRATEGY_NAME = "xsolla"
    STRATEGY_ICON = "fa-sign-in"

    def __init__(self, oauth_client: OAuthClient, xsolla_settings: XsollaSettings) -> None:
        """Initialize auth service.

        Args:
            oauth_client: Xsolla OAuth client implementation
            xsolla_settings: Xsolla configuration
        """
        self.oauth_client = oauth_client
        self.xsolla_settings = xsolla_settings

    def list_strategies(self) -> list[StrategyInfo]:
        """List the login strategies this service offers.

        The Xsolla strategy is only offered once app id and secret are set.
        """
        if not self.xsolla_settings.is_configured:
            logfire.warn("Xsolla strategy not registered: app id or secret missing")
            return []

        return [
            StrategyInfo(
                name=self.STRATEGY_NAME,
                url="/auth/xsolla",
                callback_url="/auth/xsolla/callback",
                icon=self.STRATEGY_ICON,
                scope=self.xsolla_settings.scope,
            )
        ]

    async def initiate_login(self, state: str) -> str:
        """Initiate the Xsolla OAuth flow.

        Raises:
            ConfigurationError: If the strategy is not configured
        """
        self._ensure_configured()
        return await self.oauth_client.initiate_authorization(state)

    async def complete_login(self, code: str, state: str) -> ExternalIdentity:
        """Complete the Xsolla OAuth flow.

        Returns:
            Verified external identity

        Raises:
            ConfigurationError: If the strategy is not configured
        """
        self._ensure_configured()
        return await self.oauth_client.complete_authorization(code, state)

    def _ensure_configured(self) -> None:
        if not self.xsolla_settings.is_configured:
            raise ConfigurationError("Xsolla app id and secret must be configured")
