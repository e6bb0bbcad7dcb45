"""Xsolla infrastructure providers."""

from dishka import Scope, provide

from sso.adapter.xsolla import RealXsollaOAuthClient, XsollaOAuthClient
from sso.config import XsollaSettings
from sso.util.di.base import ProviderBase


class XsollaProvider(ProviderBase):
    """Xsolla component base."""

    __mock_component__ = "xsolla"


class ProdXsollaProvider(XsollaProvider):
    """Production Xsolla provider."""

    __is_mock__ = False

    @provide(scope=Scope.APP)
    def get_xsolla_oauth_client(self, settings: XsollaSettings) -> XsollaOAuthClient:
        """Provide Xsolla OAuth client.

        The client is built even without credentials; AuthService refuses
        to start a login until app id and secret are configured.

        Returns:
            Xsolla OAuth 2.0 client
        """
        return RealXsollaOAuthClient(settings=settings)
