"""Core DI providers (non-mockable)."""

from dishka import Scope, provide

from sso.config import AuthSettings, MailerSettings, Settings, XsollaSettings
from sso.util.di.base import ProviderBase


class ProdConfigProvider(ProviderBase):
    """Production config provider - concrete, no mocks needed.

    Settings are loaded from environment variables and .env file automatically.
    """

    @provide(scope=Scope.APP)
    def provide_settings(self) -> Settings:
        """Provide application settings from environment."""
        return Settings()

    @provide(scope=Scope.APP)
    def provide_auth_settings(self, settings: Settings) -> AuthSettings:
        """Provide auth settings."""
        return settings.auth

    @provide(scope=Scope.APP)
    def provide_xsolla_settings(self, settings: Settings) -> XsollaSettings:
        """Provide Xsolla settings."""
        return settings.xsolla

    @provide(scope=Scope.APP)
    def provide_mailer_settings(self, settings: Settings) -> MailerSettings:
        return settings.mailer
