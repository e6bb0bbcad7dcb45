"""Mailer infrastructure providers."""

from dishka import Scope, provide

from sso.adapter.mailer import HttpValidationMailer
from sso.config import Settings
from sso.domain.service import ValidationMailer
from sso.util.di.base import ProviderBase


class MailerProvider(ProviderBase):
    """Mailer component base."""

    __mock_component__ = "mailer"


class ProdMailerProvider(MailerProvider):
    """Production mailer provider posting to the mail service."""

    __is_mock__ = False

    @provide(scope=Scope.APP)
    def get_validation_mailer(self, settings: Settings) -> ValidationMailer:
        """Provide HTTP validation mailer."""
        return HttpValidationMailer(
            settings=settings.mailer, base_url=settings.api.base_url
        )
