"""Domain layer DI providers."""

from dishka import Scope, provide

from sso.adapter.xsolla import XsollaOAuthClient
from sso.config import AuthSettings, MailerSettings, Settings, XsollaSettings
from sso.domain.repository import (
    EmailConfirmationRepository,
    IdentityRepository,
    UserRepository,
)
from sso.domain.service import (
    AssociationService,
    AuthService,
    EmailConfirmationService,
    IdentityLinkService,
    InterstitialService,
    JWTService,
    ValidationMailer,
)
from sso.util.di.base import ProviderBase


class ProdDomainProvider(ProviderBase):
    """Production domain services provider - concrete, no mocks needed.

    Domain services are REQUEST-scoped to align with repository/session lifecycle.
    Each HTTP request gets fresh service instances with their own transaction.
    """

    scope = Scope.REQUEST

    @provide
    def get_auth_service(
        self, oauth_client: XsollaOAuthClient, xsolla_settings: XsollaSettings
    ) -> AuthService:
        """Provide Xsolla authentication domain service."""
        return AuthService(oauth_client=oauth_client, xsolla_settings=xsolla_settings)

    @provide
    def get_jwt_service(self, auth_settings: AuthSettings) -> JWTService:
        """Provide JWT token domain service."""
        return JWTService(auth_settings=auth_settings)

    @provide
    def get_identity_link_service(
        self,
        user_repository: UserRepository,
        identity_repository: IdentityRepository,
        xsolla_settings: XsollaSettings,
    ) -> IdentityLinkService:
        """Provide identity link domain service."""
        return IdentityLinkService(
            user_repository=user_repository,
            identity_repository=identity_repository,
            xsolla_settings=xsolla_settings,
        )

    @provide
    def get_association_service(
        self,
        user_repository: UserRepository,
        identity_repository: IdentityRepository,
        settings: Settings,
    ) -> AssociationService:
        """Provide association domain service."""
        return AssociationService(
            user_repository=user_repository,
            identity_repository=identity_repository,
            settings=settings,
        )

    @provide
    def get_email_confirmation_service(
        self,
        confirmation_repository: EmailConfirmationRepository,
        user_repository: UserRepository,
        mailer: ValidationMailer,
        mailer_settings: MailerSettings,
    ) -> EmailConfirmationService:
        """Provide email confirmation domain service."""
        return EmailConfirmationService(
            confirmation_repository=confirmation_repository,
            user_repository=user_repository,
            mailer=mailer,
            mailer_settings=mailer_settings,
        )

    @provide
    def get_interstitial_service(
        self,
        user_repository: UserRepository,
        email_confirmation_service: EmailConfirmationService,
        xsolla_settings: XsollaSettings,
    ) -> InterstitialService:
        """Provide interstitial domain service."""
        return InterstitialService(
            user_repository=user_repository,
            email_confirmation_service=email_confirmation_service,
            xsolla_settings=xsolla_settings,
        )
