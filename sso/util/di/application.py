"""Application layer DI providers."""

from dishka import Scope, provide

from sso.application.usecase.association import (
    DeauthorizeUseCase,
    GetAssociationUseCase,
)
from sso.application.usecase.auth import GetCurrentUserUseCase, LoginUseCase
from sso.application.usecase.registration import (
    ConfirmEmailUseCase,
    PrepareInterstitialUseCase,
    StoreAdditionalDataUseCase,
)
from sso.domain.repository import UserRepository
from sso.domain.service import (
    AssociationService,
    AuthService,
    EmailConfirmationService,
    IdentityLinkService,
    InterstitialService,
    JWTService,
)
from sso.util.di.base import ProviderBase


class ProdApplicationProvider(ProviderBase):
    """Production application use cases provider - concrete, no mocks needed."""

    # Auth use cases
    @provide(scope=Scope.REQUEST)
    def get_login_use_case(
        self,
        auth_service: AuthService,
        jwt_service: JWTService,
        identity_link_service: IdentityLinkService,
        interstitial_service: InterstitialService,
    ) -> LoginUseCase:
        """Provide login use case."""
        return LoginUseCase(
            auth_service=auth_service,
            jwt_service=jwt_service,
            identity_link_service=identity_link_service,
            interstitial_service=interstitial_service,
        )

    @provide(scope=Scope.REQUEST)
    def get_current_user_use_case(
        self,
        jwt_service: JWTService,
        user_repository: UserRepository,
        association_service: AssociationService,
    ) -> GetCurrentUserUseCase:
        """Provide get current user use case."""
        return GetCurrentUserUseCase(
            jwt_service=jwt_service,
            user_repository=user_repository,
            association_service=association_service,
        )

    # Association use cases
    @provide(scope=Scope.REQUEST)
    def get_get_association_use_case(
        self, association_service: AssociationService
    ) -> GetAssociationUseCase:
        """Provide get association use case."""
        return GetAssociationUseCase(association_service=association_service)

    @provide(scope=Scope.REQUEST)
    def get_deauthorize_use_case(
        self, association_service: AssociationService, jwt_service: JWTService
    ) -> DeauthorizeUseCase:
        """Provide deauthorize use case."""
        return DeauthorizeUseCase(
            association_service=association_service, jwt_service=jwt_service
        )

    # Registration use cases
    @provide(scope=Scope.REQUEST)
    def get_prepare_interstitial_use_case(
        self, interstitial_service: InterstitialService, jwt_service: JWTService
    ) -> PrepareInterstitialUseCase:
        """Provide prepare interstitial use case."""
        return PrepareInterstitialUseCase(
            interstitial_service=interstitial_service, jwt_service=jwt_service
        )

    @provide(scope=Scope.REQUEST)
    def get_store_additional_data_use_case(
        self, interstitial_service: InterstitialService, jwt_service: JWTService
    ) -> StoreAdditionalDataUseCase:
        """Provide store additional data use case."""
        return StoreAdditionalDataUseCase(
            interstitial_service=interstitial_service, jwt_service=jwt_service
        )

    @provide(scope=Scope.REQUEST)
    def get_confirm_email_use_case(
        self, email_confirmation_service: EmailConfirmationService
    ) -> ConfirmEmailUseCase:
        """Provide confirm email use case."""
        return ConfirmEmailUseCase(
            email_confirmation_service=email_confirmation_service
        )
