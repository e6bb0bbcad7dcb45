"""Login use case."""

import logfire
from pydantic import BaseModel

from sso.application.usecase.base import BaseUseCase
from sso.domain.model import RegistrationState
from sso.domain.service import (
    AuthService,
    IdentityLinkService,
    InterstitialService,
    JWTService,
)


class LoginRequest(BaseModel):
    """Login request from the Xsolla OAuth callback."""

    code: str  # OAuth authorization code
    state: str  # State parameter for session verification
    auth_token: str | None = None  # Session cookie, set when already logged in


class LoginResponse(BaseModel):
    """Login response."""

    token: str
    user_id: int
    username: str
    # Set when the user must supply a real email before continuing
    registration_token: str | None = None


class LoginUseCase(BaseUseCase):
    """Use case for logging in (or linking an account) through Xsolla."""

    def __init__(
        self,
        auth_service: AuthService,
        jwt_service: JWTService,
        identity_link_service: IdentityLinkService,
        interstitial_service: InterstitialService,
    ) -> None:
        """Initialize login use case.

        Args:
            auth_service: Xsolla authentication domain service
            jwt_service: JWT token domain service
            identity_link_service: Resolves identities to local users
            interstitial_service: Detects placeholder emails
        """
        self.auth_service = auth_service
        self.jwt_service = jwt_service
        self.identity_link_service = identity_link_service
        self.interstitial_service = interstitial_service

    async def execute(self, request: LoginRequest) -> LoginResponse:
        """Execute the Xsolla login flow.

        Steps:
        1. Complete OAuth with Xsolla and get the verified identity
        2. Associate with the logged-in user, or log in / merge / register
        3. Issue a session token
        4. Issue a registration token if the email is a placeholder

        Raises:
            XsollaOAuthError: If the OAuth flow fails
            MultipleAssociationError: Current user already linked elsewhere
            RegistrationDisabledError: New accounts are not allowed
        """
        identity = await self.auth_service.complete_login(request.code, request.state)
        current_user_id = self.jwt_service.get_user_id_from_token(request.auth_token)

        with logfire.span(
            "login_user",
            xsolla_id=identity.external_id,
            linking=current_user_id is not None,
        ):
            user = await self.identity_link_service.resolve(identity, current_user_id)

            token = self.jwt_service.create_token(user.id, user.username)

            registration_token = None
            if self.interstitial_service.is_placeholder_email(user.email):
                registration_token = self.jwt_service.create_registration_token(
                    RegistrationState(user_id=user.id, xsolla_id=identity.external_id)
                )

            return LoginResponse(
                token=token,
                user_id=user.id,
                username=user.username,
                registration_token=registration_token,
            )
