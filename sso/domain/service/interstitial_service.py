"""Registration interstitial domain service.

Xsolla accounts without a public email get a placeholder address on the
provider's domain. Such users are stopped after login until they supply
a real address.
"""

import logfire

from sso.config import XsollaSettings
from sso.domain.model import AdditionalData, InterstitialStep, RegistrationState
from sso.domain.repository import UserRepository
from sso.domain.value import Email, UserField, UserId

from .base import Service
from .email_confirmation_service import EmailConfirmationService

EMAIL_TEMPLATE = "partials/sso-xsolla/email.tpl"


class InterstitialService(Service):
    """Collects a real email address from users with a placeholder one."""

    def __init__(
        self,
        user_repository: UserRepository,
        email_confirmation_service: EmailConfirmationService,
        xsolla_settings: XsollaSettings,
    ) -> None:
        self.user_repository = user_repository
        self.email_confirmation_service = email_confirmation_service
        self.xsolla_settings = xsolla_settings

    def is_placeholder_email(self, email: str | None) -> bool:
        """Whether an address is a provider-default placeholder."""
        if not email:
            return False
        try:
            return Email(email).is_on_domain(
                self.xsolla_settings.placeholder_email_domain
            )
        except ValueError:
            return False

    async def prepare_interstitial(
        self, registration: RegistrationState | None
    ) -> InterstitialStep | None:
        """Return the email collection step if the user still needs it.

        Args:
            registration: Pending registration from the login callback

        Returns:
            The email step, or None when nothing needs collecting
        """
        if registration is None or not registration.xsolla_id:
            return None

        with logfire.span(
            "interstitial_service.prepare_interstitial",
            user_id=registration.user_id,
        ):
            email = await self.user_repository.get_field(
                registration.user_id, UserField.EMAIL
            )
            if not self.is_placeholder_email(email):
                return None

            logfire.info(
                "Email collection required", user_id=registration.user_id
            )
            return InterstitialStep(
                template=EMAIL_TEMPLATE,
                data={},
                callback=self.store_additional_data,
            )

    async def store_additional_data(
        self, user_id: UserId, data: AdditionalData
    ) -> None:
        """Replace the placeholder email and send a validation email.

        Steps run in order and stop at the first failure. Completed steps
        are not undone here; the request transaction decides what sticks.

        Raises:
            StorageError: If a user store step fails
            ValidationEmailError: If the validation email cannot be sent
        """
        with logfire.span(
            "interstitial_service.store_additional_data", user_id=user_id
        ):
            new_email = data.email

            await self.email_confirmation_service.clear_throttle(user_id)

            old_email = await self.user_repository.get_field(user_id, UserField.EMAIL)
            if old_email:
                await self.user_repository.remove_email_reference(old_email)

            await self.user_repository.set_field(user_id, UserField.EMAIL, new_email)

            await self.email_confirmation_service.send_validation_email(
                user_id, new_email
            )

            logfire.info("Additional registration data stored", user_id=user_id)
