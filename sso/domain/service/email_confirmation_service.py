"""Email confirmation domain service."""

import secrets
from datetime import datetime, timedelta, timezone

import logfire

from sso.config import MailerSettings
from sso.domain.error import (
    DomainError,
    InvalidConfirmationError,
    ValidationEmailError,
)
from sso.domain.model import EmailConfirmation
from sso.domain.repository import EmailConfirmationRepository, UserRepository
from sso.domain.value import UserField, UserId

from .base import Service


class ValidationMailer:
    """Port for delivering validation emails."""

    async def send_validation_email(
        self, user_id: UserId, email: str, confirm_code: str
    ) -> None:
        """Deliver the confirmation link for ``confirm_code`` to ``email``.

        Raises:
            ValidationEmailError: If delivery fails
        """
        raise NotImplementedError


class EmailConfirmationService(Service):
    """Sends validation emails and confirms addresses."""

    def __init__(
        self,
        confirmation_repository: EmailConfirmationRepository,
        user_repository: UserRepository,
        mailer: ValidationMailer,
        mailer_settings: MailerSettings,
    ) -> None:
        self.confirmation_repository = confirmation_repository
        self.user_repository = user_repository
        self.mailer = mailer
        self.mailer_settings = mailer_settings

    async def clear_throttle(self, user_id: UserId) -> None:
        """Allow the next validation email to go out immediately."""
        await self.confirmation_repository.clear_throttle(user_id)

    async def send_validation_email(self, user_id: UserId, email: str) -> str:
        """Create a confirmation code and email it to the user.

        Args:
            user_id: User ID
            email: Address to confirm

        Returns:
            The confirmation code

        Raises:
            ValidationEmailError: If throttled or if storing or sending fails
        """
        with logfire.span(
            "email_confirmation_service.send_validation_email", user_id=user_id
        ):
            now = datetime.now(timezone.utc)

            try:
                throttled_until = await self.confirmation_repository.get_throttle(
                    user_id
                )
                if throttled_until and throttled_until > now:
                    raise ValidationEmailError(
                        f"A confirmation email was already sent to user {user_id}"
                    )

                code = secrets.token_urlsafe(24)
                await self.confirmation_repository.save(
                    EmailConfirmation(
                        code=code,
                        user_id=user_id,
                        email=email,
                        created_at=now,
                        expires_at=now
                        + timedelta(hours=self.mailer_settings.code_expiry_hours),
                    )
                )
                await self.confirmation_repository.set_throttle(
                    user_id,
                    now + timedelta(minutes=self.mailer_settings.throttle_minutes),
                )
                await self.mailer.send_validation_email(user_id, email, code)
            except ValidationEmailError as e:
                logfire.warn(
                    "Validation email not sent", user_id=user_id, error=str(e)
                )
                raise
            except DomainError as e:
                logfire.error(
                    "Validation email not sent", user_id=user_id, error=str(e)
                )
                raise ValidationEmailError(str(e)) from e

            logfire.info("Validation email sent", user_id=user_id)
            return code

    async def confirm_email(self, code: str) -> UserId:
        """Confirm the email address a code was issued for.

        Args:
            code: Confirmation code from the email link

        Returns:
            The confirmed user's ID

        Raises:
            InvalidConfirmationError: Unknown, expired or stale code
        """
        with logfire.span("email_confirmation_service.confirm_email"):
            confirmation = await self.confirmation_repository.find_by_code(code)
            if not confirmation:
                raise InvalidConfirmationError("Unknown confirmation code")

            if confirmation.is_expired(datetime.now(timezone.utc)):
                await self.confirmation_repository.delete(code)
                raise InvalidConfirmationError("Confirmation code has expired")

            current = await self.user_repository.get_field(
                confirmation.user_id, UserField.EMAIL
            )
            if current != confirmation.email:
                await self.confirmation_repository.delete(code)
                raise InvalidConfirmationError(
                    "Email address changed since the code was issued"
                )

            await self.user_repository.set_field(
                confirmation.user_id, UserField.EMAIL_CONFIRMED, True
            )
            await self.user_repository.add_email_reference(
                confirmation.email, confirmation.user_id
            )
            await self.confirmation_repository.delete(code)

            logfire.info("Email confirmed", user_id=confirmation.user_id)
            return confirmation.user_id
