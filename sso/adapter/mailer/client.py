"""Validation email delivery through the forum's mail service."""

from dataclasses import dataclass

import httpx
import logfire

from sso.config import MailerSettings
from sso.domain.error import ValidationEmailError
from sso.domain.service.email_confirmation_service import ValidationMailer
from sso.domain.value import UserId


class HttpValidationMailer(ValidationMailer):
    """Posts validation emails to an HTTP mail service."""

    def __init__(self, settings: MailerSettings, base_url: str) -> None:
        """Initialize mailer.

        Args:
            settings: Mailer configuration
            base_url: Public base URL used to build the confirmation link
        """
        self.settings = settings
        self.base_url = base_url

    def confirm_url(self, confirm_code: str) -> str:
        return f"{self.base_url}/confirm/{confirm_code}"

    async def send_validation_email(
        self, user_id: UserId, email: str, confirm_code: str
    ) -> None:
        """Send the confirmation link.

        Raises:
            ValidationEmailError: If the mail service rejects or is unreachable
        """
        payload = {
            "template": "welcome",
            "from": self.settings.sender,
            "to": email,
            "uid": user_id,
            "subject": "Please confirm your email",
            "confirm_link": self.confirm_url(confirm_code),
        }
        headers = {}
        if self.settings.api_key:
            headers["Authorization"] = f"Bearer {self.settings.api_key}"

        try:
            async with httpx.AsyncClient() as client:
                response = await client.post(
                    self.settings.url, json=payload, headers=headers, timeout=10.0
                )
        except httpx.HTTPError as e:
            logfire.error("Mail service HTTP error", user_id=user_id, error=str(e))
            raise ValidationEmailError(f"HTTP error sending validation email: {e}")

        if response.status_code >= 300:
            logfire.error(
                "Mail service rejected validation email",
                user_id=user_id,
                status_code=response.status_code,
            )
            raise ValidationEmailError(
                f"Mail service returned {response.status_code}"
            )


@dataclass
class SentEmail:
    user_id: UserId
    email: str
    confirm_code: str


class MockValidationMailer(ValidationMailer):
    """Records validation emails instead of sending them."""

    def __init__(self) -> None:
        self.sent: list[SentEmail] = []
        self.fail_with: ValidationEmailError | None = None

    async def send_validation_email(
        self, user_id: UserId, email: str, confirm_code: str
    ) -> None:
        if self.fail_with:
            raise self.fail_with
        self.sent.append(SentEmail(user_id, email, confirm_code))
