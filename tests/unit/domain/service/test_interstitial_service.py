"""Unit tests for InterstitialService."""

from datetime import datetime, timedelta, timezone

import pytest

from sso.adapter.mailer import MockValidationMailer
from sso.config import MailerSettings, XsollaSettings
from sso.domain.error import ValidationEmailError
from sso.domain.model import AdditionalData, RegistrationState
from sso.domain.service import EmailConfirmationService, InterstitialService
from sso.domain.service.interstitial_service import EMAIL_TEMPLATE
from sso.domain.value import UserField
from sso.persistence.repository.inmemory import (
    InMemoryEmailConfirmationRepository,
    InMemoryUserRepository,
)


@pytest.fixture
def user_repo():
    return InMemoryUserRepository()


@pytest.fixture
def confirmation_repo():
    return InMemoryEmailConfirmationRepository()


@pytest.fixture
def mailer():
    return MockValidationMailer()


@pytest.fixture
def service(user_repo, confirmation_repo, mailer):
    email_service = EmailConfirmationService(
        confirmation_repo, user_repo, mailer, MailerSettings()
    )
    return InterstitialService(
        user_repo, email_service, XsollaSettings(app_id="app", secret="secret")
    )


class TestPrepareInterstitial:
    """Tests for InterstitialService.prepare_interstitial()."""

    @pytest.mark.asyncio
    async def test_placeholder_email_requires_step(self, service, user_repo):
        """Should ask for an email when the stored one is a placeholder."""
        user_id = await user_repo.create("gamer", "gamer@xsolla.com")

        step = await service.prepare_interstitial(
            RegistrationState(user_id=user_id, xsolla_id="42")
        )

        assert step is not None
        assert step.template == EMAIL_TEMPLATE
        assert step.template == "partials/sso-xsolla/email.tpl"
        assert step.data == {}
        assert step.callback == service.store_additional_data

    @pytest.mark.asyncio
    async def test_real_email_needs_nothing(self, service, user_repo):
        """Should skip the step when the user has a real email."""
        user_id = await user_repo.create("gamer", "gamer@example.org")

        step = await service.prepare_interstitial(
            RegistrationState(user_id=user_id, xsolla_id="42")
        )

        assert step is None

    @pytest.mark.asyncio
    async def test_no_registration_needs_nothing(self, service):
        """Should skip the step without pending registration data."""
        assert await service.prepare_interstitial(None) is None

    @pytest.mark.asyncio
    async def test_registration_without_xsolla_id_needs_nothing(
        self, service, user_repo
    ):
        """Should skip the step when the pending data has no Xsolla id."""
        user_id = await user_repo.create("gamer", "gamer@xsolla.com")

        step = await service.prepare_interstitial(
            RegistrationState(user_id=user_id, xsolla_id="")
        )

        assert step is None

    def test_placeholder_detection_is_case_insensitive(self, service):
        """Should recognise placeholder addresses regardless of case."""
        assert service.is_placeholder_email("Gamer@XSOLLA.com") is True
        assert service.is_placeholder_email("gamer@notxsolla.com") is False
        assert service.is_placeholder_email(None) is False
        assert service.is_placeholder_email("not-an-email") is False


class TestStoreAdditionalData:
    """Tests for InterstitialService.store_additional_data()."""

    @pytest.mark.asyncio
    async def test_replaces_placeholder_and_sends_validation_email(
        self, service, user_repo, confirmation_repo, mailer
    ):
        """Should store the new email and send exactly one validation email."""
        # Arrange
        user_id = await user_repo.create("gamer", "gamer@xsolla.com")

        # Act
        await service.store_additional_data(
            user_id, AdditionalData(email="Gamer@Example.org")
        )

        # Assert
        assert await user_repo.get_field(user_id, UserField.EMAIL) == "gamer@example.org"
        assert await user_repo.find_uid_by_email("gamer@xsolla.com") is None
        assert len(mailer.sent) == 1
        sent = mailer.sent[0]
        assert sent.user_id == user_id
        assert sent.email == "gamer@example.org"
        confirmation = await confirmation_repo.find_by_code(sent.confirm_code)
        assert confirmation is not None
        assert confirmation.email == "gamer@example.org"

    @pytest.mark.asyncio
    async def test_clears_throttle_before_sending(
        self, service, user_repo, confirmation_repo, mailer
    ):
        """Should send even if a previous email set the throttle."""
        user_id = await user_repo.create("gamer", "gamer@xsolla.com")
        await confirmation_repo.set_throttle(
            user_id, datetime.now(timezone.utc) + timedelta(hours=1)
        )

        await service.store_additional_data(
            user_id, AdditionalData(email="gamer@example.org")
        )

        assert len(mailer.sent) == 1

    @pytest.mark.asyncio
    async def test_mailer_failure_propagates_after_email_write(
        self, service, user_repo, mailer
    ):
        """Should surface the send failure after the email was written."""
        # Arrange
        user_id = await user_repo.create("gamer", "gamer@xsolla.com")
        mailer.fail_with = ValidationEmailError("mail service down")

        # Act & Assert
        with pytest.raises(ValidationEmailError):
            await service.store_additional_data(
                user_id, AdditionalData(email="gamer@example.org")
            )

        assert await user_repo.get_field(user_id, UserField.EMAIL) == "gamer@example.org"
        assert mailer.sent == []

    def test_additional_data_rejects_malformed_email(self):
        """Should validate the submitted address."""
        with pytest.raises(ValueError):
            AdditionalData(email="not-an-email")
