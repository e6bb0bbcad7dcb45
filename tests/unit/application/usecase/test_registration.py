"""Unit tests for the registration completion use cases."""

from dishka import AsyncContainer
import pytest

from sso.adapter.xsolla import XsollaOAuthClient
from sso.application.usecase.auth import LoginUseCase
from sso.application.usecase.auth.login import LoginRequest
from sso.application.usecase.registration import (
    ConfirmEmailUseCase,
    PrepareInterstitialUseCase,
    StoreAdditionalDataUseCase,
)
from sso.application.usecase.registration.confirm_email import ConfirmEmailRequest
from sso.application.usecase.registration.prepare_interstitial import (
    PrepareInterstitialRequest,
)
from sso.application.usecase.registration.store_additional_data import (
    StoreAdditionalDataRequest,
)
from sso.domain.repository import UserRepository
from sso.domain.service import ValidationMailer
from sso.util.jwt import JWTError
from tests.conftest import make_identity
from tests.harness import create_env_fixture

# Unit test fixture
unit_env = create_env_fixture()


async def login_with_placeholder(unit_env: AsyncContainer) -> str:
    oauth_client = await unit_env.get(XsollaOAuthClient)
    oauth_client.identity = make_identity("77", email="gamer@xsolla.com")
    login_use_case = await unit_env.get(LoginUseCase)
    response = await login_use_case.execute(LoginRequest(code="c", state="s"))
    return response.registration_token


class TestRegistrationCompletion:
    """Tests for interstitial and confirmation use cases."""

    @pytest.mark.asyncio
    async def test_full_flow(self, unit_env: AsyncContainer):
        """Placeholder email is replaced, validated and confirmed."""
        # Arrange
        registration_token = await login_with_placeholder(unit_env)
        prepare = await unit_env.get(PrepareInterstitialUseCase)
        store = await unit_env.get(StoreAdditionalDataUseCase)
        confirm = await unit_env.get(ConfirmEmailUseCase)
        mailer = await unit_env.get(ValidationMailer)
        user_repository = await unit_env.get(UserRepository)

        # Act - step is required
        step = await prepare.execute(
            PrepareInterstitialRequest(registration_token=registration_token)
        )
        assert step.required is True
        assert step.template == "partials/sso-xsolla/email.tpl"

        # Act - submit real email
        stored = await store.execute(
            StoreAdditionalDataRequest(
                registration_token=registration_token, email="gamer@example.org"
            )
        )

        # Assert
        assert stored.validation_email_sent is True
        assert len(mailer.sent) == 1

        # Act - follow the link
        confirmed = await confirm.execute(
            ConfirmEmailRequest(code=mailer.sent[0].confirm_code)
        )

        # Assert
        assert confirmed.user_id == stored.user_id
        user = await user_repository.find_by_id(stored.user_id)
        assert user.email == "gamer@example.org"
        assert user.email_confirmed is True

        # Step is no longer required
        step = await prepare.execute(
            PrepareInterstitialRequest(registration_token=registration_token)
        )
        assert step.required is False

    @pytest.mark.asyncio
    async def test_store_without_registration_is_rejected(
        self, unit_env: AsyncContainer
    ):
        """Submitting the form without pending state should fail."""
        store = await unit_env.get(StoreAdditionalDataUseCase)

        with pytest.raises(JWTError):
            await store.execute(
                StoreAdditionalDataRequest(email="gamer@example.org")
            )

    @pytest.mark.asyncio
    async def test_store_rejects_malformed_email(self, unit_env: AsyncContainer):
        """Submitting a malformed email should fail before any write."""
        registration_token = await login_with_placeholder(unit_env)
        store = await unit_env.get(StoreAdditionalDataUseCase)
        mailer = await unit_env.get(ValidationMailer)

        with pytest.raises(ValueError):
            await store.execute(
                StoreAdditionalDataRequest(
                    registration_token=registration_token, email="nope"
                )
            )

        assert mailer.sent == []
