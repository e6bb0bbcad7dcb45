"""Unit tests for LoginUseCase."""

from dishka import AsyncContainer
import pytest

from sso.adapter.xsolla import XsollaOAuthClient
from sso.application.usecase.auth import LoginUseCase
from sso.application.usecase.auth.login import LoginRequest
from sso.domain.error import MultipleAssociationError
from sso.domain.repository import UserRepository
from sso.domain.service import IdentityLinkService, JWTService
from tests.conftest import make_identity
from tests.harness import create_env_fixture

# Unit test fixture
unit_env = create_env_fixture()


class TestLoginUseCase:
    """Tests for LoginUseCase."""

    @pytest.mark.asyncio
    async def test_login_creates_user_and_issues_token(self, unit_env: AsyncContainer):
        """Login should create a user for a new Xsolla account."""
        # Arrange
        login_use_case = await unit_env.get(LoginUseCase)
        jwt_service = await unit_env.get(JWTService)
        user_repository = await unit_env.get(UserRepository)

        # Act
        response = await login_use_case.execute(
            LoginRequest(code="code-1", state="state-1")
        )

        # Assert (MockXsollaOAuthClient returns account "42")
        assert response.username == "Mock Xsolla User"
        assert response.registration_token is None
        assert jwt_service.verify_token(response.token).user_id == response.user_id

        user = await user_repository.find_by_id(response.user_id)
        assert user.xsolla_id == "42"
        assert user.xsolla_access_token == "mock-access-token"

    @pytest.mark.asyncio
    async def test_placeholder_email_issues_registration_token(
        self, unit_env: AsyncContainer
    ):
        """Login should ask for more data when Xsolla gave no real email."""
        # Arrange
        oauth_client = await unit_env.get(XsollaOAuthClient)
        oauth_client.identity = make_identity("77", email="gamer@xsolla.com")
        login_use_case = await unit_env.get(LoginUseCase)
        jwt_service = await unit_env.get(JWTService)

        # Act
        response = await login_use_case.execute(
            LoginRequest(code="code-1", state="state-1")
        )

        # Assert
        registration = jwt_service.get_registration(response.registration_token)
        assert registration is not None
        assert registration.user_id == response.user_id
        assert registration.xsolla_id == "77"

    @pytest.mark.asyncio
    async def test_logged_in_user_gets_account_linked(self, unit_env: AsyncContainer):
        """Login with a session should link instead of creating a user."""
        # Arrange
        user_repository = await unit_env.get(UserRepository)
        jwt_service = await unit_env.get(JWTService)
        login_use_case = await unit_env.get(LoginUseCase)

        user_id = await user_repository.create("alice", "alice@example.org")
        session = jwt_service.create_token(user_id, "alice")

        # Act
        response = await login_use_case.execute(
            LoginRequest(code="code-1", state="state-1", auth_token=session)
        )

        # Assert
        assert response.user_id == user_id
        assert response.username == "alice"
        user = await user_repository.find_by_id(user_id)
        assert user.xsolla_id == "42"

    @pytest.mark.asyncio
    async def test_linked_user_cannot_link_second_account(
        self, unit_env: AsyncContainer
    ):
        """Login should surface the multiple association error."""
        # Arrange
        user_repository = await unit_env.get(UserRepository)
        jwt_service = await unit_env.get(JWTService)
        identity_link_service = await unit_env.get(IdentityLinkService)
        oauth_client = await unit_env.get(XsollaOAuthClient)
        login_use_case = await unit_env.get(LoginUseCase)

        user_id = await user_repository.create("alice", "alice@example.org")
        await identity_link_service.associate(user_id, make_identity("99"))
        session = jwt_service.create_token(user_id, "alice")
        oauth_client.identity = make_identity("42")

        # Act & Assert
        with pytest.raises(MultipleAssociationError):
            await login_use_case.execute(
                LoginRequest(code="code-1", state="state-1", auth_token=session)
            )
