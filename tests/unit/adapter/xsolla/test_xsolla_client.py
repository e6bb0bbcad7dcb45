"""Unit tests for the Xsolla OAuth client."""

from datetime import datetime, timedelta, timezone
from unittest.mock import AsyncMock, patch
from urllib.parse import parse_qs, urlparse

import httpx
import jwt
import pytest

from sso.adapter.xsolla import RealXsollaOAuthClient, XsollaOAuthError
from sso.config import XsollaSettings

SECRET = "xsolla-project-secret-long-enough-for-hs256"


def make_access_token(secret: str = SECRET, **claims) -> str:
    payload = {
        "sub": "42",
        "exp": datetime.now(timezone.utc) + timedelta(hours=1),
        **claims,
    }
    return jwt.encode(payload, secret, algorithm="HS256")


@pytest.fixture
def settings():
    return XsollaSettings(
        app_id="12345",
        secret=SECRET,
        callback_url="https://forum.example.com/auth/xsolla/callback",
    )


@pytest.fixture
def client(settings):
    return RealXsollaOAuthClient(settings)


class TestInitiateAuthorization:
    """Tests for initiate_authorization."""

    @pytest.mark.asyncio
    async def test_builds_login_url(self, client):
        """Should point at the Xsolla login endpoint with all parameters."""
        url = await client.initiate_authorization("state-1")

        parsed = urlparse(url)
        params = parse_qs(parsed.query)
        assert f"{parsed.scheme}://{parsed.netloc}{parsed.path}" == (
            "https://login.xsolla.com/api/oauth2/login"
        )
        assert params["response_type"] == ["code"]
        assert params["client_id"] == ["12345"]
        assert params["redirect_uri"] == [
            "https://forum.example.com/auth/xsolla/callback"
        ]
        assert params["scope"] == ["offline"]
        assert params["state"] == ["state-1"]


class TestCompleteAuthorization:
    """Tests for complete_authorization."""

    @pytest.mark.asyncio
    async def test_rejects_unknown_state(self, client):
        """Should refuse callbacks for states it never issued."""
        with pytest.raises(XsollaOAuthError, match="state"):
            await client.complete_authorization("code", "forged")

    @pytest.mark.asyncio
    async def test_builds_identity_from_verified_token(self, client):
        """Should verify the access token and map its claims."""
        # Arrange
        await client.initiate_authorization("state-1")
        access_token = make_access_token(
            username="gamer",
            name="Gamer One",
            email="gamer@example.org",
            picture="https://cdn.example.org/a.png",
        )

        with patch.object(
            client,
            "_exchange_code_for_token",
            AsyncMock(
                return_value={"access_token": access_token, "refresh_token": "r-1"}
            ),
        ) as mock_exchange:
            # Act
            identity = await client.complete_authorization("code-1", "state-1")

        # Assert
        mock_exchange.assert_awaited_once_with("code-1")
        assert identity.external_id == "42"
        assert identity.display_name == "Gamer One"
        assert identity.email == "gamer@example.org"
        assert identity.avatar_url == "https://cdn.example.org/a.png"
        assert identity.access_token == access_token
        assert identity.refresh_token == "r-1"

    @pytest.mark.asyncio
    async def test_state_is_single_use(self, client):
        """Should not accept the same state twice."""
        await client.initiate_authorization("state-1")
        tokens = {"access_token": make_access_token()}

        with patch.object(
            client, "_exchange_code_for_token", AsyncMock(return_value=tokens)
        ):
            await client.complete_authorization("code-1", "state-1")

            with pytest.raises(XsollaOAuthError):
                await client.complete_authorization("code-1", "state-1")

    @pytest.mark.asyncio
    async def test_rejects_token_with_wrong_signature(self, client):
        """Should refuse an access token not signed with the project secret."""
        await client.initiate_authorization("state-1")
        forged = make_access_token(secret="some-other-secret-long-enough-for-hs256")

        with patch.object(
            client,
            "_exchange_code_for_token",
            AsyncMock(return_value={"access_token": forged}),
        ):
            with pytest.raises(XsollaOAuthError, match="Invalid"):
                await client.complete_authorization("code-1", "state-1")

    @pytest.mark.asyncio
    async def test_rejects_response_without_access_token(self, client):
        """Should fail when the token endpoint returns no access token."""
        await client.initiate_authorization("state-1")

        with patch.object(
            client, "_exchange_code_for_token", AsyncMock(return_value={})
        ):
            with pytest.raises(XsollaOAuthError, match="access_token"):
                await client.complete_authorization("code-1", "state-1")


class TestIdentityFromClaims:
    """Tests for identity_from_claims."""

    def test_placeholder_email_from_username(self, client):
        """Should build a placeholder address from the username."""
        identity = client.identity_from_claims(
            {"sub": "42", "username": "gamer"}, "token", None
        )

        assert identity.email == "gamer@xsolla.com"
        assert identity.display_name == "gamer"

    def test_placeholder_email_from_id(self, client):
        """Should fall back to the account id without a username."""
        identity = client.identity_from_claims({"sub": 42}, "token", None)

        assert identity.external_id == "42"
        assert identity.email == "42@xsolla.com"
        assert identity.display_name == "42"
        assert identity.avatar_url is None


class TestExchangeCode:
    """Tests for _exchange_code_for_token."""

    @pytest.mark.asyncio
    async def test_posts_form_to_token_endpoint(self, client):
        """Should send the authorization code with the app credentials."""
        response = httpx.Response(200, json={"access_token": "t"})

        with patch.object(
            httpx.AsyncClient, "post", AsyncMock(return_value=response)
        ) as mock_post:
            tokens = await client._exchange_code_for_token("code-1")

        assert tokens == {"access_token": "t"}
        args, kwargs = mock_post.call_args
        assert args[0] == "https://login.xsolla.com/api/oauth2/token"
        assert kwargs["data"]["grant_type"] == "authorization_code"
        assert kwargs["data"]["code"] == "code-1"
        assert kwargs["data"]["client_id"] == "12345"

    @pytest.mark.asyncio
    async def test_error_status(self, client):
        """Should raise on a non-200 token response."""
        response = httpx.Response(400, text="invalid_grant")

        with patch.object(httpx.AsyncClient, "post", AsyncMock(return_value=response)):
            with pytest.raises(XsollaOAuthError, match="400"):
                await client._exchange_code_for_token("code-1")

    @pytest.mark.asyncio
    async def test_network_error(self, client):
        """Should wrap transport failures."""
        with patch.object(
            httpx.AsyncClient,
            "post",
            AsyncMock(side_effect=httpx.ConnectError("connection refused")),
        ):
            with pytest.raises(XsollaOAuthError, match="HTTP error"):
                await client._exchange_code_for_token("code-1")
