"""End-to-end tests for the Xsolla login flow."""

from urllib.parse import parse_qs, urlparse

import pytest
from fastapi.testclient import TestClient

from sso.adapter.xsolla import XsollaOAuthClient
from sso.interface.api.app import create_app
from tests.conftest import make_identity
from tests.di import build_test_container


@pytest.fixture
def container():
    """Test container with every component mocked."""
    return build_test_container()


@pytest.fixture
def client(container):
    """Create test client over the test container."""
    with TestClient(create_app(container)) as test_client:
        yield test_client


def login(client, **params):
    return client.get(
        "/auth/xsolla/callback",
        params={"code": "test_code", "state": "test_state", **params},
        follow_redirects=False,
    )


class TestAuthFlow:
    """End-to-end tests for OAuth authentication flow."""

    def test_strategies_list_xsolla(self, client):
        """Should offer the Xsolla strategy when configured."""
        # Act
        response = client.get("/auth/strategies")

        # Assert
        assert response.status_code == 200
        data = response.json()
        assert len(data) == 1
        assert data[0]["name"] == "xsolla"
        assert data[0]["url"].endswith("/auth/xsolla")
        assert data[0]["callback_url"].endswith("/auth/xsolla/callback")

    def test_initiate_login_redirects_to_xsolla(self, client):
        """Should redirect to the Xsolla login page."""
        # Act
        response = client.get("/auth/xsolla", follow_redirects=False)

        # Assert
        assert response.status_code == 302
        location = response.headers["location"]
        assert location.startswith("https://login.xsolla.com/")
        assert "mock=true" in location

    def test_callback_sets_cookie_and_redirects_home(self, client):
        """Should log the user in and redirect to the forum root."""
        # Act
        response = login(client)

        # Assert
        assert response.status_code == 302
        assert response.headers["location"] == "http://localhost:8000/"
        assert "auth_token" in response.cookies

        me = client.get("/auth/me").json()
        assert me["authenticated"] is True
        assert me["user"]["username"] == "Mock Xsolla User"
        assert me["user"]["association"]["associated"] is True
        assert me["user"]["association"]["url"] == "https://xsolla.com/42"

    def test_returning_user_gets_same_account(self, client):
        """Should resolve the same Xsolla account to the same user."""
        # Arrange
        login(client)
        first = client.get("/auth/me").json()["user"]["user_id"]
        client.cookies.clear()

        # Act
        login(client)
        second = client.get("/auth/me").json()["user"]["user_id"]

        # Assert
        assert first == second

    def test_linking_while_logged_in_redirects_to_profile(self, client):
        """Should send an already logged-in user back to their profile."""
        # Arrange
        login(client)

        # Act
        response = login(client)

        # Assert
        assert response.status_code == 302
        assert response.headers["location"] == "/me/edit"

    def test_second_xsolla_account_is_rejected(self, client, container):
        """Should redirect to the error page on a second association."""
        # Arrange
        login(client)
        oauth_client = client.portal.call(container.get, XsollaOAuthClient)
        oauth_client.identity = make_identity("99", email="other@example.org")

        # Act
        response = login(client)

        # Assert
        assert response.status_code == 302
        location = urlparse(response.headers["location"])
        assert location.path == "/auth/error"
        assert parse_qs(location.query)["error"] == ["multiple_association"]

    def test_me_without_cookie_is_unauthenticated(self, client):
        """Should return authenticated=false without a session."""
        # Act
        response = client.get("/auth/me")

        # Assert
        assert response.status_code == 200
        assert response.json() == {"authenticated": False, "user": None}

    def test_me_with_invalid_token_is_unauthenticated(self, client):
        """Should not fail on a garbage session cookie."""
        # Act
        client.cookies.set("auth_token", "invalid-token")
        response = client.get("/auth/me")

        # Assert
        assert response.status_code == 200
        assert response.json()["authenticated"] is False

    def test_logout_clears_cookie(self, client):
        """Should log the user out."""
        # Arrange
        login(client)

        # Act
        response = client.post("/auth/logout")

        # Assert
        assert response.status_code == 200
        assert response.json()["success"] is True
        assert client.get("/auth/me").json()["authenticated"] is False

    def test_health(self, client):
        """Should report health and Xsolla configuration."""
        # Act
        response = client.get("/health")

        # Assert
        assert response.status_code == 200
        data = response.json()
        assert data["status"] == "healthy"
        assert data["xsolla_configured"] is True
