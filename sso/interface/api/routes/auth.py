"""Authentication routes."""

import logging
import secrets
from urllib.parse import urlencode

from dishka.integrations.fastapi import DishkaRoute, FromDishka
from fastapi import APIRouter, Cookie, HTTPException, Response, status
from fastapi.responses import RedirectResponse
from pydantic import BaseModel

from sso.adapter.xsolla import XsollaOAuthError
from sso.application.usecase.auth import GetCurrentUserUseCase, LoginUseCase
from sso.application.usecase.auth.get_current_user import (
    GetCurrentUserRequest,
    GetCurrentUserResponse,
)
from sso.application.usecase.auth.login import LoginRequest
from sso.config import Settings
from sso.domain.error import (
    DomainError,
    IdentityConflictError,
    MultipleAssociationError,
    NotFoundError,
    RegistrationDisabledError,
)
from sso.domain.service import AuthService
from sso.util.error import ConfigurationError
from sso.util.jwt import JWTError

from .cookies import (
    AUTH_COOKIE,
    clear_cookie,
    set_auth_cookie,
    set_registration_cookie,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/auth", tags=["authentication"], route_class=DishkaRoute)


class StrategyResponse(BaseModel):
    """Login strategy offered on the login page."""

    name: str
    url: str
    callback_url: str
    icon: str
    scope: str


class LogoutResponse(BaseModel):
    """Logout response."""

    success: bool
    message: str


class AuthStatusResponse(BaseModel):
    """Response for checking authentication status.

    Used by /auth/me to return current user if authenticated,
    or indicate unauthenticated state without raising an error.
    """

    authenticated: bool
    user: GetCurrentUserResponse | None = None


@router.get("/strategies", response_model=list[StrategyResponse])
async def list_strategies(
    auth_service: FromDishka[AuthService],
) -> list[StrategyResponse]:
    """List available login strategies.

    Empty when Xsolla credentials are not configured.
    """
    return [
        StrategyResponse(**strategy.model_dump())
        for strategy in auth_service.list_strategies()
    ]


@router.get("/xsolla")
async def initiate_login(auth_service: FromDishka[AuthService]):
    """Redirect to the Xsolla login page.

    Example:
        GET /auth/xsolla

        Redirects to: https://login.xsolla.com/api/oauth2/login?...
    """
    state = secrets.token_urlsafe(32)

    try:
        auth_url = await auth_service.initiate_login(state)
    except ConfigurationError:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="Xsolla login is not configured",
        )

    logger.info("Redirecting to Xsolla login")
    return RedirectResponse(url=auth_url, status_code=status.HTTP_302_FOUND)


@router.get("/xsolla/callback")
async def xsolla_callback(
    code: str,
    state: str,
    login_use_case: FromDishka[LoginUseCase],
    settings: FromDishka[Settings],
    auth_token: str | None = Cookie(default=None),
):
    """Handle the Xsolla OAuth callback and complete login.

    Logged-in users get the Xsolla account linked and are sent back to
    their profile. Others are logged in (or registered) and get a session
    cookie. Users with a placeholder email are sent to the registration
    completion page first.

    Example:
        GET /auth/xsolla/callback?code=abc123&state=xyz789

        Redirects to: http://localhost:8000/
        Sets cookie: auth_token
    """
    try:
        login_response = await login_use_case.execute(
            LoginRequest(code=code, state=state, auth_token=auth_token)
        )
    except MultipleAssociationError as e:
        logger.warning(f"Xsolla association rejected: {e}")
        return _error_redirect(settings, "multiple_association", str(e))
    except RegistrationDisabledError as e:
        logger.warning(f"Xsolla registration refused: {e}")
        return _error_redirect(settings, "registration_disabled", str(e))
    except IdentityConflictError as e:
        logger.error(f"Xsolla identity conflict: {e}")
        return _error_redirect(settings, "identity_conflict", str(e))
    except XsollaOAuthError as e:
        logger.error(f"Xsolla OAuth error during callback: {e}")
        return _error_redirect(settings, "auth_failed", str(e))
    except ConfigurationError as e:
        logger.error(f"Xsolla callback while not configured: {e}")
        return _error_redirect(settings, "not_configured", str(e))
    except DomainError as e:
        logger.exception(f"Unexpected error during Xsolla callback: {e}")
        return _error_redirect(settings, "unexpected", str(e))

    logger.info(f"Xsolla login successful for user: {login_response.user_id}")

    if login_response.registration_token:
        redirect_url = f"{settings.api.base_url}/register/complete"
    elif auth_token:
        redirect_url = f"{settings.relative_path}/me/edit"
    else:
        redirect_url = f"{settings.api.base_url}/"

    redirect_response = RedirectResponse(
        url=redirect_url, status_code=status.HTTP_302_FOUND
    )
    set_auth_cookie(redirect_response, login_response.token, settings)
    if login_response.registration_token:
        set_registration_cookie(
            redirect_response, login_response.registration_token, settings
        )

    return redirect_response


def _error_redirect(settings: Settings, error: str, message: str) -> RedirectResponse:
    query = urlencode({"error": error, "message": message})
    return RedirectResponse(
        url=f"{settings.api.base_url}/auth/error?{query}",
        status_code=status.HTTP_302_FOUND,
    )


@router.post("/logout", response_model=LogoutResponse)
async def logout(
    response: Response,
    settings: FromDishka[Settings],
) -> LogoutResponse:
    """Logout user by clearing authentication cookie."""
    clear_cookie(response, AUTH_COOKIE, settings)
    return LogoutResponse(success=True, message="Successfully logged out")


@router.get("/me", response_model=AuthStatusResponse)
async def get_current_user(
    get_current_user_use_case: FromDishka[GetCurrentUserUseCase],
    auth_token: str | None = Cookie(default=None),
) -> AuthStatusResponse:
    """Get current user if authenticated, or return unauthenticated status.

    This endpoint is safe to call without authentication - it will return
    authenticated=false instead of raising an error.

    Examples:
        Authenticated:
        {
            "authenticated": true,
            "user": {
                "user_id": 1,
                "username": "alice",
                "association": {"associated": true, ...},
                ...
            }
        }

        Unauthenticated:
        {
            "authenticated": false,
            "user": null
        }
    """
    if not auth_token:
        return AuthStatusResponse(authenticated=False)

    try:
        user = await get_current_user_use_case.execute(
            GetCurrentUserRequest(token=auth_token)
        )
        return AuthStatusResponse(authenticated=True, user=user)

    except JWTError:
        # Invalid or expired token - this is expected behavior, not an error
        return AuthStatusResponse(authenticated=False)
    except NotFoundError:
        # JWT valid but user not found in database (orphaned token)
        return AuthStatusResponse(authenticated=False)
