"""Session cookie helpers shared by route modules."""

from fastapi import Response

from sso.config import Settings

AUTH_COOKIE = "auth_token"
REGISTRATION_COOKIE = "registration_token"


def cookie_path(settings: Settings) -> str:
    return settings.relative_path.rstrip("/") or "/"


def set_auth_cookie(response: Response, token: str, settings: Settings) -> None:
    """Set the HTTP-only session cookie.

    Production requires HTTPS; development allows plain HTTP.
    """
    response.set_cookie(
        key=AUTH_COOKIE,
        value=token,
        httponly=True,
        secure=settings.environment == "production",
        samesite="lax",
        path=cookie_path(settings),
        max_age=settings.auth.jwt_expiry_days * 24 * 60 * 60,
    )


def set_registration_cookie(response: Response, token: str, settings: Settings) -> None:
    response.set_cookie(
        key=REGISTRATION_COOKIE,
        value=token,
        httponly=True,
        secure=settings.environment == "production",
        samesite="lax",
        path=cookie_path(settings),
        max_age=settings.auth.registration_expiry_minutes * 60,
    )


def clear_cookie(response: Response, key: str, settings: Settings) -> None:
    # Must match the path the cookie was created with
    response.delete_cookie(key=key, path=cookie_path(settings))
