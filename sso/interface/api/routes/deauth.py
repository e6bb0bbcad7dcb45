"""Xsolla deauthorization routes."""

import logging

from dishka.integrations.fastapi import DishkaRoute, FromDishka
from fastapi import APIRouter, Cookie, HTTPException, status
from fastapi.responses import RedirectResponse
from pydantic import BaseModel

from sso.application.usecase.association import DeauthorizeUseCase
from sso.application.usecase.association.deauthorize import DeauthorizeRequest
from sso.config import Settings
from sso.domain.error import StorageError
from sso.domain.service import JWTService
from sso.util.jwt import JWTError

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/deauth", tags=["association"], route_class=DishkaRoute)


class DeauthPageResponse(BaseModel):
    """Data for the confirmation page shown before unlinking."""

    service: str
    action_url: str


@router.get("/xsolla", response_model=DeauthPageResponse)
async def deauth_page(
    jwt_service: FromDishka[JWTService],
    settings: FromDishka[Settings],
    auth_token: str | None = Cookie(default=None),
) -> DeauthPageResponse:
    """Describe the deauthorization form for the logged-in user."""
    if jwt_service.get_user_id_from_token(auth_token) is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Not authenticated",
        )

    return DeauthPageResponse(
        service="Xsolla",
        action_url=f"{settings.api.base_url}/deauth/xsolla",
    )


@router.post("/xsolla")
async def deauth(
    deauthorize_use_case: FromDishka[DeauthorizeUseCase],
    settings: FromDishka[Settings],
    auth_token: str | None = Cookie(default=None),
):
    """Remove the logged-in user's Xsolla association.

    Example:
        POST /deauth/xsolla
        Cookie: auth_token=...

        Redirects to: /me/edit
    """
    if not auth_token:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Not authenticated",
        )

    try:
        result = await deauthorize_use_case.execute(
            DeauthorizeRequest(token=auth_token)
        )
    except JWTError:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid or expired token",
        )
    except StorageError as e:
        logger.error(f"Failed to remove Xsolla association: {e}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Could not remove Xsolla association",
        )

    logger.info(f"Xsolla association removed for user: {result.user_id}")
    return RedirectResponse(
        url=f"{settings.relative_path}/me/edit",
        status_code=status.HTTP_302_FOUND,
    )
