"""User association routes."""

from dishka.integrations.fastapi import DishkaRoute, FromDishka
from fastapi import APIRouter

from sso.application.usecase.association import GetAssociationUseCase
from sso.application.usecase.association.get_association import (
    GetAssociationRequest,
    GetAssociationResponse,
)

router = APIRouter(prefix="/users", tags=["users"], route_class=DishkaRoute)


@router.get("/{user_id}/association", response_model=GetAssociationResponse)
async def get_user_association(
    user_id: int,
    get_association_use_case: FromDishka[GetAssociationUseCase],
) -> GetAssociationResponse:
    """Get a user's Xsolla association.

    Example:
        GET /users/1/association

        Response:
        {
            "associated": true,
            "url": "https://xsolla.com/42",
            "deauth_url": "http://localhost:8000/deauth/xsolla",
            "name": "Xsolla",
            "icon": "fa-sign-in"
        }
    """
    return await get_association_use_case.execute(
        GetAssociationRequest(user_id=user_id)
    )
