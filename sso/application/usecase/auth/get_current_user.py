"""Get current user use case."""

from pydantic import BaseModel

from sso.application.usecase.association.get_association import (
    GetAssociationResponse,
)
from sso.application.usecase.base import BaseUseCase
from sso.domain.error import NotFoundError
from sso.domain.repository import UserRepository
from sso.domain.service import AssociationService, JWTService
from sso.domain.value import UserId


class GetCurrentUserRequest(BaseModel):
    """Get current user request."""

    token: str  # JWT token


class GetCurrentUserResponse(BaseModel):
    """Get current user response."""

    user_id: int
    username: str
    email: str | None
    email_confirmed: bool
    picture: str | None
    association: GetAssociationResponse


class GetCurrentUserUseCase(BaseUseCase):
    """Use case for getting current authenticated user."""

    def __init__(
        self,
        jwt_service: JWTService,
        user_repository: UserRepository,
        association_service: AssociationService,
    ) -> None:
        self.jwt_service = jwt_service
        self.user_repository = user_repository
        self.association_service = association_service

    async def execute(self, request: GetCurrentUserRequest) -> GetCurrentUserResponse:
        """Get the user the session token belongs to.

        Raises:
            JWTError: If the token is invalid or expired
            NotFoundError: If the user no longer exists
        """
        payload = self.jwt_service.verify_token(request.token)
        user_id = UserId(payload.user_id)

        user = await self.user_repository.find_by_id(user_id)
        if not user:
            raise NotFoundError("User", str(user_id))

        association = await self.association_service.describe_association(user_id)

        return GetCurrentUserResponse(
            user_id=user.id,
            username=user.username,
            email=user.email,
            email_confirmed=user.email_confirmed,
            picture=user.picture,
            association=GetAssociationResponse.from_association(association),
        )
