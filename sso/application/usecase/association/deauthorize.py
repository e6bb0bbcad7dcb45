"""Deauthorize use case."""

from pydantic import BaseModel

from sso.application.usecase.base import BaseUseCase
from sso.domain.service import AssociationService, JWTService
from sso.domain.value import UserId


class DeauthorizeRequest(BaseModel):
    """Deauthorize request."""

    token: str  # Session token of the user removing the link


class DeauthorizeResponse(BaseModel):
    """Deauthorize response."""

    user_id: int


class DeauthorizeUseCase(BaseUseCase):
    """Use case for removing the current user's Xsolla association."""

    def __init__(
        self, association_service: AssociationService, jwt_service: JWTService
    ) -> None:
        self.association_service = association_service
        self.jwt_service = jwt_service

    async def execute(self, request: DeauthorizeRequest) -> DeauthorizeResponse:
        """Unlink the Xsolla account of the token's user.

        Raises:
            JWTError: If the token is invalid or expired
            StorageError: If removing the link fails
        """
        payload = self.jwt_service.verify_token(request.token)
        user_id = await self.association_service.unlink(UserId(payload.user_id))
        return DeauthorizeResponse(user_id=user_id)
