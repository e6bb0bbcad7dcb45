"""Get association use case."""

from pydantic import BaseModel

from sso.application.usecase.base import BaseUseCase
from sso.domain.model import Association
from sso.domain.service import AssociationService
from sso.domain.value import UserId


class GetAssociationRequest(BaseModel):
    """Get association request."""

    user_id: int


class GetAssociationResponse(BaseModel):
    """Association shown on the profile edit page."""

    associated: bool
    url: str
    deauth_url: str | None = None
    name: str
    icon: str

    @classmethod
    def from_association(cls, association: Association) -> "GetAssociationResponse":
        return cls(**association.model_dump())


class GetAssociationUseCase(BaseUseCase):
    """Use case for describing a user's Xsolla association."""

    def __init__(self, association_service: AssociationService) -> None:
        self.association_service = association_service

    async def execute(self, request: GetAssociationRequest) -> GetAssociationResponse:
        association = await self.association_service.describe_association(
            UserId(request.user_id)
        )
        return GetAssociationResponse.from_association(association)
