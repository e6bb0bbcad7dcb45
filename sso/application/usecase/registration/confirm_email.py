"""Confirm email use case."""

from pydantic import BaseModel

from sso.application.usecase.base import BaseUseCase
from sso.domain.service import EmailConfirmationService


class ConfirmEmailRequest(BaseModel):
    """Confirm email request."""

    code: str


class ConfirmEmailResponse(BaseModel):
    """Confirm email response."""

    user_id: int


class ConfirmEmailUseCase(BaseUseCase):
    """Use case for following an email confirmation link."""

    def __init__(self, email_confirmation_service: EmailConfirmationService) -> None:
        self.email_confirmation_service = email_confirmation_service

    async def execute(self, request: ConfirmEmailRequest) -> ConfirmEmailResponse:
        user_id = await self.email_confirmation_service.confirm_email(request.code)
        return ConfirmEmailResponse(user_id=user_id)
