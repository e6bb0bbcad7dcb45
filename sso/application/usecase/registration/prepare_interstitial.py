"""Prepare interstitial use case."""

from typing import Any

from pydantic import BaseModel

from sso.application.usecase.base import BaseUseCase
from sso.domain.service import InterstitialService, JWTService


class PrepareInterstitialRequest(BaseModel):
    """Prepare interstitial request."""

    registration_token: str | None = None


class PrepareInterstitialResponse(BaseModel):
    """Data-collection step to render, if any."""

    required: bool
    template: str | None = None
    data: dict[str, Any] = {}


class PrepareInterstitialUseCase(BaseUseCase):
    """Use case for deciding whether the user must supply more data."""

    def __init__(
        self, interstitial_service: InterstitialService, jwt_service: JWTService
    ) -> None:
        self.interstitial_service = interstitial_service
        self.jwt_service = jwt_service

    async def execute(
        self, request: PrepareInterstitialRequest
    ) -> PrepareInterstitialResponse:
        registration = self.jwt_service.get_registration(request.registration_token)
        step = await self.interstitial_service.prepare_interstitial(registration)

        if step is None:
            return PrepareInterstitialResponse(required=False)

        return PrepareInterstitialResponse(
            required=True, template=step.template, data=step.data
        )
