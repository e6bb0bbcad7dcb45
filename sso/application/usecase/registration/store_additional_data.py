"""Store additional data use case."""

from pydantic import BaseModel

from sso.application.usecase.base import BaseUseCase
from sso.domain.model import AdditionalData
from sso.domain.service import InterstitialService, JWTService
from sso.util.jwt import JWTError


class StoreAdditionalDataRequest(BaseModel):
    """Interstitial form submission."""

    registration_token: str | None = None
    email: str


class StoreAdditionalDataResponse(BaseModel):
    """Store additional data response."""

    user_id: int
    email: str | None = None
    # False when the account no longer needed any data
    validation_email_sent: bool


class StoreAdditionalDataUseCase(BaseUseCase):
    """Use case for completing the email interstitial."""

    def __init__(
        self, interstitial_service: InterstitialService, jwt_service: JWTService
    ) -> None:
        self.interstitial_service = interstitial_service
        self.jwt_service = jwt_service

    async def execute(
        self, request: StoreAdditionalDataRequest
    ) -> StoreAdditionalDataResponse:
        """Run the pending interstitial step with the submitted data.

        Raises:
            JWTError: If there is no valid pending registration
            ValueError: If the submitted email is malformed
            StorageError: If updating the user fails
            ValidationEmailError: If the validation email cannot be sent
        """
        registration = self.jwt_service.get_registration(request.registration_token)
        if registration is None:
            raise JWTError("No pending registration")

        data = AdditionalData(email=request.email)

        step = await self.interstitial_service.prepare_interstitial(registration)
        if step is None:
            return StoreAdditionalDataResponse(
                user_id=registration.user_id, validation_email_sent=False
            )

        await step.callback(registration.user_id, data)

        return StoreAdditionalDataResponse(
            user_id=registration.user_id,
            email=data.email,
            validation_email_sent=True,
        )
