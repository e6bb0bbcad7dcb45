"""Registration completion and email confirmation routes."""

import logging

from dishka.integrations.fastapi import DishkaRoute, FromDishka
from fastapi import APIRouter, Cookie, HTTPException, Response, status
from pydantic import BaseModel

from sso.application.usecase.registration import (
    ConfirmEmailUseCase,
    PrepareInterstitialUseCase,
    StoreAdditionalDataUseCase,
)
from sso.application.usecase.registration.confirm_email import (
    ConfirmEmailRequest,
    ConfirmEmailResponse,
)
from sso.application.usecase.registration.prepare_interstitial import (
    PrepareInterstitialRequest,
    PrepareInterstitialResponse,
)
from sso.application.usecase.registration.store_additional_data import (
    StoreAdditionalDataRequest,
    StoreAdditionalDataResponse,
)
from sso.config import Settings
from sso.domain.error import (
    InvalidConfirmationError,
    StorageError,
    ValidationEmailError,
)
from sso.util.jwt import JWTError

from .cookies import REGISTRATION_COOKIE, clear_cookie

logger = logging.getLogger(__name__)

router = APIRouter(tags=["registration"], route_class=DishkaRoute)


class CompleteRegistrationAPIRequest(BaseModel):
    """Interstitial form body."""

    email: str


@router.get("/register/complete", response_model=PrepareInterstitialResponse)
async def get_registration_step(
    prepare_interstitial_use_case: FromDishka[PrepareInterstitialUseCase],
    registration_token: str | None = Cookie(default=None),
) -> PrepareInterstitialResponse:
    """Return the data-collection step pending for this registration, if any."""
    return await prepare_interstitial_use_case.execute(
        PrepareInterstitialRequest(registration_token=registration_token)
    )


@router.post("/register/complete", response_model=StoreAdditionalDataResponse)
async def complete_registration(
    request: CompleteRegistrationAPIRequest,
    response: Response,
    store_additional_data_use_case: FromDishka[StoreAdditionalDataUseCase],
    settings: FromDishka[Settings],
    registration_token: str | None = Cookie(default=None),
) -> StoreAdditionalDataResponse:
    """Store the real email address and send a validation email.

    Example:
        POST /register/complete
        Cookie: registration_token=...
        {"email": "alice@example.org"}
    """
    try:
        result = await store_additional_data_use_case.execute(
            StoreAdditionalDataRequest(
                registration_token=registration_token, email=request.email
            )
        )
    except JWTError:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="No pending registration",
        )
    except ValueError as e:
        raise HTTPException(
            status_code=422,
            detail=f"Invalid email: {request.email}",
        ) from e
    except ValidationEmailError as e:
        logger.error(f"Validation email failed: {e}")
        raise HTTPException(
            status_code=status.HTTP_502_BAD_GATEWAY,
            detail="Could not send validation email",
        )
    except StorageError as e:
        logger.error(f"Storing registration data failed: {e}")
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Could not store registration data",
        )

    clear_cookie(response, REGISTRATION_COOKIE, settings)
    return result


@router.get("/confirm/{code}", response_model=ConfirmEmailResponse)
async def confirm_email(
    code: str,
    confirm_email_use_case: FromDishka[ConfirmEmailUseCase],
) -> ConfirmEmailResponse:
    """Confirm an email address from a validation link."""
    try:
        return await confirm_email_use_case.execute(ConfirmEmailRequest(code=code))
    except InvalidConfirmationError as e:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=str(e),
        )
