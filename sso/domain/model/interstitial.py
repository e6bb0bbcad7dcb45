"""Registration interstitial models."""

from typing import Any, Awaitable, Callable

from pydantic import Field, field_validator

from sso.domain.model.common import DomainModel
from sso.domain.value import Email, UserId


class RegistrationState(DomainModel):
    """Pending registration data carried between login and completion."""

    user_id: UserId
    xsolla_id: str


class AdditionalData(DomainModel):
    """Data submitted on the interstitial form."""

    email: str

    @field_validator("email")
    @classmethod
    def normalize_email(cls, v: str) -> str:
        return Email(v).root


class InterstitialStep(DomainModel):
    """A data-collection step the user must complete before continuing."""

    template: str
    data: dict[str, Any] = Field(default_factory=dict)
    callback: Callable[[UserId, AdditionalData], Awaitable[None]] = Field(
        exclude=True
    )
