"""Domain model entities for the SSO bridge."""

from sso.domain.model.association import Association
from sso.domain.model.email_confirmation import EmailConfirmation
from sso.domain.model.interstitial import (
    AdditionalData,
    InterstitialStep,
    RegistrationState,
)
from sso.domain.model.user import User

__all__ = [
    "AdditionalData",
    "Association",
    "EmailConfirmation",
    "InterstitialStep",
    "RegistrationState",
    "User",
]
