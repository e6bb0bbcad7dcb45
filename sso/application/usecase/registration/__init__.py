"""Registration completion use cases."""

from .confirm_email import ConfirmEmailUseCase
from .prepare_interstitial import PrepareInterstitialUseCase
from .store_additional_data import StoreAdditionalDataUseCase

__all__ = [
    "ConfirmEmailUseCase",
    "PrepareInterstitialUseCase",
    "StoreAdditionalDataUseCase",
]
