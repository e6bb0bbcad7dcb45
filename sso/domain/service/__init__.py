"""Domain services."""

from .association_service import AssociationService
from .auth_service import AuthService, OAuthClient
from .base import Service
from .email_confirmation_service import EmailConfirmationService, ValidationMailer
from .identity_link_service import IdentityLinkService
from .interstitial_service import InterstitialService
from .jwt_service import JWTService

__all__ = [
    "AssociationService",
    "AuthService",
    "EmailConfirmationService",
    "IdentityLinkService",
    "InterstitialService",
    "JWTService",
    "OAuthClient",
    "Service",
    "ValidationMailer",
]
