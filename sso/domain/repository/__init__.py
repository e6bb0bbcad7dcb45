"""Repository interfaces for the SSO domain.

Interfaces live in the domain layer; implementations live in persistence.
"""

from sso.domain.repository.email_confirmation import EmailConfirmationRepository
from sso.domain.repository.identity import IdentityRepository
from sso.domain.repository.user import UserRepository

__all__ = [
    "EmailConfirmationRepository",
    "IdentityRepository",
    "UserRepository",
]
