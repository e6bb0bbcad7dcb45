"""PostgreSQL repository implementations."""

from sso.persistence.repository.email_confirmation import (
    PostgresEmailConfirmationRepository,
)
from sso.persistence.repository.identity import PostgresIdentityRepository
from sso.persistence.repository.user import PostgresUserRepository

__all__ = [
    "PostgresEmailConfirmationRepository",
    "PostgresIdentityRepository",
    "PostgresUserRepository",
]
