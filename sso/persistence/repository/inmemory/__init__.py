"""In-memory repository implementations for testing."""

from .email_confirmation import InMemoryEmailConfirmationRepository
from .identity import InMemoryIdentityRepository
from .user import InMemoryUserRepository

__all__ = [
    "InMemoryEmailConfirmationRepository",
    "InMemoryIdentityRepository",
    "InMemoryUserRepository",
]
