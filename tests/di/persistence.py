"""Mock persistence providers for testing."""

from dishka import Scope, provide

from sso.domain.repository import (
    EmailConfirmationRepository,
    IdentityRepository,
    UserRepository,
)
from sso.persistence.repository.inmemory import (
    InMemoryEmailConfirmationRepository,
    InMemoryIdentityRepository,
    InMemoryUserRepository,
)
from sso.util.di.infrastructure.persistence import PersistenceProvider


class MockPersistenceProvider(PersistenceProvider):
    """Mock persistence provider using in-memory repositories.

    Uses APP scope so state survives across HTTP requests within one test.
    Each test builds its own container, which keeps tests isolated.
    """

    __is_mock__ = True

    @provide(scope=Scope.APP)
    def get_user_repository(self) -> UserRepository:
        """Provide in-memory user repository."""
        return InMemoryUserRepository()

    @provide(scope=Scope.APP)
    def get_identity_repository(self) -> IdentityRepository:
        """Provide in-memory identity map."""
        return InMemoryIdentityRepository()

    @provide(scope=Scope.APP)
    def get_email_confirmation_repository(self) -> EmailConfirmationRepository:
        """Provide in-memory email confirmation repository."""
        return InMemoryEmailConfirmationRepository()
