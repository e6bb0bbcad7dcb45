"""Persistence infrastructure providers."""

from collections.abc import AsyncIterator

from dishka import Scope, provide
import logfire
from sqlalchemy.ext.asyncio import AsyncEngine, AsyncSession, async_sessionmaker

from sso.config import Settings
from sso.domain.repository import (
    EmailConfirmationRepository,
    IdentityRepository,
    UserRepository,
)
from sso.persistence.database import create_engine, create_session_factory
from sso.persistence.repository import (
    PostgresEmailConfirmationRepository,
    PostgresIdentityRepository,
    PostgresUserRepository,
)
from sso.util.di.base import ProviderBase
from sso.util.observability import instrument_sqlalchemy


class PersistenceProvider(ProviderBase):
    """Persistence component base."""

    __mock_component__ = "persistence"


class ProdPersistenceProvider(PersistenceProvider):
    """Production persistence provider using PostgreSQL."""

    __is_mock__ = False

    scope = Scope.APP

    @provide(scope=Scope.APP)
    async def get_engine(self, settings: Settings) -> AsyncIterator[AsyncEngine]:
        """Provide database engine, disposed when the container closes."""
        engine = create_engine(settings)
        instrument_sqlalchemy(engine)
        yield engine
        await engine.dispose()

    @provide(scope=Scope.APP)
    def get_session_factory(
        self, engine: AsyncEngine
    ) -> async_sessionmaker[AsyncSession]:
        """Provide session factory."""
        return create_session_factory(engine)

    @provide(scope=Scope.REQUEST)
    async def get_session(
        self, session_factory: async_sessionmaker[AsyncSession]
    ) -> AsyncIterator[AsyncSession]:
        """Provide database session for request scope.

        The session is committed at the end of the request if no exception
        occurred, or rolled back if an exception was raised. Writes made
        before a failure inside one request are therefore rolled back
        together; writes from earlier requests stay.
        """
        async with session_factory() as session:
            try:
                yield session
                await session.commit()
                logfire.debug("Session committed")
            except Exception as e:
                logfire.warn("Session rollback", error=str(e))
                await session.rollback()
                raise

    @provide(scope=Scope.REQUEST)
    def get_user_repository(self, session: AsyncSession) -> UserRepository:
        """Provide User repository."""
        return PostgresUserRepository(session)

    @provide(scope=Scope.REQUEST)
    def get_identity_repository(self, session: AsyncSession) -> IdentityRepository:
        """Provide Xsolla identity map repository."""
        return PostgresIdentityRepository(session)

    @provide(scope=Scope.REQUEST)
    def get_email_confirmation_repository(
        self, session: AsyncSession
    ) -> EmailConfirmationRepository:
        """Provide email confirmation repository."""
        return PostgresEmailConfirmationRepository(session)
