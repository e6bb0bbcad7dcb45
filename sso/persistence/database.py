"""Database connection and session management.

Provides async database engine and session factory for PostgreSQL.
"""

from contextlib import contextmanager
from typing import Iterator

import logfire
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)

from sso.config import Settings
from sso.domain.error import StorageError


def create_engine(settings: Settings) -> AsyncEngine:
    """Create async database engine.

    Args:
        settings: Application settings with database URL

    Returns:
        Configured async engine
    """
    return create_async_engine(
        settings.database_url,
        echo=settings.debug,  # Log SQL queries in debug mode
        pool_pre_ping=True,
        pool_size=settings.database.pool_size,
        max_overflow=settings.database.max_overflow,
    )


def create_session_factory(engine: AsyncEngine) -> async_sessionmaker[AsyncSession]:
    """Create async session factory.

    Args:
        engine: Database engine

    Returns:
        Session factory for creating database sessions
    """
    return async_sessionmaker(
        engine,
        class_=AsyncSession,
        expire_on_commit=False,
        autoflush=False,
        autocommit=False,
    )


@contextmanager
def storage_errors(operation: str) -> Iterator[None]:
    """Translate SQLAlchemy failures into StorageError.

    Args:
        operation: Short name of the storage operation, used in the message
    """
    try:
        yield
    except SQLAlchemyError as e:
        logfire.error("Storage operation failed", operation=operation, error=str(e))
        raise StorageError(f"{operation} failed: {e}") from e
