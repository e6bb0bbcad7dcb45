"""PostgreSQL implementation of the user store."""

from datetime import datetime, timezone
from typing import Any, Optional

from sqlalchemy import delete, select
from sqlalchemy.dialects.postgresql import insert
from sqlalchemy.ext.asyncio import AsyncSession

from sso.domain.model import User
from sso.domain.repository import UserRepository
from sso.domain.value import UserField, UserId
from sso.persistence.database import storage_errors
from sso.persistence.mappers import row_to_user
from sso.persistence.tables import user_emails_table, users_table


class PostgresUserRepository(UserRepository):
    """PostgreSQL implementation of UserRepository."""

    def __init__(self, session: AsyncSession) -> None:
        """Initialize repository with database session.

        Args:
            session: SQLAlchemy async session
        """
        self.session = session

    async def find_by_id(self, user_id: UserId) -> Optional[User]:
        """Find a user by ID."""
        with storage_errors("find user"):
            stmt = select(users_table).where(users_table.c.id == user_id)
            result = await self.session.execute(stmt)
            row = result.mappings().first()
        return row_to_user(dict(row)) if row else None

    async def find_uid_by_email(self, email: str) -> Optional[UserId]:
        """Look up a user through the email index."""
        with storage_errors("find uid by email"):
            stmt = select(user_emails_table.c.user_id).where(
                user_emails_table.c.email == email.strip().lower()
            )
            result = await self.session.execute(stmt)
            uid = result.scalar_one_or_none()
        return UserId(uid) if uid is not None else None

    async def create(self, username: str, email: str) -> UserId:
        """Create a user and index its email."""
        with storage_errors("create user"):
            stmt = (
                users_table.insert()
                .values(username=username, email=email)
                .returning(users_table.c.id)
            )
            result = await self.session.execute(stmt)
            user_id = UserId(result.scalar_one())

            await self.session.execute(
                insert(user_emails_table)
                .values(email=email.strip().lower(), user_id=user_id)
                .on_conflict_do_nothing(index_elements=["email"])
            )
            await self.session.flush()
        return user_id

    async def get_field(self, user_id: UserId, field: UserField) -> Any:
        """Read a single field of a user record."""
        with storage_errors(f"get {field.value}"):
            stmt = select(users_table.c[field.value]).where(
                users_table.c.id == user_id
            )
            result = await self.session.execute(stmt)
            return result.scalar_one_or_none()

    async def set_field(self, user_id: UserId, field: UserField, value: Any) -> None:
        """Write a single field of a user record."""
        with storage_errors(f"set {field.value}"):
            stmt = (
                users_table.update()
                .where(users_table.c.id == user_id)
                .values(
                    {
                        field.value: value,
                        "updated_at": datetime.now(timezone.utc),
                    }
                )
            )
            await self.session.execute(stmt)
            await self.session.flush()

    async def delete_field(self, user_id: UserId, field: UserField) -> None:
        """Clear a single field of a user record."""
        await self.set_field(user_id, field, None)

    async def add_email_reference(self, email: str, user_id: UserId) -> None:
        """Point an email address at a user in the email index."""
        with storage_errors("add email reference"):
            stmt = insert(user_emails_table).values(
                email=email.strip().lower(), user_id=user_id
            )
            stmt = stmt.on_conflict_do_update(
                index_elements=["email"], set_={"user_id": user_id}
            )
            await self.session.execute(stmt)
            await self.session.flush()

    async def remove_email_reference(self, email: str) -> None:
        """Drop an email address from the email index."""
        with storage_errors("remove email reference"):
            stmt = delete(user_emails_table).where(
                user_emails_table.c.email == email.strip().lower()
            )
            await self.session.execute(stmt)
            await self.session.flush()
