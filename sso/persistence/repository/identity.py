"""PostgreSQL implementation of the Xsolla identity map."""

from typing import Optional

from sqlalchemy import delete, select
from sqlalchemy.dialects.postgresql import insert
from sqlalchemy.ext.asyncio import AsyncSession

from sso.domain.error import IdentityConflictError
from sso.domain.repository import IdentityRepository
from sso.domain.value import UserId
from sso.persistence.database import storage_errors
from sso.persistence.tables import xsolla_identities_table


class PostgresIdentityRepository(IdentityRepository):
    """PostgreSQL implementation of IdentityRepository.

    The primary key on ``xsolla_id`` makes the first write win; later
    writes for another user are rejected.
    """

    def __init__(self, session: AsyncSession) -> None:
        """Initialize repository with database session.

        Args:
            session: SQLAlchemy async session
        """
        self.session = session

    async def find_uid(self, xsolla_id: str) -> Optional[UserId]:
        """Find the user linked to an Xsolla account."""
        with storage_errors("find uid by xsolla id"):
            stmt = select(xsolla_identities_table.c.user_id).where(
                xsolla_identities_table.c.xsolla_id == xsolla_id
            )
            result = await self.session.execute(stmt)
            uid = result.scalar_one_or_none()
        return UserId(uid) if uid is not None else None

    async def save(self, xsolla_id: str, user_id: UserId) -> None:
        """Map an Xsolla account to a user, rejecting remaps."""
        with storage_errors("save xsolla identity"):
            stmt = (
                insert(xsolla_identities_table)
                .values(xsolla_id=xsolla_id, user_id=user_id)
                .on_conflict_do_nothing(index_elements=["xsolla_id"])
            )
            await self.session.execute(stmt)
            await self.session.flush()

        owner = await self.find_uid(xsolla_id)
        if owner != user_id:
            raise IdentityConflictError(xsolla_id, owner)

    async def delete(self, xsolla_id: str) -> None:
        """Remove the mapping for an Xsolla account."""
        with storage_errors("delete xsolla identity"):
            stmt = delete(xsolla_identities_table).where(
                xsolla_identities_table.c.xsolla_id == xsolla_id
            )
            await self.session.execute(stmt)
            await self.session.flush()
