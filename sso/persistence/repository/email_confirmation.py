"""PostgreSQL implementation of the email confirmation repository."""

from datetime import datetime
from typing import Optional

from sqlalchemy import delete, select
from sqlalchemy.dialects.postgresql import insert
from sqlalchemy.ext.asyncio import AsyncSession

from sso.domain.model import EmailConfirmation
from sso.domain.repository import EmailConfirmationRepository
from sso.domain.value import UserId
from sso.persistence.database import storage_errors
from sso.persistence.mappers import (
    email_confirmation_to_dict,
    row_to_email_confirmation,
)
from sso.persistence.tables import (
    email_confirm_throttle_table,
    email_confirmations_table,
)


class PostgresEmailConfirmationRepository(EmailConfirmationRepository):
    """PostgreSQL implementation of EmailConfirmationRepository."""

    def __init__(self, session: AsyncSession) -> None:
        self.session = session

    async def save(self, confirmation: EmailConfirmation) -> EmailConfirmation:
        with storage_errors("save email confirmation"):
            stmt = email_confirmations_table.insert().values(
                **email_confirmation_to_dict(confirmation)
            )
            await self.session.execute(stmt)
            await self.session.flush()
        return confirmation

    async def find_by_code(self, code: str) -> Optional[EmailConfirmation]:
        with storage_errors("find email confirmation"):
            stmt = select(email_confirmations_table).where(
                email_confirmations_table.c.code == code
            )
            result = await self.session.execute(stmt)
            row = result.mappings().first()
        return row_to_email_confirmation(dict(row)) if row else None

    async def delete(self, code: str) -> None:
        with storage_errors("delete email confirmation"):
            stmt = delete(email_confirmations_table).where(
                email_confirmations_table.c.code == code
            )
            await self.session.execute(stmt)
            await self.session.flush()

    async def get_throttle(self, user_id: UserId) -> Optional[datetime]:
        with storage_errors("get email confirm throttle"):
            stmt = select(email_confirm_throttle_table.c.throttled_until).where(
                email_confirm_throttle_table.c.user_id == user_id
            )
            result = await self.session.execute(stmt)
            return result.scalar_one_or_none()

    async def set_throttle(self, user_id: UserId, until: datetime) -> None:
        with storage_errors("set email confirm throttle"):
            stmt = insert(email_confirm_throttle_table).values(
                user_id=user_id, throttled_until=until
            )
            stmt = stmt.on_conflict_do_update(
                index_elements=["user_id"], set_={"throttled_until": until}
            )
            await self.session.execute(stmt)
            await self.session.flush()

    async def clear_throttle(self, user_id: UserId) -> None:
        with storage_errors("clear email confirm throttle"):
            stmt = delete(email_confirm_throttle_table).where(
                email_confirm_throttle_table.c.user_id == user_id
            )
            await self.session.execute(stmt)
            await self.session.flush()
