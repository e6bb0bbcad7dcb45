"""In-memory email confirmation repository for testing."""

from datetime import datetime
from typing import Optional

from sso.domain.model.email_confirmation import EmailConfirmation
from sso.domain.repository.email_confirmation import EmailConfirmationRepository
from sso.domain.value import UserId


class InMemoryEmailConfirmationRepository(EmailConfirmationRepository):
    """In-memory implementation of EmailConfirmationRepository for testing."""

    def __init__(self) -> None:
        self._confirmations: dict[str, EmailConfirmation] = {}
        self._throttles: dict[UserId, datetime] = {}

    async def save(self, confirmation: EmailConfirmation) -> EmailConfirmation:
        self._confirmations[confirmation.code] = confirmation
        return confirmation

    async def find_by_code(self, code: str) -> Optional[EmailConfirmation]:
        return self._confirmations.get(code)

    async def delete(self, code: str) -> None:
        self._confirmations.pop(code, None)

    async def get_throttle(self, user_id: UserId) -> Optional[datetime]:
        return self._throttles.get(user_id)

    async def set_throttle(self, user_id: UserId, until: datetime) -> None:
        self._throttles[user_id] = until

    async def clear_throttle(self, user_id: UserId) -> None:
        self._throttles.pop(user_id, None)
