"""Email confirmation repository interface."""

from abc import ABC, abstractmethod
from datetime import datetime
from typing import Optional

from sso.domain.model.email_confirmation import EmailConfirmation
from sso.domain.value import UserId


class EmailConfirmationRepository(ABC):
    """Stores confirmation codes and the per-user send throttle."""

    @abstractmethod
    async def save(self, confirmation: EmailConfirmation) -> EmailConfirmation:
        pass

    @abstractmethod
    async def find_by_code(self, code: str) -> Optional[EmailConfirmation]:
        pass

    @abstractmethod
    async def delete(self, code: str) -> None:
        pass

    @abstractmethod
    async def get_throttle(self, user_id: UserId) -> Optional[datetime]:
        """Return the time until which sending is throttled, if any."""
        pass

    @abstractmethod
    async def set_throttle(self, user_id: UserId, until: datetime) -> None:
        pass

    @abstractmethod
    async def clear_throttle(self, user_id: UserId) -> None:
        """Forget the last send so a new validation email is allowed."""
        pass
