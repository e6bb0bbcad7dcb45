"""Identity map interface (Xsolla account id -> local user id)."""

from abc import ABC, abstractmethod
from typing import Optional

from sso.domain.value import UserId


class IdentityRepository(ABC):
    """Repository for the Xsolla id to user id mapping.

    Each Xsolla id maps to at most one user.
    """

    @abstractmethod
    async def find_uid(self, xsolla_id: str) -> Optional[UserId]:
        """Find the user linked to an Xsolla account.

        Args:
            xsolla_id: Xsolla account id

        Returns:
            The linked user ID, None if unmapped
        """
        pass

    @abstractmethod
    async def save(self, xsolla_id: str, user_id: UserId) -> None:
        """Map an Xsolla account to a user.

        Saving an existing mapping to the same user is a no-op.

        Raises:
            IdentityConflictError: If the Xsolla id is mapped to another user
        """
        pass

    @abstractmethod
    async def delete(self, xsolla_id: str) -> None:
        """Remove the mapping for an Xsolla account (no-op if absent)."""
        pass
