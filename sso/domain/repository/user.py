"""User store interface."""

from abc import ABC, abstractmethod
from typing import Any, Optional

from sso.domain.model.user import User
from sso.domain.value import UserField, UserId


class UserRepository(ABC):
    """Repository for local user records.

    Field writes are independent operations; nothing here is transactional
    across calls. Implementations raise StorageError on I/O failure.
    """

    @abstractmethod
    async def find_by_id(self, user_id: UserId) -> Optional[User]:
        """Find a user by ID.

        Args:
            user_id: The user's unique identifier

        Returns:
            The user if found, None otherwise
        """
        pass

    @abstractmethod
    async def find_uid_by_email(self, email: str) -> Optional[UserId]:
        """Look up a user through the email index.

        Args:
            email: Email address (matched case-insensitively)

        Returns:
            The user ID if the address is indexed, None otherwise
        """
        pass

    @abstractmethod
    async def create(self, username: str, email: str) -> UserId:
        """Create a user and index its email.

        Args:
            username: Display name used as the username
            email: Email address

        Returns:
            The new user's ID
        """
        pass

    @abstractmethod
    async def get_field(self, user_id: UserId, field: UserField) -> Any:
        """Read a single field of a user record.

        Returns:
            The field value, or None when the user or the value is missing
        """
        pass

    @abstractmethod
    async def set_field(self, user_id: UserId, field: UserField, value: Any) -> None:
        """Write a single field of a user record."""
        pass

    @abstractmethod
    async def delete_field(self, user_id: UserId, field: UserField) -> None:
        """Clear a single field of a user record."""
        pass

    @abstractmethod
    async def add_email_reference(self, email: str, user_id: UserId) -> None:
        """Point an email address at a user in the email index."""
        pass

    @abstractmethod
    async def remove_email_reference(self, email: str) -> None:
        """Drop an email address from the email index."""
        pass
