"""In-memory user repository for testing."""

from datetime import datetime, timezone
from typing import Any, Optional

from sso.domain.model.user import User
from sso.domain.repository.user import UserRepository
from sso.domain.value import UserField, UserId


class InMemoryUserRepository(UserRepository):
    """In-memory implementation of UserRepository for testing."""

    def __init__(self) -> None:
        self._users: dict[UserId, User] = {}
        self._emails: dict[str, UserId] = {}
        self._next_id = 1

    async def find_by_id(self, user_id: UserId) -> Optional[User]:
        """Find a user by ID."""
        return self._users.get(user_id)

    async def find_uid_by_email(self, email: str) -> Optional[UserId]:
        """Look up a user through the email index."""
        return self._emails.get(email.strip().lower())

    async def create(self, username: str, email: str) -> UserId:
        """Create a user with the next free id."""
        user_id = UserId(self._next_id)
        self._next_id += 1
        self._users[user_id] = User(id=user_id, username=username, email=email)
        self._emails[email.strip().lower()] = user_id
        return user_id

    async def get_field(self, user_id: UserId, field: UserField) -> Any:
        user = self._users.get(user_id)
        if user is None:
            return None
        return getattr(user, field.value)

    async def set_field(self, user_id: UserId, field: UserField, value: Any) -> None:
        user = self._users.get(user_id)
        if user:
            self._users[user_id] = user.model_copy(
                update={field.value: value, "updated_at": datetime.now(timezone.utc)}
            )

    async def delete_field(self, user_id: UserId, field: UserField) -> None:
        await self.set_field(user_id, field, None)

    async def add_email_reference(self, email: str, user_id: UserId) -> None:
        self._emails[email.strip().lower()] = user_id

    async def remove_email_reference(self, email: str) -> None:
        self._emails.pop(email.strip().lower(), None)
