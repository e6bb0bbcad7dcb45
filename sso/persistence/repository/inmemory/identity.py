"""In-memory identity map for testing."""

from typing import Optional

from sso.domain.error import IdentityConflictError
from sso.domain.repository.identity import IdentityRepository
from sso.domain.value import UserId


class InMemoryIdentityRepository(IdentityRepository):
    """In-memory implementation of IdentityRepository for testing."""

    def __init__(self) -> None:
        self._map: dict[str, UserId] = {}

    async def find_uid(self, xsolla_id: str) -> Optional[UserId]:
        return self._map.get(xsolla_id)

    async def save(self, xsolla_id: str, user_id: UserId) -> None:
        owner = self._map.setdefault(xsolla_id, user_id)
        if owner != user_id:
            raise IdentityConflictError(xsolla_id, owner)

    async def delete(self, xsolla_id: str) -> None:
        self._map.pop(xsolla_id, None)
