"""Email confirmation entity."""

from datetime import datetime, timezone

from pydantic import Field

from sso.domain.model.common import DomainModel
from sso.domain.value import UserId


class EmailConfirmation(DomainModel):
    """Pending confirmation of an email address.

    The code is sent by email; following the link confirms the address.
    """

    code: str
    user_id: UserId
    email: str
    created_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
    expires_at: datetime

    def is_expired(self, now: datetime) -> bool:
        return now >= self.expires_at
