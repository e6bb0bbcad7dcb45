"""Local forum user.

The user store owns the record. The SSO bridge only writes the Xsolla
link, the provider tokens, the pictures and the email fields.
"""

from datetime import datetime, timezone
from typing import Optional

from pydantic import Field

from sso.domain.model.common import DomainModel
from sso.domain.value import UserId


class User(DomainModel):
    """Local user account, optionally linked to one Xsolla account."""

    id: UserId = Field(gt=0)
    username: str = Field(min_length=1, max_length=255)
    email: Optional[str] = None
    email_confirmed: bool = False
    picture: Optional[str] = None
    uploaded_picture: Optional[str] = None
    xsolla_id: Optional[str] = None  # At most one Xsolla account per user
    xsolla_access_token: Optional[str] = Field(default=None, repr=False)
    xsolla_refresh_token: Optional[str] = Field(default=None, repr=False)
    created_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
    updated_at: datetime = Field(default_factory=lambda: datetime.now(timezone.utc))
