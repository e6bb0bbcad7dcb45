"""Domain value objects for the SSO bridge.

Value objects are immutable and defined by their values, not identity.
"""

from enum import Enum

from pydantic import field_validator

from sso.domain.value.common import RootValueObject, ValueObject


class UserField(str, Enum):
    """Individually writable fields of a local user record."""

    XSOLLA_ID = "xsolla_id"
    EMAIL = "email"
    EMAIL_CONFIRMED = "email_confirmed"
    PICTURE = "picture"
    UPLOADED_PICTURE = "uploaded_picture"
    XSOLLA_ACCESS_TOKEN = "xsolla_access_token"
    XSOLLA_REFRESH_TOKEN = "xsolla_refresh_token"


class Email(RootValueObject[str]):
    """Email address, stored lowercased and trimmed."""

    @field_validator("root")
    @classmethod
    def validate_email(cls, v: str) -> str:
        """Validate there is exactly one @ with text on both sides."""
        v = v.strip().lower()
        local, sep, domain = v.partition("@")
        if not sep or not local or not domain or "@" in domain:
            raise ValueError("Invalid email address")
        if len(v) > 255:
            raise ValueError("Email must be at most 255 characters")
        return v

    def is_on_domain(self, domain: str) -> bool:
        """Whether the address belongs to the given domain."""
        return self.root.endswith(f"@{domain.lower()}")


class ExternalIdentity(ValueObject):
    """Identity assertion produced by the Xsolla OAuth client.

    Built once per login attempt after the access token has been verified.
    """

    external_id: str  # Permanent Xsolla account id (JWT "sub")
    display_name: str
    email: str  # Real address or a placeholder on the provider domain
    avatar_url: str | None = None
    access_token: str
    refresh_token: str | None = None

    @field_validator("external_id", "display_name")
    @classmethod
    def validate_not_empty(cls, v: str) -> str:
        """Reject empty ids and names."""
        if not v:
            raise ValueError("must not be empty")
        return v


class StrategyInfo(ValueObject):
    """Login strategy advertised to the forum's login page."""

    name: str
    url: str
    callback_url: str
    icon: str
    scope: str
