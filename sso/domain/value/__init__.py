"""Domain value objects for the SSO bridge."""

from sso.domain.value.identifiers import UserId
from sso.domain.value.types import Email, ExternalIdentity, StrategyInfo, UserField

__all__ = [
    "UserId",
    "Email",
    "ExternalIdentity",
    "StrategyInfo",
    "UserField",
]
