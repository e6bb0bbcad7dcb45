"""Mappers for converting between database rows and domain models.

Domain models are immutable Pydantic models, so rows are mapped by hand
instead of through SQLAlchemy's ORM.
"""

from typing import Any, Dict

from sso.domain.model import EmailConfirmation, User
from sso.domain.value import UserId


def row_to_user(row: Dict[str, Any]) -> User:
    """Convert database row to User domain model.

    Args:
        row: Database row as dict

    Returns:
        User domain model
    """
    return User(
        id=UserId(row["id"]),
        username=row["username"],
        email=row.get("email"),
        email_confirmed=row.get("email_confirmed", False),
        picture=row.get("picture"),
        uploaded_picture=row.get("uploaded_picture"),
        xsolla_id=row.get("xsolla_id"),
        xsolla_access_token=row.get("xsolla_access_token"),
        xsolla_refresh_token=row.get("xsolla_refresh_token"),
        created_at=row["created_at"],
        updated_at=row["updated_at"],
    )


def row_to_email_confirmation(row: Dict[str, Any]) -> EmailConfirmation:
    """Convert database row to EmailConfirmation domain model."""
    return EmailConfirmation(
        code=row["code"],
        user_id=UserId(row["user_id"]),
        email=row["email"],
        created_at=row["created_at"],
        expires_at=row["expires_at"],
    )


def email_confirmation_to_dict(confirmation: EmailConfirmation) -> Dict[str, Any]:
    """Convert EmailConfirmation domain model to database dict."""
    return confirmation.model_dump()
