"""SQLAlchemy table definitions for the SSO bridge.

These table definitions match the schema defined in Alembic migrations.
"""

from sqlalchemy import (
    Boolean,
    Column,
    ForeignKey,
    Identity,
    Index,
    Integer,
    MetaData,
    String,
    Table,
    Text,
)
from sqlalchemy.dialects.postgresql import TIMESTAMP

metadata = MetaData()

# ============================================================================
# USERS TABLE
# ============================================================================
users_table = Table(
    "users",
    metadata,
    Column("id", Integer, Identity(start=1), primary_key=True),
    Column("username", String(255), nullable=False),
    Column("email", String(255), nullable=True),
    Column("email_confirmed", Boolean, nullable=False, server_default="false"),
    Column("picture", Text, nullable=True),
    Column("uploaded_picture", Text, nullable=True),
    Column("xsolla_id", String(255), nullable=True),
    Column("xsolla_access_token", Text, nullable=True),
    Column("xsolla_refresh_token", Text, nullable=True),
    Column(
        "created_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
    Column(
        "updated_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
)

Index("idx_users_xsolla_id", users_table.c.xsolla_id)

# ============================================================================
# EMAIL INDEX (email -> user)
# ============================================================================
user_emails_table = Table(
    "user_emails",
    metadata,
    Column("email", String(255), primary_key=True),  # Lowercased
    Column(
        "user_id", Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False
    ),
)

# ============================================================================
# IDENTITY MAP (xsolla id -> user)
# ============================================================================
xsolla_identities_table = Table(
    "xsolla_identities",
    metadata,
    Column("xsolla_id", String(255), primary_key=True),
    Column(
        "user_id", Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False
    ),
    Column(
        "created_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
)

Index("idx_xsolla_identities_user_id", xsolla_identities_table.c.user_id)

# ============================================================================
# EMAIL CONFIRMATIONS
# ============================================================================
email_confirmations_table = Table(
    "email_confirmations",
    metadata,
    Column("code", String(64), primary_key=True),
    Column(
        "user_id", Integer, ForeignKey("users.id", ondelete="CASCADE"), nullable=False
    ),
    Column("email", String(255), nullable=False),
    Column(
        "created_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
    Column("expires_at", TIMESTAMP(timezone=True), nullable=False),
)

email_confirm_throttle_table = Table(
    "email_confirm_throttle",
    metadata,
    Column(
        "user_id",
        Integer,
        ForeignKey("users.id", ondelete="CASCADE"),
        primary_key=True,
    ),
    Column("throttled_until", TIMESTAMP(timezone=True), nullable=False),
)
