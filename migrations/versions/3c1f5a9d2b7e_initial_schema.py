"""initial_schema

Create the schema for the Xsolla SSO bridge:
- Users (local accounts with Xsolla link and tokens)
- User emails (email -> user index)
- Xsolla identities (xsolla id -> user map, first write wins)
- Email confirmations and the per-user send throttle

Revision ID: 3c1f5a9d2b7e
Revises:
Create Date: 2026-10-18 10:12:44.502113

"""

from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = "3c1f5a9d2b7e"
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """Upgrade schema."""
    # ========================================================================
    # USERS table
    # ========================================================================
    op.create_table(
        "users",
        sa.Column("id", sa.Integer(), sa.Identity(start=1), nullable=False),
        sa.Column("username", sa.String(255), nullable=False),
        sa.Column("email", sa.String(255), nullable=True),
        sa.Column(
            "email_confirmed", sa.Boolean(), nullable=False, server_default="false"
        ),
        sa.Column("picture", sa.Text(), nullable=True),
        sa.Column("uploaded_picture", sa.Text(), nullable=True),
        sa.Column("xsolla_id", sa.String(255), nullable=True),
        sa.Column("xsolla_access_token", sa.Text(), nullable=True),
        sa.Column("xsolla_refresh_token", sa.Text(), nullable=True),
        sa.Column(
            "created_at",
            sa.TIMESTAMP(timezone=True),
            nullable=False,
            server_default=sa.text("NOW()"),
        ),
        sa.Column(
            "updated_at",
            sa.TIMESTAMP(timezone=True),
            nullable=False,
            server_default=sa.text("NOW()"),
        ),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("idx_users_xsolla_id", "users", ["xsolla_id"])

    # ========================================================================
    # USER_EMAILS table (lowercased email -> user)
    # ========================================================================
    op.create_table(
        "user_emails",
        sa.Column("email", sa.String(255), nullable=False),
        sa.Column("user_id", sa.Integer(), nullable=False),
        sa.ForeignKeyConstraint(["user_id"], ["users.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("email"),
    )

    # ========================================================================
    # XSOLLA_IDENTITIES table
    # ========================================================================
    op.create_table(
        "xsolla_identities",
        sa.Column("xsolla_id", sa.String(255), nullable=False),
        sa.Column("user_id", sa.Integer(), nullable=False),
        sa.Column(
            "created_at",
            sa.TIMESTAMP(timezone=True),
            nullable=False,
            server_default=sa.text("NOW()"),
        ),
        sa.ForeignKeyConstraint(["user_id"], ["users.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("xsolla_id"),
    )
    op.create_index(
        "idx_xsolla_identities_user_id", "xsolla_identities", ["user_id"]
    )

    # ========================================================================
    # EMAIL_CONFIRMATIONS and throttle
    # ========================================================================
    op.create_table(
        "email_confirmations",
        sa.Column("code", sa.String(64), nullable=False),
        sa.Column("user_id", sa.Integer(), nullable=False),
        sa.Column("email", sa.String(255), nullable=False),
        sa.Column(
            "created_at",
            sa.TIMESTAMP(timezone=True),
            nullable=False,
            server_default=sa.text("NOW()"),
        ),
        sa.Column("expires_at", sa.TIMESTAMP(timezone=True), nullable=False),
        sa.ForeignKeyConstraint(["user_id"], ["users.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("code"),
    )

    op.create_table(
        "email_confirm_throttle",
        sa.Column("user_id", sa.Integer(), nullable=False),
        sa.Column("throttled_until", sa.TIMESTAMP(timezone=True), nullable=False),
        sa.ForeignKeyConstraint(["user_id"], ["users.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("user_id"),
    )


def downgrade() -> None:
    """Downgrade schema."""
    op.drop_table("email_confirm_throttle")
    op.drop_table("email_confirmations")
    op.drop_index("idx_xsolla_identities_user_id", table_name="xsolla_identities")
    op.drop_table("xsolla_identities")
    op.drop_table("user_emails")
    op.drop_index("idx_users_xsolla_id", table_name="users")
    op.drop_table("users")
