"""initial_schema

Create the account linking schema:
- Accounts (profile source preference, primary provider)
- Identities (one linked login method per provider per account)

Revision ID: 3c51d0e9a7b2
Revises:
Create Date: 2026-10-18 10:12:44.201377

"""

from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects import postgresql


# revision identifiers, used by Alembic.
revision: str = "3c51d0e9a7b2"
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """Upgrade schema."""
    op.create_table(
        "accounts",
        sa.Column("id", sa.String(128), primary_key=True),
        sa.Column("profile_source", sa.String(16), nullable=True),
        sa.Column("primary_provider", sa.String(32), nullable=True),
        sa.Column("email", sa.String(255), nullable=True),
        sa.Column("username", sa.String(255), nullable=True),
        sa.Column("avatar_url", sa.Text(), nullable=True),
        sa.Column(
            "created_at",
            postgresql.TIMESTAMP(timezone=True),
            nullable=False,
            server_default=sa.text("NOW()"),
        ),
        sa.Column(
            "updated_at",
            postgresql.TIMESTAMP(timezone=True),
            nullable=False,
            server_default=sa.text("NOW()"),
        ),
        sa.CheckConstraint(
            "profile_source IS NULL OR profile_source IN ('nostr', 'oauth')",
            name="ck_accounts_profile_source",
        ),
    )
    op.create_index("idx_accounts_email", "accounts", ["email"])

    op.create_table(
        "identities",
        sa.Column("id", sa.String(128), primary_key=True),
        sa.Column(
            "account_id",
            sa.String(128),
            sa.ForeignKey("accounts.id", ondelete="CASCADE"),
            nullable=False,
        ),
        sa.Column("provider", sa.String(32), nullable=False),
        sa.Column("provider_user_id", sa.String(255), nullable=True),
        sa.Column("pubkey", sa.String(64), nullable=True),
        sa.Column("access_token", sa.Text(), nullable=True),
        sa.Column("nostr_metadata", sa.Text(), nullable=True),
        sa.Column(
            "linked_at",
            postgresql.TIMESTAMP(timezone=True),
            nullable=False,
            server_default=sa.text("NOW()"),
        ),
        sa.UniqueConstraint("account_id", "provider", name="uq_account_provider"),
    )
    op.create_index("idx_identities_account_id", "identities", ["account_id"])
    op.create_index(
        "idx_identities_provider", "identities", ["provider", "provider_user_id"]
    )


def downgrade() -> None:
    """Downgrade schema."""
    op.drop_index("idx_identities_provider", table_name="identities")
    op.drop_index("idx_identities_account_id", table_name="identities")
    op.drop_table("identities")
    op.drop_index("idx_accounts_email", table_name="accounts")
    op.drop_table("accounts")
