"""SQLAlchemy table definitions.

These match the schema defined in the Alembic migrations.
"""

from sqlalchemy import (
    Column,
    ForeignKey,
    Index,
    MetaData,
    String,
    Table,
    Text,
    UniqueConstraint,
)
from sqlalchemy.dialects.postgresql import TIMESTAMP

metadata = MetaData()

# ============================================================================
# ACCOUNTS TABLE (provider-agnostic)
# ============================================================================
accounts_table = Table(
    "accounts",
    metadata,
    Column("id", String(128), primary_key=True),
    Column("profile_source", String(16), nullable=True),  # 'nostr' | 'oauth'
    Column("primary_provider", String(32), nullable=True),  # provider kind value
    Column("email", String(255), nullable=True),
    Column("username", String(255), nullable=True),
    Column("avatar_url", Text, nullable=True),
    Column(
        "created_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
    Column(
        "updated_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
)

Index("idx_accounts_email", accounts_table.c.email)

# ============================================================================
# IDENTITIES TABLE (linked login methods)
# ============================================================================
identities_table = Table(
    "identities",
    metadata,
    Column("id", String(128), primary_key=True),
    Column(
        "account_id",
        String(128),
        ForeignKey("accounts.id", ondelete="CASCADE"),
        nullable=False,
    ),
    Column("provider", String(32), nullable=False),  # 'nostr', 'github', ...
    Column("provider_user_id", String(255), nullable=True),
    Column("pubkey", String(64), nullable=True),
    Column("access_token", Text, nullable=True),
    Column("nostr_metadata", Text, nullable=True),  # last kind-0 content
    Column(
        "linked_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
    UniqueConstraint("account_id", "provider", name="uq_account_provider"),
)

Index("idx_identities_account_id", identities_table.c.account_id)
Index(
    "idx_identities_provider",
    identities_table.c.provider,
    identities_table.c.provider_user_id,
)
