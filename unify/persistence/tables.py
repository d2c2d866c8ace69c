"""SQLAlchemy table definitions for unify.

These table definitions are used with SQLAlchemy Core.
They match the schema defined in Alembic migrations.
"""

from sqlalchemy import (
    BigInteger,
    Boolean,
    CheckConstraint,
    Column,
    Enum,
    ForeignKey,
    Index,
    Integer,
    MetaData,
    PrimaryKeyConstraint,
    String,
    Table,
    Text,
    UniqueConstraint,
)
from sqlalchemy.dialects.postgresql import JSONB, TIMESTAMP, UUID

# Metadata object for all tables
metadata = MetaData()

# ============================================================================
# ACCOUNTS TABLE (Provider-agnostic, never deleted)
# ============================================================================
accounts_table = Table(
    "accounts",
    metadata,
    Column("id", UUID, primary_key=True, server_default="uuid_generate_v4()"),
    Column("is_active", Boolean, nullable=False, server_default="true"),
    Column(
        "created_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
    Column(
        "updated_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
    Column("disabled_at", TIMESTAMP(timezone=True), nullable=True),
    Column(
        "disabled_reason",
        Enum("merged", "deleted", name="disabled_reason", create_type=False),
        nullable=True,
    ),
    Column("merged_into", UUID, ForeignKey("accounts.id"), nullable=True),
    CheckConstraint(
        "is_active OR disabled_at IS NOT NULL", name="ck_accounts_disabled_at"
    ),
)

# ============================================================================
# IDENTITIES TABLE (Multi-provider authentication)
# ============================================================================
identities_table = Table(
    "identities",
    metadata,
    Column("id", UUID, primary_key=True, server_default="uuid_generate_v4()"),
    Column("account_id", UUID, ForeignKey("accounts.id"), nullable=False),
    Column("provider", String(50), nullable=False),  # 'apple', 'google'
    Column("external_id", String(255), nullable=False),  # Provider "sub" claim
    Column("email", String(255), nullable=True),
    Column("is_primary", Boolean, nullable=False, server_default="false"),
    Column(
        "linked_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
    Column(
        "updated_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
    UniqueConstraint("provider", "external_id", name="uq_provider_identity"),
)

Index("idx_identities_account_id", identities_table.c.account_id)
# At most one primary identity per account
Index(
    "uq_identities_primary",
    identities_table.c.account_id,
    unique=True,
    postgresql_where=identities_table.c.is_primary,
)

# ============================================================================
# MERGE RECORDS TABLE (Merge ledger)
# ============================================================================
merge_records_table = Table(
    "merge_records",
    metadata,
    Column("fingerprint", String(64), primary_key=True),
    Column("target_account_id", UUID, ForeignKey("accounts.id"), nullable=False),
    Column("source_account_id", UUID, ForeignKey("accounts.id"), nullable=False),
    Column(
        "status",
        Enum("pending", "committed", "failed", name="merge_status", create_type=False),
        nullable=False,
        server_default="pending",
    ),
    Column("summary", JSONB, nullable=False, server_default="{}"),
    Column("attempts", Integer, nullable=False, server_default="1"),
    Column("last_error", Text, nullable=True),
    Column(
        "created_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
    Column(
        "updated_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
    Column("completed_at", TIMESTAMP(timezone=True), nullable=True),
    CheckConstraint(
        "target_account_id <> source_account_id", name="ck_merge_records_distinct"
    ),
)

Index("idx_merge_records_target", merge_records_table.c.target_account_id)
Index("idx_merge_records_source", merge_records_table.c.source_account_id)
# A source account is consumed by at most one committed merge
Index(
    "uq_merge_records_committed_source",
    merge_records_table.c.source_account_id,
    unique=True,
    postgresql_where=merge_records_table.c.status == "committed",
)

# ============================================================================
# OWNED ITEMS TABLE (Set-union merge data)
# ============================================================================
owned_items_table = Table(
    "owned_items",
    metadata,
    Column("id", UUID, primary_key=True, server_default="uuid_generate_v4()"),
    Column("owner_id", UUID, ForeignKey("accounts.id"), nullable=False),
    Column(
        "kind",
        Enum(
            "collection",
            "itinerary",
            "favorite",
            "achievement",
            name="item_kind",
            create_type=False,
        ),
        nullable=False,
    ),
    Column("natural_key", String(255), nullable=False),
    Column(
        "acquired_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
    UniqueConstraint("owner_id", "kind", "natural_key", name="uq_owned_item"),
)

# ============================================================================
# BALANCES TABLE (Summation merge data)
# ============================================================================
balances_table = Table(
    "balances",
    metadata,
    Column("owner_id", UUID, ForeignKey("accounts.id"), nullable=False),
    Column(
        "kind",
        Enum("experience", "coins", name="balance_kind", create_type=False),
        nullable=False,
    ),
    Column("amount", BigInteger, nullable=False, server_default="0"),
    Column(
        "updated_at", TIMESTAMP(timezone=True), nullable=False, server_default="NOW()"
    ),
    PrimaryKeyConstraint("owner_id", "kind"),
    CheckConstraint("amount >= 0", name="ck_balances_amount"),
)
