"""initial_schema

Create the foundational schema for unify:
- Accounts (never deleted, only disabled)
- Identities (Apple / Google logins linked to accounts)
- Merge records (merge ledger keyed by fingerprint)
- Owned items (collections, itineraries, favorites, achievements)
- Balances (experience, coins)

Revision ID: 3c1f7a92d4e6
Revises:
Create Date: 2026-10-17 09:12:44.218305

"""

from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects import postgresql


# revision identifiers, used by Alembic.
revision: str = "3c1f7a92d4e6"
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def _create_enum(name: str, values: Sequence[str]) -> None:
    labels = ", ".join(f"'{v}'" for v in values)
    op.execute(f"""
        DO $$ BEGIN
            CREATE TYPE {name} AS ENUM ({labels});
        EXCEPTION
            WHEN duplicate_object THEN null;
        END $$;
    """)


def upgrade() -> None:
    """Upgrade schema."""
    # Enable required extensions
    op.execute('CREATE EXTENSION IF NOT EXISTS "uuid-ossp"')

    # Create ENUM types (idempotent)
    _create_enum("disabled_reason", ["merged", "deleted"])
    _create_enum("merge_status", ["pending", "committed", "failed"])
    _create_enum("item_kind", ["collection", "itinerary", "favorite", "achievement"])
    _create_enum("balance_kind", ["experience", "coins"])

    # ========================================================================
    # ACCOUNTS table
    # ========================================================================
    op.create_table(
        "accounts",
        sa.Column(
            "id",
            sa.UUID(),
            server_default=sa.text("uuid_generate_v4()"),
            nullable=False,
        ),
        sa.Column("is_active", sa.Boolean(), nullable=False, server_default="true"),
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
        sa.Column("disabled_at", sa.TIMESTAMP(timezone=True), nullable=True),
        sa.Column(
            "disabled_reason",
            postgresql.ENUM(name="disabled_reason", create_type=False),
            nullable=True,
        ),
        sa.Column("merged_into", sa.UUID(), nullable=True),
        sa.ForeignKeyConstraint(["merged_into"], ["accounts.id"]),
        sa.PrimaryKeyConstraint("id"),
        sa.CheckConstraint(
            "is_active OR disabled_at IS NOT NULL", name="ck_accounts_disabled_at"
        ),
    )

    # ========================================================================
    # IDENTITIES table
    # ========================================================================
    op.create_table(
        "identities",
        sa.Column(
            "id",
            sa.UUID(),
            server_default=sa.text("uuid_generate_v4()"),
            nullable=False,
        ),
        sa.Column("account_id", sa.UUID(), nullable=False),
        sa.Column("provider", sa.String(50), nullable=False),  # 'apple', 'google'
        sa.Column("external_id", sa.String(255), nullable=False),
        sa.Column("email", sa.String(255), nullable=True),
        sa.Column("is_primary", sa.Boolean(), nullable=False, server_default="false"),
        sa.Column(
            "linked_at",
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
        sa.ForeignKeyConstraint(["account_id"], ["accounts.id"]),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("provider", "external_id", name="uq_provider_identity"),
    )
    op.create_index("idx_identities_account_id", "identities", ["account_id"])
    op.create_index(
        "uq_identities_primary",
        "identities",
        ["account_id"],
        unique=True,
        postgresql_where=sa.text("is_primary"),
    )

    # ========================================================================
    # MERGE_RECORDS table (merge ledger)
    # ========================================================================
    op.create_table(
        "merge_records",
        sa.Column("fingerprint", sa.String(64), nullable=False),
        sa.Column("target_account_id", sa.UUID(), nullable=False),
        sa.Column("source_account_id", sa.UUID(), nullable=False),
        sa.Column(
            "status",
            postgresql.ENUM(name="merge_status", create_type=False),
            nullable=False,
            server_default="pending",
        ),
        sa.Column(
            "summary",
            postgresql.JSONB(),
            nullable=False,
            server_default=sa.text("'{}'::jsonb"),
        ),
        sa.Column("attempts", sa.Integer(), nullable=False, server_default="1"),
        sa.Column("last_error", sa.Text(), nullable=True),
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
        sa.Column("completed_at", sa.TIMESTAMP(timezone=True), nullable=True),
        sa.ForeignKeyConstraint(["target_account_id"], ["accounts.id"]),
        sa.ForeignKeyConstraint(["source_account_id"], ["accounts.id"]),
        sa.PrimaryKeyConstraint("fingerprint"),
        sa.CheckConstraint(
            "target_account_id <> source_account_id", name="ck_merge_records_distinct"
        ),
    )
    op.create_index("idx_merge_records_target", "merge_records", ["target_account_id"])
    op.create_index("idx_merge_records_source", "merge_records", ["source_account_id"])
    # A source account is consumed by at most one committed merge
    op.create_index(
        "uq_merge_records_committed_source",
        "merge_records",
        ["source_account_id"],
        unique=True,
        postgresql_where=sa.text("status = 'committed'"),
    )

    # ========================================================================
    # OWNED_ITEMS table
    # ========================================================================
    op.create_table(
        "owned_items",
        sa.Column(
            "id",
            sa.UUID(),
            server_default=sa.text("uuid_generate_v4()"),
            nullable=False,
        ),
        sa.Column("owner_id", sa.UUID(), nullable=False),
        sa.Column(
            "kind",
            postgresql.ENUM(name="item_kind", create_type=False),
            nullable=False,
        ),
        sa.Column("natural_key", sa.String(255), nullable=False),
        sa.Column(
            "acquired_at",
            sa.TIMESTAMP(timezone=True),
            nullable=False,
            server_default=sa.text("NOW()"),
        ),
        sa.ForeignKeyConstraint(["owner_id"], ["accounts.id"]),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("owner_id", "kind", "natural_key", name="uq_owned_item"),
    )

    # ========================================================================
    # BALANCES table
    # ========================================================================
    op.create_table(
        "balances",
        sa.Column("owner_id", sa.UUID(), nullable=False),
        sa.Column(
            "kind",
            postgresql.ENUM(name="balance_kind", create_type=False),
            nullable=False,
        ),
        sa.Column("amount", sa.BigInteger(), nullable=False, server_default="0"),
        sa.Column(
            "updated_at",
            sa.TIMESTAMP(timezone=True),
            nullable=False,
            server_default=sa.text("NOW()"),
        ),
        sa.ForeignKeyConstraint(["owner_id"], ["accounts.id"]),
        sa.PrimaryKeyConstraint("owner_id", "kind"),
        sa.CheckConstraint("amount >= 0", name="ck_balances_amount"),
    )


def downgrade() -> None:
    """Downgrade schema."""
    op.drop_table("balances")
    op.drop_table("owned_items")
    op.drop_index("uq_merge_records_committed_source", table_name="merge_records")
    op.drop_index("idx_merge_records_source", table_name="merge_records")
    op.drop_index("idx_merge_records_target", table_name="merge_records")
    op.drop_table("merge_records")
    op.drop_index("uq_identities_primary", table_name="identities")
    op.drop_index("idx_identities_account_id", table_name="identities")
    op.drop_table("identities")
    op.drop_table("accounts")

    op.execute("DROP TYPE IF EXISTS balance_kind")
    op.execute("DROP TYPE IF EXISTS item_kind")
    op.execute("DROP TYPE IF EXISTS merge_status")
    op.execute("DROP TYPE IF EXISTS disabled_reason")
