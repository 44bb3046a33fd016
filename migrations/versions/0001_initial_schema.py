"""initial schema: entries, accounts, categories

Revision ID: 0001
Revises:
Create Date: 2026-10-18 12:00:00

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


revision: str = "0001"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None

# SQLAlchemy persists Python enums by member name
entry_kind = sa.Enum("INCOME", "EXPENSE", name="entry_kind_enum", create_constraint=True)
division = sa.Enum("OFFICE", "PERSONAL", name="division_enum", create_constraint=True)
account_type = sa.Enum(
    "SAVINGS", "CURRENT", "CREDIT_CARD", "CASH", "INVESTMENT",
    name="account_type_enum",
    create_constraint=True,
)
category_type = sa.Enum(
    "INCOME", "EXPENSE", "BOTH", name="category_type_enum", create_constraint=True
)
category_division = sa.Enum(
    "OFFICE", "PERSONAL", "BOTH", name="category_division_enum", create_constraint=True
)


def upgrade() -> None:
    op.create_table(
        "entries",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("external_id", sa.Uuid(), nullable=False, unique=True),
        sa.Column("owner", sa.String(255), nullable=False),
        sa.Column("kind", entry_kind, nullable=False),
        sa.Column("source", sa.String(255), nullable=False),
        sa.Column("amount", sa.Numeric(19, 4), nullable=False),
        sa.Column("payment_method", sa.String(100), nullable=False),
        sa.Column("date", sa.Date(), nullable=False),
        sa.Column("time", sa.String(20), nullable=False),
        sa.Column("notes", sa.Text(), nullable=True),
        sa.Column("division", division, nullable=False),
        sa.Column("category", sa.String(100), nullable=True),
        sa.Column("account", sa.String(100), nullable=False),
        sa.Column("is_transfer", sa.Boolean(), nullable=False),
        sa.Column("transfer_to", sa.String(100), nullable=True),
        sa.Column("transfer_from", sa.String(100), nullable=True),
        sa.Column("created_at", sa.DateTime(), nullable=False),
        sa.Column("updated_at", sa.DateTime(), nullable=False),
        sa.CheckConstraint("amount >= 0", name="ck_entries_amount_non_negative"),
    )
    op.create_index("ix_entries_owner", "entries", ["owner"])
    op.create_index("ix_entries_owner_date", "entries", ["owner", "date"])
    op.create_index("ix_entries_owner_division", "entries", ["owner", "division"])
    op.create_index("ix_entries_owner_category", "entries", ["owner", "category"])

    op.create_table(
        "accounts",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("owner", sa.String(255), nullable=False),
        sa.Column("account_name", sa.String(100), nullable=False),
        sa.Column("account_type", account_type, nullable=False),
        sa.Column("balance", sa.Numeric(19, 4), nullable=False),
        sa.Column("currency", sa.String(3), nullable=False),
        sa.Column("is_active", sa.Boolean(), nullable=False),
        sa.Column("created_at", sa.DateTime(), nullable=False),
        sa.Column("updated_at", sa.DateTime(), nullable=False),
        sa.UniqueConstraint("owner", "account_name", name="uq_accounts_owner_name"),
    )
    op.create_index("ix_accounts_owner", "accounts", ["owner"])

    op.create_table(
        "categories",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("owner", sa.String(255), nullable=False),
        sa.Column("name", sa.String(100), nullable=False),
        sa.Column("type", category_type, nullable=False),
        sa.Column("division", category_division, nullable=False),
        sa.Column("is_active", sa.Boolean(), nullable=False),
        sa.Column("created_at", sa.DateTime(), nullable=False),
        sa.UniqueConstraint(
            "owner", "name", "division", name="uq_categories_owner_name_division"
        ),
    )
    op.create_index("ix_categories_owner", "categories", ["owner"])


def downgrade() -> None:
    op.drop_index("ix_categories_owner", table_name="categories")
    op.drop_table("categories")
    op.drop_index("ix_accounts_owner", table_name="accounts")
    op.drop_table("accounts")
    op.drop_index("ix_entries_owner_category", table_name="entries")
    op.drop_index("ix_entries_owner_division", table_name="entries")
    op.drop_index("ix_entries_owner_date", table_name="entries")
    op.drop_index("ix_entries_owner", table_name="entries")
    op.drop_table("entries")
