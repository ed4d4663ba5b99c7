"""init_inventory_ledger

Revision ID: 3a7c9e1b5d20
Revises:
Create Date: 2026-10-19 10:12:44.318207
"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision: str = "3a7c9e1b5d20"
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def _ledger_columns() -> list[sa.Column]:
    return [
        sa.Column("id", sa.String(length=24), primary_key=True),
        sa.Column("user_id", sa.String(length=128), nullable=False),
        # No foreign key: ledger rows outlive the catalog item they reference.
        sa.Column("product_id", sa.String(length=24), nullable=False),
        sa.Column("product_name", sa.String(length=255), nullable=True),
        sa.Column("price", sa.Float(), nullable=True),
        sa.Column("quantity", sa.BigInteger(), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
    ]


def upgrade() -> None:
    """Upgrade schema."""
    op.create_table(
        "models",
        sa.Column("id", sa.String(length=24), primary_key=True),
        sa.Column("name", sa.String(length=255), nullable=True),
        sa.Column("price", sa.Float(), nullable=True),
        sa.Column("available_quantity", sa.BigInteger(), nullable=False),
        sa.Column("attributes", sa.JSON(), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False),
    )

    op.create_table("imports", *_ledger_columns())
    op.create_index("ix_imports_user_created", "imports", ["user_id", "created_at"])

    op.create_table("exports", *_ledger_columns())
    op.create_index("ix_exports_user_created", "exports", ["user_id", "created_at"])

    op.create_table(
        "users",
        sa.Column("id", sa.String(length=24), primary_key=True),
        sa.Column("user_id", sa.String(length=128), nullable=False),
        sa.Column("role", sa.String(length=64), nullable=False),
        sa.Column("email", sa.String(length=255), nullable=True),
        sa.Column("name", sa.String(length=255), nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False),
    )
    op.create_index("ix_users_user_id", "users", ["user_id"], unique=True)


def downgrade() -> None:
    """Downgrade schema."""
    op.drop_index("ix_users_user_id", table_name="users")
    op.drop_table("users")
    op.drop_index("ix_exports_user_created", table_name="exports")
    op.drop_table("exports")
    op.drop_index("ix_imports_user_created", table_name="imports")
    op.drop_table("imports")
    op.drop_table("models")
