"""Initial schema: the kv_store table.

Every Elix record (assets, alerts, work orders, user profiles) is a JSON
document under a type-prefixed text key.

Revision ID: 001
Revises:
Create Date: 2026-10-19
"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects.postgresql import JSONB

revision: str = "001"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table(
        "kv_store",
        sa.Column("key", sa.Text, primary_key=True),
        sa.Column("value", JSONB, nullable=False),
    )
    # Prefix scans use LIKE 'prefix%'; text_pattern_ops lets them use the index
    # under non-C collations.
    op.create_index(
        "ix_kv_store_key_pattern",
        "kv_store",
        ["key"],
        postgresql_ops={"key": "text_pattern_ops"},
    )


def downgrade() -> None:
    op.drop_index("ix_kv_store_key_pattern", table_name="kv_store")
    op.drop_table("kv_store")
