"""SQLAlchemy ORM table models for Elix.

Every record lives in one key-value table. Keys carry a type prefix
(``asset:``, ``alert:``, ``work_order:``, ``user:``) and values are the
record's JSON document. Uses FlexJSON (JSONB on Postgres, JSON on SQLite).
"""

from sqlalchemy import Text
from sqlalchemy.dialects.postgresql import JSONB
from sqlalchemy.orm import Mapped, mapped_column
from sqlalchemy.types import JSON

from src.db.session import Base

# JSONB on PostgreSQL, plain JSON on SQLite (for tests)
FlexJSON = JSONB().with_variant(JSON(), "sqlite")


class KVStoreRow(Base):
    __tablename__ = "kv_store"

    key: Mapped[str] = mapped_column(Text, primary_key=True)
    value = mapped_column(FlexJSON, nullable=False)
