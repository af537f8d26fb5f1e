"""SQLAlchemy Declarative Base — shared base class and column types for all ORM models.

Invariants:
    - All models inherit from Base
    - Base is the single source of truth for table metadata
    - U64Amount round-trips Python ints; no Decimal or float leaks into core records

Design Decisions:
    - Separate file for Base: avoids circular imports between models
    - Numeric(20, 0) for amounts: u64 does not fit a signed BIGINT
    - SQLite has no exact decimal, so it gets INTEGER (signed 64-bit) instead of a
      float-backed NUMERIC; SQLite is for local runs and tests only
"""

from decimal import Decimal

from sqlalchemy import BigInteger, Numeric
from sqlalchemy.orm import DeclarativeBase
from sqlalchemy.types import TypeDecorator


class Base(DeclarativeBase):
    """Base class for all StakePool ORM models."""
    pass


class U64Amount(TypeDecorator):
    """Unsigned 64-bit base-unit amount."""
    impl = Numeric(20, 0)
    cache_ok = True

    def load_dialect_impl(self, dialect):
        if dialect.name == "sqlite":
            return dialect.type_descriptor(BigInteger())
        return dialect.type_descriptor(Numeric(20, 0))

    def process_bind_param(self, value, dialect):
        if value is None:
            return None
        if dialect.name == "sqlite":
            return int(value)
        return Decimal(int(value))

    def process_result_value(self, value, dialect):
        if value is None:
            return None
        return int(value)
