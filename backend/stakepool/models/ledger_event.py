"""LedgerEvent ORM — append-only event log read by the external indexer.

Invariants:
    - Rows are only inserted, never updated or deleted
    - sequence is monotonic and defines replay order
"""

from datetime import datetime, timezone

from sqlalchemy import Integer, String, DateTime, JSON
from sqlalchemy.orm import Mapped, mapped_column

from stakepool.db.base import Base


class LedgerEventRow(Base):
    """One committed ledger event."""
    __tablename__ = "ledger_events"

    sequence: Mapped[int] = mapped_column(
        Integer, primary_key=True, autoincrement=True,
    )
    kind: Mapped[str] = mapped_column(String(32), nullable=False, index=True)
    server_id: Mapped[str | None] = mapped_column(String(65), nullable=True, index=True)
    payload: Mapped[dict] = mapped_column(JSON, nullable=False)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
    )
