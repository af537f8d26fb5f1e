"""MainState ORM — the registry singleton row.

Invariants:
    - Exactly one row, keyed by derive("main")
    - Created by initialize_main, never deleted
"""

from datetime import datetime, timezone

from sqlalchemy import String, Boolean, Integer, DateTime
from sqlalchemy.orm import Mapped, mapped_column

from stakepool.db.base import Base, U64Amount


class MainStateRow(Base):
    """Global stake policy and running totals."""
    __tablename__ = "main_state"

    address: Mapped[str] = mapped_column(String(64), primary_key=True)
    initialized: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    admin: Mapped[str | None] = mapped_column(String(128), nullable=True)
    min_stake: Mapped[int] = mapped_column(U64Amount, nullable=False, default=0)
    max_stake: Mapped[int] = mapped_column(U64Amount, nullable=False, default=0)
    min_delegation: Mapped[int] = mapped_column(U64Amount, nullable=False, default=0)
    max_delegation: Mapped[int] = mapped_column(U64Amount, nullable=False, default=0)
    total_locked: Mapped[int] = mapped_column(U64Amount, nullable=False, default=0)
    server_count: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
    )
