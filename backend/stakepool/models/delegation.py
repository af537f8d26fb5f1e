"""Delegation ORM — per-(delegator, server) record keyed by derived address.

Invariants:
    - address = derive("delegation", delegator, server_id)
    - amount == 0 means closed; the row is kept
"""

from datetime import datetime, timezone

from sqlalchemy import String, DateTime, ForeignKey, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column

from stakepool.core.enforce_server import MAX_SERVER_ID_BYTES
from stakepool.db.base import Base, U64Amount


class DelegationRow(Base):
    """Delegation record — one delegator's stake behind one server."""
    __tablename__ = "delegations"
    __table_args__ = (
        UniqueConstraint("delegator", "server_id", name="uq_delegator_server"),
    )

    address: Mapped[str] = mapped_column(String(64), primary_key=True)
    delegator: Mapped[str] = mapped_column(String(128), nullable=False, index=True)
    server_id: Mapped[str] = mapped_column(
        String(MAX_SERVER_ID_BYTES), ForeignKey("servers.server_id", ondelete="CASCADE"),
        nullable=False,
    )
    amount: Mapped[int] = mapped_column(U64Amount, nullable=False, default=0)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
    )
