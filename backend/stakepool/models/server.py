"""Server ORM — per-server staking record keyed by derived address.

Invariants:
    - address = derive("server", server_id); server_id is unique as well
    - removed rows are kept so the address stays occupied
    - name and server_id columns are sized from the core byte bounds, which also
      cap the configurable limits in Settings
"""

from datetime import datetime, timezone

from sqlalchemy import String, Boolean, Integer, DateTime
from sqlalchemy.orm import Mapped, mapped_column

from stakepool.core.enforce_server import MAX_NAME_BYTES, MAX_SERVER_ID_BYTES
from stakepool.db.base import Base, U64Amount


class ServerRow(Base):
    """Server record — owner, name, stake and delegation totals."""
    __tablename__ = "servers"

    address: Mapped[str] = mapped_column(String(64), primary_key=True)
    server_id: Mapped[str] = mapped_column(
        String(MAX_SERVER_ID_BYTES), nullable=False, unique=True,
    )
    owner: Mapped[str] = mapped_column(String(128), nullable=False, index=True)
    name: Mapped[str] = mapped_column(String(MAX_NAME_BYTES), nullable=False)
    staked_amount: Mapped[int] = mapped_column(U64Amount, nullable=False, default=0)
    delegated_total: Mapped[int] = mapped_column(U64Amount, nullable=False, default=0)
    delegator_count: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    active: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    removed: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
    )
    updated_at: Mapped[datetime | None] = mapped_column(
        DateTime(timezone=True), nullable=True,
        onupdate=lambda: datetime.now(timezone.utc),
    )
