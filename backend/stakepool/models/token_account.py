"""TokenAccount ORM — balances moved by the reference vault.

Invariants:
    - Wallet accounts are keyed by the caller identity, vault accounts by derive("vault", id)
    - balance never goes negative (checked in SqlTokenVault before any write)

Design Decisions:
    - One table for wallets and vaults: a transfer is two row updates in the
      caller's transaction, so it commits or rolls back with the ledger records
"""

from sqlalchemy import String
from sqlalchemy.orm import Mapped, mapped_column

from stakepool.db.base import Base, U64Amount


class TokenAccountRow(Base):
    """Balance-holding account for a single mint."""
    __tablename__ = "token_accounts"

    address: Mapped[str] = mapped_column(String(128), primary_key=True)
    owner: Mapped[str] = mapped_column(String(128), nullable=False)
    mint: Mapped[str] = mapped_column(String(64), nullable=False)
    balance: Mapped[int] = mapped_column(U64Amount, nullable=False, default=0)
