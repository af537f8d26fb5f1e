"""SQL Token Vault — reference TokenVault over the token_accounts table.

Invariants:
    - transfer() validates both accounts, the mint, the source owner and the
      source balance before writing
    - The source account's owner must equal the transfer authority
      (UnauthorizedError otherwise)
    - Both balance updates happen in the caller's session: they commit or roll back
      together with the ledger records
    - Only accounts of the accepted mint may move funds (InvalidMintError otherwise)

Design Decisions:
    - Stands in for the external token program so the engine runs end to end;
      any implementation of core.repository_protocols.TokenVault can replace it
    - Wallets are keyed by derive("wallet", identity) and owned by the identity;
      vaults by derive("vault", id) and owned by derive("server", id)
"""

import logging

from sqlalchemy.ext.asyncio import AsyncSession

from stakepool.core.checked_math import checked_add, checked_sub
from stakepool.core.domain_types import Address
from stakepool.core.errors import (
    InsufficientFundsError, InvalidAccountError, InvalidMintError,
    UnauthorizedError,
)
from stakepool.models.token_account import TokenAccountRow

logger = logging.getLogger(__name__)


class SqlTokenVault:
    """TokenVault bound to one AsyncSession and one accepted mint."""

    def __init__(self, db: AsyncSession, accepted_mint: str):
        self.db = db
        self.accepted_mint = accepted_mint

    async def _account(self, address: Address) -> TokenAccountRow:
        row = await self.db.get(TokenAccountRow, address, with_for_update=True)
        if row is None:
            raise InvalidAccountError(address)
        if row.mint != self.accepted_mint:
            raise InvalidMintError(row.mint)
        return row

    async def open_account(self, address: Address, owner: Address) -> None:
        """Create an empty account; no-op if it already exists."""
        row = await self.db.get(TokenAccountRow, address)
        if row is None:
            self.db.add(TokenAccountRow(
                address=address, owner=owner,
                mint=self.accepted_mint, balance=0,
            ))
            await self.db.flush()

    async def balance(self, address: Address) -> int:
        row = await self.db.get(TokenAccountRow, address)
        return row.balance if row else 0

    async def transfer(
        self,
        source: Address,
        destination: Address,
        amount: int,
        authority: Address,
    ) -> None:
        src = await self._account(source)
        dst = await self._account(destination)
        if src.owner != authority:
            raise UnauthorizedError(authority)
        if src.balance < amount:
            raise InsufficientFundsError(amount, src.balance)
        new_src = checked_sub(src.balance, amount)
        new_dst = checked_add(dst.balance, amount)

        src.balance = new_src
        dst.balance = new_dst
        logger.debug(
            "Transferred %d from %s to %s", amount, source, destination,
            extra={"amount": amount},
        )

    async def mint_to(self, address: Address, amount: int) -> None:
        """Credit an existing account with newly issued tokens."""
        row = await self._account(address)
        row.balance = checked_add(row.balance, amount)
