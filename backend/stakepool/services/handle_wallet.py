"""Wallet Handlers — open_wallet, fund_wallet.

Invariants:
    - A wallet is the token account at derive("wallet", identity), owned by the identity
    - open_wallet is idempotent; fund_wallet opens the wallet on first use
    - Funding issues new tokens of the accepted mint and is admin-only
"""

import logging

from stakepool.core.address import wallet_address
from stakepool.core.domain_types import Address
from stakepool.core.enforce_wallet import authorize_funding
from stakepool.core.ledger_state import WalletInfo
from stakepool.services.ledger_handlers import LedgerHandlers
from stakepool.services.unit_of_work import atomic

logger = logging.getLogger(__name__)


class WalletHandlers(LedgerHandlers):
    """Token accounts that stake and delegation are paid from."""

    async def open_wallet(self, owner: Address) -> WalletInfo:
        address = wallet_address(owner)
        async with atomic(self.db, "open_wallet", caller=owner):
            await self.vault.open_account(address, owner)
        balance = await self.vault.balance(address)
        return WalletInfo(owner=owner, address=address, balance=balance)

    async def fund_wallet(
        self, admin: Address, recipient: Address, amount: int,
    ) -> WalletInfo:
        address = wallet_address(recipient)
        async with atomic(self.db, "fund_wallet", caller=admin):
            main = await self.repo.get_main()
            authorize_funding(main, admin, amount)
            await self.vault.open_account(address, recipient)
            await self.vault.mint_to(address, amount)
        logger.info(
            "Wallet funded",
            extra={"operation": "fund_wallet", "caller": admin, "amount": amount},
        )
        balance = await self.vault.balance(address)
        return WalletInfo(owner=recipient, address=address, balance=balance)
