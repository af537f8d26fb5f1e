"""Staking Handlers — deposit, withdraw.

Invariants:
    - Every method calls the pure enforce_staking rule before touching the vault
    - Vault transfer and record writes share one transaction
"""

import logging

from stakepool.core.domain_types import Address, ServerId
from stakepool.core.enforce_staking import apply_deposit, apply_withdraw
from stakepool.core.ledger_state import ServerInfo
from stakepool.services.ledger_handlers import LedgerHandlers
from stakepool.services.unit_of_work import atomic

logger = logging.getLogger(__name__)


class StakingHandlers(LedgerHandlers):
    """Direct stake by the server owner."""

    async def deposit(
        self, owner: Address, server_id: ServerId, amount: int,
    ) -> ServerInfo:
        async with atomic(self.db, "deposit", server_id, owner):
            main = await self.repo.get_main()
            server = await self.repo.get_server(server_id)
            transition = apply_deposit(main, server, owner, server_id, amount)
            await self._apply(transition)
        logger.info(
            "Stake deposited",
            extra={"operation": "deposit", "server_id": server_id, "amount": amount},
        )
        await self._emit(transition)
        return transition.server

    async def withdraw(
        self, owner: Address, server_id: ServerId, amount: int,
    ) -> ServerInfo:
        async with atomic(self.db, "withdraw", server_id, owner):
            main = await self.repo.get_main()
            server = await self.repo.get_server(server_id)
            transition = apply_withdraw(main, server, owner, server_id, amount)
            await self._apply(transition)
        logger.info(
            "Stake withdrawn",
            extra={"operation": "withdraw", "server_id": server_id, "amount": amount},
        )
        await self._emit(transition)
        return transition.server
