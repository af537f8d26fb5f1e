"""Delegation Handlers — d_deposit, d_withdraw.

Invariants:
    - The delegation record is created lazily by the first successful d_deposit;
      a rejected first deposit leaves no record behind (rollback)
"""

import logging

from stakepool.core.domain_types import Address, ServerId
from stakepool.core.enforce_delegation import apply_delegate, apply_undelegate
from stakepool.core.ledger_state import DelegationRecord
from stakepool.services.ledger_handlers import LedgerHandlers
from stakepool.services.unit_of_work import atomic

logger = logging.getLogger(__name__)


class DelegationHandlers(LedgerHandlers):
    """Third-party delegation against a server's pool."""

    async def d_deposit(
        self, delegator: Address, server_id: ServerId, amount: int,
    ) -> DelegationRecord:
        async with atomic(self.db, "d_deposit", server_id, delegator):
            main = await self.repo.get_main()
            server = await self.repo.get_server(server_id)
            record = await self.repo.get_delegation(delegator, server_id)
            transition = apply_delegate(
                main, server, record, delegator, server_id, amount,
            )
            await self._apply(transition)
        logger.info(
            "Delegation deposited",
            extra={"operation": "d_deposit", "server_id": server_id, "amount": amount},
        )
        await self._emit(transition)
        return transition.delegation

    async def d_withdraw(
        self, delegator: Address, server_id: ServerId, amount: int,
    ) -> DelegationRecord:
        async with atomic(self.db, "d_withdraw", server_id, delegator):
            main = await self.repo.get_main()
            server = await self.repo.get_server(server_id)
            record = await self.repo.get_delegation(delegator, server_id)
            transition = apply_undelegate(
                main, server, record, delegator, server_id, amount,
            )
            await self._apply(transition)
        logger.info(
            "Delegation withdrawn",
            extra={"operation": "d_withdraw", "server_id": server_id, "amount": amount},
        )
        await self._emit(transition)
        return transition.delegation
