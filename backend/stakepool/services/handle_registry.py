"""Registry Handlers — initialize_main.

Invariants:
    - Limits omitted by the caller fall back to the configured defaults
    - The caller identity becomes the registry admin
"""

import logging

from stakepool.core.domain_types import Address
from stakepool.core.enforce_registry import initialize_main
from stakepool.core.ledger_state import MainState
from stakepool.services.ledger_handlers import LedgerHandlers
from stakepool.services.unit_of_work import atomic

logger = logging.getLogger(__name__)


class RegistryHandlers(LedgerHandlers):
    """Global policy setup — callable exactly once per deployment."""

    async def initialize_main(
        self,
        admin: Address,
        min_stake: int | None = None,
        max_stake: int | None = None,
        min_delegation: int | None = None,
        max_delegation: int | None = None,
    ) -> MainState:
        async with atomic(self.db, "initialize_main", caller=admin):
            main = await self.repo.get_main()
            transition = initialize_main(
                main,
                admin,
                min_stake if min_stake is not None else self.settings.default_min_stake,
                max_stake if max_stake is not None else self.settings.default_max_stake,
                (
                    min_delegation if min_delegation is not None
                    else self.settings.default_min_delegation
                ),
                max_delegation,
            )
            await self._apply(transition)
        logger.info(
            "Registry initialized", extra={"operation": "initialize_main", "caller": admin},
        )
        await self._emit(transition)
        return transition.main
