"""Operation Dispatch — explicit routing from operation name to handler method.

Invariants:
    - Every operation->handler mapping is visible — no getattr magic, no auto-discovery
    - Unknown operations raise InvalidArgumentError before any handler runs
    - The verified caller identity is always the first handler argument
    - Results are the committed core records (MainState, ServerInfo, DelegationRecord,
      WalletInfo)

Design Decisions:
    - Explicit dict over getattr: adding an operation requires editing this table
    - Handlers instantiated per-dispatch with a shared DB session
"""

from sqlalchemy.ext.asyncio import AsyncSession

from stakepool.config import Settings
from stakepool.core.domain_types import Address
from stakepool.core.errors import InvalidArgumentError
from stakepool.core.ledger_state import (
    DelegationRecord, MainState, ServerInfo, WalletInfo,
)
from stakepool.services.handle_registry import RegistryHandlers
from stakepool.services.handle_server import ServerHandlers
from stakepool.services.handle_staking import StakingHandlers
from stakepool.services.handle_delegation import DelegationHandlers
from stakepool.services.handle_wallet import WalletHandlers


class OperationDispatch:
    """Routes operation name -> handler. Explicit registration."""

    def __init__(self, db: AsyncSession, settings: Settings):
        registry = RegistryHandlers(db, settings)
        server = ServerHandlers(db, settings)
        staking = StakingHandlers(db, settings)
        delegation = DelegationHandlers(db, settings)
        wallet = WalletHandlers(db, settings)

        self._handlers = {
            # Main Registry
            "initialize_main": registry.initialize_main,

            # Server Management
            "add_server": server.add_server,
            "update_server": server.update_server,
            "remove_server": server.remove_server,

            # Staking
            "deposit": staking.deposit,
            "withdraw": staking.withdraw,

            # Delegation
            "d_deposit": delegation.d_deposit,
            "d_withdraw": delegation.d_withdraw,

            # Wallets
            "open_wallet": wallet.open_wallet,
            "fund_wallet": wallet.fund_wallet,
        }

    @property
    def operations(self) -> list[str]:
        return sorted(self._handlers)

    async def execute(
        self, operation: str, caller: Address, input_data: dict,
    ) -> MainState | ServerInfo | DelegationRecord | WalletInfo:
        """Run one operation for a verified caller. Raises StakePoolError on rejection."""
        handler = self._handlers.get(operation)
        if not handler:
            raise InvalidArgumentError(
                f"Operation '{operation}' does not exist.", "operation",
            )
        return await handler(caller, **input_data)
