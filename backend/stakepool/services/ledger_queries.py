"""Ledger Queries — read-only views over registry, servers, delegations and vaults.

Invariants:
    - No writes, no commits, no events
    - audit() reports invariant violations instead of raising
"""

from sqlalchemy.ext.asyncio import AsyncSession

from stakepool.config import Settings
from stakepool.core.address import vault_address, wallet_address
from stakepool.core.audit import audit_server
from stakepool.core.domain_types import Address, ServerId
from stakepool.core.errors import AccountNotFoundError
from stakepool.core.ledger_state import (
    DelegationRecord, MainState, ServerInfo, WalletInfo,
)
from stakepool.infrastructure.event_sink import DatabaseEventSink
from stakepool.infrastructure.ledger_repository import SqlLedgerRepository
from stakepool.infrastructure.token_vault import SqlTokenVault


class LedgerQueries:
    """Read side of the ledger."""

    def __init__(self, db: AsyncSession, settings: Settings):
        self.repo = SqlLedgerRepository(db)
        self.vault = SqlTokenVault(db, settings.accepted_mint)
        self.events = DatabaseEventSink(db)

    async def get_main(self) -> MainState:
        return await self.repo.get_main()

    async def get_server(self, server_id: ServerId) -> ServerInfo:
        server = await self.repo.get_server(server_id)
        if server is None:
            raise AccountNotFoundError("Server", server_id)
        return server

    async def list_servers(self, include_removed: bool = False) -> list[ServerInfo]:
        return await self.repo.list_servers(include_removed)

    async def get_delegation(
        self, delegator: Address, server_id: ServerId,
    ) -> DelegationRecord:
        record = await self.repo.get_delegation(delegator, server_id)
        if record is None:
            raise AccountNotFoundError("Delegation", f"{delegator}/{server_id}")
        return record

    async def list_delegations(
        self, server_id: ServerId, open_only: bool = False,
    ) -> list[DelegationRecord]:
        await self.get_server(server_id)
        return await self.repo.list_delegations(server_id, open_only)

    async def vault_balance(self, server_id: ServerId) -> int:
        return await self.vault.balance(vault_address(server_id))

    async def wallet(self, owner: Address) -> WalletInfo:
        address = wallet_address(owner)
        return WalletInfo(
            owner=owner, address=address,
            balance=await self.vault.balance(address),
        )

    async def audit(self, server_id: ServerId) -> list[str]:
        main = await self.repo.get_main()
        server = await self.get_server(server_id)
        delegations = await self.repo.list_delegations(server_id)
        balance = await self.vault_balance(server_id)
        return audit_server(main, server, delegations, balance)

    async def list_events(
        self, server_id: str | None = None, after: int = 0, limit: int = 100,
    ) -> list[dict]:
        return await self.events.list_events(server_id, after, limit)
