"""SQL Ledger Repository — LedgerRepository over the main_state/servers/delegations tables.

Invariants:
    - Rows are located by derived address only (core/address.py)
    - Reads inside an operation lock the row (SELECT ... FOR UPDATE where supported)
    - No commit here — the unit of work in services/ owns the transaction
    - Converts rows <-> frozen core records; ORM objects never leave this module

Design Decisions:
    - Upsert via session.get + attribute copy: identity map keeps one object per row
"""

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from stakepool.core.address import delegation_address, main_address, server_address
from stakepool.core.domain_types import Address, ServerId
from stakepool.core.ledger_state import DelegationRecord, MainState, ServerInfo
from stakepool.models.main_state import MainStateRow
from stakepool.models.server import ServerRow
from stakepool.models.delegation import DelegationRow


def _to_main(row: MainStateRow) -> MainState:
    return MainState(
        initialized=row.initialized,
        admin=row.admin,
        min_stake=row.min_stake,
        max_stake=row.max_stake,
        min_delegation=row.min_delegation,
        max_delegation=row.max_delegation,
        total_locked=row.total_locked,
        server_count=row.server_count,
    )


def _to_server(row: ServerRow) -> ServerInfo:
    return ServerInfo(
        id=ServerId(row.server_id),
        owner=Address(row.owner),
        name=row.name,
        staked_amount=row.staked_amount,
        delegated_total=row.delegated_total,
        delegator_count=row.delegator_count,
        active=row.active,
        removed=row.removed,
    )


def _to_delegation(row: DelegationRow) -> DelegationRecord:
    return DelegationRecord(
        delegator=Address(row.delegator),
        server_id=ServerId(row.server_id),
        amount=row.amount,
    )


class SqlLedgerRepository:
    """LedgerRepository bound to one AsyncSession (one unit of work)."""

    def __init__(self, db: AsyncSession):
        self.db = db

    # ─── MainState ──────────────────────────────────────────────

    async def get_main(self) -> MainState:
        row = await self.db.get(
            MainStateRow, main_address(), with_for_update=True,
        )
        return _to_main(row) if row else MainState()

    async def save_main(self, main: MainState) -> None:
        address = main_address()
        row = await self.db.get(MainStateRow, address)
        if row is None:
            row = MainStateRow(address=address)
            self.db.add(row)
        row.initialized = main.initialized
        row.admin = main.admin
        row.min_stake = main.min_stake
        row.max_stake = main.max_stake
        row.min_delegation = main.min_delegation
        row.max_delegation = main.max_delegation
        row.total_locked = main.total_locked
        row.server_count = main.server_count

    # ─── Servers ────────────────────────────────────────────────

    async def get_server(self, server_id: ServerId) -> ServerInfo | None:
        row = await self.db.get(
            ServerRow, server_address(server_id), with_for_update=True,
        )
        return _to_server(row) if row else None

    async def save_server(self, server: ServerInfo) -> None:
        address = server_address(server.id)
        row = await self.db.get(ServerRow, address)
        if row is None:
            row = ServerRow(address=address, server_id=server.id)
            self.db.add(row)
        row.owner = server.owner
        row.name = server.name
        row.staked_amount = server.staked_amount
        row.delegated_total = server.delegated_total
        row.delegator_count = server.delegator_count
        row.active = server.active
        row.removed = server.removed

    async def list_servers(self, include_removed: bool = False) -> list[ServerInfo]:
        query = select(ServerRow).order_by(ServerRow.server_id)
        if not include_removed:
            query = query.where(ServerRow.removed.is_(False))
        result = await self.db.execute(query)
        return [_to_server(row) for row in result.scalars().all()]

    # ─── Delegations ────────────────────────────────────────────

    async def get_delegation(
        self, delegator: Address, server_id: ServerId,
    ) -> DelegationRecord | None:
        row = await self.db.get(
            DelegationRow, delegation_address(delegator, server_id),
            with_for_update=True,
        )
        return _to_delegation(row) if row else None

    async def save_delegation(self, record: DelegationRecord) -> None:
        address = delegation_address(record.delegator, record.server_id)
        row = await self.db.get(DelegationRow, address)
        if row is None:
            row = DelegationRow(
                address=address,
                delegator=record.delegator,
                server_id=record.server_id,
            )
            self.db.add(row)
        row.amount = record.amount

    async def list_delegations(
        self, server_id: ServerId, open_only: bool = False,
    ) -> list[DelegationRecord]:
        query = (
            select(DelegationRow)
            .where(DelegationRow.server_id == server_id)
            .order_by(DelegationRow.delegator)
        )
        if open_only:
            query = query.where(DelegationRow.amount > 0)
        result = await self.db.execute(query)
        return [_to_delegation(row) for row in result.scalars().all()]
