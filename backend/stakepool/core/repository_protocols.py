"""Boundary Protocols — contracts between core and shell.

Invariants:
    - Core NEVER imports from shell — dependency arrows point inward only
    - Repositories speak in core records (MainState, ServerInfo, DelegationRecord)
    - TokenVault.transfer is atomic: it fully applies or raises before any change,
      and only debits a source account owned by `authority`
    - EventSink.append is only called after the state commit; its failure never
      undoes or fails the committed operation

Design Decisions:
    - Protocol over ABC: structural subtyping, no inheritance hierarchy
    - Async in Protocol: implementations do IO, but the pure enforce_* functions
      never await — the shell orchestrates IO around them
"""

from typing import Protocol

from stakepool.core.domain_types import Address, ServerId
from stakepool.core.events import LedgerEvent
from stakepool.core.ledger_state import DelegationRecord, MainState, ServerInfo


class LedgerRepository(Protocol):
    """Contract for record persistence inside one unit of work."""
    async def get_main(self) -> MainState: ...
    async def save_main(self, main: MainState) -> None: ...
    async def get_server(self, server_id: ServerId) -> ServerInfo | None: ...
    async def save_server(self, server: ServerInfo) -> None: ...
    async def list_servers(self, include_removed: bool = False) -> list[ServerInfo]: ...
    async def get_delegation(
        self, delegator: Address, server_id: ServerId,
    ) -> DelegationRecord | None: ...
    async def save_delegation(self, record: DelegationRecord) -> None: ...
    async def list_delegations(
        self, server_id: ServerId, open_only: bool = False,
    ) -> list[DelegationRecord]: ...


class TokenVault(Protocol):
    """Contract for the atomic token-transfer collaborator."""
    async def open_account(self, address: Address, owner: Address) -> None: ...
    async def mint_to(self, address: Address, amount: int) -> None: ...
    async def balance(self, address: Address) -> int: ...
    async def transfer(
        self, source: Address, destination: Address, amount: int,
        authority: Address,
    ) -> None: ...


class EventSink(Protocol):
    """Contract for the append-only event log."""
    async def append(self, event: LedgerEvent) -> None: ...
