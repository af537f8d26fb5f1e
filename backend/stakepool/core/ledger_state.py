"""Ledger State — frozen snapshots of the three persisted record kinds.

Invariants:
    - Records are immutable; transitions return new instances via dataclasses.replace
    - MainState defaults describe an uninitialized registry
    - ServerInfo.status is derived, never stored

Design Decisions:
    - Frozen dataclasses over ORM objects in core: pure, comparable, testable without a DB
"""

from dataclasses import dataclass

from stakepool.core.domain_types import Address, ServerId, ServerStatus
from stakepool.core.events import LedgerEvent


@dataclass(frozen=True)
class MainState:
    """Registry singleton — global stake policy and running totals."""
    initialized: bool = False
    admin: Address | None = None
    min_stake: int = 0
    max_stake: int = 0
    min_delegation: int = 0
    max_delegation: int = 0
    total_locked: int = 0
    server_count: int = 0


@dataclass(frozen=True)
class ServerInfo:
    """Per-server record keyed by derive("server", id)."""
    id: ServerId
    owner: Address
    name: str
    staked_amount: int = 0
    delegated_total: int = 0
    delegator_count: int = 0
    active: bool = False
    removed: bool = False

    @property
    def status(self) -> ServerStatus:
        if self.removed:
            return ServerStatus.REMOVED
        if self.active:
            return ServerStatus.ACTIVE
        return ServerStatus.REGISTERED

    @property
    def locked_total(self) -> int:
        """Amount the server's vault must hold."""
        return self.staked_amount + self.delegated_total


@dataclass(frozen=True)
class DelegationRecord:
    """Per-(delegator, server) record keyed by derive("delegation", ...)."""
    delegator: Address
    server_id: ServerId
    amount: int = 0

    @property
    def is_open(self) -> bool:
        return self.amount > 0


@dataclass(frozen=True)
class Transfer:
    """Vault movement requested by a transition — executed by the shell.

    `authority` must own the source account: the caller for wallet debits,
    the server address for vault debits.
    """
    source: Address
    destination: Address
    amount: int
    authority: Address


@dataclass(frozen=True)
class Transition:
    """Result of a validated operation: records to persist, transfer, event.

    The shell executes `transfer`, persists every non-None record, commits,
    and only then appends `event`.
    """
    main: MainState
    server: ServerInfo | None = None
    delegation: DelegationRecord | None = None
    transfer: Transfer | None = None
    event: LedgerEvent | None = None


@dataclass(frozen=True)
class WalletInfo:
    """An identity's token account as seen by the ledger."""
    owner: Address
    address: Address
    balance: int = 0
