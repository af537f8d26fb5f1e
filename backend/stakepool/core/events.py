"""Ledger Events — append-only records consumed by an external indexer.

Invariants:
    - One event type per EventKind; payload() is JSON-serializable
    - Events are built from committed values only (new_balance / new_total after the change)
"""

from dataclasses import dataclass, asdict

from stakepool.core.domain_types import Address, ServerId, EventKind


@dataclass(frozen=True)
class LedgerEvent:
    """Base event — subclasses set KIND."""
    KIND = None

    @property
    def kind(self) -> EventKind:
        return self.KIND

    def payload(self) -> dict:
        return asdict(self)


@dataclass(frozen=True)
class MainInitialized(LedgerEvent):
    KIND = EventKind.MAIN_INITIALIZED
    admin: Address


@dataclass(frozen=True)
class ServerRegistered(LedgerEvent):
    KIND = EventKind.SERVER_REGISTERED
    id: ServerId
    owner: Address
    name: str


@dataclass(frozen=True)
class ServerUpdated(LedgerEvent):
    KIND = EventKind.SERVER_UPDATED
    id: ServerId
    name: str


@dataclass(frozen=True)
class ServerRemoved(LedgerEvent):
    KIND = EventKind.SERVER_REMOVED
    id: ServerId


@dataclass(frozen=True)
class Deposited(LedgerEvent):
    KIND = EventKind.DEPOSITED
    id: ServerId
    amount: int
    new_balance: int


@dataclass(frozen=True)
class Withdrawn(LedgerEvent):
    KIND = EventKind.WITHDRAWN
    id: ServerId
    amount: int
    new_balance: int


@dataclass(frozen=True)
class Delegated(LedgerEvent):
    KIND = EventKind.DELEGATED
    id: ServerId
    delegator: Address
    amount: int
    new_total: int


@dataclass(frozen=True)
class Undelegated(LedgerEvent):
    KIND = EventKind.UNDELEGATED
    id: ServerId
    delegator: Address
    amount: int
    new_total: int
