"""Ledger Schemas — Pydantic models with field-level validation for API boundaries.

Invariants:
    - Amounts are integers in base units, 0..U64_MAX (zero is rejected by core as INVALID_AMOUNT)
    - Name and server id byte bounds are enforced by core, not here, so the
      error codes stay identical for API and direct callers

Design Decisions:
    - Response models built from core records via from_record(): routes never touch ORM rows
"""

from pydantic import BaseModel, Field

from stakepool.core.domain_types import U64_MAX
from stakepool.core.ledger_state import (
    DelegationRecord, MainState, ServerInfo, WalletInfo,
)


class RegistryInit(BaseModel):
    """initialize_main body — omitted limits fall back to configured defaults."""
    min_stake: int | None = Field(None, ge=0, le=U64_MAX)
    max_stake: int | None = Field(None, ge=0, le=U64_MAX)
    min_delegation: int | None = Field(None, ge=0, le=U64_MAX)
    max_delegation: int | None = Field(None, ge=0, le=U64_MAX)


class ServerCreate(BaseModel):
    server_id: str
    name: str


class ServerRename(BaseModel):
    name: str


class AmountRequest(BaseModel):
    amount: int = Field(ge=0, le=U64_MAX)


class MainStateResponse(BaseModel):
    initialized: bool
    admin: str | None
    min_stake: int
    max_stake: int
    min_delegation: int
    max_delegation: int
    total_locked: int
    server_count: int

    @classmethod
    def from_record(cls, main: MainState) -> "MainStateResponse":
        return cls(
            initialized=main.initialized,
            admin=main.admin,
            min_stake=main.min_stake,
            max_stake=main.max_stake,
            min_delegation=main.min_delegation,
            max_delegation=main.max_delegation,
            total_locked=main.total_locked,
            server_count=main.server_count,
        )


class ServerResponse(BaseModel):
    id: str
    owner: str
    name: str
    staked_amount: int
    delegated_total: int
    delegator_count: int
    active: bool
    status: str
    vault_balance: int | None = None

    @classmethod
    def from_record(
        cls, server: ServerInfo, vault_balance: int | None = None,
    ) -> "ServerResponse":
        return cls(
            id=server.id,
            owner=server.owner,
            name=server.name,
            staked_amount=server.staked_amount,
            delegated_total=server.delegated_total,
            delegator_count=server.delegator_count,
            active=server.active,
            status=server.status.value,
            vault_balance=vault_balance,
        )


class DelegationResponse(BaseModel):
    delegator: str
    server_id: str
    amount: int

    @classmethod
    def from_record(cls, record: DelegationRecord) -> "DelegationResponse":
        return cls(
            delegator=record.delegator,
            server_id=record.server_id,
            amount=record.amount,
        )


class AuditResponse(BaseModel):
    server_id: str
    healthy: bool
    violations: list[str]


class WalletResponse(BaseModel):
    owner: str
    address: str
    balance: int

    @classmethod
    def from_record(cls, wallet: WalletInfo) -> "WalletResponse":
        return cls(owner=wallet.owner, address=wallet.address, balance=wallet.balance)
