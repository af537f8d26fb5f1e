"""Delegation Enforcement — third-party deposits and withdrawals against a server.

Invariants:
    - Delegation deposits require an active server; withdrawals do not
      (delegators can always exit, even after the owner unstaked)
    - After success: record.amount == 0 or min_delegation <= record.amount <= max_delegation
    - delegated_total moves by exactly the transferred amount (checked)
    - delegator_count counts records with amount > 0

Design Decisions:
    - A closed record (amount == 0) is kept, not deleted: re-delegating reuses its address
    - The record is identified by its derived address, so the caller IS the delegator;
      the stored delegator field is still compared to reject mismatched records
"""

from dataclasses import replace

from stakepool.core.address import server_address, vault_address, wallet_address
from stakepool.core.checked_math import checked_add, checked_sub
from stakepool.core.domain_types import Address, ServerId
from stakepool.core.enforce_registry import require_initialized
from stakepool.core.enforce_server import require_server
from stakepool.core.enforce_staking import check_amount
from stakepool.core.errors import (
    AccountNotFoundError, BelowMinDelegationError, DelegationBelowMinError,
    DelegationExceedsMaxError, InsufficientFundsError, ServerInactiveError,
    UnauthorizedError,
)
from stakepool.core.events import Delegated, Undelegated
from stakepool.core.ledger_state import (
    DelegationRecord, MainState, ServerInfo, Transfer, Transition,
)


def apply_delegate(
    main: MainState,
    server: ServerInfo | None,
    record: DelegationRecord | None,
    delegator: Address,
    server_id: ServerId,
    amount: int,
) -> Transition:
    """Lock `amount` from the delegator into the server's delegation pool."""
    require_initialized(main)
    server = require_server(server, server_id)
    if not server.active:
        raise ServerInactiveError(server_id)
    check_amount(amount)

    if record is None:
        record = DelegationRecord(delegator=delegator, server_id=server_id)
    elif record.delegator != delegator:
        raise UnauthorizedError(delegator)

    new_amount = checked_add(record.amount, amount)
    if new_amount < main.min_delegation:
        raise BelowMinDelegationError(new_amount, main.min_delegation)
    if new_amount > main.max_delegation:
        raise DelegationExceedsMaxError(new_amount, main.max_delegation)
    new_total = checked_add(server.delegated_total, amount)
    new_locked = checked_add(main.total_locked, amount)
    new_count = server.delegator_count
    if not record.is_open:
        new_count = checked_add(new_count, 1)

    return Transition(
        main=replace(main, total_locked=new_locked),
        server=replace(
            server, delegated_total=new_total, delegator_count=new_count,
        ),
        delegation=replace(record, amount=new_amount),
        transfer=Transfer(
            source=wallet_address(delegator), destination=vault_address(server_id),
            amount=amount, authority=delegator,
        ),
        event=Delegated(
            id=server_id, delegator=delegator, amount=amount, new_total=new_total,
        ),
    )


def apply_undelegate(
    main: MainState,
    server: ServerInfo | None,
    record: DelegationRecord | None,
    delegator: Address,
    server_id: ServerId,
    amount: int,
) -> Transition:
    """Release `amount` of delegation back to the delegator."""
    require_initialized(main)
    if server is None:
        raise AccountNotFoundError("Server", server_id)
    if record is None:
        raise AccountNotFoundError("Delegation", f"{delegator}/{server_id}")
    if record.delegator != delegator:
        raise UnauthorizedError(delegator)
    check_amount(amount)

    if amount > record.amount:
        raise InsufficientFundsError(amount, record.amount)
    new_amount = checked_sub(record.amount, amount)
    if 0 < new_amount < main.min_delegation:
        raise DelegationBelowMinError(new_amount, main.min_delegation)
    new_total = checked_sub(server.delegated_total, amount)
    new_locked = checked_sub(main.total_locked, amount)
    new_count = server.delegator_count
    if new_amount == 0:
        new_count = checked_sub(new_count, 1)

    return Transition(
        main=replace(main, total_locked=new_locked),
        server=replace(
            server, delegated_total=new_total, delegator_count=new_count,
        ),
        delegation=replace(record, amount=new_amount),
        transfer=Transfer(
            source=vault_address(server_id), destination=wallet_address(delegator),
            amount=amount, authority=server_address(server_id),
        ),
        event=Undelegated(
            id=server_id, delegator=delegator, amount=amount, new_total=new_total,
        ),
    )
