"""Staking Enforcement — direct stake deposit and withdrawal.

Invariants:
    - Only the stored owner may deposit or withdraw
    - After success: staked_amount == 0 or min_stake <= staked_amount <= max_stake
    - active is True exactly when staked_amount >= min_stake
    - All checks (including checked arithmetic) run before a Transfer is described

Design Decisions:
    - Deposits that would land in (0, min_stake) are rejected with StakeBelowMinError,
      same as withdrawals: no operation ever produces the below-floor state
"""

from dataclasses import replace

from stakepool.core.address import server_address, vault_address, wallet_address
from stakepool.core.checked_math import checked_add, checked_sub
from stakepool.core.domain_types import Address, ServerId
from stakepool.core.enforce_registry import require_initialized
from stakepool.core.enforce_server import require_owner, require_server
from stakepool.core.errors import (
    InsufficientFundsError, InvalidAmountError, StakeBelowMinError,
    StakeExceedsMaxError,
)
from stakepool.core.events import Deposited, Withdrawn
from stakepool.core.ledger_state import MainState, ServerInfo, Transfer, Transition


def check_amount(amount: int) -> None:
    if amount <= 0:
        raise InvalidAmountError()


def apply_deposit(
    main: MainState,
    server: ServerInfo | None,
    caller: Address,
    server_id: ServerId,
    amount: int,
) -> Transition:
    """Lock `amount` more stake from the owner into the server's vault."""
    require_initialized(main)
    server = require_server(server, server_id)
    require_owner(server, caller)
    check_amount(amount)

    new_staked = checked_add(server.staked_amount, amount)
    if new_staked > main.max_stake:
        raise StakeExceedsMaxError(new_staked, main.max_stake)
    if new_staked < main.min_stake:
        raise StakeBelowMinError(new_staked, main.min_stake)
    new_locked = checked_add(main.total_locked, amount)

    return Transition(
        main=replace(main, total_locked=new_locked),
        server=replace(server, staked_amount=new_staked, active=True),
        transfer=Transfer(
            source=wallet_address(caller), destination=vault_address(server_id),
            amount=amount, authority=caller,
        ),
        event=Deposited(id=server_id, amount=amount, new_balance=new_staked),
    )


def apply_withdraw(
    main: MainState,
    server: ServerInfo | None,
    caller: Address,
    server_id: ServerId,
    amount: int,
) -> Transition:
    """Release `amount` of stake back to the owner; full exit or stay above floor."""
    require_initialized(main)
    server = require_server(server, server_id)
    require_owner(server, caller)
    check_amount(amount)

    if amount > server.staked_amount:
        raise InsufficientFundsError(amount, server.staked_amount)
    new_staked = checked_sub(server.staked_amount, amount)
    if 0 < new_staked < main.min_stake:
        raise StakeBelowMinError(new_staked, main.min_stake)
    new_locked = checked_sub(main.total_locked, amount)

    return Transition(
        main=replace(main, total_locked=new_locked),
        server=replace(server, staked_amount=new_staked, active=new_staked > 0),
        transfer=Transfer(
            source=vault_address(server_id), destination=wallet_address(caller),
            amount=amount, authority=server_address(server_id),
        ),
        event=Withdrawn(id=server_id, amount=amount, new_balance=new_staked),
    )
