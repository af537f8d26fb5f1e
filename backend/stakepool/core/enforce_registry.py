"""Registry Enforcement — one-time initialization of global stake policy.

Invariants:
    - initialize_main succeeds exactly once; a second call raises AlreadyInitializedError
    - Policy must satisfy 0 < min_stake <= max_stake and 0 < min_delegation <= max_delegation
    - Every other operation calls require_initialized first

Design Decisions:
    - Checked boolean flag on the stored record, not a language-level singleton
"""

from stakepool.core.domain_types import Address, U64_MAX
from stakepool.core.errors import (
    AccountNotFoundError, AlreadyInitializedError, InvalidArgumentError,
)
from stakepool.core.events import MainInitialized
from stakepool.core.ledger_state import MainState, Transition


def require_initialized(main: MainState) -> None:
    if not main.initialized:
        raise AccountNotFoundError("MainState", "main")


def _check_limit(value: int, name: str) -> None:
    if value <= 0 or value > U64_MAX:
        raise InvalidArgumentError(
            f"{name} must be in 1..{U64_MAX}, got {value}.", name,
        )


def initialize_main(
    main: MainState,
    admin: Address,
    min_stake: int,
    max_stake: int,
    min_delegation: int,
    max_delegation: int | None = None,
) -> Transition:
    """Set global policy and flip the initialized flag."""
    if main.initialized:
        raise AlreadyInitializedError()

    if max_delegation is None:
        max_delegation = max_stake
    for value, name in (
        (min_stake, "min_stake"),
        (max_stake, "max_stake"),
        (min_delegation, "min_delegation"),
        (max_delegation, "max_delegation"),
    ):
        _check_limit(value, name)
    if min_stake > max_stake:
        raise InvalidArgumentError(
            f"min_stake {min_stake} exceeds max_stake {max_stake}.", "min_stake",
        )
    if min_delegation > max_delegation:
        raise InvalidArgumentError(
            f"min_delegation {min_delegation} exceeds max_delegation {max_delegation}.",
            "min_delegation",
        )

    new_main = MainState(
        initialized=True,
        admin=admin,
        min_stake=min_stake,
        max_stake=max_stake,
        min_delegation=min_delegation,
        max_delegation=max_delegation,
    )
    return Transition(main=new_main, event=MainInitialized(admin=admin))
