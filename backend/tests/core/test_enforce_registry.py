"""Registry Enforcement — tests for one-time initialization.

Tests cover:
    - initialize_main sets policy and flips the flag
    - second initialize_main raises AlreadyInitializedError, state unchanged
    - invalid limit combinations raise InvalidArgumentError
    - require_initialized rejects an uninitialized registry
"""

import pytest

from stakepool.core.domain_types import Address, EventKind
from stakepool.core.enforce_registry import initialize_main, require_initialized
from stakepool.core.errors import (
    AccountNotFoundError, AlreadyInitializedError, InvalidArgumentError,
)
from stakepool.core.ledger_state import MainState
from tests.core.helpers import make_main

ADMIN = Address("admin")


def test_initialize_sets_policy():
    transition = initialize_main(MainState(), ADMIN, 1000, 10000, 500)
    main = transition.main
    assert main.initialized
    assert main.admin == ADMIN
    assert (main.min_stake, main.max_stake, main.min_delegation) == (1000, 10000, 500)


def test_initialize_defaults_max_delegation_to_max_stake():
    transition = initialize_main(MainState(), ADMIN, 1000, 10000, 500)
    assert transition.main.max_delegation == 10000


def test_initialize_emits_main_initialized():
    transition = initialize_main(MainState(), ADMIN, 1000, 10000, 500)
    assert transition.event.kind == EventKind.MAIN_INITIALIZED
    assert transition.event.payload() == {"admin": "admin"}
    assert transition.transfer is None


def test_second_initialize_raises_already_initialized():
    main = make_main()
    with pytest.raises(AlreadyInitializedError) as exc:
        initialize_main(main, Address("someone-else"), 1, 2, 1)
    assert exc.value.code == "ALREADY_INITIALIZED"
    assert main.admin == Address("admin")
    assert main.min_stake == 1000


def test_initialize_rejects_min_above_max():
    with pytest.raises(InvalidArgumentError) as exc:
        initialize_main(MainState(), ADMIN, 20000, 10000, 500)
    assert exc.value.argument == "min_stake"


def test_initialize_rejects_zero_min_stake():
    with pytest.raises(InvalidArgumentError):
        initialize_main(MainState(), ADMIN, 0, 10000, 500)


def test_initialize_rejects_zero_min_delegation():
    with pytest.raises(InvalidArgumentError):
        initialize_main(MainState(), ADMIN, 1000, 10000, 0)


def test_initialize_rejects_min_delegation_above_max_delegation():
    with pytest.raises(InvalidArgumentError) as exc:
        initialize_main(MainState(), ADMIN, 1000, 10000, 600, max_delegation=500)
    assert exc.value.argument == "min_delegation"


def test_require_initialized_rejects_fresh_state():
    with pytest.raises(AccountNotFoundError):
        require_initialized(MainState())


def test_require_initialized_accepts_initialized():
    require_initialized(make_main())
