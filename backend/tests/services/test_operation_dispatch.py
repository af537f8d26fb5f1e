"""Operation Dispatch — tests for explicit operation routing.

Tests cover:
    - every ledger operation is registered
    - known operations route to the right handler
    - unknown operations raise INVALID_ARGUMENT
"""

import pytest

from stakepool.core.errors import InvalidArgumentError
from tests.services.helpers import ADMIN, OWNER, SERVER_ID


def test_all_operations_registered(dispatch):
    assert dispatch.operations == sorted([
        "initialize_main", "add_server", "update_server", "remove_server",
        "deposit", "withdraw", "d_deposit", "d_withdraw",
        "open_wallet", "fund_wallet",
    ])


@pytest.mark.asyncio
async def test_unknown_operation_rejected(dispatch):
    with pytest.raises(InvalidArgumentError) as exc:
        await dispatch.execute("mint_everything", ADMIN, {})
    assert exc.value.code == "INVALID_ARGUMENT"


@pytest.mark.asyncio
async def test_dispatch_runs_full_lifecycle(dispatch, test_db):
    main = await dispatch.execute(
        "initialize_main", ADMIN,
        {"min_stake": 1000, "max_stake": 10000, "min_delegation": 500},
    )
    assert main.admin == ADMIN

    server = await dispatch.execute(
        "add_server", OWNER, {"server_id": SERVER_ID, "name": "alpha"},
    )
    assert server.id == SERVER_ID

    wallet = await dispatch.execute(
        "fund_wallet", ADMIN, {"recipient": OWNER, "amount": 3000},
    )
    assert wallet.balance == 3000
    server = await dispatch.execute(
        "deposit", OWNER, {"server_id": SERVER_ID, "amount": 3000},
    )
    assert server.active is True
