"""Delegation Handlers — tests for d_deposit/d_withdraw against a staked server.

Tests cover:
    - first deposit creates the record, top-ups accumulate
    - rejected first deposit leaves no record behind
    - inactive servers refuse delegation
    - vault balance always equals stake + delegations
    - events appended only after successful commits
"""

import pytest

from stakepool.core.errors import (
    AccountNotFoundError, BelowMinDelegationError, DelegationBelowMinError,
    ServerInactiveError,
)
from tests.services.helpers import (
    DELEGATOR, OWNER, SERVER_ID, fund, setup_server, wallet_balance,
)


@pytest.fixture
async def staked_server(registry, servers, staking, test_db):
    await setup_server(registry, servers)
    await fund(test_db, OWNER, 5000)
    await fund(test_db, DELEGATOR, 5000)
    await staking.deposit(OWNER, SERVER_ID, 2000)


@pytest.mark.asyncio
async def test_delegations_accumulate(staked_server, delegation, queries):
    await delegation.d_deposit(DELEGATOR, SERVER_ID, 500)
    record = await delegation.d_deposit(DELEGATOR, SERVER_ID, 300)
    assert record.amount == 800
    server = await queries.get_server(SERVER_ID)
    assert server.delegated_total == 800
    assert server.delegator_count == 1


@pytest.mark.asyncio
async def test_rejected_first_deposit_creates_no_record(staked_server, delegation, queries):
    with pytest.raises(BelowMinDelegationError):
        await delegation.d_deposit(DELEGATOR, SERVER_ID, 100)
    with pytest.raises(AccountNotFoundError):
        await queries.get_delegation(DELEGATOR, SERVER_ID)
    assert await queries.list_delegations(SERVER_ID) == []


@pytest.mark.asyncio
async def test_delegation_to_inactive_server_rejected(
    registry, servers, delegation, test_db,
):
    await setup_server(registry, servers)
    await fund(test_db, DELEGATOR, 5000)
    with pytest.raises(ServerInactiveError):
        await delegation.d_deposit(DELEGATOR, SERVER_ID, 500)
    assert await wallet_balance(test_db, DELEGATOR) == 5000


@pytest.mark.asyncio
async def test_vault_balance_tracks_stake_and_delegations(
    staked_server, delegation, queries, test_db,
):
    await delegation.d_deposit(DELEGATOR, SERVER_ID, 1200)
    await delegation.d_withdraw(DELEGATOR, SERVER_ID, 200)
    server = await queries.get_server(SERVER_ID)
    assert await queries.vault_balance(SERVER_ID) == server.locked_total == 3000
    assert await wallet_balance(test_db, DELEGATOR) == 4000
    assert await queries.audit(SERVER_ID) == []


@pytest.mark.asyncio
async def test_full_withdraw_closes_record(staked_server, delegation, queries):
    await delegation.d_deposit(DELEGATOR, SERVER_ID, 800)
    record = await delegation.d_withdraw(DELEGATOR, SERVER_ID, 800)
    assert record.amount == 0
    assert await queries.list_delegations(SERVER_ID, open_only=True) == []
    assert (await queries.get_server(SERVER_ID)).delegator_count == 0


@pytest.mark.asyncio
async def test_withdraw_leaving_dust_rejected(staked_server, delegation, queries):
    await delegation.d_deposit(DELEGATOR, SERVER_ID, 800)
    with pytest.raises(DelegationBelowMinError):
        await delegation.d_withdraw(DELEGATOR, SERVER_ID, 400)
    assert (await queries.get_delegation(DELEGATOR, SERVER_ID)).amount == 800


@pytest.mark.asyncio
async def test_events_follow_successful_commits_only(staked_server, delegation, queries):
    await delegation.d_deposit(DELEGATOR, SERVER_ID, 500)
    with pytest.raises(BelowMinDelegationError):
        await delegation.d_deposit("newcomer", SERVER_ID, 100)
    kinds = [e["kind"] for e in await queries.list_events(SERVER_ID)]
    assert kinds == ["ServerRegistered", "Deposited", "Delegated"]
