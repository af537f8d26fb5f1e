"""Ledger Routes — tests for the HTTP surface over the full operation set.

Tests cover:
    - registry init/read and 409 on re-init
    - server create/read/rename/delete with status codes
    - deposit/withdraw and delegation endpoints
    - structured error envelope (code, category, severity, context)
    - missing caller header and negative amounts are 400 VALIDATION_ERROR
    - wallet open/fund/read, admin-only funding
    - event log and audit endpoints
"""

import pytest

from tests.services.helpers import (
    ADMIN, DELEGATOR, OTHER, OWNER, SERVER_ID, as_caller,
)

INIT_BODY = {"min_stake": 1000, "max_stake": 10000, "min_delegation": 500}


async def _bootstrap(client, stake: int = 0) -> None:
    r = await client.post("/api/v1/registry", json=INIT_BODY, headers=as_caller(ADMIN))
    assert r.status_code == 201
    r = await client.post(
        "/api/v1/servers", json={"server_id": SERVER_ID, "name": "alpha"},
        headers=as_caller(OWNER),
    )
    assert r.status_code == 201
    for identity in (OWNER, DELEGATOR):
        r = await client.post(
            f"/api/v1/wallets/{identity}/fund", json={"amount": 10000},
            headers=as_caller(ADMIN),
        )
        assert r.status_code == 200
    if stake:
        r = await client.post(
            f"/api/v1/servers/{SERVER_ID}/deposit", json={"amount": stake},
            headers=as_caller(OWNER),
        )
        assert r.status_code == 200


# ─── Registry ───────────────────────────────────────────────────

@pytest.mark.asyncio
async def test_registry_init_and_read(client):
    r = await client.post("/api/v1/registry", json=INIT_BODY, headers=as_caller(ADMIN))
    assert r.status_code == 201
    assert r.json()["admin"] == "admin"

    r = await client.get("/api/v1/registry")
    assert r.status_code == 200
    assert r.json()["min_delegation"] == 500
    assert r.json()["max_delegation"] == 10000


@pytest.mark.asyncio
async def test_registry_reinit_conflict(client):
    await client.post("/api/v1/registry", json=INIT_BODY, headers=as_caller(ADMIN))
    r = await client.post("/api/v1/registry", json=INIT_BODY, headers=as_caller(OTHER))
    assert r.status_code == 409
    error = r.json()["error"]
    assert error["code"] == "ALREADY_INITIALIZED"
    assert error["context"]["operation"] == "initialize_main"


@pytest.mark.asyncio
async def test_missing_caller_header_is_validation_error(client):
    r = await client.post("/api/v1/registry", json=INIT_BODY)
    assert r.status_code == 400
    assert r.json()["error"]["code"] == "VALIDATION_ERROR"


# ─── Servers ────────────────────────────────────────────────────

@pytest.mark.asyncio
async def test_server_read_includes_vault_balance(client):
    await _bootstrap(client, stake=1500)
    r = await client.get(f"/api/v1/servers/{SERVER_ID}")
    assert r.status_code == 200
    body = r.json()
    assert body["staked_amount"] == 1500
    assert body["status"] == "active"
    assert body["vault_balance"] == 1500


@pytest.mark.asyncio
async def test_unknown_server_is_404(client):
    r = await client.get("/api/v1/servers/nope")
    assert r.status_code == 404
    assert r.json()["error"]["code"] == "ACCOUNT_NOT_FOUND"


@pytest.mark.asyncio
async def test_duplicate_server_is_409(client):
    await _bootstrap(client)
    r = await client.post(
        "/api/v1/servers", json={"server_id": SERVER_ID, "name": "beta"},
        headers=as_caller(OTHER),
    )
    assert r.status_code == 409
    assert r.json()["error"]["code"] == "DUPLICATE_SERVER"


@pytest.mark.asyncio
async def test_rename_by_non_owner_is_403(client):
    await _bootstrap(client)
    r = await client.patch(
        f"/api/v1/servers/{SERVER_ID}", json={"name": "pwned"},
        headers=as_caller(OTHER),
    )
    assert r.status_code == 403
    assert r.json()["error"]["code"] == "UNAUTHORIZED"


@pytest.mark.asyncio
async def test_rename_and_remove(client):
    await _bootstrap(client)
    r = await client.patch(
        f"/api/v1/servers/{SERVER_ID}", json={"name": "gamma"},
        headers=as_caller(OWNER),
    )
    assert r.json()["name"] == "gamma"

    r = await client.delete(f"/api/v1/servers/{SERVER_ID}", headers=as_caller(OWNER))
    assert r.status_code == 200
    assert r.json()["status"] == "removed"

    r = await client.get("/api/v1/servers")
    assert r.json() == []
    r = await client.get("/api/v1/servers", params={"include_removed": True})
    assert len(r.json()) == 1


# ─── Staking & Delegation ───────────────────────────────────────

@pytest.mark.asyncio
async def test_deposit_over_max_is_business_rule_error(client):
    await _bootstrap(client, stake=9500)
    r = await client.post(
        f"/api/v1/servers/{SERVER_ID}/deposit", json={"amount": 600},
        headers=as_caller(OWNER),
    )
    assert r.status_code == 400
    error = r.json()["error"]
    assert error["code"] == "STAKE_EXCEEDS_MAX"
    assert error["category"] == "business_rule"


@pytest.mark.asyncio
async def test_negative_amount_is_validation_error(client):
    await _bootstrap(client)
    r = await client.post(
        f"/api/v1/servers/{SERVER_ID}/deposit", json={"amount": -1},
        headers=as_caller(OWNER),
    )
    assert r.status_code == 400
    assert r.json()["error"]["code"] == "VALIDATION_ERROR"


@pytest.mark.asyncio
async def test_delegation_flow(client):
    await _bootstrap(client, stake=2000)
    headers = as_caller(DELEGATOR)
    r = await client.post(
        f"/api/v1/servers/{SERVER_ID}/delegations/deposit",
        json={"amount": 500}, headers=headers,
    )
    assert r.status_code == 200
    r = await client.post(
        f"/api/v1/servers/{SERVER_ID}/delegations/deposit",
        json={"amount": 300}, headers=headers,
    )
    assert r.json() == {"delegator": DELEGATOR, "server_id": SERVER_ID, "amount": 800}

    r = await client.post(
        f"/api/v1/servers/{SERVER_ID}/delegations/withdraw",
        json={"amount": 800}, headers=headers,
    )
    assert r.json()["amount"] == 0

    r = await client.get(
        f"/api/v1/servers/{SERVER_ID}/delegations", params={"open_only": True},
    )
    assert r.json() == []

    r = await client.get(f"/api/v1/servers/{SERVER_ID}/audit")
    assert r.json() == {"server_id": SERVER_ID, "healthy": True, "violations": []}


@pytest.mark.asyncio
async def test_small_first_delegation_rejected(client):
    await _bootstrap(client, stake=2000)
    r = await client.post(
        f"/api/v1/servers/{SERVER_ID}/delegations/deposit",
        json={"amount": 100}, headers=as_caller(DELEGATOR),
    )
    assert r.status_code == 400
    assert r.json()["error"]["code"] == "BELOW_MIN_DELEGATION"


# ─── Wallets ────────────────────────────────────────────────────

@pytest.mark.asyncio
async def test_open_wallet_and_read_balance(client):
    r = await client.post("/api/v1/wallets", headers=as_caller(OTHER))
    assert r.status_code == 201
    assert r.json()["owner"] == OTHER
    assert r.json()["balance"] == 0

    await _bootstrap(client)
    r = await client.get(f"/api/v1/wallets/{OWNER}")
    assert r.status_code == 200
    assert r.json()["balance"] == 10000


@pytest.mark.asyncio
async def test_fund_wallet_by_non_admin_is_403(client):
    await _bootstrap(client)
    r = await client.post(
        f"/api/v1/wallets/{OTHER}/fund", json={"amount": 500},
        headers=as_caller(OTHER),
    )
    assert r.status_code == 403
    assert r.json()["error"]["code"] == "UNAUTHORIZED"
    r = await client.get(f"/api/v1/wallets/{OTHER}")
    assert r.json()["balance"] == 0


# ─── Events & Health ────────────────────────────────────────────

@pytest.mark.asyncio
async def test_event_log_cursor(client):
    await _bootstrap(client, stake=1000)
    r = await client.get("/api/v1/events", params={"limit": 1})
    body = r.json()
    assert [e["kind"] for e in body["events"]] == ["MainInitialized"]
    assert body["next_cursor"] == body["events"][0]["sequence"]

    r = await client.get("/api/v1/events", params={"after": body["next_cursor"]})
    kinds = [e["kind"] for e in r.json()["events"]]
    assert kinds == ["ServerRegistered", "Deposited"]


@pytest.mark.asyncio
async def test_health_and_readiness(client):
    r = await client.get("/api/v1/health/")
    assert r.json()["status"] == "healthy"
    r = await client.get("/api/v1/health/ready")
    assert r.status_code == 200
    assert r.json()["checks"] == {"database": "healthy", "registry": "uninitialized"}
