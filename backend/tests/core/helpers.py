"""Core test helpers — records with the limits used throughout the core suite."""

from stakepool.core.domain_types import Address, ServerId
from stakepool.core.ledger_state import MainState, ServerInfo

OWNER = Address("owner-1")
OTHER = Address("intruder")
DELEGATOR = Address("delegator-1")
SERVER_ID = ServerId("srv-1")


def make_main(**overrides) -> MainState:
    values = dict(
        initialized=True,
        admin=Address("admin"),
        min_stake=1000,
        max_stake=10000,
        min_delegation=500,
        max_delegation=10000,
    )
    values.update(overrides)
    return MainState(**values)


def make_server(**overrides) -> ServerInfo:
    values = dict(id=SERVER_ID, owner=OWNER, name="alpha")
    values.update(overrides)
    return ServerInfo(**values)
