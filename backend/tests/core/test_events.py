"""Ledger Events — tests for event kinds and JSON payloads."""

import json

from stakepool.core.domain_types import Address, EventKind, ServerId
from stakepool.core.events import (
    Delegated, Deposited, ServerRegistered, ServerRemoved, Undelegated,
)


def test_every_event_kind_is_distinct():
    assert len({k.value for k in EventKind}) == len(EventKind)


def test_server_registered_payload():
    event = ServerRegistered(id=ServerId("s"), owner=Address("o"), name="n")
    assert event.kind == EventKind.SERVER_REGISTERED
    assert event.payload() == {"id": "s", "owner": "o", "name": "n"}


def test_server_removed_payload_has_only_id():
    assert ServerRemoved(id=ServerId("s")).payload() == {"id": "s"}


def test_payloads_are_json_serializable():
    events = [
        Deposited(id=ServerId("s"), amount=1, new_balance=2),
        Delegated(id=ServerId("s"), delegator=Address("d"), amount=1, new_total=1),
        Undelegated(id=ServerId("s"), delegator=Address("d"), amount=1, new_total=0),
    ]
    for event in events:
        assert json.loads(json.dumps(event.payload())) == event.payload()
