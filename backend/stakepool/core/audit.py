"""Server Audit — checks the accounting invariants for one server.

Invariants:
    - audit_server is PURE: returns violations, never raises, never mutates
    - Empty list means every checked invariant holds
"""

from stakepool.core.ledger_state import DelegationRecord, MainState, ServerInfo


def audit_server(
    main: MainState,
    server: ServerInfo,
    delegations: list[DelegationRecord],
    vault_balance: int,
) -> list[str]:
    """Return a description of every invariant the server violates."""
    violations: list[str] = []

    if server.staked_amount < 0 or server.staked_amount > main.max_stake:
        violations.append(
            f"staked_amount {server.staked_amount} outside 0..{main.max_stake}",
        )
    if 0 < server.staked_amount < main.min_stake:
        violations.append(
            f"staked_amount {server.staked_amount} below min_stake {main.min_stake}",
        )
    if server.active != (server.staked_amount >= main.min_stake > 0):
        violations.append(
            f"active={server.active} inconsistent with staked_amount {server.staked_amount}",
        )

    delegated_sum = sum(d.amount for d in delegations if d.server_id == server.id)
    if delegated_sum != server.delegated_total:
        violations.append(
            f"delegation records sum {delegated_sum} != delegated_total {server.delegated_total}",
        )
    for d in delegations:
        if 0 < d.amount < main.min_delegation:
            violations.append(
                f"delegation {d.delegator} amount {d.amount} below min_delegation",
            )
    open_count = sum(1 for d in delegations if d.is_open)
    if open_count != server.delegator_count:
        violations.append(
            f"{open_count} open delegations != delegator_count {server.delegator_count}",
        )

    if vault_balance != server.locked_total:
        violations.append(
            f"vault balance {vault_balance} != stake + delegation {server.locked_total}",
        )
    return violations
