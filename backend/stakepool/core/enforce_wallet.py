"""Wallet Enforcement — who may issue tokens into wallets.

Invariants:
    - Only the registry admin may fund a wallet, and only after initialize_main
    - Funding amounts follow the same positivity rule as stake and delegation
"""

from stakepool.core.domain_types import Address
from stakepool.core.enforce_registry import require_initialized
from stakepool.core.enforce_staking import check_amount
from stakepool.core.errors import UnauthorizedError
from stakepool.core.ledger_state import MainState


def authorize_funding(main: MainState, caller: Address, amount: int) -> None:
    require_initialized(main)
    if caller != main.admin:
        raise UnauthorizedError(caller)
    check_amount(amount)
