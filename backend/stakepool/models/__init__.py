"""ORM Models — one table per persisted record kind.

Invariants:
    - Primary keys of main_state, servers, delegations and vault token accounts
      are addresses from core/address.py
    - Amount columns use U64Amount (db/base.py)
    - All models imported here so Base.metadata holds every table
"""

from stakepool.models.main_state import MainStateRow  # noqa: F401
from stakepool.models.server import ServerRow  # noqa: F401
from stakepool.models.delegation import DelegationRow  # noqa: F401
from stakepool.models.token_account import TokenAccountRow  # noqa: F401
from stakepool.models.ledger_event import LedgerEventRow  # noqa: F401
