"""Shared Route Dependencies — caller identity and per-request service wiring.

Invariants:
    - The caller identity is taken verbatim from X-Caller-Identity; verifying it
      is the upstream gateway's job
    - A missing header is a request validation error (400)
"""

from fastapi import Depends, Header
from sqlalchemy.ext.asyncio import AsyncSession

from stakepool.config import get_settings
from stakepool.core.domain_types import Address
from stakepool.infrastructure.database import get_db
from stakepool.services.ledger_queries import LedgerQueries
from stakepool.services.operation_dispatch import OperationDispatch


def get_caller(
    x_caller_identity: str = Header(..., min_length=1, max_length=128),
) -> Address:
    return Address(x_caller_identity)


def get_dispatch(db: AsyncSession = Depends(get_db)) -> OperationDispatch:
    return OperationDispatch(db, get_settings())


def get_queries(db: AsyncSession = Depends(get_db)) -> LedgerQueries:
    return LedgerQueries(db, get_settings())
