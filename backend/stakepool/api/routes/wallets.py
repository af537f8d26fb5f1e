"""Wallet Routes — open the caller's wallet, admin funding, balance read.

Invariants:
    - POST /wallets opens the caller's own wallet only
    - POST /wallets/{identity}/fund is admin-only (403 UNAUTHORIZED otherwise)
"""

from fastapi import APIRouter, Depends, status

from stakepool.api.dependencies import get_caller, get_dispatch, get_queries
from stakepool.core.domain_types import Address
from stakepool.schemas.ledger import AmountRequest, WalletResponse
from stakepool.services.ledger_queries import LedgerQueries
from stakepool.services.operation_dispatch import OperationDispatch

router = APIRouter(prefix="/api/v1/wallets", tags=["wallets"])


@router.post(
    "", response_model=WalletResponse, status_code=status.HTTP_201_CREATED,
)
async def open_wallet(
    caller: Address = Depends(get_caller),
    dispatch: OperationDispatch = Depends(get_dispatch),
):
    wallet = await dispatch.execute("open_wallet", caller, {})
    return WalletResponse.from_record(wallet)


@router.post("/{identity}/fund", response_model=WalletResponse)
async def fund_wallet(
    identity: str,
    body: AmountRequest,
    caller: Address = Depends(get_caller),
    dispatch: OperationDispatch = Depends(get_dispatch),
):
    wallet = await dispatch.execute(
        "fund_wallet", caller,
        {"recipient": Address(identity), "amount": body.amount},
    )
    return WalletResponse.from_record(wallet)


@router.get("/{identity}", response_model=WalletResponse)
async def get_wallet(
    identity: str, queries: LedgerQueries = Depends(get_queries),
):
    return WalletResponse.from_record(await queries.wallet(Address(identity)))
