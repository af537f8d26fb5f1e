"""Delegation Routes — delegator deposit/withdrawal and per-server listing."""

from fastapi import APIRouter, Depends, Query

from stakepool.api.dependencies import get_caller, get_dispatch, get_queries
from stakepool.core.domain_types import Address, ServerId
from stakepool.schemas.ledger import AmountRequest, DelegationResponse
from stakepool.services.ledger_queries import LedgerQueries
from stakepool.services.operation_dispatch import OperationDispatch

router = APIRouter(prefix="/api/v1/servers", tags=["delegations"])


@router.post("/{server_id}/delegations/deposit", response_model=DelegationResponse)
async def delegate(
    server_id: str,
    body: AmountRequest,
    caller: Address = Depends(get_caller),
    dispatch: OperationDispatch = Depends(get_dispatch),
):
    record = await dispatch.execute(
        "d_deposit", caller,
        {"server_id": ServerId(server_id), "amount": body.amount},
    )
    return DelegationResponse.from_record(record)


@router.post("/{server_id}/delegations/withdraw", response_model=DelegationResponse)
async def undelegate(
    server_id: str,
    body: AmountRequest,
    caller: Address = Depends(get_caller),
    dispatch: OperationDispatch = Depends(get_dispatch),
):
    record = await dispatch.execute(
        "d_withdraw", caller,
        {"server_id": ServerId(server_id), "amount": body.amount},
    )
    return DelegationResponse.from_record(record)


@router.get("/{server_id}/delegations", response_model=list[DelegationResponse])
async def list_delegations(
    server_id: str,
    open_only: bool = Query(False),
    queries: LedgerQueries = Depends(get_queries),
):
    records = await queries.list_delegations(ServerId(server_id), open_only)
    return [DelegationResponse.from_record(r) for r in records]
