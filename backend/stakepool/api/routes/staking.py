"""Staking Routes — owner deposit and withdrawal."""

from fastapi import APIRouter, Depends

from stakepool.api.dependencies import get_caller, get_dispatch
from stakepool.core.domain_types import Address, ServerId
from stakepool.schemas.ledger import AmountRequest, ServerResponse
from stakepool.services.operation_dispatch import OperationDispatch

router = APIRouter(prefix="/api/v1/servers", tags=["staking"])


@router.post("/{server_id}/deposit", response_model=ServerResponse)
async def deposit(
    server_id: str,
    body: AmountRequest,
    caller: Address = Depends(get_caller),
    dispatch: OperationDispatch = Depends(get_dispatch),
):
    server = await dispatch.execute(
        "deposit", caller,
        {"server_id": ServerId(server_id), "amount": body.amount},
    )
    return ServerResponse.from_record(server)


@router.post("/{server_id}/withdraw", response_model=ServerResponse)
async def withdraw(
    server_id: str,
    body: AmountRequest,
    caller: Address = Depends(get_caller),
    dispatch: OperationDispatch = Depends(get_dispatch),
):
    server = await dispatch.execute(
        "withdraw", caller,
        {"server_id": ServerId(server_id), "amount": body.amount},
    )
    return ServerResponse.from_record(server)
