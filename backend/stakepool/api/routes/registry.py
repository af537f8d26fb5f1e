"""Registry Routes — one-time initialization and policy read-out.

Invariants:
    - POST /registry makes the caller the admin; a second call returns 409 ALREADY_INITIALIZED
"""

from fastapi import APIRouter, Depends, status

from stakepool.api.dependencies import get_caller, get_dispatch, get_queries
from stakepool.core.domain_types import Address
from stakepool.schemas.ledger import MainStateResponse, RegistryInit
from stakepool.services.ledger_queries import LedgerQueries
from stakepool.services.operation_dispatch import OperationDispatch

router = APIRouter(prefix="/api/v1/registry", tags=["registry"])


@router.post(
    "", response_model=MainStateResponse, status_code=status.HTTP_201_CREATED,
)
async def initialize_registry(
    body: RegistryInit,
    caller: Address = Depends(get_caller),
    dispatch: OperationDispatch = Depends(get_dispatch),
):
    """Initialize global stake policy."""
    main = await dispatch.execute(
        "initialize_main", caller, body.model_dump(),
    )
    return MainStateResponse.from_record(main)


@router.get("", response_model=MainStateResponse)
async def get_registry(queries: LedgerQueries = Depends(get_queries)):
    return MainStateResponse.from_record(await queries.get_main())
