"""Server Routes — registration, rename, removal, reads and audit.

Invariants:
    - Mutations go through OperationDispatch with the verified caller
    - Reads include the server's vault balance
"""

from fastapi import APIRouter, Depends, Query, status

from stakepool.api.dependencies import get_caller, get_dispatch, get_queries
from stakepool.core.domain_types import Address, ServerId
from stakepool.schemas.ledger import (
    AuditResponse, ServerCreate, ServerRename, ServerResponse,
)
from stakepool.services.ledger_queries import LedgerQueries
from stakepool.services.operation_dispatch import OperationDispatch

router = APIRouter(prefix="/api/v1/servers", tags=["servers"])


@router.post(
    "", response_model=ServerResponse, status_code=status.HTTP_201_CREATED,
)
async def add_server(
    body: ServerCreate,
    caller: Address = Depends(get_caller),
    dispatch: OperationDispatch = Depends(get_dispatch),
):
    server = await dispatch.execute(
        "add_server", caller,
        {"server_id": ServerId(body.server_id), "name": body.name},
    )
    return ServerResponse.from_record(server, vault_balance=0)


@router.get("", response_model=list[ServerResponse])
async def list_servers(
    include_removed: bool = Query(False),
    queries: LedgerQueries = Depends(get_queries),
):
    servers = await queries.list_servers(include_removed)
    return [ServerResponse.from_record(s) for s in servers]


@router.get("/{server_id}", response_model=ServerResponse)
async def get_server(
    server_id: str, queries: LedgerQueries = Depends(get_queries),
):
    server = await queries.get_server(ServerId(server_id))
    balance = await queries.vault_balance(server.id)
    return ServerResponse.from_record(server, vault_balance=balance)


@router.patch("/{server_id}", response_model=ServerResponse)
async def update_server(
    server_id: str,
    body: ServerRename,
    caller: Address = Depends(get_caller),
    dispatch: OperationDispatch = Depends(get_dispatch),
):
    server = await dispatch.execute(
        "update_server", caller,
        {"server_id": ServerId(server_id), "new_name": body.name},
    )
    return ServerResponse.from_record(server)


@router.delete("/{server_id}", response_model=ServerResponse)
async def remove_server(
    server_id: str,
    caller: Address = Depends(get_caller),
    dispatch: OperationDispatch = Depends(get_dispatch),
):
    server = await dispatch.execute(
        "remove_server", caller, {"server_id": ServerId(server_id)},
    )
    return ServerResponse.from_record(server)


@router.get("/{server_id}/audit", response_model=AuditResponse)
async def audit_server(
    server_id: str, queries: LedgerQueries = Depends(get_queries),
):
    violations = await queries.audit(ServerId(server_id))
    return AuditResponse(
        server_id=server_id, healthy=not violations, violations=violations,
    )
