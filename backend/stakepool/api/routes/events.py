"""Event Routes — paged read of the append-only ledger event log.

Invariants:
    - Events returned in sequence order; `after` is an exclusive cursor
"""

from fastapi import APIRouter, Depends, Query

from stakepool.api.dependencies import get_queries
from stakepool.services.ledger_queries import LedgerQueries

router = APIRouter(prefix="/api/v1/events", tags=["events"])


@router.get("")
async def list_events(
    server_id: str | None = Query(None),
    after: int = Query(0, ge=0),
    limit: int = Query(100, ge=1, le=1000),
    queries: LedgerQueries = Depends(get_queries),
):
    events = await queries.list_events(server_id, after, limit)
    return {
        "events": events,
        "next_cursor": events[-1]["sequence"] if events else after,
    }
