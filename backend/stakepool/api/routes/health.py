"""Health & Readiness Checks — process liveness and ledger readiness.

Invariants:
    - GET /health/ answers 200 whenever the process is up
    - GET /health/ready answers 503 while the database is unreachable;
      an uninitialized registry is reported but does not fail readiness
"""

from fastapi import APIRouter, status
from fastapi.responses import JSONResponse

import stakepool.infrastructure.database as database
from stakepool.config import get_settings
from stakepool.infrastructure.ledger_repository import SqlLedgerRepository

router = APIRouter(prefix="/api/v1/health", tags=["health"])


@router.get("/", status_code=status.HTTP_200_OK)
async def liveness():
    return {
        "status": "healthy",
        "service": "stakepool-api",
        "accepted_mint": get_settings().accepted_mint,
    }


@router.get("/ready")
async def readiness():
    manager = database.db_manager
    if manager is None or not await manager.health_check():
        return JSONResponse(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            content={"status": "not_ready", "reason": "database_unavailable"},
        )
    async with manager.session() as db:
        main = await SqlLedgerRepository(db).get_main()
    return {
        "status": "ready",
        "checks": {
            "database": "healthy",
            "registry": "initialized" if main.initialized else "uninitialized",
        },
    }
