"""StakePool API — FastAPI application assembling the ledger routes.

Invariants:
    - Routers included by hand: health, registry, servers, staking, delegations,
      events, wallets
    - Ledger failures leave through register_error_handlers as the JSON error envelope
    - Allowed CORS origins come from Settings.cors_origins
    - The engine is created in lifespan startup and disposed on shutdown

Design Decisions:
    - lifespan context manager instead of startup/shutdown event hooks
    - The API is one possible dispatcher: it forwards the caller identity set by
      the upstream gateway and never verifies signatures itself
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from stakepool.api.error_handlers import register_error_handlers
from stakepool.api.routes import (
    delegations, events, health, registry, servers, staking, wallets,
)
from stakepool.config import get_settings
from stakepool.infrastructure.database import init_db
from stakepool.infrastructure.observability import setup_logging

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup/shutdown lifecycle."""
    settings = get_settings()
    setup_logging(settings.log_level, settings.log_format)
    manager = init_db(
        settings.database_url,
        pool_size=settings.database_pool_size,
        max_overflow=settings.database_max_overflow,
    )
    logger.info("StakePool API started, accepted mint %s", settings.accepted_mint)
    yield
    await manager.close()
    logger.info("StakePool API stopped")


app = FastAPI(
    title="StakePool API", version="1.0.0", lifespan=lifespan,
)

settings = get_settings()
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Routes, registered one by one
app.include_router(health.router)
app.include_router(registry.router)
app.include_router(servers.router)
app.include_router(staking.router)
app.include_router(delegations.router)
app.include_router(events.router)
app.include_router(wallets.router)

register_error_handlers(app)
