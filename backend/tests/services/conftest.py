"""Service test fixtures — async DB, handler instances and FastAPI test client.

Invariants:
    - Every test gets a fresh in-memory SQLite database
    - get_db dependency overridden to use the test DB session factory
    - db_manager patched so readiness checks hit the test engine

Design Decisions:
    - SQLite in-memory: fast, no external dependency, sufficient for ledger flows
      (amounts stay far below the signed 64-bit ceiling of SQLite INTEGER)
    - Handlers share the test session, exactly as OperationDispatch does per request
"""

import pytest
from sqlalchemy.ext.asyncio import (
    AsyncSession, create_async_engine, async_sessionmaker,
)
from httpx import ASGITransport, AsyncClient

from stakepool.config import get_settings
from stakepool.db.base import Base
from stakepool.infrastructure.database import get_db, DatabaseSessionManager
import stakepool.infrastructure.database as db_module
from stakepool.main import app
from stakepool.services.handle_delegation import DelegationHandlers
from stakepool.services.handle_registry import RegistryHandlers
from stakepool.services.handle_server import ServerHandlers
from stakepool.services.handle_staking import StakingHandlers
from stakepool.services.handle_wallet import WalletHandlers
from stakepool.services.ledger_queries import LedgerQueries
from stakepool.services.operation_dispatch import OperationDispatch


@pytest.fixture
async def test_engine():
    engine = create_async_engine(
        "sqlite+aiosqlite:///:memory:", echo=False,
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    yield engine
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
    await engine.dispose()


@pytest.fixture
async def test_session_factory(test_engine):
    return async_sessionmaker(
        test_engine, class_=AsyncSession, expire_on_commit=False,
    )


@pytest.fixture
async def test_db(test_session_factory):
    async with test_session_factory() as session:
        yield session


@pytest.fixture
def settings():
    return get_settings()


@pytest.fixture
def registry(test_db, settings):
    return RegistryHandlers(test_db, settings)


@pytest.fixture
def servers(test_db, settings):
    return ServerHandlers(test_db, settings)


@pytest.fixture
def staking(test_db, settings):
    return StakingHandlers(test_db, settings)


@pytest.fixture
def delegation(test_db, settings):
    return DelegationHandlers(test_db, settings)


@pytest.fixture
def wallets(test_db, settings):
    return WalletHandlers(test_db, settings)


@pytest.fixture
def queries(test_db, settings):
    return LedgerQueries(test_db, settings)


@pytest.fixture
def dispatch(test_db, settings):
    return OperationDispatch(test_db, settings)


@pytest.fixture
async def client(test_engine, test_session_factory):
    """FastAPI test client with DB dependency overridden."""
    async def override_get_db():
        async with test_session_factory() as session:
            yield session

    app.dependency_overrides[get_db] = override_get_db

    # Readiness check reads db_manager directly
    original_manager = db_module.db_manager
    fake_manager = DatabaseSessionManager.__new__(DatabaseSessionManager)
    fake_manager.engine = test_engine
    fake_manager._session_factory = test_session_factory
    db_module.db_manager = fake_manager

    async with AsyncClient(
        transport=ASGITransport(app=app), base_url="http://test",
    ) as c:
        yield c

    app.dependency_overrides.clear()
    db_module.db_manager = original_manager
