"""Service test helpers — wallet funding and a ready-made registry/server."""

from sqlalchemy.ext.asyncio import AsyncSession

from stakepool.config import get_settings
from stakepool.core.address import wallet_address
from stakepool.core.domain_types import Address, ServerId
from stakepool.models.token_account import TokenAccountRow

ADMIN = Address("admin")
OWNER = Address("owner-1")
OTHER = Address("intruder")
DELEGATOR = Address("delegator-1")
SERVER_ID = ServerId("srv-1")

MIN_STAKE = 1000
MAX_STAKE = 10000
MIN_DELEGATION = 500


async def fund(
    db: AsyncSession, identity: str, balance: int, mint: str | None = None,
) -> None:
    """Create the wallet token account of `identity` holding `balance`."""
    db.add(TokenAccountRow(
        address=wallet_address(Address(identity)), owner=identity,
        mint=mint or get_settings().accepted_mint, balance=balance,
    ))
    await db.commit()


async def account_balance(db: AsyncSession, address: str) -> int:
    row = await db.get(TokenAccountRow, address, populate_existing=True)
    return row.balance


async def wallet_balance(db: AsyncSession, identity: str) -> int:
    return await account_balance(db, wallet_address(Address(identity)))


async def init_registry(registry) -> None:
    await registry.initialize_main(
        ADMIN, min_stake=MIN_STAKE, max_stake=MAX_STAKE,
        min_delegation=MIN_DELEGATION,
    )


async def setup_server(registry, servers) -> None:
    await init_registry(registry)
    await servers.add_server(OWNER, SERVER_ID, "alpha")


def as_caller(identity: str) -> dict:
    return {"X-Caller-Identity": identity}
