"""Unit of Work — one transaction per ledger operation.

Invariants:
    - Commit only when the whole block succeeds; any exception rolls back and re-raises
    - Domain rejections are logged at WARNING with the error code; nothing is retried
    - ErrorContext.operation/server_id/caller are filled in before the error propagates
"""

import logging
from contextlib import asynccontextmanager
from typing import AsyncGenerator

from sqlalchemy.ext.asyncio import AsyncSession

from stakepool.core.errors import StakePoolError

logger = logging.getLogger(__name__)


@asynccontextmanager
async def atomic(
    db: AsyncSession,
    operation: str,
    server_id: str | None = None,
    caller: str | None = None,
) -> AsyncGenerator[None, None]:
    """Run the block as a single all-or-nothing unit of work."""
    try:
        yield
        await db.commit()
    except StakePoolError as e:
        await db.rollback()
        e.context.operation = e.context.operation or operation
        e.context.server_id = e.context.server_id or server_id
        e.context.caller = e.context.caller or caller
        logger.warning(
            "%s rejected: %s", operation, e.message,
            extra={
                "operation": operation, "server_id": server_id,
                "caller": caller, "error_code": e.code,
            },
        )
        raise
    except Exception:
        await db.rollback()
        logger.error(
            "%s aborted", operation, exc_info=True,
            extra={"operation": operation, "server_id": server_id},
        )
        raise
