"""Database Event Sink — EventSink over the ledger_events table.

Invariants:
    - append() runs after the state commit, in its own commit
    - An append failure rolls back the event row and re-raises; the handler base
      logs it without failing the already committed operation

Design Decisions:
    - Same session as the operation: the sink never sees uncommitted state because
      the unit of work has already committed when append() is called
"""

import logging

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from stakepool.core.events import LedgerEvent
from stakepool.models.ledger_event import LedgerEventRow

logger = logging.getLogger(__name__)


class DatabaseEventSink:
    """Appends committed events to ledger_events."""

    def __init__(self, db: AsyncSession):
        self.db = db

    async def append(self, event: LedgerEvent) -> None:
        payload = event.payload()
        self.db.add(LedgerEventRow(
            kind=event.kind.value,
            server_id=payload.get("id"),
            payload=payload,
        ))
        try:
            await self.db.commit()
        except Exception as e:
            await self.db.rollback()
            logger.error(
                "Failed to append event %s: %s", event.kind.value, e,
                extra={"event_kind": event.kind.value},
            )
            raise
        logger.info(
            "Event %s appended", event.kind.value,
            extra={"event_kind": event.kind.value, "server_id": payload.get("id")},
        )

    async def list_events(
        self,
        server_id: str | None = None,
        after: int = 0,
        limit: int = 100,
    ) -> list[dict]:
        query = (
            select(LedgerEventRow)
            .where(LedgerEventRow.sequence > after)
            .order_by(LedgerEventRow.sequence)
            .limit(limit)
        )
        if server_id:
            query = query.where(LedgerEventRow.server_id == server_id)
        result = await self.db.execute(query)
        return [
            {
                "sequence": row.sequence,
                "kind": row.kind,
                "payload": row.payload,
                "created_at": row.created_at.isoformat(),
            }
            for row in result.scalars().all()
        ]
