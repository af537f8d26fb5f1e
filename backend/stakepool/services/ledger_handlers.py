"""Ledger Handler Base — shared wiring for the operation handler classes.

Invariants:
    - _apply persists a Transition inside the caller's unit of work:
      vault transfer first, then records (a failed transfer leaves nothing to roll back)
    - _emit runs strictly after commit and never raises: the operation has
      already happened, so a lost event is logged at ERROR instead of failing it
"""

import logging

from sqlalchemy.ext.asyncio import AsyncSession

from stakepool.config import Settings
from stakepool.core.ledger_state import Transition
from stakepool.core.repository_protocols import EventSink, LedgerRepository, TokenVault
from stakepool.infrastructure.event_sink import DatabaseEventSink
from stakepool.infrastructure.ledger_repository import SqlLedgerRepository
from stakepool.infrastructure.token_vault import SqlTokenVault

logger = logging.getLogger(__name__)


class LedgerHandlers:
    """Base for handler classes — one repository, vault and sink per session."""

    def __init__(self, db: AsyncSession, settings: Settings):
        self.db = db
        self.settings = settings
        self.repo: LedgerRepository = SqlLedgerRepository(db)
        self.vault: TokenVault = SqlTokenVault(db, settings.accepted_mint)
        self.sink: EventSink = DatabaseEventSink(db)

    async def _apply(self, transition: Transition) -> None:
        if transition.transfer is not None:
            t = transition.transfer
            await self.vault.transfer(t.source, t.destination, t.amount, t.authority)
        await self.repo.save_main(transition.main)
        if transition.server is not None:
            await self.repo.save_server(transition.server)
        if transition.delegation is not None:
            await self.repo.save_delegation(transition.delegation)

    async def _emit(self, transition: Transition) -> None:
        event = transition.event
        if event is None:
            return
        try:
            await self.sink.append(event)
        except Exception:
            logger.error(
                "Event %s lost after commit", event.kind.value, exc_info=True,
                extra={
                    "event_kind": event.kind.value,
                    "server_id": event.payload().get("id"),
                },
            )
