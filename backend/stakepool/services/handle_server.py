"""Server Handlers — add_server, update_server, remove_server.

Invariants:
    - add_server opens the server's vault account in the same transaction
    - Follows impureim sandwich: read records -> pure enforce_server -> persist
"""

import logging

from stakepool.core.address import server_address, vault_address
from stakepool.core.domain_types import Address, ServerId
from stakepool.core.enforce_server import register_server, remove_server, rename_server
from stakepool.core.ledger_state import ServerInfo
from stakepool.services.ledger_handlers import LedgerHandlers
from stakepool.services.unit_of_work import atomic

logger = logging.getLogger(__name__)


class ServerHandlers(LedgerHandlers):
    """Server registration lifecycle."""

    async def add_server(
        self, owner: Address, server_id: ServerId, name: str,
    ) -> ServerInfo:
        async with atomic(self.db, "add_server", server_id, owner):
            main = await self.repo.get_main()
            existing = await self.repo.get_server(server_id)
            transition = register_server(
                main, existing, owner, server_id, name,
                self.settings.max_name_bytes, self.settings.max_server_id_bytes,
            )
            await self._apply(transition)
            await self.vault.open_account(
                vault_address(server_id), server_address(server_id),
            )
        logger.info(
            "Server registered",
            extra={"operation": "add_server", "server_id": server_id, "caller": owner},
        )
        await self._emit(transition)
        return transition.server

    async def update_server(
        self, owner: Address, server_id: ServerId, new_name: str,
    ) -> ServerInfo:
        async with atomic(self.db, "update_server", server_id, owner):
            main = await self.repo.get_main()
            server = await self.repo.get_server(server_id)
            transition = rename_server(
                main, server, owner, server_id, new_name,
                self.settings.max_name_bytes,
            )
            await self._apply(transition)
        logger.info(
            "Server renamed",
            extra={"operation": "update_server", "server_id": server_id, "caller": owner},
        )
        await self._emit(transition)
        return transition.server

    async def remove_server(self, owner: Address, server_id: ServerId) -> ServerInfo:
        async with atomic(self.db, "remove_server", server_id, owner):
            main = await self.repo.get_main()
            server = await self.repo.get_server(server_id)
            transition = remove_server(main, server, owner, server_id)
            await self._apply(transition)
        logger.info(
            "Server removed",
            extra={"operation": "remove_server", "server_id": server_id, "caller": owner},
        )
        await self._emit(transition)
        return transition.server
