"""Server Enforcement — registration, rename, and removal rules.

Invariants:
    - Server id is 1..MAX_SERVER_ID_BYTES UTF-8 bytes; name is 1..MAX_NAME_BYTES
    - A derived server address is occupied forever once registered (removed included)
    - Removal only when staked_amount == 0 and delegated_total == 0
    - update/remove require caller == stored owner

Design Decisions:
    - Removal is soft (removed=True): the record keeps the id unique and the
      history locatable by address
"""

from dataclasses import replace

from stakepool.core.checked_math import checked_add, checked_sub
from stakepool.core.domain_types import Address, ServerId
from stakepool.core.errors import (
    AccountNotFoundError, DuplicateServerError, InvalidArgumentError,
    InvalidNameError, NonZeroBalanceError, UnauthorizedError,
)
from stakepool.core.events import ServerRegistered, ServerRemoved, ServerUpdated
from stakepool.core.ledger_state import MainState, ServerInfo, Transition
from stakepool.core.enforce_registry import require_initialized


MAX_NAME_BYTES: int = 32
MAX_SERVER_ID_BYTES: int = 65


def check_name(name: str, max_bytes: int = MAX_NAME_BYTES) -> None:
    size = len(name.encode("utf-8"))
    if not name.strip() or size > max_bytes:
        raise InvalidNameError(max_bytes)


def check_server_id(server_id: str, max_bytes: int = MAX_SERVER_ID_BYTES) -> None:
    size = len(server_id.encode("utf-8"))
    if size == 0 or size > max_bytes:
        raise InvalidArgumentError(
            f"Server id must be 1-{max_bytes} bytes.", "server_id",
        )


def require_server(server: ServerInfo | None, server_id: ServerId) -> ServerInfo:
    """Absent and removed servers are both reported as not found."""
    if server is None or server.removed:
        raise AccountNotFoundError("Server", server_id)
    return server


def require_owner(server: ServerInfo, caller: Address) -> None:
    if server.owner != caller:
        raise UnauthorizedError(caller)


def register_server(
    main: MainState,
    existing: ServerInfo | None,
    owner: Address,
    server_id: ServerId,
    name: str,
    max_name_bytes: int = MAX_NAME_BYTES,
    max_server_id_bytes: int = MAX_SERVER_ID_BYTES,
) -> Transition:
    require_initialized(main)
    check_server_id(server_id, max_server_id_bytes)
    if existing is not None:
        raise DuplicateServerError(server_id)
    check_name(name, max_name_bytes)

    server = ServerInfo(id=server_id, owner=owner, name=name)
    new_main = replace(main, server_count=checked_add(main.server_count, 1))
    return Transition(
        main=new_main,
        server=server,
        event=ServerRegistered(id=server_id, owner=owner, name=name),
    )


def rename_server(
    main: MainState,
    server: ServerInfo | None,
    caller: Address,
    server_id: ServerId,
    new_name: str,
    max_name_bytes: int = MAX_NAME_BYTES,
) -> Transition:
    require_initialized(main)
    server = require_server(server, server_id)
    require_owner(server, caller)
    check_name(new_name, max_name_bytes)

    return Transition(
        main=main,
        server=replace(server, name=new_name),
        event=ServerUpdated(id=server_id, name=new_name),
    )


def remove_server(
    main: MainState,
    server: ServerInfo | None,
    caller: Address,
    server_id: ServerId,
) -> Transition:
    require_initialized(main)
    server = require_server(server, server_id)
    require_owner(server, caller)
    if server.staked_amount != 0 or server.delegated_total != 0:
        raise NonZeroBalanceError(server.staked_amount, server.delegated_total)

    new_main = replace(main, server_count=checked_sub(main.server_count, 1))
    return Transition(
        main=new_main,
        server=replace(server, active=False, removed=True),
        event=ServerRemoved(id=server_id),
    )
