"""Domain Types — rich types that replace bare primitives across the codebase.

Invariants:
    - Address is a hex SHA-256 digest produced by core/address.py, or a caller identity
    - Amount is a non-negative integer in base units, bounded by U64_MAX
    - All valid states encoded as Enums — no raw string matching

Design Decisions:
    - NewType over dataclass wrappers: zero runtime cost, full type-checker support
    - str Enums: serialize to JSON without custom encoders
"""

from enum import Enum
from typing import NewType


# ─── Identity Types ──────────────────────────────────────────────

Address = NewType("Address", str)
ServerId = NewType("ServerId", str)


# ─── Value Types ─────────────────────────────────────────────────

Amount = NewType("Amount", int)   # 0..U64_MAX base units

U64_MAX: int = 2**64 - 1


# ─── Enums ───────────────────────────────────────────────────────

class Namespace(str, Enum):
    """Address derivation namespaces — one per persisted record kind."""
    MAIN = "main"
    SERVER = "server"
    DELEGATION = "delegation"
    VAULT = "vault"
    WALLET = "wallet"


class ServerStatus(str, Enum):
    """Server lifecycle states derived from stake and removal flag."""
    REGISTERED = "registered"
    ACTIVE = "active"
    REMOVED = "removed"


class EventKind(str, Enum):
    """Event names appended to the ledger event log."""
    MAIN_INITIALIZED = "MainInitialized"
    SERVER_REGISTERED = "ServerRegistered"
    SERVER_UPDATED = "ServerUpdated"
    SERVER_REMOVED = "ServerRemoved"
    DEPOSITED = "Deposited"
    WITHDRAWN = "Withdrawn"
    DELEGATED = "Delegated"
    UNDELEGATED = "Undelegated"
