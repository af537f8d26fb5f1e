"""Error Hierarchy — typed, categorized exceptions for every StakePool failure mode.

Invariants:
    - Every error has a code (str), category (ErrorCategory), severity (ErrorSeverity)
    - Domain errors (400-level) are raised before any vault call or state write
    - Infrastructure errors (500-level) abort the unit of work
    - to_response() produces the REST envelope; no internal details leaked

Design Decisions:
    - Single hierarchy with StakePoolError base: FastAPI global handler catches all
    - ErrorContext as dataclass: operation/server/caller for observability without
      coupling to the logging framework
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any
from datetime import datetime, timezone


class ErrorSeverity(str, Enum):
    """Error severity for observability and client handling."""
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"
    CRITICAL = "critical"


class ErrorCategory(str, Enum):
    """High-level error categories for routing and handling."""
    VALIDATION = "validation"
    AUTHORIZATION = "authorization"
    BUSINESS_RULE = "business_rule"
    RESOURCE_NOT_FOUND = "resource_not_found"
    CONFLICT = "conflict"
    ARITHMETIC = "arithmetic"
    VAULT = "vault"
    DATABASE = "database"


@dataclass
class ErrorContext:
    """Rich context for error observability and debugging."""
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    operation: str | None = None
    server_id: str | None = None
    caller: str | None = None
    debug_info: dict[str, Any] | None = None


class StakePoolError(Exception):
    """Base exception for all StakePool errors."""

    def __init__(
        self,
        message: str,
        code: str,
        category: ErrorCategory,
        severity: ErrorSeverity = ErrorSeverity.ERROR,
        context: ErrorContext | None = None,
        http_status: int = 500,
    ):
        super().__init__(message)
        self.message = message
        self.code = code
        self.category = category
        self.severity = severity
        self.context = context or ErrorContext()
        self.http_status = http_status

    def to_response(self) -> dict:
        """Convert to standardized REST error response."""
        return {
            "error": {
                "code": self.code,
                "message": self.message,
                "category": self.category.value,
                "severity": self.severity.value,
                "timestamp": self.context.timestamp.isoformat(),
                "context": {
                    "operation": self.context.operation,
                    "server_id": self.context.server_id,
                },
            }
        }


# ─── Registry Errors ────────────────────────────────────────────

class AlreadyInitializedError(StakePoolError):
    """initialize_main called on an initialized registry."""
    def __init__(self, context: ErrorContext | None = None):
        super().__init__(
            "Registry is already initialized.",
            "ALREADY_INITIALIZED", ErrorCategory.CONFLICT,
            ErrorSeverity.ERROR, context, 409,
        )


class InvalidArgumentError(StakePoolError):
    """Malformed operation argument (limits, server id)."""
    def __init__(self, message: str, argument: str, context: ErrorContext | None = None):
        super().__init__(
            message, "INVALID_ARGUMENT", ErrorCategory.VALIDATION,
            ErrorSeverity.ERROR, context, 400,
        )
        self.argument = argument


# ─── Identity & Lookup Errors ───────────────────────────────────

class UnauthorizedError(StakePoolError):
    """Caller is not the stored owner/delegator of the record."""
    def __init__(self, caller: str, context: ErrorContext | None = None):
        super().__init__(
            f"Caller '{caller}' is not allowed to perform this action.",
            "UNAUTHORIZED", ErrorCategory.AUTHORIZATION,
            ErrorSeverity.ERROR, context, 403,
        )
        self.caller = caller


class AccountNotFoundError(StakePoolError):
    """Addressed record does not exist."""
    def __init__(
        self, account_type: str, account_id: str, context: ErrorContext | None = None,
    ):
        super().__init__(
            f"{account_type} '{account_id}' not found",
            "ACCOUNT_NOT_FOUND", ErrorCategory.RESOURCE_NOT_FOUND,
            ErrorSeverity.ERROR, context, 404,
        )
        self.account_type = account_type
        self.account_id = account_id


# ─── Server Errors ──────────────────────────────────────────────

class DuplicateServerError(StakePoolError):
    """Derived server address is already occupied."""
    def __init__(self, server_id: str, context: ErrorContext | None = None):
        super().__init__(
            f"Server '{server_id}' is already registered.",
            "DUPLICATE_SERVER", ErrorCategory.CONFLICT,
            ErrorSeverity.ERROR, context, 409,
        )
        self.server_id = server_id


class InvalidNameError(StakePoolError):
    """Server name empty or longer than the byte bound."""
    def __init__(self, max_bytes: int, context: ErrorContext | None = None):
        super().__init__(
            f"Server name must be 1-{max_bytes} bytes.",
            "INVALID_NAME", ErrorCategory.VALIDATION,
            ErrorSeverity.ERROR, context, 400,
        )
        self.max_bytes = max_bytes


class NonZeroBalanceError(StakePoolError):
    """Removal attempted while stake or delegation is still locked."""
    def __init__(self, staked: int, delegated: int, context: ErrorContext | None = None):
        super().__init__(
            f"Server still holds stake={staked} delegated={delegated}.",
            "NON_ZERO_BALANCE", ErrorCategory.BUSINESS_RULE,
            ErrorSeverity.ERROR, context, 409,
        )
        self.staked = staked
        self.delegated = delegated


class ServerInactiveError(StakePoolError):
    """Delegation attempted against a server below the stake floor."""
    def __init__(self, server_id: str, context: ErrorContext | None = None):
        super().__init__(
            f"Server '{server_id}' is not active.",
            "SERVER_INACTIVE", ErrorCategory.BUSINESS_RULE,
            ErrorSeverity.ERROR, context, 409,
        )
        self.server_id = server_id


# ─── Amount Errors ──────────────────────────────────────────────

class InvalidAmountError(StakePoolError):
    """Zero amount passed to a balance-moving operation."""
    def __init__(self, context: ErrorContext | None = None):
        super().__init__(
            "Amount must be greater than zero.",
            "INVALID_AMOUNT", ErrorCategory.VALIDATION,
            ErrorSeverity.ERROR, context, 400,
        )


class StakeExceedsMaxError(StakePoolError):
    """Deposit would push stake above max_stake."""
    def __init__(self, resulting: int, maximum: int, context: ErrorContext | None = None):
        super().__init__(
            f"Resulting stake {resulting} exceeds maximum {maximum}.",
            "STAKE_EXCEEDS_MAX", ErrorCategory.BUSINESS_RULE,
            ErrorSeverity.ERROR, context, 400,
        )
        self.resulting = resulting
        self.maximum = maximum


class StakeBelowMinError(StakePoolError):
    """Operation would leave stake strictly between zero and min_stake."""
    def __init__(self, resulting: int, minimum: int, context: ErrorContext | None = None):
        super().__init__(
            f"Resulting stake {resulting} is below minimum {minimum}.",
            "STAKE_BELOW_MIN", ErrorCategory.BUSINESS_RULE,
            ErrorSeverity.ERROR, context, 400,
        )
        self.resulting = resulting
        self.minimum = minimum


class InsufficientFundsError(StakePoolError):
    """Requested amount exceeds the available balance."""
    def __init__(self, requested: int, available: int, context: ErrorContext | None = None):
        super().__init__(
            f"Requested {requested} but only {available} available.",
            "INSUFFICIENT_FUNDS", ErrorCategory.BUSINESS_RULE,
            ErrorSeverity.ERROR, context, 400,
        )
        self.requested = requested
        self.available = available


class BelowMinDelegationError(StakePoolError):
    """Delegation deposit leaves the record below min_delegation."""
    def __init__(self, resulting: int, minimum: int, context: ErrorContext | None = None):
        super().__init__(
            f"Delegation {resulting} is below minimum {minimum}.",
            "BELOW_MIN_DELEGATION", ErrorCategory.BUSINESS_RULE,
            ErrorSeverity.ERROR, context, 400,
        )
        self.resulting = resulting
        self.minimum = minimum


class DelegationBelowMinError(StakePoolError):
    """Delegation withdrawal leaves a nonzero remainder below min_delegation."""
    def __init__(self, resulting: int, minimum: int, context: ErrorContext | None = None):
        super().__init__(
            f"Remaining delegation {resulting} is below minimum {minimum}.",
            "DELEGATION_BELOW_MIN", ErrorCategory.BUSINESS_RULE,
            ErrorSeverity.ERROR, context, 400,
        )
        self.resulting = resulting
        self.minimum = minimum


class DelegationExceedsMaxError(StakePoolError):
    """Delegation deposit pushes a single record above max_delegation."""
    def __init__(self, resulting: int, maximum: int, context: ErrorContext | None = None):
        super().__init__(
            f"Delegation {resulting} exceeds maximum {maximum}.",
            "DELEGATION_EXCEEDS_MAX", ErrorCategory.BUSINESS_RULE,
            ErrorSeverity.ERROR, context, 400,
        )
        self.resulting = resulting
        self.maximum = maximum


class ArithmeticOverflowError(StakePoolError):
    """Checked u64 arithmetic overflowed or underflowed."""
    def __init__(self, operation: str, context: ErrorContext | None = None):
        super().__init__(
            f"Arithmetic overflow in {operation}.",
            "ARITHMETIC_OVERFLOW", ErrorCategory.ARITHMETIC,
            ErrorSeverity.ERROR, context, 400,
        )
        self.operation = operation


# ─── Vault Errors ───────────────────────────────────────────────

class InvalidAccountError(StakePoolError):
    """Token account missing on either side of a transfer."""
    def __init__(self, address: str, context: ErrorContext | None = None):
        super().__init__(
            f"Token account '{address}' does not exist.",
            "INVALID_ACCOUNT", ErrorCategory.VAULT,
            ErrorSeverity.ERROR, context, 400,
        )
        self.address = address


class InvalidMintError(StakePoolError):
    """Token account holds a mint other than the accepted one."""
    def __init__(self, mint: str, context: ErrorContext | None = None):
        super().__init__(
            f"Mint '{mint}' does not match the accepted mint.",
            "INVALID_MINT", ErrorCategory.VAULT,
            ErrorSeverity.ERROR, context, 400,
        )
        self.mint = mint


# ─── Infrastructure Errors (500-level) ──────────────────────────

class DatabaseError(StakePoolError):
    """Database operation failed."""
    def __init__(self, message: str, operation: str, context: ErrorContext | None = None):
        super().__init__(
            f"Database {operation} failed: {message}",
            "DATABASE_ERROR", ErrorCategory.DATABASE,
            ErrorSeverity.CRITICAL, context, 503,
        )
        self.operation = operation
