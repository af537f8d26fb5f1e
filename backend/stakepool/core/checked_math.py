"""Checked Arithmetic — u64 add/sub/mul that never wrap.

Invariants:
    - Every result lies in [0, U64_MAX]; anything else raises ArithmeticOverflowError
    - Underflow (negative result) is reported as overflow, same as the upper bound
"""

from stakepool.core.domain_types import U64_MAX
from stakepool.core.errors import ArithmeticOverflowError


def _bounded(value: int, operation: str) -> int:
    if value < 0 or value > U64_MAX:
        raise ArithmeticOverflowError(operation)
    return value


def checked_add(a: int, b: int) -> int:
    return _bounded(a + b, "add")


def checked_sub(a: int, b: int) -> int:
    return _bounded(a - b, "sub")


def checked_mul(a: int, b: int) -> int:
    return _bounded(a * b, "mul")


def to_base_units(tokens: int, decimals: int) -> int:
    """Whole tokens -> base units (tokens * 10**decimals), checked."""
    return checked_mul(tokens, 10**decimals)
