"""Checked Math — tests for u64 bounded arithmetic.

Tests cover:
    - add/sub/mul inside the range return exact results
    - overflow past U64_MAX and underflow below zero raise ArithmeticOverflowError
    - to_base_units scales by 10**decimals
"""

import pytest

from stakepool.core.checked_math import (
    checked_add, checked_sub, checked_mul, to_base_units,
)
from stakepool.core.domain_types import U64_MAX
from stakepool.core.errors import ArithmeticOverflowError


def test_checked_add_within_range():
    assert checked_add(9500, 500) == 10000


def test_checked_add_at_upper_bound():
    assert checked_add(U64_MAX - 1, 1) == U64_MAX


def test_checked_add_overflow_raises():
    with pytest.raises(ArithmeticOverflowError) as exc:
        checked_add(U64_MAX, 1)
    assert exc.value.code == "ARITHMETIC_OVERFLOW"


def test_checked_sub_to_zero():
    assert checked_sub(1000, 1000) == 0


def test_checked_sub_underflow_raises():
    with pytest.raises(ArithmeticOverflowError):
        checked_sub(0, 1)


def test_checked_mul_overflow_raises():
    with pytest.raises(ArithmeticOverflowError):
        checked_mul(2**32, 2**32)


def test_to_base_units_nine_decimals():
    assert to_base_units(1000, 9) == 1_000_000_000_000


def test_to_base_units_overflow_raises():
    with pytest.raises(ArithmeticOverflowError):
        to_base_units(U64_MAX, 9)
