"""Tests for cl_common.fixed_point: normalization and checked arithmetic."""

import pytest

from src.cl_common.errors import ArithmeticOverflowError
from src.cl_common.fixed_point import (
    CANONICAL_PRECISION,
    CANONICAL_UNIT,
    MAX_PRECISION,
    MAX_UINT256,
    checked_mul,
    format_fixed,
    normalize,
    to_canonical,
    usd_display,
)


class TestNormalize:
    def test_scales_up_from_fewer_digits(self) -> None:
        # 8-decimal feed: 2000.00000000 → 2000 * 10**18
        assert normalize(2000 * 10**8, 8) == 2000 * 10**18

    def test_scales_down_from_more_digits(self) -> None:
        assert normalize(2000 * 10**20, 20) == 2000 * 10**18

    def test_scale_down_floors(self) -> None:
        # 1.999...9 at 20 digits loses the last two digits
        assert normalize(199, 20) == 1
        assert normalize(99, 20) == 0

    def test_equal_precision_unchanged(self) -> None:
        assert normalize(123456789, CANONICAL_PRECISION) == 123456789

    def test_zero_precision(self) -> None:
        assert normalize(2000, 0) == 2000 * CANONICAL_UNIT

    def test_value_preserved_across_precisions(self) -> None:
        # raw/10**d == normalized/10**18 for every d below canonical
        for d in range(0, CANONICAL_PRECISION):
            raw = 314159 * 10**d
            assert normalize(raw, d) * 10**d == raw * CANONICAL_UNIT

    def test_custom_target_precision(self) -> None:
        assert normalize(5, 2, to_precision=4) == 500

    def test_negative_value_raises(self) -> None:
        with pytest.raises(ValueError, match="non-negative"):
            normalize(-1, 8)

    def test_negative_precision_raises(self) -> None:
        with pytest.raises(ValueError, match="non-negative"):
            normalize(1, -8)

    def test_precision_above_bound_raises(self) -> None:
        assert normalize(10**MAX_PRECISION, MAX_PRECISION) == CANONICAL_UNIT
        with pytest.raises(ValueError, match="at most"):
            normalize(1, MAX_PRECISION + 1)

    def test_overflow_raises(self) -> None:
        with pytest.raises(ArithmeticOverflowError) as exc_info:
            normalize(MAX_UINT256 // 10, 0)
        assert exc_info.value.code == 9001

    def test_realistic_magnitude_does_not_overflow(self) -> None:
        # rates up to ~10**12 USD at canonical precision
        assert normalize(10**12 * 10**8, 8) == 10**30


class TestCheckedMul:
    def test_basic(self) -> None:
        assert checked_mul(5 * CANONICAL_UNIT, CANONICAL_UNIT) == 5 * 10**36

    def test_at_bound(self) -> None:
        assert checked_mul(MAX_UINT256, 1) == MAX_UINT256

    def test_past_bound_raises(self) -> None:
        with pytest.raises(ArithmeticOverflowError):
            checked_mul(2**128, 2**128)

    def test_negative_raises(self) -> None:
        with pytest.raises(ValueError):
            checked_mul(-1, 5)


class TestToCanonical:
    def test_whole_units(self) -> None:
        assert to_canonical(1) == 10**18
        assert to_canonical(5) == 5 * 10**18


class TestFormatFixed:
    def test_fraction(self) -> None:
        assert format_fixed(500000000000000) == "0.0005"

    def test_whole(self) -> None:
        assert format_fixed(2000 * 10**18) == "2,000"

    def test_zero(self) -> None:
        assert format_fixed(0) == "0"

    def test_negative(self) -> None:
        assert format_fixed(-15, 1) == "-1.5"

    def test_zero_precision(self) -> None:
        assert format_fixed(1234, 0) == "1,234"


class TestUsdDisplay:
    def test_basic(self) -> None:
        assert usd_display(5 * 10**18) == "$5.00"

    def test_large(self) -> None:
        assert usd_display(1500 * 10**18) == "$1,500.00"

    def test_truncates_below_cent(self) -> None:
        assert usd_display(10**18 + 10**16 - 1) == "$1.00"
