"""Unit tests for raw <-> human amount conversion."""

from __future__ import annotations

from decimal import Decimal

import pytest

from cherrydapp.chain.units import to_human, to_raw, wei_to_ether
from cherrydapp.errors import PrecisionError


class TestToRaw:
    """Tests for to_raw."""

    def test_whole_amount(self) -> None:
        assert to_raw(Decimal("3"), 6) == 3_000_000

    def test_fractional_amount(self) -> None:
        assert to_raw("1.5", 18) == 1_500_000_000_000_000_000

    def test_exactly_max_fractional_digits(self) -> None:
        assert to_raw("1.23", 2) == 123

    def test_trailing_zeros_beyond_decimals_are_fine(self) -> None:
        assert to_raw("1.2300", 2) == 123

    def test_too_many_fractional_digits(self) -> None:
        with pytest.raises(PrecisionError):
            to_raw(Decimal("1.2345"), 2)

    def test_float_with_too_many_digits(self) -> None:
        with pytest.raises(PrecisionError):
            to_raw(1.2345, 2)

    def test_float_uses_shortest_repr(self) -> None:
        assert to_raw(1.23, 2) == 123

    def test_int_input(self) -> None:
        assert to_raw(42, 0) == 42

    def test_zero_decimals_rejects_fraction(self) -> None:
        with pytest.raises(PrecisionError):
            to_raw("0.5", 0)

    def test_beyond_context_precision(self) -> None:
        # 78 digits: more than the default 28-digit decimal context
        assert to_raw(str(2**256 - 1), 0) == 2**256 - 1
        assert to_raw(Decimal(2**256 - 1), 0) == 2**256 - 1

    @pytest.mark.parametrize("bad", ["abc", "", "1.2.3", None, True])
    def test_not_a_number(self, bad: object) -> None:
        with pytest.raises(PrecisionError):
            to_raw(bad, 18)  # type: ignore[arg-type]

    @pytest.mark.parametrize("bad", ["NaN", "Infinity", float("inf")])
    def test_non_finite(self, bad: object) -> None:
        with pytest.raises(PrecisionError):
            to_raw(bad, 18)  # type: ignore[arg-type]

    def test_negative_decimals(self) -> None:
        with pytest.raises(PrecisionError):
            to_raw("1", -1)


class TestToHuman:
    """Tests for to_human."""

    def test_shift(self) -> None:
        assert to_human(123, 2) == Decimal("1.23")

    def test_small_raw(self) -> None:
        assert to_human(1, 18) == Decimal("0.000000000000000001")

    def test_zero(self) -> None:
        assert to_human(0, 6) == 0

    def test_large_raw_is_exact(self) -> None:
        raw = 2**256 - 1
        human = to_human(raw, 18)
        assert format(human, "f") == f"{raw // 10**18}.{raw % 10**18:018d}"

    def test_wei_to_ether(self) -> None:
        assert wei_to_ether(2 * 10**18 + 5 * 10**17) == Decimal("2.5")


class TestRoundTrip:
    """to_human(to_raw(x, d), d) == x for exactly representable x."""

    @pytest.mark.parametrize(
        "human, decimals",
        [
            ("0", 0),
            ("1", 18),
            ("0.000001", 6),
            ("123456789.123456789", 9),
            ("31.5", 1),
            ("115792089237316195423570985008687907853269984665640564039457.584007913129639935", 18),
        ],
    )
    def test_round_trip(self, human: str, decimals: int) -> None:
        value = Decimal(human)
        assert to_human(to_raw(value, decimals), decimals) == value
