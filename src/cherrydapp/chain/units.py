"""Exact conversion between raw integer token units and human decimal amounts."""

from __future__ import annotations

from decimal import Decimal, InvalidOperation
from typing import Union

from ..errors import PrecisionError

HumanAmount = Union[Decimal, int, float, str]

ETHER_DECIMALS = 18


def _as_decimal(value: HumanAmount) -> Decimal:
    if isinstance(value, bool):
        raise PrecisionError(f"Not an amount: {value!r}")
    if isinstance(value, float):
        # Floats go through their shortest repr so 1.23 stays 1.23.
        value = repr(value)
    try:
        result = Decimal(value)
    except (InvalidOperation, TypeError, ValueError) as exc:
        raise PrecisionError(f"Not a decimal amount: {value!r}") from exc
    if not result.is_finite():
        raise PrecisionError(f"Amount must be finite: {value!r}")
    return result


def _shift(value: Decimal, places: int) -> Decimal:
    """Move the decimal point without touching the context precision."""
    sign, digits, exponent = value.as_tuple()
    return Decimal((sign, digits, exponent + places))


def to_raw(human: HumanAmount, decimals: int) -> int:
    """
    Convert a human amount to raw integer units.

    Raises:
        PrecisionError: If the amount has more fractional digits than
            ``decimals`` allows
    """
    if decimals < 0:
        raise PrecisionError(f"decimals must be non-negative, got {decimals}")
    scaled = _shift(_as_decimal(human), decimals)
    if scaled != scaled.to_integral_value():
        raise PrecisionError(
            f"{human} has more than {decimals} fractional digit(s)"
        )
    return int(scaled)


def to_human(raw: int, decimals: int) -> Decimal:
    if decimals < 0:
        raise PrecisionError(f"decimals must be non-negative, got {decimals}")
    return _shift(Decimal(raw), -decimals)


def wei_to_ether(wei: int) -> Decimal:
    return to_human(wei, ETHER_DECIMALS)
