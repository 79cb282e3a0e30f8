"""Integer-cent currency helpers.

All engine arithmetic is carried in integer cents; conversion to and from
decimal amounts happens at the catalog load and the HTTP boundary only.
"""

from decimal import ROUND_HALF_UP, Decimal, InvalidOperation
from typing import Any

_CENT = Decimal("0.01")


def to_cents(value: Any) -> int:
    """Convert a decimal amount (``12.5``, ``"12.50"``, ``Decimal``) to cents, rounding half up."""
    if isinstance(value, bool):
        raise ValueError("price must be a number")
    try:
        amount = Decimal(str(value))
    except (InvalidOperation, ValueError) as exc:
        raise ValueError(f"price {value!r} is not a number") from exc
    if not amount.is_finite():
        raise ValueError(f"price {value!r} is not a number")
    try:
        cents = amount.quantize(_CENT, rounding=ROUND_HALF_UP) * 100
    except InvalidOperation as exc:
        raise ValueError(f"price {value!r} is out of range") from exc
    return int(cents.to_integral_value())


def percent_of(cents: int, pct: int | float | Decimal) -> int:
    """``cents * pct / 100`` rounded half up to a whole cent."""
    amount = Decimal(cents) * Decimal(str(pct)) / Decimal(100)
    return int(amount.quantize(Decimal(1), rounding=ROUND_HALF_UP))


def cents_to_amount(cents: int) -> float:
    return float((Decimal(cents) / 100).quantize(_CENT))


def format_cents(cents: int) -> str:
    """``2000`` -> ``"$20"``, ``1250`` -> ``"$12.50"``."""
    if cents % 100 == 0:
        return f"${cents // 100}"
    return f"${Decimal(cents) / 100:.2f}"
