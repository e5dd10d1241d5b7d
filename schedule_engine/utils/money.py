"""Conversion between decimal currency amounts and integer cents"""

from decimal import Decimal, InvalidOperation, ROUND_HALF_UP
from typing import Union

from schedule_engine.domain.exceptions import InvalidArgumentError

CENT = Decimal("0.01")


def to_cents(amount: Union[Decimal, int, float, str]) -> int:
    """
    Convert a currency amount to integer cents, rounding half-up.

    Floats go through str() so 0.1 becomes 10 cents, not 9.
    """
    try:
        value = amount if isinstance(amount, Decimal) else Decimal(str(amount))
        return int((value / CENT).quantize(Decimal("1"), rounding=ROUND_HALF_UP))
    except (InvalidOperation, ValueError) as e:
        raise InvalidArgumentError(f"Invalid amount: {amount!r}") from e


def from_cents(amount_cents: int) -> Decimal:
    return (Decimal(amount_cents) * CENT).quantize(CENT)


def divide_half_up(amount_cents: int, parts: int) -> int:
    """Integer division of cents rounded half away from zero"""
    quotient = Decimal(amount_cents) / Decimal(parts)
    return int(quotient.quantize(Decimal("1"), rounding=ROUND_HALF_UP))
