"""Exact fixed-point currency value.

Money wraps a Decimal that is always quantized to cents with ROUND_HALF_UP.
Every operation returns a new value, so repeated sums are reproducible and
independent of the order in which they are applied.
"""

from __future__ import annotations

from dataclasses import dataclass
from decimal import ROUND_HALF_UP, Decimal, InvalidOperation
from typing import Any, Iterable

import simplejson

from boojet.domain.errors import InvalidAmountError

CENTS = Decimal("0.01")
ROUNDING = ROUND_HALF_UP
# Largest magnitude the store keeps exactly: signed 64-bit count of cents
MAX_STORED_AMOUNT = Decimal(2**63 - 1).scaleb(-2)


def _to_decimal(value: Any) -> Decimal:
    if value is None:
        return Decimal(0)
    if isinstance(value, Money):
        return value.amount
    if isinstance(value, bool):
        raise InvalidAmountError(f"Cannot use boolean {value!r} as an amount")
    if isinstance(value, Decimal):
        result = value
    elif isinstance(value, int):
        result = Decimal(value)
    elif isinstance(value, str):
        try:
            result = Decimal(value.strip())
        except InvalidOperation:
            raise InvalidAmountError(f"Could not parse amount '{value}'") from None
    else:
        # floats are rejected: binary fractions are not exact cents
        raise InvalidAmountError(
            f"Unsupported amount type {type(value).__name__}; use Decimal or str"
        )
    if not result.is_finite():
        raise InvalidAmountError(f"Amount must be a finite number, got '{value}'")
    return result


@dataclass(frozen=True, order=True)
class Money:
    """Immutable two-decimal currency amount."""

    amount: Decimal = Decimal("0.00")

    def __post_init__(self) -> None:
        normalized = _to_decimal(self.amount).quantize(CENTS, rounding=ROUNDING)
        object.__setattr__(self, "amount", normalized)

    @classmethod
    def of(cls, value: Decimal | str | int | "Money" | None) -> "Money":
        """Build Money from a decimal, decimal string or integer.

        ``None`` normalizes to zero.

        Raises:
            InvalidAmountError: If the value is not an exact decimal number
        """
        return cls(_to_decimal(value))

    @classmethod
    def zero(cls) -> "Money":
        return cls(Decimal(0))

    def add(self, other: "Money") -> "Money":
        return Money(self.amount + other.amount)

    def subtract(self, other: "Money") -> "Money":
        return Money(self.amount - other.amount)

    def negate(self) -> "Money":
        return Money(-self.amount)

    def __add__(self, other: Any) -> "Money":
        if not isinstance(other, Money):
            return NotImplemented
        return self.add(other)

    def __sub__(self, other: Any) -> "Money":
        if not isinstance(other, Money):
            return NotImplemented
        return self.subtract(other)

    def __neg__(self) -> "Money":
        return self.negate()

    def is_positive(self) -> bool:
        return self.amount > 0

    def is_negative(self) -> bool:
        return self.amount < 0

    def is_zero(self) -> bool:
        return self.amount == 0

    @staticmethod
    def compare(a: "Money", b: "Money") -> int:
        """Return -1, 0 or 1 ordering ``a`` against ``b`` by value."""
        if a.amount < b.amount:
            return -1
        if a.amount > b.amount:
            return 1
        return 0

    def format(self) -> str:
        """Format for display, e.g. ``$1,234.56`` or ``-$5.50``."""
        sign = "-" if self.is_negative() else ""
        return f"{sign}${abs(self.amount):,.2f}"

    def to_json(self) -> Decimal:
        """Wire value: the plain decimal number."""
        return self.amount

    @classmethod
    def from_json(cls, value: Decimal | int | str | None) -> "Money":
        return cls.of(value)

    def __str__(self) -> str:
        return f"${self.amount:f}"


def sum_money(values: Iterable[Money]) -> Money:
    """Sum Money values; an empty iterable yields zero."""
    total = Money.zero()
    for value in values:
        total = total.add(value)
    return total


def _wire_default(obj: Any) -> Any:
    if isinstance(obj, Money):
        return obj.amount
    if hasattr(obj, "isoformat"):
        return obj.isoformat()
    raise TypeError(f"Object of type {type(obj).__name__} is not JSON serializable")


def money_dumps(obj: Any, **kwargs: Any) -> str:
    """Serialize ``obj`` to JSON with Money written as exact plain numbers.

    Dates are written as ISO-8601 strings.
    """
    return simplejson.dumps(obj, default=_wire_default, use_decimal=True, **kwargs)


def money_loads(text: str) -> Any:
    """Parse JSON, reading every fractional number as an exact Decimal."""
    return simplejson.loads(text, use_decimal=True)
