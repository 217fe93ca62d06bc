"""Calendar-month periods and income plan projection.

Pay frequencies are normalized to a monthly figure with extended decimal
precision; the result is only rounded to cents at the end.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from datetime import date
from decimal import ROUND_HALF_UP, Decimal
from typing import Iterable

from dateutil.relativedelta import relativedelta

from boojet.domain.entities import IncomePlan, PayType
from boojet.domain.errors import InvalidInputError
from boojet.domain.money import Money, sum_money

_RATIO_PLACES = Decimal("0.0000000001")

WEEKS_PER_YEAR = Decimal("52")
MONTHS_PER_YEAR = Decimal("12")
PAYCHECKS_PER_YEAR = Decimal("26")
WEEKS_PER_MONTH = (WEEKS_PER_YEAR / MONTHS_PER_YEAR).quantize(
    _RATIO_PLACES, rounding=ROUND_HALF_UP
)
PAYCHECKS_PER_MONTH = (PAYCHECKS_PER_YEAR / MONTHS_PER_YEAR).quantize(
    _RATIO_PLACES, rounding=ROUND_HALF_UP
)

_YEAR_MONTH_PATTERN = re.compile(r"^(\d{4})-(\d{1,2})$")


@dataclass(frozen=True, order=True)
class YearMonth:
    """A calendar month, the unit of reporting and projection."""

    year: int
    month: int

    def __post_init__(self) -> None:
        if isinstance(self.year, bool) or not isinstance(self.year, int):
            raise InvalidInputError(f"Invalid year: {self.year!r}")
        if isinstance(self.month, bool) or not isinstance(self.month, int):
            raise InvalidInputError(f"Invalid month: {self.month!r}")
        if not 1 <= self.year <= 9999:
            raise InvalidInputError(f"Invalid year: {self.year} (expected 1-9999)")
        if not 1 <= self.month <= 12:
            raise InvalidInputError(f"Invalid month: {self.month} (expected 1-12)")

    @classmethod
    def of(cls, year: int, month: int) -> "YearMonth":
        return cls(year, month)

    @classmethod
    def from_date(cls, value: date) -> "YearMonth":
        return cls(value.year, value.month)

    @classmethod
    def parse(cls, token: str) -> "YearMonth":
        """Parse an ISO ``YYYY-MM`` token."""
        match = _YEAR_MONTH_PATTERN.match(token.strip()) if token else None
        if match is None:
            raise InvalidInputError(f"Invalid period '{token}' (expected YYYY-MM)")
        return cls(int(match.group(1)), int(match.group(2)))

    @property
    def first_day(self) -> date:
        return date(self.year, self.month, 1)

    @property
    def last_day(self) -> date:
        return self.first_day + relativedelta(months=1, days=-1)

    def contains(self, value: date) -> bool:
        return self.first_day <= value <= self.last_day

    def next(self) -> "YearMonth":
        return YearMonth.from_date(self.first_day + relativedelta(months=1))

    def previous(self) -> "YearMonth":
        return YearMonth.from_date(self.first_day - relativedelta(months=1))

    def __str__(self) -> str:
        return f"{self.year:04d}-{self.month:02d}"


def months_between(start: YearMonth, end: YearMonth) -> list[YearMonth]:
    """Inclusive list of months from ``start`` to ``end``."""
    months = []
    current = start
    while current <= end:
        months.append(current)
        if current == YearMonth(9999, 12):
            break
        current = current.next()
    return months


def active_in(plan: IncomePlan, year_month: YearMonth) -> bool:
    """True when the plan's effective range overlaps the month (inclusive)."""
    if plan.effective_from is not None and plan.effective_from > year_month.last_day:
        return False
    if plan.effective_to is not None and plan.effective_to < year_month.first_day:
        return False
    return True


def monthly_amount(plan: IncomePlan, year_month: YearMonth) -> Money:
    """Expected income contributed by ``plan`` in ``year_month``.

    - HOURLY: hours_per_week * weeks_per_month * hourly rate
    - WEEKLY: weekly pay * weeks_per_month
    - BIWEEKLY: paycheck * (26 / 12)
    - MONTHLY: as-is
    - ANNUAL: salary / 12

    Raises:
        InvalidInputError: If an HOURLY plan has no hours_per_week
    """
    if not active_in(plan, year_month):
        return Money.zero()
    if plan.pay_type is None or plan.amount is None:
        return Money.zero()

    amount = plan.amount.amount
    if plan.pay_type == PayType.HOURLY:
        if plan.hours_per_week is None:
            raise InvalidInputError("hours_per_week is required for HOURLY pay type")
        hours_per_month = Decimal(plan.hours_per_week) * WEEKS_PER_MONTH
        return Money.of(hours_per_month * amount)
    if plan.pay_type == PayType.WEEKLY:
        return Money.of(amount * WEEKS_PER_MONTH)
    if plan.pay_type == PayType.BIWEEKLY:
        return Money.of(amount * PAYCHECKS_PER_MONTH)
    if plan.pay_type == PayType.MONTHLY:
        return plan.amount
    if plan.pay_type == PayType.ANNUAL:
        return Money.of(
            (amount / MONTHS_PER_YEAR).quantize(_RATIO_PLACES, rounding=ROUND_HALF_UP)
        )
    return Money.zero()


def expected_income(plans: Iterable[IncomePlan], year_month: YearMonth) -> Money:
    """Sum of every plan's monthly amount."""
    return sum_money(monthly_amount(plan, year_month) for plan in plans)
