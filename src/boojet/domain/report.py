"""Net report builder."""

from __future__ import annotations

from typing import Iterable, Sequence

from boojet.domain.entities import IncomePlan, NetReport, Transaction
from boojet.domain.errors import InvalidInputError
from boojet.domain.ledger import filter_by_month, total_expenses, total_income
from boojet.domain.periods import YearMonth, expected_income


def build_year_month(year: object, month: object) -> YearMonth:
    """Build a YearMonth from caller-supplied values.

    Raises:
        InvalidInputError: If either value is missing or out of range
    """
    if year is None or month is None:
        raise InvalidInputError("Year and month must both be provided")
    try:
        year_value, month_value = int(year), int(month)
    except (TypeError, ValueError) as e:
        raise InvalidInputError(
            f"Cannot build period from year={year!r}, month={month!r}"
        ) from e
    return YearMonth(year_value, month_value)


def net_report(
    year_month: YearMonth,
    plans: Iterable[IncomePlan],
    transactions: Sequence[Transaction],
) -> NetReport:
    """Combine projected income, actual income and expenses for a month.

    Plans are not scoped by owner; the engine is single-tenant.
    """
    in_month = filter_by_month(transactions, year_month)
    expected = expected_income(plans, year_month)
    actual = total_income(in_month)
    expenses = total_expenses(in_month)
    return NetReport(
        month=str(year_month),
        expected_income=expected,
        actual_income=actual,
        expenses=expenses,
        net_expected=expected.subtract(expenses),
        net_actual=actual.subtract(expenses),
    )
