"""Aggregation over transaction sets.

Every function here is a pure computation over already-retrieved entities.
Income counts positive and expenses negative; the stored amount is always
positive and ``Transaction.income`` carries the sign.
"""

from __future__ import annotations

from datetime import date
from enum import Enum
from typing import Iterable, Optional, Sequence

from boojet.domain.catalog import CategoryCatalog, normalize_code
from boojet.domain.entities import Account, CategoryTotal, Transaction
from boojet.domain.money import Money, sum_money
from boojet.domain.periods import YearMonth


def net_of(txn: Transaction) -> Money:
    """Signed contribution of a transaction to a balance."""
    return txn.amount if txn.income else txn.amount.negate()


def filter_by_account(
    transactions: Iterable[Transaction], account_id: int
) -> list[Transaction]:
    return [txn for txn in transactions if txn.account_id == account_id]


def filter_by_category(
    transactions: Iterable[Transaction], category: str | Enum
) -> list[Transaction]:
    code = normalize_code(category)
    return [txn for txn in transactions if normalize_code(txn.category) == code]


def filter_by_month(
    transactions: Iterable[Transaction], year_month: YearMonth
) -> list[Transaction]:
    return filter_between(transactions, year_month.first_day, year_month.last_day)


def filter_between(
    transactions: Iterable[Transaction],
    start: Optional[date] = None,
    end: Optional[date] = None,
) -> list[Transaction]:
    """Keep transactions dated within ``[start, end]``; None means unbounded."""
    return [
        txn
        for txn in transactions
        if (start is None or txn.date >= start) and (end is None or txn.date <= end)
    ]


def total_balance(transactions: Iterable[Transaction]) -> Money:
    return sum_money(net_of(txn) for txn in transactions)


def total_income(transactions: Iterable[Transaction]) -> Money:
    return sum_money(txn.amount for txn in transactions if txn.income)


def total_expenses(transactions: Iterable[Transaction]) -> Money:
    """Sum of expense amounts, reported as a positive value."""
    return sum_money(txn.amount for txn in transactions if not txn.income)


def balance_for_account(account: Account, transactions: Iterable[Transaction]) -> Money:
    """Opening balance plus the net of the account's own transactions."""
    return account.opening_balance.add(
        total_balance(filter_by_account(transactions, account.id))
    )


def summarise_by_category(
    transactions: Sequence[Transaction],
    catalog: Optional[CategoryCatalog] = None,
) -> dict[str, Money]:
    """Group transactions by category code and sum their nets.

    Only categories present in the input appear. Keys follow catalog order;
    codes unknown to the catalog follow in order of first appearance.
    """
    catalog = catalog or CategoryCatalog.default()
    totals: dict[str, Money] = {}
    for txn in transactions:
        code = normalize_code(txn.category)
        totals[code] = totals.get(code, Money.zero()).add(net_of(txn))

    ordered = {code: totals[code] for code in catalog.codes() if code in totals}
    for code, total in totals.items():
        ordered.setdefault(code, total)
    return ordered


def summarise_catalog(
    transactions: Sequence[Transaction],
    catalog: Optional[CategoryCatalog] = None,
) -> list[CategoryTotal]:
    """Net total for every catalog category, zero where nothing was recorded."""
    catalog = catalog or CategoryCatalog.default()
    sparse = summarise_by_category(transactions, catalog)
    return [
        CategoryTotal(category=code, total=sparse.get(code, Money.zero()))
        for code in catalog.codes()
    ]


def rollup_by_root(
    summary: dict[str, Money], catalog: CategoryCatalog
) -> dict[str, Money]:
    """Fold subcategory totals into their top-level category."""
    rolled: dict[str, Money] = {}
    for code, total in summary.items():
        root = catalog.root_of(code) if code in catalog else code
        rolled[root] = rolled.get(root, Money.zero()).add(total)

    ordered = {code: rolled[code] for code in catalog.codes() if code in rolled}
    for code, total in rolled.items():
        ordered.setdefault(code, total)
    return ordered


def summarise_by_month(transactions: Iterable[Transaction]) -> dict[YearMonth, Money]:
    """Net per calendar month, in ascending month order."""
    totals: dict[YearMonth, Money] = {}
    for txn in transactions:
        key = YearMonth.from_date(txn.date)
        totals[key] = totals.get(key, Money.zero()).add(net_of(txn))
    return {key: totals[key] for key in sorted(totals)}
