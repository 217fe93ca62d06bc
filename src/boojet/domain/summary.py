"""Summary domain service."""

from typing import Optional, Union

from boojet.database.base import Database
from boojet.domain import ledger
from boojet.domain.category import CategoryService
from boojet.domain.entities import CategoryTotal
from boojet.domain.money import Money
from boojet.domain.periods import YearMonth, months_between
from boojet.domain.report import build_year_month


class SummaryService:
    """Service for building category and monthly summaries."""

    def __init__(self, db: Database):
        """Initialize summary service.

        Args:
            db: Database instance
        """
        self.db = db
        self.categories = CategoryService(db)

    def _transactions(self, year_month: Optional[YearMonth]):
        if year_month is None:
            return self.db.list_transactions()
        return self.db.list_transactions(
            start_date=year_month.first_day, end_date=year_month.last_day
        )

    def category_summary(
        self,
        year: Optional[int] = None,
        month: Optional[int] = None,
        full_catalog: bool = True,
    ) -> Union[list[CategoryTotal], dict[str, Money]]:
        """Net totals per category.

        Args:
            year: Optional year; requires ``month``
            month: Optional month; requires ``year``
            full_catalog: If True, return every catalog category (zero where
                nothing was recorded) as CategoryTotal entries; otherwise a
                dict of only the categories that occur

        Returns:
            Totals in catalog order
        """
        year_month = None
        if year is not None or month is not None:
            year_month = build_year_month(year, month)
        transactions = self._transactions(year_month)
        catalog = self.categories.catalog()
        if full_catalog:
            return ledger.summarise_catalog(transactions, catalog)
        return ledger.summarise_by_category(transactions, catalog)

    def rollup_summary(
        self, year: Optional[int] = None, month: Optional[int] = None
    ) -> dict[str, Money]:
        """Category totals with subcategories folded into their top-level category."""
        year_month = None
        if year is not None or month is not None:
            year_month = build_year_month(year, month)
        catalog = self.categories.catalog()
        sparse = ledger.summarise_by_category(self._transactions(year_month), catalog)
        return ledger.rollup_by_root(sparse, catalog)

    def monthly_summary(self, start: YearMonth, end: YearMonth) -> dict[YearMonth, Money]:
        """Net per month from ``start`` to ``end`` inclusive; empty months are zero."""
        transactions = self.db.list_transactions(
            start_date=start.first_day, end_date=end.last_day
        )
        recorded = ledger.summarise_by_month(transactions)
        return {
            year_month: recorded.get(year_month, Money.zero())
            for year_month in months_between(start, end)
        }
