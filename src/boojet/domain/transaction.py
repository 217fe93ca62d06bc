"""Transaction domain service."""

from datetime import date
from typing import Optional

from boojet.database.base import Database
from boojet.domain import ledger
from boojet.domain.catalog import normalize_code
from boojet.domain.category import CategoryService
from boojet.domain.entities import Transaction as TransactionEntity
from boojet.domain.entities import TransactionDraft, TransactionSuggestion
from boojet.domain.errors import (
    InvalidInputError,
    ReferenceNotFoundError,
    account_not_found,
    transaction_not_found,
)
from boojet.domain.money import Money
from boojet.domain.periods import YearMonth
from boojet.domain.report import build_year_month
from boojet.domain.validation import (
    ValidationMode,
    apply_transaction_defaults,
    merge_transaction,
    replace_transaction,
    validate_id,
    validate_transaction,
)
from boojet.logging_config import get_logger

logger = get_logger("transaction")

MIN_SUGGESTION_PREFIX = 2
MAX_SUGGESTIONS = 15


class TransactionService:
    """Service for managing transactions."""

    def __init__(self, db: Database):
        """Initialize transaction service.

        Args:
            db: Database instance
        """
        self.db = db
        self.categories = CategoryService(db)

    def _check_references(self, account_id: int, category: str, new_category: bool) -> None:
        if self.db.get_account(account_id) is None:
            raise ReferenceNotFoundError(account_not_found(account_id))
        if new_category:
            self.categories.require_usable(category)
        else:
            self.categories.require_category(category)

    def create_transaction(self, draft: TransactionDraft, today: Optional[date] = None) -> int:
        """Create a transaction.

        Args:
            draft: Candidate values; date, description and income flag default
                to today, "No description" and expense

        Returns:
            Transaction ID

        Raises:
            InvalidInputError: If a field is missing or invalid, or the
                category is inactive
            ReferenceNotFoundError: If account or category doesn't exist
        """
        try:
            candidate = validate_transaction(
                apply_transaction_defaults(draft, today), ValidationMode.CREATE
            )
        except InvalidInputError as e:
            logger.debug("transaction create rejected: %s", e)
            raise
        self._check_references(candidate.account_id, candidate.category, new_category=True)

        transaction_id = self.db.create_transaction(
            account_id=candidate.account_id,
            date=candidate.date,
            amount=candidate.amount,
            category=candidate.category,
            income=candidate.income,
            description=candidate.description,
        )
        logger.info(
            "transaction created id=%s account=%s amount=%s income=%s",
            transaction_id,
            candidate.account_id,
            candidate.amount,
            candidate.income,
        )
        return transaction_id

    def get_transaction(self, transaction_id: int) -> Optional[TransactionEntity]:
        """Get transaction by ID.

        Args:
            transaction_id: Transaction ID

        Returns:
            Transaction entity or None if not found
        """
        return self.db.get_transaction(transaction_id)

    def require_transaction(self, transaction_id: int) -> TransactionEntity:
        """Get transaction by ID or raise ReferenceNotFoundError."""
        validate_id(transaction_id, "Transaction")
        txn = self.db.get_transaction(transaction_id)
        if txn is None:
            raise ReferenceNotFoundError(transaction_not_found(transaction_id))
        return txn

    def transaction_exists(self, transaction_id: int) -> bool:
        return self.db.get_transaction(transaction_id) is not None

    def _store(self, existing: TransactionEntity, updated: TransactionEntity) -> TransactionEntity:
        # A category that is merely kept may be inactive; a changed one may not
        self._check_references(
            updated.account_id,
            updated.category,
            new_category=normalize_code(updated.category) != normalize_code(existing.category),
        )
        self.db.update_transaction(updated)
        logger.info("transaction updated id=%s", updated.id)
        return updated

    def update_transaction(
        self, transaction_id: int, draft: TransactionDraft
    ) -> TransactionEntity:
        """Replace every field of a transaction.

        Raises:
            ReferenceNotFoundError: If the transaction, account or category doesn't exist
            InvalidInputError: If a field is missing or invalid
        """
        existing = self.require_transaction(transaction_id)
        try:
            candidate = validate_transaction(draft, ValidationMode.FULL_REPLACE)
        except InvalidInputError as e:
            logger.debug("transaction %s replace rejected: %s", transaction_id, e)
            raise
        return self._store(existing, replace_transaction(existing, candidate))

    def patch_transaction(
        self, transaction_id: int, draft: TransactionDraft
    ) -> TransactionEntity:
        """Update only the fields present in ``draft``.

        Raises:
            ReferenceNotFoundError: If the transaction, account or category doesn't exist
            InvalidInputError: If a present field is invalid
        """
        existing = self.require_transaction(transaction_id)
        try:
            candidate = validate_transaction(draft, ValidationMode.PARTIAL_PATCH)
        except InvalidInputError as e:
            logger.debug("transaction %s patch rejected: %s", transaction_id, e)
            raise
        return self._store(existing, merge_transaction(existing, candidate))

    def delete_transaction(self, transaction_id: int) -> None:
        """Delete a transaction.

        Raises:
            ReferenceNotFoundError: If the transaction doesn't exist
        """
        self.require_transaction(transaction_id)
        self.db.delete_transaction(transaction_id)
        logger.info("transaction deleted id=%s", transaction_id)

    def list_transactions(
        self,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
        category: Optional[str] = None,
        account_id: Optional[int] = None,
        year_month: Optional[YearMonth] = None,
        income: Optional[bool] = None,
    ) -> list[TransactionEntity]:
        """Search transactions, newest first.

        Args:
            start_date: Optional inclusive start date
            end_date: Optional inclusive end date
            category: Optional category code
            account_id: Optional account ID
            year_month: Optional month; narrows the date range further
            income: If set, only income (True) or expense (False) entries

        Returns:
            List of transaction entities
        """
        if year_month is not None:
            if start_date is None or start_date < year_month.first_day:
                start_date = year_month.first_day
            if end_date is None or end_date > year_month.last_day:
                end_date = year_month.last_day
        return self.db.list_transactions(
            start_date=start_date,
            end_date=end_date,
            category=normalize_code(category) if category is not None else None,
            account_id=account_id,
            income=income,
        )

    def total_balance(self) -> Money:
        """Net of every recorded transaction."""
        return ledger.total_balance(self.db.list_transactions())

    def monthly_balance(self, year: int, month: int) -> Money:
        """Net of the transactions dated in one month."""
        year_month = build_year_month(year, month)
        return ledger.total_balance(self.list_transactions(year_month=year_month))

    def total_by_category(self, category: str) -> Money:
        """Net of the transactions in one category."""
        self.categories.require_category(category)
        return ledger.total_balance(self.list_transactions(category=category))

    def total_by_account(self, account_id: int) -> Money:
        """Net of one account's transactions, excluding the opening balance."""
        if self.db.get_account(account_id) is None:
            raise ReferenceNotFoundError(account_not_found(account_id))
        return ledger.total_balance(self.list_transactions(account_id=account_id))

    def income_between(self, start_date: date, end_date: date) -> Money:
        return ledger.total_income(
            self.list_transactions(start_date=start_date, end_date=end_date)
        )

    def expenses_between(self, start_date: date, end_date: date) -> Money:
        """Expense total for the date range, reported as a positive value."""
        return ledger.total_expenses(
            self.list_transactions(start_date=start_date, end_date=end_date)
        )

    def suggest_descriptions(self, fragment: str, how_many: int = 5) -> list[str]:
        """Autocomplete descriptions from transaction history.

        Descriptions starting with ``fragment`` come first, then those that
        merely contain it. Each group is ordered most recently used first.

        Args:
            fragment: Typed text; shorter than two characters yields nothing
            how_many: Maximum number of suggestions, capped at 15

        Returns:
            Distinct descriptions
        """
        fragment = (fragment or "").strip()
        if len(fragment) < MIN_SUGGESTION_PREFIX or how_many <= 0:
            return []
        limit = min(how_many, MAX_SUGGESTIONS)

        candidates = self.db.find_descriptions(fragment, prefix=True, limit=limit)
        if len(candidates) < limit:
            candidates += self.db.find_descriptions(
                fragment, prefix=False, limit=limit + len(candidates)
            )

        suggestions: list[str] = []
        seen: set[str] = set()
        for description in candidates:
            if description.lower() in seen:
                continue
            seen.add(description.lower())
            suggestions.append(description)
            if len(suggestions) >= limit:
                break
        return suggestions

    def suggestion_details(self, description: str) -> Optional[TransactionSuggestion]:
        """Autofill values from the latest transaction with this description."""
        if description is None or not description.strip():
            return None
        txn = self.db.get_latest_transaction_by_description(description.strip())
        if txn is None:
            return None
        return TransactionSuggestion(
            description=txn.description,
            category=txn.category,
            amount=txn.amount,
            income=txn.income,
            account_id=txn.account_id,
        )
