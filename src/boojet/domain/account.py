"""Account domain service."""

from datetime import date
from typing import Optional

from boojet.database.base import Database
from boojet.domain import ledger
from boojet.domain.entities import Account as AccountEntity
from boojet.domain.entities import AccountDraft, Transaction
from boojet.domain.errors import (
    ConflictError,
    DependencyError,
    InvalidInputError,
    ReferenceNotFoundError,
    account_delete_blocked,
    account_not_found,
    duplicate_account_name,
)
from boojet.domain.money import Money
from boojet.domain.validation import (
    ValidationMode,
    apply_account_defaults,
    merge_account,
    replace_account,
    validate_account,
    validate_id,
)
from boojet.logging_config import get_logger

logger = get_logger("account")


class AccountService:
    """Service for managing accounts."""

    def __init__(self, db: Database):
        """Initialize account service.

        Args:
            db: Database instance
        """
        self.db = db

    def _check_name_available(
        self, name: str, owner_id: int, account_id: Optional[int] = None
    ) -> None:
        existing = self.db.get_account_by_name(name, owner_id)
        if existing is not None and existing.id != account_id:
            raise ConflictError(duplicate_account_name(name))

    def create_account(self, draft: AccountDraft, today: Optional[date] = None) -> int:
        """Create a new account.

        Missing fields take their defaults; a missing name becomes
        "Default Account <id>".

        Args:
            draft: Candidate account values
            today: Reference date for defaults and the creation-date check

        Returns:
            Account ID

        Raises:
            InvalidInputError: If a field is invalid
            ConflictError: If account name already exists
        """
        try:
            candidate = validate_account(
                apply_account_defaults(draft, today), ValidationMode.CREATE, today
            )
        except InvalidInputError as e:
            logger.debug("account create rejected: %s", e)
            raise
        if candidate.name is not None:
            self._check_name_available(candidate.name, candidate.owner_id)

        account_id = self.db.create_account(
            name=candidate.name,
            type=candidate.type,
            opening_balance=candidate.opening_balance,
            created_at=candidate.created_at,
            closed_at=candidate.closed_at,
            owner_id=candidate.owner_id,
        )
        logger.info("account created id=%s", account_id)
        return account_id

    def get_account(self, account_id: int) -> Optional[AccountEntity]:
        """Get account by ID.

        Args:
            account_id: Account ID

        Returns:
            Account entity or None if not found
        """
        return self.db.get_account(account_id)

    def require_account(self, account_id: int) -> AccountEntity:
        """Get account by ID or raise ReferenceNotFoundError."""
        validate_id(account_id, "Account")
        account = self.db.get_account(account_id)
        if account is None:
            raise ReferenceNotFoundError(account_not_found(account_id))
        return account

    def list_accounts(self) -> list[AccountEntity]:
        """List all accounts.

        Returns:
            List of account entities
        """
        return self.db.list_accounts()

    def _store(self, account: AccountEntity) -> AccountEntity:
        self._check_name_available(account.name, account.owner_id, account.id)
        self.db.update_account(account)
        logger.info("account updated id=%s", account.id)
        return account

    def update_account(
        self, account_id: int, draft: AccountDraft, today: Optional[date] = None
    ) -> AccountEntity:
        """Replace every field of an account.

        Args:
            account_id: Account ID to update
            draft: Complete replacement values
            today: Reference date for the creation-date check

        Returns:
            The updated account

        Raises:
            ReferenceNotFoundError: If account not found
            InvalidInputError: If a field is missing or invalid
            ConflictError: If the new name is already used
        """
        existing = self.require_account(account_id)
        try:
            candidate = validate_account(draft, ValidationMode.FULL_REPLACE, today)
        except InvalidInputError as e:
            logger.debug("account %s replace rejected: %s", account_id, e)
            raise
        return self._store(replace_account(existing, candidate))

    def patch_account(
        self, account_id: int, draft: AccountDraft, today: Optional[date] = None
    ) -> AccountEntity:
        """Update only the fields present in ``draft``.

        Raises:
            ReferenceNotFoundError: If account not found
            InvalidInputError: If a present field is invalid
            ConflictError: If the new name is already used
        """
        existing = self.require_account(account_id)
        try:
            candidate = validate_account(draft, ValidationMode.PARTIAL_PATCH, today)
            merged = merge_account(existing, candidate)
        except InvalidInputError as e:
            logger.debug("account %s patch rejected: %s", account_id, e)
            raise
        return self._store(merged)

    def close_account(self, account_id: int, closed_at: Optional[date] = None) -> AccountEntity:
        """Close an account as of ``closed_at`` (today by default)."""
        return self.patch_account(
            account_id, AccountDraft(closed_at=closed_at or date.today())
        )

    def delete_account(self, account_id: int) -> None:
        """Delete an account.

        Args:
            account_id: Account ID to delete

        Raises:
            ReferenceNotFoundError: If account not found
            DependencyError: If transactions still reference the account
        """
        self.require_account(account_id)

        transaction_count = self.db.get_account_transaction_count(account_id)
        if transaction_count > 0:
            raise DependencyError(account_delete_blocked(account_id, transaction_count))

        self.db.delete_account(account_id)
        logger.info("account deleted id=%s", account_id)

    def list_transactions(self, account_id: int) -> list[Transaction]:
        """Transactions recorded against an account, newest first."""
        self.require_account(account_id)
        return self.db.list_transactions(account_id=account_id)

    def get_balance(self, account_id: int) -> Money:
        """Opening balance plus the net of the account's transactions."""
        account = self.require_account(account_id)
        return ledger.balance_for_account(
            account, self.db.list_transactions(account_id=account_id)
        )
