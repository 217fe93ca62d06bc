"""Abstract database interface."""

from abc import ABC, abstractmethod
from datetime import date
from decimal import Decimal
from typing import Optional

# Import entities directly to avoid circular import through domain/__init__.py
from boojet.domain.entities import (
    Account,
    AccountType,
    CategoryDefinition,
    IncomePlan,
    PayType,
    Transaction,
)
from boojet.domain.money import Money


class Database(ABC):
    """Abstract entity store for boojet.

    Lookups return None for absent entities; callers decide whether that is
    an error.
    """

    @abstractmethod
    def connect(self) -> None:
        """Connect to the database."""
        pass

    @abstractmethod
    def disconnect(self) -> None:
        """Disconnect from the database."""
        pass

    @abstractmethod
    def initialize_schema(self) -> None:
        """Initialize database schema (create tables)."""
        pass

    # Account operations
    @abstractmethod
    def create_account(
        self,
        name: Optional[str],
        type: AccountType,
        opening_balance: Money,
        created_at: date,
        closed_at: Optional[date],
        owner_id: int,
    ) -> int:
        """Create an account. Returns account ID.

        A name of None is replaced by "Default Account <id>" in the same
        write.
        """
        pass

    @abstractmethod
    def get_account(self, account_id: int) -> Optional[Account]:
        """Get account by ID."""
        pass

    @abstractmethod
    def get_account_by_name(self, name: str, owner_id: int) -> Optional[Account]:
        """Get an owner's account by name."""
        pass

    @abstractmethod
    def list_accounts(self) -> list[Account]:
        """List all accounts."""
        pass

    @abstractmethod
    def update_account(self, account: Account) -> None:
        """Persist every field of ``account``."""
        pass

    @abstractmethod
    def delete_account(self, account_id: int) -> None:
        """Delete an account."""
        pass

    @abstractmethod
    def get_account_transaction_count(self, account_id: int) -> int:
        """Count transactions recorded against an account."""
        pass

    # Category operations
    @abstractmethod
    def create_category(self, definition: CategoryDefinition) -> int:
        """Create a category. Returns category ID."""
        pass

    @abstractmethod
    def get_category(self, code: str) -> Optional[CategoryDefinition]:
        """Get category by code."""
        pass

    @abstractmethod
    def list_categories(self) -> list[CategoryDefinition]:
        """List all categories, active or not."""
        pass

    @abstractmethod
    def update_category(self, definition: CategoryDefinition) -> None:
        """Persist every field of ``definition`` (matched by code)."""
        pass

    # Transaction operations
    @abstractmethod
    def create_transaction(
        self,
        account_id: int,
        date: date,
        amount: Money,
        category: str,
        income: bool,
        description: str,
    ) -> int:
        """Create a transaction. Returns transaction ID."""
        pass

    @abstractmethod
    def get_transaction(self, transaction_id: int) -> Optional[Transaction]:
        """Get transaction by ID."""
        pass

    @abstractmethod
    def update_transaction(self, transaction: Transaction) -> None:
        """Persist every field of ``transaction``."""
        pass

    @abstractmethod
    def delete_transaction(self, transaction_id: int) -> None:
        """Delete a transaction."""
        pass

    @abstractmethod
    def list_transactions(
        self,
        start_date: Optional[date] = None,
        end_date: Optional[date] = None,
        category: Optional[str] = None,
        account_id: Optional[int] = None,
        income: Optional[bool] = None,
    ) -> list[Transaction]:
        """List transactions with optional filters, newest first.

        Args:
            start_date: Optional inclusive start date
            end_date: Optional inclusive end date
            category: Optional category code
            account_id: Optional account ID
            income: If set, only income (True) or expense (False) entries
        """
        pass

    @abstractmethod
    def find_descriptions(self, fragment: str, prefix: bool, limit: int) -> list[str]:
        """Distinct descriptions matching ``fragment`` case-insensitively.

        With ``prefix`` the description must start with the fragment,
        otherwise it must contain it. Most recently used first.
        """
        pass

    @abstractmethod
    def get_latest_transaction_by_description(
        self, description: str
    ) -> Optional[Transaction]:
        """Most recent transaction whose description matches (case-insensitive)."""
        pass

    # Income plan operations
    @abstractmethod
    def create_income_plan(
        self,
        source_name: Optional[str],
        pay_type: PayType,
        amount: Money,
        hours_per_week: Optional[Decimal],
        effective_from: date,
        effective_to: Optional[date],
        owner_id: int,
    ) -> int:
        """Create an income plan. Returns plan ID.

        A source name of None is replaced by "Income Plan <id>" in the same
        write.
        """
        pass

    @abstractmethod
    def get_income_plan(self, plan_id: int) -> Optional[IncomePlan]:
        """Get income plan by ID."""
        pass

    @abstractmethod
    def list_income_plans(self) -> list[IncomePlan]:
        """List all income plans."""
        pass

    @abstractmethod
    def update_income_plan(self, plan: IncomePlan) -> None:
        """Persist every field of ``plan``."""
        pass

    @abstractmethod
    def delete_income_plan(self, plan_id: int) -> None:
        """Delete an income plan."""
        pass
