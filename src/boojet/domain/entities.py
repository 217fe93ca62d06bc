"""Domain model entities for boojet.

These are pure data classes representing ledger concepts, independent of
database schema. Persisted entities are frozen; updates produce new values.
Drafts carry caller-supplied candidates where every field may be absent and
are the input to validation.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from decimal import Decimal
from enum import Enum
from typing import Any, Optional

from boojet.domain.money import Money

# Single-tenant owner until an ownership model exists
DEFAULT_OWNER_ID = 1

DEFAULT_ACCOUNT_NAME_PREFIX = "Default Account"
DEFAULT_PLAN_NAME_PREFIX = "Income Plan"
DEFAULT_TRANSACTION_DESCRIPTION = "No description"


class AccountType(str, Enum):
    CHEQUING = "CHEQUING"
    SAVINGS = "SAVINGS"
    CREDIT = "CREDIT"
    INVESTMENT = "INVESTMENT"
    CASH = "CASH"
    OTHER = "OTHER"


class PayType(str, Enum):
    HOURLY = "HOURLY"
    WEEKLY = "WEEKLY"
    BIWEEKLY = "BIWEEKLY"
    MONTHLY = "MONTHLY"
    ANNUAL = "ANNUAL"


class CategoryType(str, Enum):
    INCOME = "INCOME"
    EXPENSE = "EXPENSE"


class Category(str, Enum):
    """System category codes, in reporting order."""

    INCOME = "INCOME"
    FOOD = "FOOD"
    RENT = "RENT"
    UTILITIES = "UTILITIES"
    TRANSPORTATION = "TRANSPORTATION"
    ENTERTAINMENT = "ENTERTAINMENT"
    HEALTH = "HEALTH"
    SHOPPING = "SHOPPING"
    SAVINGS = "SAVINGS"
    OTHER = "OTHER"


@dataclass(frozen=True)
class Account:
    """Financial account (chequing, savings, credit, ...)."""

    id: int
    name: str
    type: AccountType
    opening_balance: Money
    created_at: date
    closed_at: Optional[date] = None
    owner_id: int = DEFAULT_OWNER_ID

    @property
    def is_active(self) -> bool:
        return self.closed_at is None


@dataclass(frozen=True)
class Transaction:
    """Ledger entry.

    ``amount`` is always positive; ``income`` carries the direction.
    """

    id: int
    account_id: int
    date: date
    amount: Money
    category: str
    income: bool
    description: str


@dataclass(frozen=True)
class IncomePlan:
    """Recurring income source used to project expected income.

    ``amount`` means the hourly rate, the per-paycheck amount or the salary
    depending on ``pay_type``. ``effective_to`` of None means ongoing.
    """

    id: int
    source_name: str
    pay_type: Optional[PayType]
    amount: Optional[Money]
    effective_from: Optional[date]
    effective_to: Optional[date] = None
    hours_per_week: Optional[Decimal] = None
    owner_id: int = DEFAULT_OWNER_ID


@dataclass(frozen=True)
class CategoryDefinition:
    """Entry in the category catalog.

    ``parent_code`` is a non-owning back-reference; children are derived by
    the catalog index.
    """

    code: str
    name: str
    type: CategoryType
    parent_code: Optional[str] = None
    essential: Optional[bool] = None
    system: bool = True
    active: bool = True
    sort_order: int = 0
    id: Optional[int] = None


@dataclass(frozen=True)
class CategoryTotal:
    """Net total for one category."""

    category: str
    total: Money


@dataclass(frozen=True)
class NetReport:
    """Expected vs. actual income against expenses for one month."""

    month: str
    expected_income: Money
    actual_income: Money
    expenses: Money
    net_expected: Money
    net_actual: Money

    def to_dict(self) -> dict[str, Any]:
        return {
            "month": self.month,
            "expectedIncome": self.expected_income.to_json(),
            "actualIncome": self.actual_income.to_json(),
            "expenses": self.expenses.to_json(),
            "netExpected": self.net_expected.to_json(),
            "netActual": self.net_actual.to_json(),
        }


@dataclass(frozen=True)
class TransactionSuggestion:
    """Autofill values taken from the latest transaction with a description."""

    description: str
    category: str
    amount: Money
    income: bool
    account_id: int


@dataclass(frozen=True)
class AccountDraft:
    name: Optional[str] = None
    type: Optional[AccountType] = None
    opening_balance: Optional[Money] = None
    created_at: Optional[date] = None
    closed_at: Optional[date] = None
    owner_id: Optional[int] = None


@dataclass(frozen=True)
class TransactionDraft:
    account_id: Optional[int] = None
    date: Optional[date] = None
    amount: Optional[Money] = None
    category: Optional[str] = None
    income: Optional[bool] = None
    description: Optional[str] = None


@dataclass(frozen=True)
class IncomePlanDraft:
    source_name: Optional[str] = None
    pay_type: Optional[PayType] = None
    amount: Optional[Money] = None
    hours_per_week: Optional[Decimal] = None
    effective_from: Optional[date] = None
    effective_to: Optional[date] = None
    owner_id: Optional[int] = None
