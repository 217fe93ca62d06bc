"""Entity validation for create, full replace and partial patch.

Validation works on drafts and finishes before anything is persisted. Each
function either returns a normalized draft or raises InvalidInputError naming
the offending field. Reference checks against the store live in the services.
"""

from __future__ import annotations

from dataclasses import replace
from datetime import date
from decimal import Decimal
from enum import Enum
from typing import Optional

from boojet.domain.catalog import normalize_code
from boojet.domain.entities import (
    DEFAULT_OWNER_ID,
    DEFAULT_TRANSACTION_DESCRIPTION,
    Account,
    AccountDraft,
    AccountType,
    IncomePlan,
    IncomePlanDraft,
    PayType,
    Transaction,
    TransactionDraft,
)
from boojet.domain.errors import InvalidInputError, invalid_field
from boojet.domain.money import MAX_STORED_AMOUNT, Money


class ValidationMode(Enum):
    CREATE = "create"
    FULL_REPLACE = "full_replace"
    PARTIAL_PATCH = "partial_patch"

    @property
    def requires_all(self) -> bool:
        return self is not ValidationMode.PARTIAL_PATCH


def validate_id(value: object, label: str) -> int:
    """Require a positive integer identifier."""
    if isinstance(value, bool) or not isinstance(value, int) or value <= 0:
        raise InvalidInputError(f"{label} ID must be a positive number")
    return value


def _blank(value: Optional[str]) -> bool:
    return value is None or not value.strip()


def _require(mode: ValidationMode, value: object, field: str) -> None:
    if mode.requires_all and value is None:
        raise InvalidInputError(invalid_field(field, "is required"))


def _check_text(mode: ValidationMode, value: Optional[str], field: str) -> Optional[str]:
    _require(mode, value, field)
    if value is None:
        return None
    if _blank(value):
        raise InvalidInputError(invalid_field(field, "must not be blank"))
    return value.strip()


def _coerce_enum(enum_type: type[Enum], value: object, field: str):
    if value is None or isinstance(value, enum_type):
        return value
    try:
        return enum_type(str(value).strip().upper())
    except ValueError:
        allowed = ", ".join(member.value for member in enum_type)
        raise InvalidInputError(
            invalid_field(field, f"'{value}' is not one of {allowed}")
        ) from None


def _check_money(value: object, field: str) -> Optional[Money]:
    if value is None:
        return None
    if not isinstance(value, Money):
        raise InvalidInputError(invalid_field(field, "must be a Money value"))
    if abs(value.amount) > MAX_STORED_AMOUNT:
        raise InvalidInputError(
            invalid_field(field, f"must not exceed {MAX_STORED_AMOUNT} in magnitude")
        )
    return value


# Accounts


def apply_account_defaults(draft: AccountDraft, today: Optional[date] = None) -> AccountDraft:
    """Fill CREATE defaults. A blank name is left for the store to derive."""
    today = today or date.today()
    return replace(
        draft,
        name=None if _blank(draft.name) else draft.name,
        type=draft.type if draft.type is not None else AccountType.CHEQUING,
        opening_balance=(
            draft.opening_balance if draft.opening_balance is not None else Money.zero()
        ),
        created_at=draft.created_at if draft.created_at is not None else today,
        owner_id=draft.owner_id if draft.owner_id is not None else DEFAULT_OWNER_ID,
    )


def validate_account(
    draft: AccountDraft,
    mode: ValidationMode,
    today: Optional[date] = None,
) -> AccountDraft:
    """Validate an account candidate.

    On CREATE the name may be absent: the store names the account after its
    identifier once inserted.
    """
    today = today or date.today()
    if mode is ValidationMode.CREATE and draft.name is None:
        name = None
    else:
        name = _check_text(mode, draft.name, "name")
    account_type = _coerce_enum(AccountType, draft.type, "type")
    _require(mode, account_type, "type")
    opening_balance = _check_money(draft.opening_balance, "opening_balance")
    _require(mode, opening_balance, "opening_balance")

    if draft.created_at is not None and draft.created_at > today:
        raise InvalidInputError(invalid_field("created_at", "cannot be in the future"))
    if (
        draft.closed_at is not None
        and draft.created_at is not None
        and draft.closed_at < draft.created_at
    ):
        raise InvalidInputError(invalid_field("closed_at", "cannot precede created_at"))

    return replace(draft, name=name, type=account_type, opening_balance=opening_balance)


def replace_account(existing: Account, draft: AccountDraft) -> Account:
    """Full replace of a validated draft; an absent closure date reopens.

    Only the replacement's own dates are checked against each other.
    """
    replaced = Account(
        id=existing.id,
        name=draft.name if draft.name is not None else existing.name,
        type=draft.type if draft.type is not None else existing.type,
        opening_balance=(
            draft.opening_balance
            if draft.opening_balance is not None
            else existing.opening_balance
        ),
        created_at=draft.created_at if draft.created_at is not None else existing.created_at,
        closed_at=draft.closed_at,
        owner_id=draft.owner_id if draft.owner_id is not None else existing.owner_id,
    )
    _check_closure(replaced)
    return replaced


def merge_account(existing: Account, draft: AccountDraft) -> Account:
    """Overwrite only the fields present in ``draft``."""
    merged = Account(
        id=existing.id,
        name=draft.name if draft.name is not None else existing.name,
        type=draft.type if draft.type is not None else existing.type,
        opening_balance=(
            draft.opening_balance
            if draft.opening_balance is not None
            else existing.opening_balance
        ),
        created_at=draft.created_at if draft.created_at is not None else existing.created_at,
        closed_at=draft.closed_at if draft.closed_at is not None else existing.closed_at,
        owner_id=draft.owner_id if draft.owner_id is not None else existing.owner_id,
    )
    _check_closure(merged)
    return merged


def _check_closure(account: Account) -> None:
    if account.closed_at is not None and account.closed_at < account.created_at:
        raise InvalidInputError(invalid_field("closed_at", "cannot precede created_at"))


# Transactions


def apply_transaction_defaults(
    draft: TransactionDraft, today: Optional[date] = None
) -> TransactionDraft:
    today = today or date.today()
    return replace(
        draft,
        date=draft.date if draft.date is not None else today,
        description=(
            DEFAULT_TRANSACTION_DESCRIPTION if _blank(draft.description) else draft.description
        ),
        income=draft.income if draft.income is not None else False,
    )


def validate_transaction(draft: TransactionDraft, mode: ValidationMode) -> TransactionDraft:
    """Validate a transaction candidate.

    The amount must be strictly positive in every mode; direction lives in
    the income flag.
    """
    amount = _check_money(draft.amount, "amount")
    _require(mode, amount, "amount")
    if amount is not None and not amount.is_positive():
        raise InvalidInputError(invalid_field("amount", "must be a positive value"))

    _require(mode, draft.category, "category")
    category = None
    if draft.category is not None:
        category = normalize_code(draft.category)
        if not category:
            raise InvalidInputError(invalid_field("category", "must not be blank"))

    _require(mode, draft.account_id, "account_id")
    if draft.account_id is not None:
        validate_id(draft.account_id, "Account")

    _require(mode, draft.date, "date")
    description = _check_text(mode, draft.description, "description")
    _require(mode, draft.income, "income")

    return replace(draft, amount=amount, category=category, description=description)


def replace_transaction(existing: Transaction, draft: TransactionDraft) -> Transaction:
    return merge_transaction(existing, draft)


def merge_transaction(existing: Transaction, draft: TransactionDraft) -> Transaction:
    """Overwrite only the fields present in ``draft``."""
    return Transaction(
        id=existing.id,
        account_id=draft.account_id if draft.account_id is not None else existing.account_id,
        date=draft.date if draft.date is not None else existing.date,
        amount=draft.amount if draft.amount is not None else existing.amount,
        category=draft.category if draft.category is not None else existing.category,
        income=draft.income if draft.income is not None else existing.income,
        description=(
            draft.description if draft.description is not None else existing.description
        ),
    )


# Income plans


def apply_income_plan_defaults(
    draft: IncomePlanDraft, today: Optional[date] = None
) -> IncomePlanDraft:
    """Fill CREATE defaults. A blank source name is left for the store to derive."""
    today = today or date.today()
    return replace(
        draft,
        source_name=None if _blank(draft.source_name) else draft.source_name,
        effective_from=draft.effective_from if draft.effective_from is not None else today,
        owner_id=draft.owner_id if draft.owner_id is not None else DEFAULT_OWNER_ID,
    )


def _check_plan_invariants(
    pay_type: Optional[PayType],
    hours_per_week: Optional[Decimal],
    effective_from: Optional[date],
    effective_to: Optional[date],
) -> None:
    if pay_type == PayType.HOURLY and hours_per_week is None:
        raise InvalidInputError(
            invalid_field("hours_per_week", "is required for HOURLY pay type")
        )
    if effective_from is not None and effective_to is not None and effective_to < effective_from:
        raise InvalidInputError(
            invalid_field("effective_to", "cannot precede effective_from")
        )


def validate_income_plan(draft: IncomePlanDraft, mode: ValidationMode) -> IncomePlanDraft:
    """Validate an income plan candidate."""
    amount = _check_money(draft.amount, "amount")
    if amount is not None and not amount.is_positive():
        raise InvalidInputError(invalid_field("amount", "must be a positive value"))

    hours = draft.hours_per_week
    if hours is not None:
        try:
            hours = Decimal(str(hours))
        except ArithmeticError:
            raise InvalidInputError(invalid_field("hours_per_week", "must be a number")) from None
        if not hours.is_finite() or hours <= 0:
            raise InvalidInputError(invalid_field("hours_per_week", "must be positive"))

    pay_type = _coerce_enum(PayType, draft.pay_type, "pay_type")

    if mode is ValidationMode.CREATE and draft.source_name is None:
        source_name = None
    else:
        source_name = _check_text(mode, draft.source_name, "source_name")
    _require(mode, pay_type, "pay_type")
    _require(mode, amount, "amount")
    _require(mode, draft.effective_from, "effective_from")

    if mode.requires_all:
        _check_plan_invariants(pay_type, hours, draft.effective_from, draft.effective_to)
    elif draft.effective_from is not None and draft.effective_to is not None:
        _check_plan_invariants(None, None, draft.effective_from, draft.effective_to)

    return replace(
        draft,
        source_name=source_name,
        pay_type=pay_type,
        amount=amount,
        hours_per_week=hours,
    )


def replace_income_plan(existing: IncomePlan, draft: IncomePlanDraft) -> IncomePlan:
    """Full replace: the optional end date and hours follow the draft exactly."""
    plan = IncomePlan(
        id=existing.id,
        source_name=draft.source_name if draft.source_name is not None else existing.source_name,
        pay_type=draft.pay_type,
        amount=draft.amount,
        effective_from=draft.effective_from,
        effective_to=draft.effective_to,
        hours_per_week=draft.hours_per_week,
        owner_id=draft.owner_id if draft.owner_id is not None else existing.owner_id,
    )
    _check_plan_invariants(
        plan.pay_type, plan.hours_per_week, plan.effective_from, plan.effective_to
    )
    return plan


def merge_income_plan(existing: IncomePlan, draft: IncomePlanDraft) -> IncomePlan:
    """Overwrite only the fields present in ``draft``, then re-check invariants."""
    plan = IncomePlan(
        id=existing.id,
        source_name=draft.source_name if draft.source_name is not None else existing.source_name,
        pay_type=draft.pay_type if draft.pay_type is not None else existing.pay_type,
        amount=draft.amount if draft.amount is not None else existing.amount,
        effective_from=(
            draft.effective_from if draft.effective_from is not None else existing.effective_from
        ),
        effective_to=(
            draft.effective_to if draft.effective_to is not None else existing.effective_to
        ),
        hours_per_week=(
            draft.hours_per_week if draft.hours_per_week is not None else existing.hours_per_week
        ),
        owner_id=draft.owner_id if draft.owner_id is not None else existing.owner_id,
    )
    _check_plan_invariants(
        plan.pay_type, plan.hours_per_week, plan.effective_from, plan.effective_to
    )
    return plan
