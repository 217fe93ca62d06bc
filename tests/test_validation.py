"""Tests for create / replace / patch validation."""

from datetime import date
from decimal import Decimal

import pytest

from boojet.domain.entities import (
    Account,
    AccountDraft,
    AccountType,
    IncomePlan,
    IncomePlanDraft,
    PayType,
    Transaction,
    TransactionDraft,
)
from boojet.domain.errors import InvalidInputError
from boojet.domain.money import Money
from boojet.domain.validation import (
    ValidationMode,
    apply_account_defaults,
    apply_income_plan_defaults,
    apply_transaction_defaults,
    merge_account,
    merge_income_plan,
    merge_transaction,
    replace_account,
    replace_income_plan,
    validate_account,
    validate_id,
    validate_income_plan,
    validate_transaction,
)

TODAY = date(2025, 3, 15)


def full_transaction(**overrides):
    values = dict(
        account_id=1,
        date=date(2025, 3, 1),
        amount=Money.of("12.00"),
        category="food",
        income=False,
        description="Lunch",
    )
    values.update(overrides)
    return TransactionDraft(**values)


def existing_account():
    return Account(
        id=1,
        name="Everyday",
        type=AccountType.CHEQUING,
        opening_balance=Money.of("10.00"),
        created_at=date(2025, 1, 1),
    )


def existing_plan(**overrides):
    values = dict(
        id=1,
        source_name="Job",
        pay_type=PayType.MONTHLY,
        amount=Money.of("3000.00"),
        effective_from=date(2025, 1, 1),
    )
    values.update(overrides)
    return IncomePlan(**values)


class TestAccountValidation:
    def test_defaults(self):
        draft = apply_account_defaults(AccountDraft(name="  "), TODAY)
        assert draft.name is None
        assert draft.type == AccountType.CHEQUING
        assert draft.opening_balance == Money.zero()
        assert draft.created_at == TODAY
        assert draft.owner_id == 1

    def test_create_allows_missing_name(self):
        draft = apply_account_defaults(AccountDraft(), TODAY)
        assert validate_account(draft, ValidationMode.CREATE, TODAY).name is None

    def test_name_is_trimmed(self):
        draft = apply_account_defaults(AccountDraft(name="  Savings "), TODAY)
        assert validate_account(draft, ValidationMode.CREATE, TODAY).name == "Savings"

    def test_type_accepts_strings(self):
        draft = apply_account_defaults(AccountDraft(name="Visa", type="credit"), TODAY)
        assert validate_account(draft, ValidationMode.CREATE, TODAY).type == AccountType.CREDIT

    def test_unknown_type_rejected(self):
        draft = apply_account_defaults(AccountDraft(name="X", type="piggybank"), TODAY)
        with pytest.raises(InvalidInputError, match="type"):
            validate_account(draft, ValidationMode.CREATE, TODAY)

    def test_created_in_future_rejected(self):
        draft = apply_account_defaults(
            AccountDraft(name="X", created_at=date(2025, 3, 16)), TODAY
        )
        with pytest.raises(InvalidInputError, match="created_at"):
            validate_account(draft, ValidationMode.CREATE, TODAY)

    def test_closed_before_created_rejected(self):
        draft = apply_account_defaults(
            AccountDraft(name="X", created_at=date(2025, 3, 1), closed_at=date(2025, 2, 1)),
            TODAY,
        )
        with pytest.raises(InvalidInputError, match="closed_at"):
            validate_account(draft, ValidationMode.CREATE, TODAY)

    def test_full_replace_requires_name(self):
        draft = AccountDraft(type=AccountType.SAVINGS, opening_balance=Money.zero())
        with pytest.raises(InvalidInputError, match="name"):
            validate_account(draft, ValidationMode.FULL_REPLACE, TODAY)

    def test_patch_checks_only_present_fields(self):
        draft = validate_account(AccountDraft(name="Renamed"), ValidationMode.PARTIAL_PATCH, TODAY)
        merged = merge_account(existing_account(), draft)
        assert merged.name == "Renamed"
        assert merged.opening_balance == Money.of("10.00")

    def test_patch_rejects_blank_name(self):
        with pytest.raises(InvalidInputError, match="name"):
            validate_account(AccountDraft(name=" "), ValidationMode.PARTIAL_PATCH, TODAY)

    def test_merge_rechecks_closure(self):
        with pytest.raises(InvalidInputError, match="closed_at"):
            merge_account(existing_account(), AccountDraft(closed_at=date(2024, 12, 31)))

    def test_replace_reopens_when_closure_absent(self):
        closed = merge_account(existing_account(), AccountDraft(closed_at=date(2025, 2, 1)))
        draft = AccountDraft(
            name="Everyday", type=AccountType.CHEQUING, opening_balance=Money.zero()
        )
        assert replace_account(closed, draft).closed_at is None

    def test_replace_checks_only_its_own_dates(self):
        closed = merge_account(existing_account(), AccountDraft(closed_at=date(2025, 2, 1)))
        draft = validate_account(
            AccountDraft(
                name="Everyday",
                type=AccountType.CHEQUING,
                opening_balance=Money.zero(),
                created_at=date(2025, 3, 1),
            ),
            ValidationMode.FULL_REPLACE,
            TODAY,
        )
        replaced = replace_account(closed, draft)

        assert replaced.created_at == date(2025, 3, 1)
        assert replaced.closed_at is None

    def test_replace_rejects_closure_before_its_creation(self):
        draft = AccountDraft(
            name="Everyday",
            type=AccountType.CHEQUING,
            opening_balance=Money.zero(),
            created_at=date(2025, 3, 1),
            closed_at=date(2025, 2, 1),
        )
        with pytest.raises(InvalidInputError, match="closed_at"):
            replace_account(existing_account(), draft)

    def test_amount_beyond_storable_range(self):
        draft = AccountDraft(name="Huge", opening_balance=Money.of("92233720368547758.08"))
        with pytest.raises(InvalidInputError, match="opening_balance"):
            validate_account(draft, ValidationMode.PARTIAL_PATCH, TODAY)


class TestTransactionValidation:
    def test_defaults(self):
        draft = apply_transaction_defaults(TransactionDraft(description=""), TODAY)
        assert draft.date == TODAY
        assert draft.description == "No description"
        assert draft.income is False

    def test_valid_create_normalizes_category(self):
        draft = validate_transaction(full_transaction(), ValidationMode.CREATE)
        assert draft.category == "FOOD"

    @pytest.mark.parametrize("amount", ["0", "0.00", "-5.00", "0.004"])
    def test_amount_must_be_positive(self, amount):
        with pytest.raises(InvalidInputError, match="amount"):
            validate_transaction(full_transaction(amount=Money.of(amount)), ValidationMode.CREATE)

    def test_amount_positive_in_patch_too(self):
        with pytest.raises(InvalidInputError, match="amount"):
            validate_transaction(
                TransactionDraft(amount=Money.of("-1")), ValidationMode.PARTIAL_PATCH
            )

    @pytest.mark.parametrize("field", ["amount", "category", "account_id", "date"])
    def test_create_requires_field(self, field):
        with pytest.raises(InvalidInputError, match=field):
            validate_transaction(full_transaction(**{field: None}), ValidationMode.CREATE)

    def test_account_id_must_be_positive(self):
        with pytest.raises(InvalidInputError):
            validate_transaction(full_transaction(account_id=0), ValidationMode.CREATE)

    def test_patch_merge(self):
        existing = Transaction(
            id=9,
            account_id=1,
            date=date(2025, 3, 1),
            amount=Money.of("12.00"),
            category="FOOD",
            income=False,
            description="Lunch",
        )
        draft = validate_transaction(
            TransactionDraft(amount=Money.of("15.50")), ValidationMode.PARTIAL_PATCH
        )
        merged = merge_transaction(existing, draft)
        assert merged.amount == Money.of("15.50")
        assert merged.description == "Lunch"
        assert existing.amount == Money.of("12.00")


class TestIncomePlanValidation:
    def test_defaults(self):
        draft = apply_income_plan_defaults(IncomePlanDraft(source_name=""), TODAY)
        assert draft.source_name is None
        assert draft.effective_from == TODAY

    def test_hourly_without_hours_rejected(self):
        draft = apply_income_plan_defaults(
            IncomePlanDraft(pay_type=PayType.HOURLY, amount=Money.of("20.00")), TODAY
        )
        with pytest.raises(InvalidInputError, match="hours_per_week"):
            validate_income_plan(draft, ValidationMode.CREATE)

    def test_hours_must_be_positive(self):
        draft = apply_income_plan_defaults(
            IncomePlanDraft(
                pay_type=PayType.HOURLY, amount=Money.of("20.00"), hours_per_week=Decimal("0")
            ),
            TODAY,
        )
        with pytest.raises(InvalidInputError, match="hours_per_week"):
            validate_income_plan(draft, ValidationMode.CREATE)

    def test_end_before_start_rejected(self):
        draft = IncomePlanDraft(
            source_name="Job",
            pay_type=PayType.MONTHLY,
            amount=Money.of("100"),
            effective_from=date(2025, 2, 1),
            effective_to=date(2025, 1, 31),
        )
        with pytest.raises(InvalidInputError, match="effective_to"):
            validate_income_plan(draft, ValidationMode.CREATE)

    def test_amount_must_be_positive(self):
        with pytest.raises(InvalidInputError, match="amount"):
            validate_income_plan(
                IncomePlanDraft(amount=Money.zero()), ValidationMode.PARTIAL_PATCH
            )

    def test_pay_type_from_string(self):
        draft = apply_income_plan_defaults(
            IncomePlanDraft(pay_type="annual", amount=Money.of("60000")), TODAY
        )
        assert validate_income_plan(draft, ValidationMode.CREATE).pay_type == PayType.ANNUAL

    def test_patch_to_hourly_needs_hours_on_record(self):
        draft = validate_income_plan(
            IncomePlanDraft(pay_type=PayType.HOURLY), ValidationMode.PARTIAL_PATCH
        )
        with pytest.raises(InvalidInputError, match="hours_per_week"):
            merge_income_plan(existing_plan(), draft)

    def test_patch_end_date_checked_against_existing_start(self):
        draft = validate_income_plan(
            IncomePlanDraft(effective_to=date(2024, 6, 30)), ValidationMode.PARTIAL_PATCH
        )
        with pytest.raises(InvalidInputError, match="effective_to"):
            merge_income_plan(existing_plan(), draft)

    def test_replace_clears_end_date(self):
        plan = existing_plan(effective_to=date(2025, 12, 31))
        draft = validate_income_plan(
            IncomePlanDraft(
                source_name="Job",
                pay_type=PayType.MONTHLY,
                amount=Money.of("3100.00"),
                effective_from=date(2025, 1, 1),
            ),
            ValidationMode.FULL_REPLACE,
        )
        replaced = replace_income_plan(plan, draft)
        assert replaced.effective_to is None
        assert replaced.amount == Money.of("3100.00")


@pytest.mark.parametrize("value", [0, -3, True, "1", None])
def test_validate_id_rejects(value):
    with pytest.raises(InvalidInputError):
        validate_id(value, "Account")


def test_validate_id_accepts_positive():
    assert validate_id(4, "Account") == 4
