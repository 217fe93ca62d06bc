"""Tests for calendar months and income projection."""

from datetime import date
from decimal import Decimal

import pytest

from boojet.domain.entities import IncomePlan, PayType
from boojet.domain.errors import InvalidInputError
from boojet.domain.money import Money
from boojet.domain.periods import (
    PAYCHECKS_PER_MONTH,
    WEEKS_PER_MONTH,
    YearMonth,
    active_in,
    expected_income,
    monthly_amount,
    months_between,
)


def make_plan(
    pay_type,
    amount,
    hours=None,
    start=date(2025, 1, 1),
    end=None,
    plan_id=1,
):
    return IncomePlan(
        id=plan_id,
        source_name=f"Plan {plan_id}",
        pay_type=pay_type,
        amount=Money.of(amount) if amount is not None else None,
        effective_from=start,
        effective_to=end,
        hours_per_week=Decimal(hours) if hours is not None else None,
    )


class TestYearMonth:
    def test_bounds(self):
        feb = YearMonth(2024, 2)
        assert feb.first_day == date(2024, 2, 1)
        assert feb.last_day == date(2024, 2, 29)
        assert YearMonth(2025, 2).last_day == date(2025, 2, 28)
        assert YearMonth(2025, 12).last_day == date(2025, 12, 31)

    def test_contains(self):
        march = YearMonth(2025, 3)
        assert march.contains(date(2025, 3, 1))
        assert march.contains(date(2025, 3, 31))
        assert not march.contains(date(2025, 4, 1))

    def test_next_and_previous_cross_years(self):
        assert YearMonth(2024, 12).next() == YearMonth(2025, 1)
        assert YearMonth(2025, 1).previous() == YearMonth(2024, 12)

    def test_parse_and_str(self):
        assert YearMonth.parse("2025-03") == YearMonth(2025, 3)
        assert str(YearMonth(2025, 3)) == "2025-03"
        assert YearMonth.from_date(date(2025, 7, 19)) == YearMonth(2025, 7)

    def test_ordering(self):
        assert YearMonth(2024, 12) < YearMonth(2025, 1) < YearMonth(2025, 2)

    @pytest.mark.parametrize("month", [0, 13, -1])
    def test_invalid_month(self, month):
        with pytest.raises(InvalidInputError):
            YearMonth(2025, month)

    @pytest.mark.parametrize("token", ["2025/03", "March", "2025-3-1", ""])
    def test_parse_rejects_other_shapes(self, token):
        with pytest.raises(InvalidInputError):
            YearMonth.parse(token)

    def test_months_between_is_inclusive(self):
        months = months_between(YearMonth(2024, 11), YearMonth(2025, 2))
        assert [str(m) for m in months] == ["2024-11", "2024-12", "2025-01", "2025-02"]
        assert months_between(YearMonth(2025, 2), YearMonth(2025, 1)) == []


class TestRatios:
    def test_ratios_have_ten_places(self):
        assert WEEKS_PER_MONTH == Decimal("4.3333333333")
        assert PAYCHECKS_PER_MONTH == Decimal("2.1666666667")


class TestActiveIn:
    def test_open_ended_plan(self):
        plan = make_plan(PayType.MONTHLY, "100", start=date(2025, 1, 15))
        assert not active_in(plan, YearMonth(2024, 12))
        assert active_in(plan, YearMonth(2025, 1))
        assert active_in(plan, YearMonth(2030, 6))

    def test_range_overlap_is_inclusive(self):
        plan = make_plan(
            PayType.MONTHLY, "100", start=date(2025, 1, 31), end=date(2025, 3, 1)
        )
        assert active_in(plan, YearMonth(2025, 1))
        assert active_in(plan, YearMonth(2025, 3))
        assert not active_in(plan, YearMonth(2025, 4))


class TestMonthlyAmount:
    """Each pay frequency normalized to one month."""

    def test_hourly(self):
        plan = make_plan(PayType.HOURLY, "20.00", hours="40")
        assert monthly_amount(plan, YearMonth(2025, 1)) == Money.of("3466.67")

    def test_weekly(self):
        plan = make_plan(PayType.WEEKLY, "500.00")
        assert monthly_amount(plan, YearMonth(2025, 1)) == Money.of("2166.67")

    def test_biweekly(self):
        plan = make_plan(PayType.BIWEEKLY, "1000.00")
        assert monthly_amount(plan, YearMonth(2025, 1)) == Money.of("2166.67")

    def test_monthly(self):
        plan = make_plan(PayType.MONTHLY, "3000.00")
        assert monthly_amount(plan, YearMonth(2025, 1)) == Money.of("3000.00")

    def test_annual(self):
        plan = make_plan(PayType.ANNUAL, "60000.00")
        assert monthly_amount(plan, YearMonth(2025, 1)) == Money.of("5000.00")

    def test_annual_rounds_at_the_end(self):
        plan = make_plan(PayType.ANNUAL, "50000.00")
        assert monthly_amount(plan, YearMonth(2025, 1)) == Money.of("4166.67")

    def test_outside_effective_range_is_zero(self):
        plan = make_plan(
            PayType.MONTHLY, "3000.00", start=date(2025, 1, 1), end=date(2025, 3, 31)
        )
        assert monthly_amount(plan, YearMonth(2025, 4)) == Money.zero()

    def test_missing_pay_type_or_amount_is_zero(self):
        assert monthly_amount(make_plan(None, "100"), YearMonth(2025, 1)) == Money.zero()
        assert monthly_amount(make_plan(PayType.MONTHLY, None), YearMonth(2025, 1)) == Money.zero()

    def test_hourly_without_hours_fails(self):
        plan = make_plan(PayType.HOURLY, "20.00")
        with pytest.raises(InvalidInputError):
            monthly_amount(plan, YearMonth(2025, 1))


class TestExpectedIncome:
    def test_sums_active_plans(self):
        plans = [
            make_plan(PayType.MONTHLY, "3000.00", plan_id=1),
            make_plan(PayType.ANNUAL, "60000.00", plan_id=2),
            make_plan(
                PayType.MONTHLY, "999.00", start=date(2024, 1, 1), end=date(2024, 12, 31), plan_id=3
            ),
        ]
        assert expected_income(plans, YearMonth(2025, 2)) == Money.of("8000.00")

    def test_no_plans(self):
        assert expected_income([], YearMonth(2025, 2)) == Money.zero()
