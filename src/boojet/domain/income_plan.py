"""Income plan domain service."""

from datetime import date
from typing import Optional

from boojet.database.base import Database
from boojet.domain import ledger
from boojet.domain.entities import IncomePlan as IncomePlanEntity
from boojet.domain.entities import IncomePlanDraft, NetReport
from boojet.domain.errors import (
    InvalidInputError,
    ReferenceNotFoundError,
    income_plan_not_found,
)
from boojet.domain.money import Money
from boojet.domain.periods import YearMonth, expected_income, monthly_amount
from boojet.domain.report import build_year_month, net_report
from boojet.domain.validation import (
    ValidationMode,
    apply_income_plan_defaults,
    merge_income_plan,
    replace_income_plan,
    validate_id,
    validate_income_plan,
)
from boojet.logging_config import get_logger

logger = get_logger("income_plan")


class IncomePlanService:
    """Service for managing income plans and income projections."""

    def __init__(self, db: Database):
        """Initialize income plan service.

        Args:
            db: Database instance
        """
        self.db = db

    def create_plan(self, draft: IncomePlanDraft, today: Optional[date] = None) -> int:
        """Create an income plan.

        A missing source name becomes "Income Plan <id>"; a missing start
        date becomes today.

        Args:
            draft: Candidate plan values

        Returns:
            Income plan ID

        Raises:
            InvalidInputError: If a field is missing or invalid, including an
                HOURLY plan without hours per week
        """
        try:
            candidate = validate_income_plan(
                apply_income_plan_defaults(draft, today), ValidationMode.CREATE
            )
        except InvalidInputError as e:
            logger.debug("income plan create rejected: %s", e)
            raise

        plan_id = self.db.create_income_plan(
            source_name=candidate.source_name,
            pay_type=candidate.pay_type,
            amount=candidate.amount,
            hours_per_week=candidate.hours_per_week,
            effective_from=candidate.effective_from,
            effective_to=candidate.effective_to,
            owner_id=candidate.owner_id,
        )
        logger.info("income plan created id=%s pay_type=%s", plan_id, candidate.pay_type.value)
        return plan_id

    def get_plan(self, plan_id: int) -> Optional[IncomePlanEntity]:
        return self.db.get_income_plan(plan_id)

    def require_plan(self, plan_id: int) -> IncomePlanEntity:
        """Get income plan by ID or raise ReferenceNotFoundError."""
        validate_id(plan_id, "Income plan")
        plan = self.db.get_income_plan(plan_id)
        if plan is None:
            raise ReferenceNotFoundError(income_plan_not_found(plan_id))
        return plan

    def list_plans(self) -> list[IncomePlanEntity]:
        return self.db.list_income_plans()

    def update_plan(self, plan_id: int, draft: IncomePlanDraft) -> IncomePlanEntity:
        """Replace every field of an income plan.

        Raises:
            ReferenceNotFoundError: If the plan doesn't exist
            InvalidInputError: If a field is missing or invalid
        """
        existing = self.require_plan(plan_id)
        try:
            candidate = validate_income_plan(draft, ValidationMode.FULL_REPLACE)
            plan = replace_income_plan(existing, candidate)
        except InvalidInputError as e:
            logger.debug("income plan %s replace rejected: %s", plan_id, e)
            raise
        self.db.update_income_plan(plan)
        logger.info("income plan updated id=%s", plan_id)
        return plan

    def patch_plan(self, plan_id: int, draft: IncomePlanDraft) -> IncomePlanEntity:
        """Update only the fields present in ``draft``.

        The merged plan is re-checked, so switching to HOURLY without hours
        on record is rejected.

        Raises:
            ReferenceNotFoundError: If the plan doesn't exist
            InvalidInputError: If a present field is invalid
        """
        existing = self.require_plan(plan_id)
        try:
            candidate = validate_income_plan(draft, ValidationMode.PARTIAL_PATCH)
            plan = merge_income_plan(existing, candidate)
        except InvalidInputError as e:
            logger.debug("income plan %s patch rejected: %s", plan_id, e)
            raise
        self.db.update_income_plan(plan)
        logger.info("income plan updated id=%s", plan_id)
        return plan

    def delete_plan(self, plan_id: int) -> None:
        """Delete an income plan.

        Raises:
            ReferenceNotFoundError: If the plan doesn't exist
        """
        self.require_plan(plan_id)
        self.db.delete_income_plan(plan_id)
        logger.info("income plan deleted id=%s", plan_id)

    def plan_monthly_amount(self, plan_id: int, year: int, month: int) -> Money:
        """Projected income of one plan for a month."""
        return monthly_amount(self.require_plan(plan_id), build_year_month(year, month))

    def expected_monthly_income(self, year: int, month: int) -> Money:
        """Projected income of every plan for a month."""
        return expected_income(self.db.list_income_plans(), build_year_month(year, month))

    def _month_transactions(self, year_month: YearMonth):
        return self.db.list_transactions(
            start_date=year_month.first_day, end_date=year_month.last_day
        )

    def actual_monthly_income(self, year: int, month: int) -> Money:
        """Income actually recorded in a month."""
        return ledger.total_income(self._month_transactions(build_year_month(year, month)))

    def actual_monthly_expenses(self, year: int, month: int) -> Money:
        """Expenses recorded in a month, as a positive value."""
        return ledger.total_expenses(self._month_transactions(build_year_month(year, month)))

    def get_net_report(self, year: object, month: object) -> NetReport:
        """Expected and actual income against expenses for a month.

        Args:
            year: Calendar year
            month: Calendar month (1-12)

        Raises:
            InvalidInputError: If year or month is missing or out of range
        """
        year_month = build_year_month(year, month)
        return net_report(
            year_month,
            self.db.list_income_plans(),
            self._month_transactions(year_month),
        )
