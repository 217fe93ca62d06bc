"""Mapper functions to convert between domain models and SQLAlchemy models.

This layer isolates the conversion logic, so the ledger engine never sees
ORM objects.
"""

from decimal import Decimal

from boojet.domain import entities as domain
from boojet.database.models import (
    Account as ORMAccount,
    Category as ORMCategory,
    IncomePlan as ORMIncomePlan,
    Transaction as ORMTransaction,
)


def account_to_domain(orm_account: ORMAccount) -> domain.Account:
    """Convert SQLAlchemy Account model to domain Account entity."""
    return domain.Account(
        id=orm_account.id,
        name=orm_account.name,
        type=domain.AccountType(orm_account.type),
        opening_balance=orm_account.opening_balance,
        created_at=orm_account.created_at,
        closed_at=orm_account.closed_at,
        owner_id=orm_account.owner_id,
    )


def category_to_domain(orm_category: ORMCategory) -> domain.CategoryDefinition:
    """Convert SQLAlchemy Category model to domain CategoryDefinition."""
    return domain.CategoryDefinition(
        id=orm_category.id,
        code=orm_category.code,
        name=orm_category.name,
        type=domain.CategoryType(orm_category.type),
        parent_code=orm_category.parent_code,
        essential=orm_category.essential,
        system=orm_category.is_system,
        active=orm_category.active,
        sort_order=orm_category.sort_order,
    )


def transaction_to_domain(orm_transaction: ORMTransaction) -> domain.Transaction:
    """Convert SQLAlchemy Transaction model to domain Transaction entity."""
    return domain.Transaction(
        id=orm_transaction.id,
        account_id=orm_transaction.account_id,
        date=orm_transaction.date,
        amount=orm_transaction.amount,
        category=orm_transaction.category,
        income=bool(orm_transaction.income),
        description=orm_transaction.description,
    )


def income_plan_to_domain(orm_plan: ORMIncomePlan) -> domain.IncomePlan:
    """Convert SQLAlchemy IncomePlan model to domain IncomePlan entity."""
    hours = orm_plan.hours_per_week
    return domain.IncomePlan(
        id=orm_plan.id,
        source_name=orm_plan.source_name,
        pay_type=domain.PayType(orm_plan.pay_type),
        amount=orm_plan.amount,
        effective_from=orm_plan.effective_from,
        effective_to=orm_plan.effective_to,
        hours_per_week=Decimal(hours) if hours is not None else None,
        owner_id=orm_plan.owner_id,
    )
