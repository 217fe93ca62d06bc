"""Shared pytest fixtures for boojet tests."""

import os
import tempfile
from datetime import date

import pytest

from boojet.database.factories import create_sqlite_database
from boojet.domain.account import AccountService
from boojet.domain.category import CategoryService
from boojet.domain.entities import AccountDraft, TransactionDraft
from boojet.domain.income_plan import IncomePlanService
from boojet.domain.money import Money
from boojet.domain.summary import SummaryService
from boojet.domain.transaction import TransactionService
from boojet.logging_config import reset_logging


@pytest.fixture(autouse=True)
def _reset_logging():
    """Each test starts from unconfigured logging."""
    reset_logging()
    yield
    reset_logging()


@pytest.fixture
def temp_db():
    """Create a temporary database with the system categories loaded."""
    fd, db_path = tempfile.mkstemp(suffix=".db")
    os.close(fd)

    db = create_sqlite_database(database_path=db_path)
    # Store the path for tests that need it
    db.database_path = db_path
    db.connect()
    db.initialize_schema()
    CategoryService(db).ensure_system_categories()

    yield db

    db.disconnect()
    db.session_factory.kw["bind"].dispose()
    if os.path.exists(db_path):
        os.unlink(db_path)


@pytest.fixture
def account_service(temp_db):
    """Create an AccountService with a temporary database."""
    return AccountService(temp_db)


@pytest.fixture
def category_service(temp_db):
    """Create a CategoryService with a temporary database."""
    return CategoryService(temp_db)


@pytest.fixture
def transaction_service(temp_db):
    """Create a TransactionService with a temporary database."""
    return TransactionService(temp_db)


@pytest.fixture
def income_plan_service(temp_db):
    """Create an IncomePlanService with a temporary database."""
    return IncomePlanService(temp_db)


@pytest.fixture
def summary_service(temp_db):
    """Create a SummaryService with a temporary database."""
    return SummaryService(temp_db)


@pytest.fixture
def sample_account(account_service):
    """Create a sample account for testing."""
    account_id = account_service.create_account(
        AccountDraft(
            name="Test Account",
            opening_balance=Money.of("100.00"),
            created_at=date(2024, 1, 1),
        )
    )
    return account_service.get_account(account_id)


@pytest.fixture
def sample_transactions(transaction_service, sample_account):
    """Record a small March 2025 history against the sample account.

    Salary 2000.00 in, groceries 150.25 and rent 900.00 out, plus a coffee
    in February.
    """
    entries = [
        (date(2025, 3, 1), "2000.00", "INCOME", True, "Salary"),
        (date(2025, 3, 5), "150.25", "FOOD", False, "Groceries"),
        (date(2025, 3, 10), "900.00", "RENT", False, "Rent March"),
        (date(2025, 2, 20), "4.75", "FOOD", False, "Coffee"),
    ]
    ids = []
    for txn_date, amount, category, income, description in entries:
        ids.append(
            transaction_service.create_transaction(
                TransactionDraft(
                    account_id=sample_account.id,
                    date=txn_date,
                    amount=Money.of(amount),
                    category=category,
                    income=income,
                    description=description,
                )
            )
        )
    return ids


@pytest.fixture
def cli_runner():
    """Create a Click CLI test runner."""
    from click.testing import CliRunner

    return CliRunner()
