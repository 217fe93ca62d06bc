"""Tests for account service and account commands."""

from datetime import date

import pytest

from boojet.cli.main import cli
from boojet.domain.entities import AccountDraft, AccountType, TransactionDraft
from boojet.domain.errors import (
    ConflictError,
    DependencyError,
    InvalidInputError,
    ReferenceNotFoundError,
)
from boojet.domain.money import Money


class TestAccountService:
    def test_create_with_defaults(self, account_service):
        account_id = account_service.create_account(AccountDraft(name="Everyday"))
        account = account_service.get_account(account_id)

        assert account.name == "Everyday"
        assert account.type == AccountType.CHEQUING
        assert account.opening_balance == Money.zero()
        assert account.created_at == date.today()
        assert account.is_active

    def test_create_without_name_uses_id(self, account_service):
        first = account_service.create_account(AccountDraft())
        second = account_service.create_account(AccountDraft(name="   "))

        assert account_service.get_account(first).name == f"Default Account {first}"
        assert account_service.get_account(second).name == f"Default Account {second}"

    def test_duplicate_name_rejected(self, account_service, sample_account):
        with pytest.raises(ConflictError, match="already exists"):
            account_service.create_account(AccountDraft(name="Test Account"))

    def test_invalid_create_persists_nothing(self, account_service):
        with pytest.raises(InvalidInputError):
            account_service.create_account(
                AccountDraft(name="Future", created_at=date(2999, 1, 1))
            )
        assert account_service.list_accounts() == []

    def test_get_missing_returns_none(self, account_service):
        assert account_service.get_account(999) is None
        with pytest.raises(ReferenceNotFoundError):
            account_service.require_account(999)

    def test_patch_changes_only_given_fields(self, account_service, sample_account):
        updated = account_service.patch_account(
            sample_account.id, AccountDraft(type=AccountType.SAVINGS)
        )
        assert updated.type == AccountType.SAVINGS
        assert updated.name == "Test Account"
        assert account_service.get_account(sample_account.id).type == AccountType.SAVINGS

    def test_patch_to_taken_name_rejected(self, account_service, sample_account):
        account_service.create_account(AccountDraft(name="Other"))
        with pytest.raises(ConflictError):
            account_service.patch_account(sample_account.id, AccountDraft(name="Other"))

    def test_full_update_requires_every_field(self, account_service, sample_account):
        with pytest.raises(InvalidInputError):
            account_service.update_account(sample_account.id, AccountDraft(name="Only name"))

    def test_full_update(self, account_service, sample_account):
        updated = account_service.update_account(
            sample_account.id,
            AccountDraft(
                name="Renamed",
                type=AccountType.CASH,
                opening_balance=Money.of("5.00"),
                created_at=date(2024, 6, 1),
            ),
        )
        assert updated.name == "Renamed"
        assert updated.opening_balance == Money.of("5.00")
        assert updated.created_at == date(2024, 6, 1)

    def test_close_account(self, account_service, sample_account):
        closed = account_service.close_account(sample_account.id, date(2025, 1, 31))
        assert closed.closed_at == date(2025, 1, 31)
        assert not account_service.get_account(sample_account.id).is_active

    def test_close_before_opening_rejected(self, account_service, sample_account):
        with pytest.raises(InvalidInputError, match="closed_at"):
            account_service.close_account(sample_account.id, date(2023, 12, 31))

    def test_delete_empty_account(self, account_service, sample_account):
        account_service.delete_account(sample_account.id)
        assert account_service.get_account(sample_account.id) is None

    def test_delete_with_transactions_blocked(
        self, account_service, transaction_service, sample_account
    ):
        transaction_service.create_transaction(
            TransactionDraft(
                account_id=sample_account.id, amount=Money.of("1.00"), category="OTHER"
            )
        )
        with pytest.raises(DependencyError, match="1 transaction"):
            account_service.delete_account(sample_account.id)

    def test_balance(self, account_service, sample_account, sample_transactions):
        # 100.00 opening + 2000.00 - 150.25 - 900.00 - 4.75
        assert account_service.get_balance(sample_account.id) == Money.of("1045.00")

    def test_list_transactions_newest_first(
        self, account_service, sample_account, sample_transactions
    ):
        dates = [t.date for t in account_service.list_transactions(sample_account.id)]
        assert dates == sorted(dates, reverse=True)
        assert len(dates) == 4


def test_account_create(cli_runner, temp_db):
    result = cli_runner.invoke(
        cli, ["--db-path", temp_db.database_path, "account", "create", "Everyday"]
    )

    assert result.exit_code == 0
    assert "Created account 'Everyday'" in result.output
    assert "ID:" in result.output


def test_account_create_without_name(cli_runner, temp_db):
    result = cli_runner.invoke(cli, ["--db-path", temp_db.database_path, "account", "create"])

    assert result.exit_code == 0
    assert "Created account 'Default Account 1'" in result.output


def test_account_create_with_options(cli_runner, temp_db):
    result = cli_runner.invoke(
        cli,
        [
            "--db-path", temp_db.database_path,
            "account", "create", "Visa",
            "--type", "credit",
            "--opening-balance", "-250.00",
            "--created", "2025-01-01",
        ],
    )

    assert result.exit_code == 0
    account = temp_db.get_account_by_name("Visa", 1)
    assert account.type == AccountType.CREDIT
    assert account.opening_balance == Money.of("-250.00")


def test_account_create_duplicate(cli_runner, temp_db):
    args = ["--db-path", temp_db.database_path, "account", "create", "Everyday"]
    assert cli_runner.invoke(cli, args).exit_code == 0

    result = cli_runner.invoke(cli, args)

    assert result.exit_code == 1
    assert "already exists" in result.output.lower()


def test_account_list_empty(cli_runner, temp_db):
    result = cli_runner.invoke(cli, ["--db-path", temp_db.database_path, "account", "list"])

    assert result.exit_code == 0
    assert "No accounts found" in result.output


def test_account_list_with_data(cli_runner, temp_db, sample_account):
    result = cli_runner.invoke(cli, ["--db-path", temp_db.database_path, "account", "list"])

    assert result.exit_code == 0
    assert "Test Account" in result.output
    assert "CHEQUING" in result.output


def test_account_show_and_balance(cli_runner, temp_db, sample_account, sample_transactions):
    show = cli_runner.invoke(
        cli, ["--db-path", temp_db.database_path, "account", "show", "Test Account"]
    )
    balance = cli_runner.invoke(
        cli, ["--db-path", temp_db.database_path, "account", "balance", str(sample_account.id)]
    )

    assert show.exit_code == 0
    assert "Opening balance: $100.00" in show.output
    assert "Balance: $1,045.00" in show.output
    assert balance.exit_code == 0
    assert balance.output.strip() == "$1,045.00"


def test_account_update(cli_runner, temp_db, sample_account):
    result = cli_runner.invoke(
        cli,
        ["--db-path", temp_db.database_path, "account", "update", "Test Account", "--name", "Main"],
    )

    assert result.exit_code == 0
    assert "Updated account 'Main'" in result.output


def test_account_close(cli_runner, temp_db, sample_account):
    result = cli_runner.invoke(
        cli,
        ["--db-path", temp_db.database_path, "account", "close", "1", "--date", "2025-02-01"],
    )

    assert result.exit_code == 0
    assert "as of 2025-02-01" in result.output


def test_account_delete_blocked(cli_runner, temp_db, sample_account, sample_transactions):
    result = cli_runner.invoke(
        cli, ["--db-path", temp_db.database_path, "account", "delete", "1", "--yes"]
    )

    assert result.exit_code == 1
    assert "Cannot delete account 1" in result.output


def test_account_delete_confirmed(cli_runner, temp_db, sample_account):
    result = cli_runner.invoke(
        cli, ["--db-path", temp_db.database_path, "account", "delete", "Test Account"], input="y\n"
    )

    assert result.exit_code == 0
    assert "Deleted account 'Test Account'" in result.output


def test_account_unknown(cli_runner, temp_db):
    result = cli_runner.invoke(
        cli, ["--db-path", temp_db.database_path, "account", "show", "Nope"]
    )

    assert result.exit_code == 1
    assert "Account 'Nope' not found" in result.output
