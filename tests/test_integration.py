"""Integration tests for end-to-end workflows."""

from boojet.cli.main import cli


def _run(cli_runner, temp_db, *args):
    return cli_runner.invoke(cli, ["--db-path", temp_db.database_path, *args])


def test_full_workflow(cli_runner, temp_db):
    """Test complete workflow: account → plan → transactions → summary → report."""
    # Step 1: Create account
    result = _run(
        cli_runner, temp_db,
        "account", "create", "Everyday",
        "--opening-balance", "500", "--created", "2025-01-01",
    )
    assert result.exit_code == 0
    assert "Created account 'Everyday' (ID: 1)" in result.output

    # Step 2: Plan a salary
    result = _run(
        cli_runner, temp_db,
        "plan", "create", "--source", "Job", "--pay-type", "monthly",
        "--amount", "3000", "--from", "2025-01-01",
    )
    assert result.exit_code == 0

    # Step 3: Record a month of activity
    entries = [
        ("3000", "INCOME", "2025-03-01", "Payday", ["--income"]),
        ("1200", "RENT", "2025-03-02", "Rent", []),
        ("80.50", "FOOD", "2025-03-05", "Market", []),
    ]
    for amount, category, when, description, extra in entries:
        result = _run(
            cli_runner, temp_db,
            "add", "--account", "Everyday", "--amount", amount,
            "--category", category, "--date", when, "--description", description,
            *extra,
        )
        assert result.exit_code == 0

    # Step 4: Summary
    result = _run(cli_runner, temp_db, "summary", "--period", "2025-03", "--sparse")
    assert result.exit_code == 0
    assert "$3,000.00" in result.output
    assert "-$1,200.00" in result.output
    assert "-$80.50" in result.output

    # Step 5: Net report
    result = _run(cli_runner, temp_db, "report", "net", "--period", "2025-03")
    assert result.exit_code == 0
    assert "$1,280.50" in result.output
    assert "$1,719.50" in result.output

    # Step 6: Balance
    result = _run(cli_runner, temp_db, "account", "balance", "Everyday")
    assert result.exit_code == 0
    assert result.output.strip() == "$2,219.50"

    # Step 7: Account with history cannot be deleted
    result = _run(cli_runner, temp_db, "account", "delete", "1", "--yes")
    assert result.exit_code == 1
    assert "it has 3 transactions" in result.output


def test_empty_database_reports(cli_runner, temp_db):
    """Reports over an empty ledger show zeros rather than failing."""
    summary = _run(cli_runner, temp_db, "summary", "--sparse")
    report = _run(cli_runner, temp_db, "report", "net", "--period", "2025-03")
    balance = _run(cli_runner, temp_db, "balance")

    assert summary.exit_code == 0
    assert "No transactions found" in summary.output
    assert report.exit_code == 0
    assert "$0.00" in report.output
    assert balance.output.strip() == "$0.00"
