"""Transaction management commands."""

from pathlib import Path

import click

from boojet.cli.account_resolution import resolve_account_or_exit
from boojet.cli.date_filters import resolve_cli_date_range
from boojet.cli.error_handling import handle_domain_error
from boojet.domain.account import AccountService
from boojet.domain.entities import Transaction, TransactionDraft
from boojet.domain.errors import DomainError
from boojet.domain.money import money_dumps
from boojet.domain.transaction import MAX_SUGGESTIONS, TransactionService
from boojet.utils.amount_parser import parse_amount
from boojet.utils.date_parser import parse_date


def _transaction_to_dict(txn: Transaction) -> dict:
    return {
        "id": txn.id,
        "accountId": txn.account_id,
        "date": txn.date,
        "amount": txn.amount,
        "category": txn.category,
        "income": txn.income,
        "description": txn.description,
    }


def _income_filter(income_only: bool, expense_only: bool) -> bool | None:
    if income_only and not expense_only:
        return True
    if expense_only and not income_only:
        return False
    return None


@click.group()
def transaction_group():
    """Manage transactions."""
    pass


@transaction_group.command("list")
@click.option("--start-date", help="Start date (YYYY-MM-DD or relative like 'last month', 'this year')")
@click.option("--end-date", help="End date (YYYY-MM-DD or relative like 'today', 'this month')")
@click.option("--period", help="Calendar month (YYYY-MM or 'last month')")
@click.option("--category", help="Category code (e.g., FOOD)")
@click.option("--account", help="Account name or ID")
@click.option("--income", "income_only", is_flag=True, help="Show only income")
@click.option("--expense", "expense_only", is_flag=True, help="Show only expenses")
@click.pass_context
def list_transactions(
    ctx,
    start_date: str | None,
    end_date: str | None,
    period: str | None,
    category: str | None,
    account: str | None,
    income_only: bool,
    expense_only: bool,
):
    """View transactions with optional filters, newest first.

    Account can be specified by name or ID.
    """
    db = ctx.obj["db"]
    service = TransactionService(db)
    account_service = AccountService(db)

    start, end = resolve_cli_date_range(
        ctx, start_date=start_date, end_date=end_date, period=period
    )

    account_id = None
    if account:
        account_id = resolve_account_or_exit(ctx, account_service, account)

    transactions = service.list_transactions(
        start_date=start,
        end_date=end,
        category=category,
        account_id=account_id,
        income=_income_filter(income_only, expense_only),
    )

    if not transactions:
        click.echo("No transactions found.")
        return

    accounts = {acc.id: acc.name for acc in account_service.list_accounts()}

    click.echo(f"\nFound {len(transactions)} transaction(s):")
    click.echo("-" * 100)
    click.echo(
        f"{'ID':>5} | {'Date':10} | {'Account':16} | {'Category':14} | {'Amount':>12} | Description"
    )
    click.echo("-" * 100)
    for txn in transactions:
        signed = txn.amount if txn.income else txn.amount.negate()
        account_name = accounts.get(txn.account_id, "Unknown")
        click.echo(
            f"{txn.id:5d} | {txn.date} | {account_name[:16]:16} | {txn.category[:14]:14} | "
            f"{signed.format():>12} | {txn.description}"
        )


@transaction_group.command("show")
@click.argument("transaction_id", type=int)
@click.pass_context
def show_transaction(ctx, transaction_id: int) -> None:
    """Show one transaction."""
    db = ctx.obj["db"]
    service = TransactionService(db)

    try:
        txn = service.require_transaction(transaction_id)
    except DomainError as e:
        handle_domain_error(ctx, e)

    account = AccountService(db).get_account(txn.account_id)
    click.echo(f"Transaction ID: {txn.id}")
    click.echo(f"  Date: {txn.date}")
    click.echo(f"  Amount: {txn.amount.format()} ({'income' if txn.income else 'expense'})")
    click.echo(f"  Account: {account.name if account else 'Unknown'} (ID: {txn.account_id})")
    click.echo(f"  Category: {txn.category}")
    click.echo(f"  Description: {txn.description}")


@transaction_group.command("update")
@click.argument("transaction_id", type=int)
@click.option("--account", help="Account name or ID")
@click.option("--date", help="Transaction date (YYYY-MM-DD or relative like 'today', 'yesterday')")
@click.option("--amount", help="Transaction amount, always positive")
@click.option("--category", help="Category code")
@click.option("--description", help="Transaction description")
@click.option("--income/--expense", default=None, help="Change the direction of the transaction")
@click.pass_context
def update_transaction(
    ctx,
    transaction_id: int,
    account: str | None,
    date: str | None,
    amount: str | None,
    category: str | None,
    description: str | None,
    income: bool | None,
) -> None:
    """Update a transaction.

    Updates only the fields that are provided.

    Examples:
        boojet transaction update 1 --amount 75.00
        boojet transaction update 1 --account "Everyday" --category FOOD
    """
    db = ctx.obj["db"]
    transaction_service = TransactionService(db)

    account_id = None
    if account is not None:
        account_id = resolve_account_or_exit(ctx, AccountService(db), account)

    try:
        draft = TransactionDraft(
            account_id=account_id,
            date=parse_date(date) if date is not None else None,
            amount=parse_amount(amount) if amount is not None else None,
            category=category,
            income=income,
            description=description,
        )
        transaction_service.patch_transaction(transaction_id, draft)
    except DomainError as e:
        handle_domain_error(ctx, e)

    click.echo(f"Updated transaction {transaction_id}")


@transaction_group.command("delete")
@click.argument("transaction_id", type=int)
@click.option("--yes", is_flag=True, help="Do not ask for confirmation")
@click.pass_context
def delete_transaction(ctx, transaction_id: int, yes: bool) -> None:
    """Delete a transaction."""
    service = TransactionService(ctx.obj["db"])

    try:
        txn = service.require_transaction(transaction_id)
    except DomainError as e:
        handle_domain_error(ctx, e)

    if not yes and not click.confirm(
        f"Delete transaction {txn.id} ({txn.date}, {txn.amount.format()}, {txn.description})?"
    ):
        click.echo("Deletion cancelled.")
        return

    service.delete_transaction(transaction_id)
    click.echo(f"Deleted transaction {transaction_id}")


@transaction_group.command("suggest")
@click.argument("fragment")
@click.option(
    "--limit",
    type=click.IntRange(1, MAX_SUGGESTIONS),
    default=5,
    show_default=True,
    help="Maximum number of suggestions",
)
@click.option("--details", is_flag=True, help="Show the values the top match would fill in")
@click.pass_context
def suggest(ctx, fragment: str, limit: int, details: bool) -> None:
    """Suggest descriptions from earlier transactions.

    Descriptions starting with FRAGMENT are listed before those containing it.
    """
    service = TransactionService(ctx.obj["db"])

    suggestions = service.suggest_descriptions(fragment, limit)
    if not suggestions:
        click.echo("No suggestions.")
        return

    for description in suggestions:
        click.echo(description)

    if details:
        suggestion = service.suggestion_details(suggestions[0])
        if suggestion is not None:
            click.echo("")
            click.echo(f"  Category: {suggestion.category}")
            click.echo(f"  Amount: {suggestion.amount.format()}")
            click.echo(f"  Income: {'yes' if suggestion.income else 'no'}")
            click.echo(f"  Account ID: {suggestion.account_id}")


@transaction_group.command("export")
@click.argument("path", type=click.Path(dir_okay=False, writable=True))
@click.option("--start-date", help="Start date")
@click.option("--end-date", help="End date")
@click.option("--period", help="Calendar month (YYYY-MM)")
@click.pass_context
def export_transactions(
    ctx, path: str, start_date: str | None, end_date: str | None, period: str | None
) -> None:
    """Export transactions to a JSON file.

    Amounts are written as plain JSON numbers, dates as YYYY-MM-DD.
    """
    service = TransactionService(ctx.obj["db"])
    start, end = resolve_cli_date_range(
        ctx, start_date=start_date, end_date=end_date, period=period
    )

    transactions = service.list_transactions(start_date=start, end_date=end)
    payload = money_dumps([_transaction_to_dict(txn) for txn in transactions], indent=2)
    Path(path).write_text(payload + "\n", encoding="utf-8")
    click.echo(f"Exported {len(transactions)} transaction(s) to {path}")


def register_commands(cli):
    """Register transaction commands with main CLI."""
    cli.add_command(transaction_group, name="transaction")
