"""Add transaction command."""

import click

from boojet.cli.account_resolution import resolve_account_or_exit
from boojet.cli.error_handling import handle_domain_error
from boojet.domain.account import AccountService
from boojet.domain.entities import TransactionDraft
from boojet.domain.errors import DomainError
from boojet.domain.transaction import TransactionService
from boojet.utils.amount_parser import parse_amount
from boojet.utils.date_parser import parse_date


@click.command("add")
@click.option("--account", required=True, help="Account name or ID")
@click.option("--amount", required=True, help="Transaction amount, always positive (e.g., 42.50)")
@click.option("--category", required=True, help="Category code (e.g., FOOD)")
@click.option(
    "--date",
    help="Transaction date (YYYY-MM-DD or relative like 'today', 'yesterday'); defaults to today",
)
@click.option("--description", help="Transaction description")
@click.option(
    "--income/--expense",
    default=False,
    help="Record money coming in (--income) or going out (--expense, the default)",
)
@click.pass_context
def add_transaction(
    ctx,
    account: str,
    amount: str,
    category: str,
    date: str | None,
    description: str | None,
    income: bool,
):
    """Record a transaction.

    Examples:
        boojet add --account 1 --amount 54.20 --category FOOD --description "Groceries"
        boojet add --account Everyday --amount 2500 --category INCOME --income --date 2025-03-01
    """
    db = ctx.obj["db"]
    transaction_service = TransactionService(db)
    account_service = AccountService(db)

    account_id = resolve_account_or_exit(ctx, account_service, account)

    try:
        draft = TransactionDraft(
            account_id=account_id,
            date=parse_date(date) if date else None,
            amount=parse_amount(amount),
            category=category,
            income=income,
            description=description,
        )
        transaction_id = transaction_service.create_transaction(draft)
    except DomainError as e:
        handle_domain_error(ctx, e)

    txn = transaction_service.require_transaction(transaction_id)
    account_obj = account_service.require_account(account_id)
    click.echo(f"Created transaction {transaction_id}")
    click.echo(f"  Account: {account_obj.name}")
    click.echo(f"  Date: {txn.date}")
    click.echo(f"  Amount: {txn.amount.format()} ({'income' if txn.income else 'expense'})")
    click.echo(f"  Category: {txn.category}")
    click.echo(f"  Description: {txn.description}")


def register_commands(cli):
    """Register add command with main CLI."""
    cli.add_command(add_transaction)
