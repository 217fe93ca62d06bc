"""Account management commands."""

import click

from boojet.cli.account_resolution import resolve_account_or_exit
from boojet.cli.error_handling import handle_domain_error
from boojet.domain.account import AccountService
from boojet.domain.entities import AccountDraft, AccountType
from boojet.domain.errors import DomainError
from boojet.utils.amount_parser import parse_amount
from boojet.utils.date_parser import parse_date

ACCOUNT_TYPES = [t.value for t in AccountType]


def _build_draft(
    name: str | None,
    account_type: str | None,
    opening_balance: str | None,
    created: str | None,
) -> AccountDraft:
    return AccountDraft(
        name=name,
        type=AccountType(account_type.upper()) if account_type else None,
        opening_balance=parse_amount(opening_balance) if opening_balance is not None else None,
        created_at=parse_date(created) if created else None,
    )


@click.group()
def account_group():
    """Manage accounts."""
    pass


@account_group.command("create")
@click.argument("name", metavar="ACCOUNT_NAME", required=False)
@click.option(
    "--type",
    "account_type",
    type=click.Choice(ACCOUNT_TYPES, case_sensitive=False),
    help="Account type (defaults to CHEQUING)",
)
@click.option("--opening-balance", help="Opening balance (defaults to 0.00)")
@click.option("--created", help="Opening date (defaults to today)")
@click.pass_context
def create_account(
    ctx,
    name: str | None,
    account_type: str | None,
    opening_balance: str | None,
    created: str | None,
):
    """Create a new account.

    Without ACCOUNT_NAME the account is named "Default Account <id>".

    Examples:
        boojet account create "Everyday"
        boojet account create "Visa" --type credit --opening-balance -250.00
        boojet account create
    """
    service = AccountService(ctx.obj["db"])

    try:
        draft = _build_draft(name, account_type, opening_balance, created)
        account_id = service.create_account(draft)
    except DomainError as e:
        handle_domain_error(ctx, e)

    account = service.get_account(account_id)
    click.echo(f"Created account '{account.name}' (ID: {account_id})")


@account_group.command("list")
@click.option("--all", "show_all", is_flag=True, help="Include closed accounts")
@click.pass_context
def list_accounts(ctx, show_all: bool):
    """List accounts."""
    service = AccountService(ctx.obj["db"])

    accounts = service.list_accounts()
    if not show_all:
        accounts = [acc for acc in accounts if acc.is_active]
    if not accounts:
        click.echo("No accounts found.")
        return

    click.echo("\nAccounts:")
    click.echo("-" * 72)
    for acc in accounts:
        status = "" if acc.is_active else f" | closed {acc.closed_at}"
        click.echo(
            f"ID: {acc.id:3d} | {acc.name:24s} | {acc.type.value:10s} | "
            f"opened {acc.created_at}{status}"
        )


@account_group.command("show")
@click.argument("account", metavar="ACCOUNT")
@click.pass_context
def show_account(ctx, account: str) -> None:
    """Show account details and current balance.

    ACCOUNT can be an account name or ID.
    """
    service = AccountService(ctx.obj["db"])
    account_id = resolve_account_or_exit(ctx, service, account)

    acc = service.require_account(account_id)
    click.echo(f"Account {acc.id}: {acc.name}")
    click.echo(f"  Type: {acc.type.value}")
    click.echo(f"  Opening balance: {acc.opening_balance.format()}")
    click.echo(f"  Opened: {acc.created_at}")
    if acc.closed_at is not None:
        click.echo(f"  Closed: {acc.closed_at}")
    click.echo(f"  Balance: {service.get_balance(account_id).format()}")


@account_group.command("update")
@click.argument("account", metavar="ACCOUNT")
@click.option("--name", help="New account name")
@click.option(
    "--type",
    "account_type",
    type=click.Choice(ACCOUNT_TYPES, case_sensitive=False),
    help="New account type",
)
@click.option("--opening-balance", help="New opening balance")
@click.option("--created", help="New opening date")
@click.pass_context
def update_account(
    ctx,
    account: str,
    name: str | None,
    account_type: str | None,
    opening_balance: str | None,
    created: str | None,
) -> None:
    """Update an account.

    Only the options given are changed. ACCOUNT can be an account name or ID.

    Examples:
        boojet account update "Everyday" --name "Main Chequing"
        boojet account update 2 --opening-balance 150.00
    """
    service = AccountService(ctx.obj["db"])
    account_id = resolve_account_or_exit(ctx, service, account)

    try:
        draft = _build_draft(name, account_type, opening_balance, created)
        updated = service.patch_account(account_id, draft)
    except DomainError as e:
        handle_domain_error(ctx, e)

    click.echo(f"Updated account '{updated.name}' (ID: {account_id})")


@account_group.command("close")
@click.argument("account", metavar="ACCOUNT")
@click.option("--date", "closed_on", help="Closing date (defaults to today)")
@click.pass_context
def close_account(ctx, account: str, closed_on: str | None) -> None:
    """Close an account. ACCOUNT can be an account name or ID."""
    service = AccountService(ctx.obj["db"])
    account_id = resolve_account_or_exit(ctx, service, account)

    try:
        closed_at = parse_date(closed_on) if closed_on else None
        closed = service.close_account(account_id, closed_at)
    except DomainError as e:
        handle_domain_error(ctx, e)

    click.echo(f"Closed account '{closed.name}' as of {closed.closed_at}")


@account_group.command("delete")
@click.argument("account", metavar="ACCOUNT")
@click.option("--yes", is_flag=True, help="Do not ask for confirmation")
@click.pass_context
def delete_account(ctx, account: str, yes: bool) -> None:
    """Delete an account.

    ACCOUNT can be an account name or ID.

    The account can only be deleted if it has no transactions. Delete or
    move them to another account first.

    Examples:
        boojet account delete "Old Savings"
        boojet account delete 3 --yes
    """
    service = AccountService(ctx.obj["db"])
    account_id = resolve_account_or_exit(ctx, service, account)
    account_obj = service.require_account(account_id)

    if not yes and not click.confirm(
        f"Are you sure you want to delete account '{account_obj.name}' (ID: {account_id})?"
    ):
        click.echo("Deletion cancelled.")
        return

    try:
        service.delete_account(account_id)
    except DomainError as e:
        handle_domain_error(ctx, e)

    click.echo(f"Deleted account '{account_obj.name}'")


@account_group.command("balance")
@click.argument("account", metavar="ACCOUNT")
@click.pass_context
def account_balance(ctx, account: str) -> None:
    """Show an account's balance: opening balance plus its transactions."""
    service = AccountService(ctx.obj["db"])
    account_id = resolve_account_or_exit(ctx, service, account)
    click.echo(service.get_balance(account_id).format())


def register_commands(cli):
    """Register account commands with main CLI."""
    cli.add_command(account_group, name="account")
