"""Report and balance commands."""

import click

from boojet.cli.date_filters import resolve_cli_year_month
from boojet.cli.error_handling import handle_domain_error
from boojet.domain.errors import DomainError
from boojet.domain.income_plan import IncomePlanService
from boojet.domain.money import money_dumps
from boojet.domain.transaction import TransactionService


@click.group()
def report_group():
    """Income and expense reports."""
    pass


@report_group.command("net")
@click.option("--period", help="Month to report on (YYYY-MM)")
@click.option("--year", type=int, help="Year of the month to report on")
@click.option("--month", type=int, help="Month number (1-12)")
@click.option("--json", "as_json", is_flag=True, help="Print the report as JSON")
@click.pass_context
def net(ctx, period: str | None, year: int | None, month: int | None, as_json: bool):
    """Compare expected and actual income against expenses for a month.

    Examples:
        boojet report net --year 2025 --month 3
        boojet report net --period 2025-03 --json
    """
    service = IncomePlanService(ctx.obj["db"])
    year_month = resolve_cli_year_month(
        ctx, period=period, year=year, month=month, default_today=True
    )

    try:
        report = service.get_net_report(year_month.year, year_month.month)
    except DomainError as e:
        handle_domain_error(ctx, e)

    if as_json:
        click.echo(money_dumps(report.to_dict(), indent=2))
        return

    click.echo(f"\nNet report for {report.month}:")
    click.echo("-" * 40)
    click.echo(f"{'Expected income':24s} {report.expected_income.format():>15}")
    click.echo(f"{'Actual income':24s} {report.actual_income.format():>15}")
    click.echo(f"{'Expenses':24s} {report.expenses.format():>15}")
    click.echo("-" * 40)
    click.echo(f"{'Net (expected)':24s} {report.net_expected.format():>15}")
    click.echo(f"{'Net (actual)':24s} {report.net_actual.format():>15}")


@click.command("balance")
@click.option("--period", help="Only count transactions in this month (YYYY-MM)")
@click.option("--year", type=int, help="Year of the month")
@click.option("--month", type=int, help="Month number (1-12)")
@click.pass_context
def balance(ctx, period: str | None, year: int | None, month: int | None):
    """Net of all transactions: income minus expenses.

    Opening balances are not included; use 'account balance' for those.
    """
    service = TransactionService(ctx.obj["db"])
    year_month = resolve_cli_year_month(ctx, period=period, year=year, month=month)

    if year_month is None:
        click.echo(service.total_balance().format())
    else:
        click.echo(service.monthly_balance(year_month.year, year_month.month).format())


def register_commands(cli):
    """Register report commands with main CLI."""
    cli.add_command(report_group, name="report")
    cli.add_command(balance)
