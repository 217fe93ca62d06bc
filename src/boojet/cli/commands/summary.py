"""Summary commands."""

import click

from boojet.cli.date_filters import resolve_cli_year_month
from boojet.cli.error_handling import handle_domain_error
from boojet.domain.errors import DomainError
from boojet.domain.summary import SummaryService
from boojet.utils.date_parser import parse_year_month


@click.command("summary")
@click.option("--period", help="Month to summarise (YYYY-MM or 'last month')")
@click.option("--year", type=int, help="Year of the month to summarise")
@click.option("--month", type=int, help="Month number (1-12)")
@click.option("--sparse", is_flag=True, help="Only list categories that have transactions")
@click.option("--rollup", is_flag=True, help="Fold subcategories into their top-level category")
@click.pass_context
def summary(
    ctx,
    period: str | None,
    year: int | None,
    month: int | None,
    sparse: bool,
    rollup: bool,
):
    """Net total per category.

    Without a month every transaction is included. Income counts positive,
    expenses negative.

    Examples:
        boojet summary --period 2025-03
        boojet summary --year 2025 --month 3 --sparse
    """
    service = SummaryService(ctx.obj["db"])
    year_month = resolve_cli_year_month(ctx, period=period, year=year, month=month)
    year_arg = year_month.year if year_month else None
    month_arg = year_month.month if year_month else None

    if rollup:
        rows = list(service.rollup_summary(year_arg, month_arg).items())
    elif sparse:
        rows = list(service.category_summary(year_arg, month_arg, full_catalog=False).items())
    else:
        rows = [
            (entry.category, entry.total)
            for entry in service.category_summary(year_arg, month_arg, full_catalog=True)
        ]

    title = f"Summary for {year_month}" if year_month else "Summary for all transactions"
    click.echo(f"\n{title}:")
    click.echo("-" * 40)
    if not rows:
        click.echo("No transactions found.")
        return
    for code, total in rows:
        click.echo(f"{code:24s} {total.format():>15}")


@click.command("monthly")
@click.option("--start", "start", required=True, help="First month (YYYY-MM)")
@click.option("--end", "end", required=True, help="Last month (YYYY-MM)")
@click.pass_context
def monthly(ctx, start: str, end: str):
    """Net total per month over a range of months."""
    service = SummaryService(ctx.obj["db"])

    try:
        start_month = parse_year_month(start)
        end_month = parse_year_month(end)
    except DomainError as e:
        handle_domain_error(ctx, e)

    if end_month < start_month:
        click.echo("Error: --end must not be before --start.", err=True)
        ctx.exit(1)

    for year_month, total in service.monthly_summary(start_month, end_month).items():
        click.echo(f"{year_month}  {total.format():>15}")


def register_commands(cli):
    """Register summary commands with main CLI."""
    cli.add_command(summary)
    cli.add_command(monthly)
