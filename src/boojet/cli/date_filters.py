"""CLI helpers for date range and month resolution."""

from datetime import date

import click

from boojet.domain.errors import InvalidInputError
from boojet.domain.periods import YearMonth
from boojet.domain.report import build_year_month
from boojet.utils.date_parser import parse_date, parse_year_month


def _parse_or_exit(ctx: click.Context, label: str, value: str) -> date:
    try:
        return parse_date(value)
    except InvalidInputError as e:
        click.echo(f"Error: Invalid {label}: {e}", err=True)
        ctx.exit(1)


def resolve_cli_date_range(
    ctx: click.Context,
    *,
    start_date: str | None,
    end_date: str | None,
    period: str | None = None,
) -> tuple[date | None, date | None]:
    """Resolve a date range from a month token or explicit dates."""
    if period and (start_date or end_date):
        click.echo(
            "Error: --period cannot be combined with --start-date or --end-date.",
            err=True,
        )
        ctx.exit(1)

    if period:
        year_month = resolve_cli_year_month(ctx, period=period, year=None, month=None)
        return year_month.first_day, year_month.last_day

    start = _parse_or_exit(ctx, "start date", start_date) if start_date else None
    end = _parse_or_exit(ctx, "end date", end_date) if end_date else None
    return start, end


def resolve_cli_year_month(
    ctx: click.Context,
    *,
    period: str | None,
    year: int | None,
    month: int | None,
    default_today: bool = False,
) -> YearMonth | None:
    """Resolve a month from ``--period`` or ``--year``/``--month``.

    Returns None when nothing was given, unless ``default_today`` asks for
    the current month.
    """
    if period and (year is not None or month is not None):
        click.echo("Error: --period cannot be combined with --year or --month.", err=True)
        ctx.exit(1)

    try:
        if period:
            return parse_year_month(period)
        if year is not None or month is not None:
            return build_year_month(year, month)
    except InvalidInputError as e:
        click.echo(f"Error: {e}", err=True)
        ctx.exit(1)

    if default_today:
        return YearMonth.from_date(date.today())
    return None
