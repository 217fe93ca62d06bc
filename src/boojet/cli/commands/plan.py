"""Income plan commands."""

from decimal import Decimal, InvalidOperation

import click

from boojet.cli.date_filters import resolve_cli_year_month
from boojet.cli.error_handling import handle_domain_error
from boojet.domain.entities import IncomePlan, IncomePlanDraft, PayType
from boojet.domain.errors import DomainError, InvalidInputError, invalid_field
from boojet.domain.income_plan import IncomePlanService
from boojet.domain.periods import monthly_amount
from boojet.utils.amount_parser import parse_amount
from boojet.utils.date_parser import parse_date

PAY_TYPES = [t.value for t in PayType]


def _parse_hours(hours: str | None) -> Decimal | None:
    if hours is None:
        return None
    try:
        return Decimal(hours.strip())
    except InvalidOperation:
        raise InvalidInputError(invalid_field("hours_per_week", f"'{hours}' is not a number")) from None


def _build_draft(
    source: str | None,
    pay_type: str | None,
    amount: str | None,
    hours: str | None,
    start: str | None,
    end: str | None,
) -> IncomePlanDraft:
    return IncomePlanDraft(
        source_name=source,
        pay_type=PayType(pay_type.upper()) if pay_type else None,
        amount=parse_amount(amount) if amount is not None else None,
        hours_per_week=_parse_hours(hours),
        effective_from=parse_date(start) if start else None,
        effective_to=parse_date(end) if end else None,
    )


def _describe(plan: IncomePlan) -> str:
    rate = plan.amount.format() if plan.amount is not None else "-"
    hours = f" x {plan.hours_per_week}h/week" if plan.hours_per_week is not None else ""
    until = plan.effective_to if plan.effective_to is not None else "ongoing"
    pay_type = plan.pay_type.value if plan.pay_type is not None else "-"
    return (
        f"ID: {plan.id:3d} | {plan.source_name:20s} | {pay_type:8s} | "
        f"{rate}{hours} | {plan.effective_from} to {until}"
    )


@click.group()
def plan_group():
    """Manage income plans."""
    pass


@plan_group.command("create")
@click.option("--source", help="Income source name (defaults to 'Income Plan <id>')")
@click.option(
    "--pay-type",
    required=True,
    type=click.Choice(PAY_TYPES, case_sensitive=False),
    help="How the amount is paid",
)
@click.option(
    "--amount",
    required=True,
    help="Hourly rate, paycheck, monthly amount or annual salary depending on --pay-type",
)
@click.option("--hours", help="Hours per week (required for HOURLY)")
@click.option("--from", "start", help="First effective date (defaults to today)")
@click.option("--to", "end", help="Last effective date (open-ended if omitted)")
@click.pass_context
def create_plan(
    ctx,
    source: str | None,
    pay_type: str,
    amount: str,
    hours: str | None,
    start: str | None,
    end: str | None,
):
    """Create an income plan.

    Examples:
        boojet plan create --source "Cafe" --pay-type hourly --amount 20 --hours 40
        boojet plan create --source "Salary" --pay-type annual --amount 60000 --from 2025-01-01
    """
    service = IncomePlanService(ctx.obj["db"])

    try:
        plan_id = service.create_plan(_build_draft(source, pay_type, amount, hours, start, end))
    except DomainError as e:
        handle_domain_error(ctx, e)

    plan = service.require_plan(plan_id)
    click.echo(f"Created income plan '{plan.source_name}' (ID: {plan_id})")


@plan_group.command("list")
@click.pass_context
def list_plans(ctx):
    """List income plans."""
    service = IncomePlanService(ctx.obj["db"])

    plans = service.list_plans()
    if not plans:
        click.echo("No income plans found.")
        return

    click.echo("\nIncome plans:")
    click.echo("-" * 80)
    for plan in plans:
        click.echo(_describe(plan))


@plan_group.command("update")
@click.argument("plan_id", type=int)
@click.option("--source", help="New source name")
@click.option(
    "--pay-type",
    type=click.Choice(PAY_TYPES, case_sensitive=False),
    help="New pay type",
)
@click.option("--amount", help="New amount")
@click.option("--hours", help="New hours per week")
@click.option("--from", "start", help="New first effective date")
@click.option("--to", "end", help="New last effective date")
@click.pass_context
def update_plan(
    ctx,
    plan_id: int,
    source: str | None,
    pay_type: str | None,
    amount: str | None,
    hours: str | None,
    start: str | None,
    end: str | None,
) -> None:
    """Update an income plan.

    Only the options given are changed.
    """
    service = IncomePlanService(ctx.obj["db"])

    try:
        plan = service.patch_plan(
            plan_id, _build_draft(source, pay_type, amount, hours, start, end)
        )
    except DomainError as e:
        handle_domain_error(ctx, e)

    click.echo(f"Updated income plan '{plan.source_name}' (ID: {plan_id})")


@plan_group.command("delete")
@click.argument("plan_id", type=int)
@click.pass_context
def delete_plan(ctx, plan_id: int) -> None:
    """Delete an income plan."""
    service = IncomePlanService(ctx.obj["db"])

    try:
        service.delete_plan(plan_id)
    except DomainError as e:
        handle_domain_error(ctx, e)

    click.echo(f"Deleted income plan {plan_id}")


@plan_group.command("project")
@click.option("--period", help="Month to project (YYYY-MM); defaults to the current month")
@click.option("--year", type=int, help="Year of the month to project")
@click.option("--month", type=int, help="Month number (1-12)")
@click.pass_context
def project(ctx, period: str | None, year: int | None, month: int | None) -> None:
    """Show the income each plan is expected to bring in for a month."""
    service = IncomePlanService(ctx.obj["db"])
    year_month = resolve_cli_year_month(
        ctx, period=period, year=year, month=month, default_today=True
    )

    plans = service.list_plans()
    click.echo(f"\nProjected income for {year_month}:")
    click.echo("-" * 60)
    try:
        for plan in plans:
            click.echo(f"{plan.source_name:30s} {monthly_amount(plan, year_month).format():>15}")
        total = service.expected_monthly_income(year_month.year, year_month.month)
    except DomainError as e:
        handle_domain_error(ctx, e)

    click.echo("-" * 60)
    click.echo(f"{'Total':30s} {total.format():>15}")


def register_commands(cli):
    """Register income plan commands with main CLI."""
    cli.add_command(plan_group, name="plan")
