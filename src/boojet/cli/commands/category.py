"""Category management commands."""

import click

from boojet.cli.error_handling import handle_domain_error
from boojet.domain.category import CategoryService
from boojet.domain.errors import DomainError


@click.group()
def category_group():
    """Manage categories."""
    pass


@category_group.command("list")
@click.option("--all", "show_all", is_flag=True, help="Include deactivated categories")
@click.pass_context
def list_categories(ctx, show_all: bool):
    """List categories in reporting order."""
    service = CategoryService(ctx.obj["db"])
    catalog = service.catalog(include_inactive=show_all)

    if not len(catalog):
        click.echo("No categories found.")
        return

    for definition in catalog:
        depth = 0
        parent = definition.parent_code
        while parent is not None and depth < 10:
            depth += 1
            parent_def = catalog.get(parent)
            parent = parent_def.parent_code if parent_def is not None else None
        flags = []
        if not definition.system:
            flags.append("custom")
        if definition.essential:
            flags.append("essential")
        if not definition.active:
            flags.append("inactive")
        suffix = f" [{', '.join(flags)}]" if flags else ""
        click.echo(
            f"{'  ' * depth}{definition.code} - {definition.name} "
            f"({definition.type.value.lower()}){suffix}"
        )


@category_group.command("create")
@click.argument("code")
@click.argument("name")
@click.option("--parent", required=True, help="Parent category code (e.g., FOOD)")
@click.option("--essential/--non-essential", default=None, help="Mark as an essential expense")
@click.pass_context
def create_category(ctx, code: str, name: str, parent: str, essential: bool | None):
    """Create a subcategory.

    Examples:
        boojet category create GROCERIES "Groceries" --parent FOOD --essential
        boojet category create DINING "Dining out" --parent FOOD
    """
    service = CategoryService(ctx.obj["db"])

    try:
        service.create_category(code=code, name=name, parent_code=parent, essential=essential)
    except DomainError as e:
        handle_domain_error(ctx, e)

    click.echo(f"Created category '{code.strip().upper()}' under {parent.strip().upper()}")


@category_group.command("deactivate")
@click.argument("code")
@click.pass_context
def deactivate_category(ctx, code: str):
    """Deactivate a category.

    Existing transactions keep it; new transactions can no longer use it.
    """
    service = CategoryService(ctx.obj["db"])

    try:
        service.deactivate_category(code)
    except DomainError as e:
        handle_domain_error(ctx, e)

    click.echo(f"Deactivated category '{code.strip().upper()}'")


def register_commands(cli):
    """Register category commands with main CLI."""
    cli.add_command(category_group, name="category")
