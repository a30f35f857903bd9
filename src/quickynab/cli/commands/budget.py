"""Budget and account listing commands."""

import click

from quickynab.cli.context import get_upload_service
from quickynab.cli.error_handling import handle_domain_error
from quickynab.cli.selection import resolve_budget_or_prompt
from quickynab.domain.errors import DomainError


@click.command("budgets")
@click.pass_context
def list_budgets(ctx):
    """List all budgets."""
    try:
        budgets = get_upload_service(ctx).list_budgets()
    except DomainError as e:
        handle_domain_error(ctx, e)

    if not budgets:
        click.echo("No budgets found.")
        return

    click.echo("Available budgets:")
    for budget in budgets:
        click.echo(f"  - {budget.name} ({budget.id})")


@click.command("accounts")
@click.option("--budget", "budget_id", help="Budget ID (overrides YNAB_BUDGET_ID)")
@click.pass_context
def list_accounts(ctx, budget_id):
    """List open accounts in a budget."""
    try:
        service = get_upload_service(ctx)
        budget_id = resolve_budget_or_prompt(service, budget_id)
        accounts = service.list_accounts(budget_id)
    except DomainError as e:
        handle_domain_error(ctx, e)

    if not accounts:
        click.echo("No open accounts found.")
        return

    click.echo("Available accounts:")
    for account in accounts:
        click.echo(f"  - {account.name} ({account.id})")


def register_commands(cli):
    """Register budget commands with main CLI."""
    cli.add_command(list_budgets)
    cli.add_command(list_accounts)
