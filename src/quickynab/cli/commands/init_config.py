"""Configuration setup command."""

import click

from quickynab.cli.context import get_upload_service
from quickynab.cli.error_handling import handle_domain_error
from quickynab.config import Settings, default_config_path, save_config
from quickynab.domain.errors import DomainError

TOKEN_URL = "https://app.ynab.com/settings/developer"


@click.command("init")
@click.option("--token", help="YNAB personal access token (prompted if omitted)")
@click.pass_context
def init_config(ctx, token: str | None):
    """Initialize quickynab configuration."""
    if not token:
        click.echo("quickynab setup")
        click.echo(f"Get your Personal Access Token from: {TOKEN_URL}\n")
        token = click.prompt("Enter your YNAB Access Token", hide_input=True)
    token = token.strip()
    if not token:
        click.echo("Error: Access token is required", err=True)
        ctx.exit(1)

    click.echo("\nVerifying token...")
    try:
        service = get_upload_service(ctx, Settings(ynab_access_token=token))
        budgets = service.list_budgets()
    except DomainError as e:
        handle_domain_error(ctx, e)

    click.echo(f"Token verified! Found {len(budgets)} budget(s)")
    for budget in budgets:
        click.echo(f"  - {budget.name}")

    path = save_config(
        {"YNAB_ACCESS_TOKEN": token},
        ctx.obj.get("config_path") or default_config_path(),
    )
    click.echo(f"\nConfiguration saved to {path}")
    click.echo("Optionally add YNAB_BUDGET_ID and YNAB_ACCOUNT_ID to skip selection prompts.")


def register_commands(cli):
    """Register init command with main CLI."""
    cli.add_command(init_config)
