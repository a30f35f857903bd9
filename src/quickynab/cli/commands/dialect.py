"""Bank dialect commands."""

import click

from quickynab.cli.context import get_registry, user_dialects_path
from quickynab.cli.error_handling import handle_domain_error
from quickynab.domain.dialects import (
    BANK2YNAB_CONF_URL,
    fetch_bank2ynab_configs,
    write_snapshot,
)
from quickynab.domain.errors import DomainError


@click.group("dialects")
def dialect_group():
    """Inspect known bank CSV formats."""
    pass


@dialect_group.command("list")
@click.pass_context
def list_dialects(ctx):
    """List bank formats in matching order."""
    try:
        registry = get_registry(ctx)
    except DomainError as e:
        handle_domain_error(ctx, e)

    if len(registry) == 0:
        click.echo("No bank formats loaded.")
        return

    click.echo(f"{'Name':<40} {'Pattern':<45} {'Regex':<6}")
    click.echo("-" * 93)
    for descriptor in registry:
        click.echo(
            f"{descriptor.name:<40} {descriptor.filename_pattern:<45} "
            f"{'yes' if descriptor.use_regex else 'no':<6}"
        )
    click.echo(f"\n{len(registry)} bank formats")


@dialect_group.command("match")
@click.argument("filename")
@click.pass_context
def match_filename(ctx, filename: str):
    """Show which bank format a filename is detected as."""
    try:
        descriptor = get_registry(ctx).match(filename)
    except DomainError as e:
        handle_domain_error(ctx, e)

    if descriptor is None:
        click.echo("No bank format matched; the generic YNAB layout will be used.")
        return

    click.echo(f"Matched: {descriptor.name}")
    click.echo(f"  Delimiter: {descriptor.delimiter!r}")
    click.echo(f"  Header rows: {descriptor.header_rows}")
    click.echo(f"  Footer rows: {descriptor.footer_rows}")
    click.echo(f"  Columns: {', '.join(column.value for column in descriptor.columns)}")
    click.echo(f"  Date format: {descriptor.date_format or 'auto-detect'}")


@click.command("update-dialects")
@click.option("--url", default=BANK2YNAB_CONF_URL, show_default=True, help="bank2ynab.conf location")
@click.option("--output", type=click.Path(dir_okay=False), help="Snapshot file to write")
@click.pass_context
def update_dialects(ctx, url: str, output: str | None):
    """Refresh the bank format snapshot from bank2ynab."""
    path = output or user_dialects_path(ctx)
    click.echo("Fetching bank2ynab configs...")
    try:
        configs = fetch_bank2ynab_configs(url)
    except DomainError as e:
        handle_domain_error(ctx, e)

    if write_snapshot(configs, path):
        click.echo(f"Saved {len(configs)} bank formats to {path}")
    else:
        click.echo(f"Bank formats are up to date ({len(configs)} formats)")


def register_commands(cli):
    """Register dialect commands with main CLI."""
    cli.add_command(dialect_group)
    cli.add_command(update_dialects)
