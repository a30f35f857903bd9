"""Main CLI entry point."""

from pathlib import Path

import click

from quickynab.logging_setup import configure_logging

# Import and register all commands at module level
from quickynab.cli.commands import (
    budget,
    dialect,
    import_cmd,
    init_config,
)


@click.group()
@click.option(
    "--config",
    "config_path",
    type=click.Path(dir_okay=False),
    help="Path to config file (overrides QUICKYNAB_CONFIG environment variable)",
    envvar="QUICKYNAB_CONFIG",
)
@click.option(
    "--dialects",
    "dialects_path",
    type=click.Path(exists=True, dir_okay=False),
    help="JSON bank format snapshot to use instead of the installed one",
    envvar="QUICKYNAB_DIALECTS",
)
@click.option("-v", "--verbose", is_flag=True, help="Show debug logging")
@click.pass_context
def cli(ctx, config_path: str | None, dialects_path: str | None, verbose: bool):
    """quickynab - Quick bank transaction imports to YNAB.

    Detects your bank's CSV export format automatically and uploads the
    transactions, skipping any that were imported before.
    """
    ctx.ensure_object(dict)
    configure_logging("DEBUG" if verbose else None)

    if config_path:
        ctx.obj["config_path"] = Path(config_path)
    if dialects_path:
        ctx.obj["dialects_path"] = Path(dialects_path)


# Register all commands
init_config.register_commands(cli)
import_cmd.register_commands(cli)
budget.register_commands(cli)
dialect.register_commands(cli)


def main():
    """Main entry point for CLI."""
    cli()


if __name__ == "__main__":
    main()
