"""CLI error handling helpers."""

import click

from quickynab.domain.errors import ConfigError, CSVParseError, DomainError, YnabApiError
from quickynab.logging_setup import get_logger

logger = get_logger(__name__)


def describe_error(error: DomainError | ValueError) -> str:
    """One-line summary of an error, prefixed with what kind of failure it was."""
    if isinstance(error, ConfigError):
        return f"Configuration error: {error}"
    if isinstance(error, CSVParseError):
        where = f" (line {error.line})" if error.line else ""
        return f"CSV error{where}: {error}"
    if isinstance(error, YnabApiError):
        status = f" (HTTP {error.status_code})" if error.status_code else ""
        return f"{error}{status}"
    return str(error)


def handle_domain_error(ctx: click.Context, error: DomainError | ValueError) -> None:
    """Render a domain error on stderr and exit with failure.

    The traceback is logged at debug level, so ``--verbose`` shows it.
    """
    logger.debug("%s raised", type(error).__name__, exc_info=error)
    click.echo(f"Error: {describe_error(error)}", err=True)
    ctx.exit(1)
