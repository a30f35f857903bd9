"""CSV import command."""

import click

from quickynab.cli.context import get_import_service, get_upload_service
from quickynab.cli.error_handling import handle_domain_error
from quickynab.cli.selection import resolve_account_or_prompt, resolve_budget_or_prompt
from quickynab.domain.errors import DomainError

PREVIEW_ROWS = 5


@click.command("import")
@click.argument("csv_file", type=click.Path(exists=True, dir_okay=False))
@click.option("--dry-run", is_flag=True, help="Preview transactions without uploading")
@click.option("--budget", "budget_id", help="Budget ID (overrides YNAB_BUDGET_ID)")
@click.option("--account", "account_id", help="Account ID (overrides YNAB_ACCOUNT_ID)")
@click.option(
    "--original-name",
    help="Filename to use for bank format detection if the file was renamed",
)
@click.pass_context
def import_csv(ctx, csv_file: str, dry_run: bool, budget_id, account_id, original_name):
    """Import transactions from a bank CSV file."""
    click.echo(f"Reading CSV file: {csv_file}")
    try:
        service = get_import_service(ctx)
        service.validate_structure(csv_file, original_name)
        report = service.parse_report(csv_file, original_name)
    except DomainError as e:
        handle_domain_error(ctx, e)

    click.echo(f"Format: {report.dialect_name or 'YNAB (generic)'}")
    click.echo(f"Parsed {len(report.transactions)} transactions")
    if report.skipped:
        click.echo(f"Skipped {len(report.skipped)} rows:", err=True)
        for row in report.skipped:
            click.echo(f"  Row {row.row_num}: {row.reason}", err=True)

    if not report.transactions:
        click.echo("No transactions to import")
        return

    click.echo("\nPreview of transactions:")
    for index, tx in enumerate(report.transactions[:PREVIEW_ROWS], start=1):
        click.echo(f"  {index}. {tx.date} | {tx.payee_name or 'No payee'} | {tx.amount:.2f}")
    if len(report.transactions) > PREVIEW_ROWS:
        click.echo(f"  ... and {len(report.transactions) - PREVIEW_ROWS} more")

    if dry_run:
        click.echo("\n[DRY RUN] No transactions were uploaded")
        return

    click.echo("\nUploading transactions to YNAB...")
    try:
        upload_service = get_upload_service(ctx)
        budget_id = resolve_budget_or_prompt(upload_service, budget_id)
        account_id = resolve_account_or_prompt(upload_service, budget_id, account_id)
        result = upload_service.upload(
            report.transactions, account_id=account_id, budget_id=budget_id
        )
    except DomainError as e:
        handle_domain_error(ctx, e)

    click.echo("\nImport complete:")
    click.echo(f"  Imported: {result.imported} transactions")
    click.echo(f"  Skipped: {result.duplicates} duplicates")


def register_commands(cli):
    """Register import command with main CLI."""
    cli.add_command(import_csv)
