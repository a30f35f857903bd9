"""Tests for CSV import command."""

import pytest

from quickynab.cli.main import cli
from quickynab.config import Settings
from quickynab.domain.entities import Account
from quickynab.domain.errors import YnabApiError

NEON_FILE = "2025_9_account_statements.csv"
NEON_CONTENT = (
    '"Date";"Amount";"Original amount";"Original currency";"Exchange rate";"Description";"Subject"\n'
    '"2025-09-29";"-80.00";"";"";"";"TWINT *Sent";""\n'
)


@pytest.fixture
def cli_obj(registry, fake_client, settings):
    """Context object wiring the CLI to the test registry and fake client."""

    def _make(client=None, settings_override=None):
        return {
            "registry": registry,
            "settings": settings_override or settings,
            "client_factory": lambda s: client or fake_client,
        }

    return _make


def test_import_dry_run(cli_runner, cli_obj, fake_client, write_csv):
    path = write_csv(NEON_FILE, NEON_CONTENT)

    result = cli_runner.invoke(cli, ["import", str(path), "--dry-run"], obj=cli_obj())

    assert result.exit_code == 0
    assert "Format: CH Neon Monthly" in result.output
    assert "Parsed 1 transactions" in result.output
    assert "2025-09-29 | TWINT *Sent | -80.00" in result.output
    assert "[DRY RUN] No transactions were uploaded" in result.output
    assert fake_client.calls == []


def test_import_successful(cli_runner, cli_obj, fake_client, write_csv):
    path = write_csv(NEON_FILE, NEON_CONTENT)

    result = cli_runner.invoke(cli, ["import", str(path)], obj=cli_obj())

    assert result.exit_code == 0
    assert "Import complete" in result.output
    assert "Imported: 1 transactions" in result.output
    assert "Skipped: 0 duplicates" in result.output
    budget_id, payload = fake_client.calls[0]
    assert budget_id == "budget-123"
    assert payload[0]["amount"] == -80000
    assert payload[0]["account_id"] == "account-456"


def test_import_twice_reports_duplicates(cli_runner, cli_obj, write_csv):
    path = write_csv(NEON_FILE, NEON_CONTENT)

    cli_runner.invoke(cli, ["import", str(path)], obj=cli_obj())
    result = cli_runner.invoke(cli, ["import", str(path)], obj=cli_obj())

    assert result.exit_code == 0
    assert "Imported: 0 transactions" in result.output
    assert "Skipped: 1 duplicates" in result.output


def test_import_account_option(cli_runner, cli_obj, fake_client, write_csv):
    path = write_csv(NEON_FILE, NEON_CONTENT)

    result = cli_runner.invoke(
        cli, ["import", str(path), "--account", "acct-x", "--budget", "budget-x"], obj=cli_obj()
    )

    assert result.exit_code == 0
    budget_id, payload = fake_client.calls[0]
    assert budget_id == "budget-x"
    assert payload[0]["account_id"] == "acct-x"


def test_import_prompts_for_ambiguous_account(cli_runner, cli_obj, make_client, write_csv):
    client = make_client(
        accounts={
            "budget-123": [
                Account(id="a1", name="Checking", type="checking"),
                Account(id="a2", name="Savings", type="savings"),
            ]
        }
    )
    settings = Settings(ynab_access_token="test-token", ynab_budget_id="budget-123")
    path = write_csv(NEON_FILE, NEON_CONTENT)

    result = cli_runner.invoke(
        cli,
        ["import", str(path)],
        obj=cli_obj(client=client, settings_override=settings),
        input="2\n",
    )

    assert result.exit_code == 0
    assert "Selected: Savings [savings]" in result.output
    assert client.calls[0][1][0]["account_id"] == "a2"


def test_import_original_name(cli_runner, cli_obj, write_csv):
    path = write_csv("upload.tmp", NEON_CONTENT)

    result = cli_runner.invoke(
        cli, ["import", str(path), "--original-name", NEON_FILE, "--dry-run"], obj=cli_obj()
    )

    assert result.exit_code == 0
    assert "Format: CH Neon Monthly" in result.output


def test_import_generic_format(cli_runner, cli_obj, write_csv):
    path = write_csv(
        "transactions.csv",
        "Date,Payee,Category,Memo,Outflow,Inflow\n2025-01-15,Store A,,,150.50,\n",
    )

    result = cli_runner.invoke(cli, ["import", str(path), "--dry-run"], obj=cli_obj())

    assert result.exit_code == 0
    assert "Format: YNAB (generic)" in result.output
    assert "Parsed 1 transactions" in result.output


def test_import_invalid_csv(cli_runner, cli_obj, write_csv):
    path = write_csv("export.csv", "Payee,Amount\nStore,1.00\n")

    result = cli_runner.invoke(cli, ["import", str(path)], obj=cli_obj())

    assert result.exit_code == 1
    assert "Error: CSV error (line 1): Invalid CSV format. Missing Date column" in result.output


def test_import_reports_skipped_rows(cli_runner, cli_obj, write_csv):
    path = write_csv(
        "transactions.csv",
        "Date,Payee,Category,Memo,Outflow,Inflow\n"
        "2025-01-15,Store A,,,150.50,\n"
        "someday,Store B,,,1.00,\n",
    )

    result = cli_runner.invoke(cli, ["import", str(path), "--dry-run"], obj=cli_obj())

    assert result.exit_code == 0
    assert "Skipped 1 rows:" in result.output
    assert "Row 3:" in result.output


def test_import_nothing_to_import(cli_runner, cli_obj, fake_client, write_csv):
    path = write_csv("transactions.csv", "Date,Payee,Outflow\nsomeday,Store,1.00\n")

    result = cli_runner.invoke(cli, ["import", str(path)], obj=cli_obj())

    assert result.exit_code == 0
    assert "No transactions to import" in result.output
    assert fake_client.calls == []


def test_import_without_token(cli_runner, registry, tmp_path, write_csv):
    path = write_csv(NEON_FILE, NEON_CONTENT)

    result = cli_runner.invoke(
        cli,
        ["--config", str(tmp_path / "missing-config"), "import", str(path)],
        obj={"registry": registry},
    )

    assert result.exit_code == 1
    assert "Error: Configuration error: YNAB_ACCESS_TOKEN not found" in result.output


def test_import_api_error(cli_runner, cli_obj, make_client, write_csv):
    client = make_client(error=YnabApiError("YNAB API Error: Unauthorized", status_code=401))
    path = write_csv(NEON_FILE, NEON_CONTENT)

    result = cli_runner.invoke(cli, ["import", str(path)], obj=cli_obj(client=client))

    assert result.exit_code == 1
    assert "Error: YNAB API Error: Unauthorized (HTTP 401)" in result.output


def test_import_missing_file(cli_runner, cli_obj, tmp_path):
    result = cli_runner.invoke(cli, ["import", str(tmp_path / "nope.csv")], obj=cli_obj())

    assert result.exit_code != 0
