"""Shared pytest fixtures for quickynab tests."""

from pathlib import Path
from typing import Any

import pytest

from quickynab.config import Settings
from quickynab.domain.csv_import import CSVImportService
from quickynab.domain.dialects import DialectRegistry
from quickynab.domain.entities import (
    Account,
    Budget,
    ColumnField,
    CreateTransactionsResult,
    DialectDescriptor,
)
from quickynab.domain.errors import DomainError
from quickynab.domain.upload import UploadService
from quickynab.ynab.base import BudgetClient


class FakeBudgetClient(BudgetClient):
    """In-memory YNAB client that records submitted batches.

    Import ids already submitted are reported back as duplicates, the way
    YNAB treats them.
    """

    def __init__(self, budgets=None, accounts=None, error=None):
        self.budgets = budgets if budgets is not None else [Budget(id="budget-123", name="My Budget")]
        self.accounts = accounts if accounts is not None else {
            "budget-123": [Account(id="account-456", name="Checking", type="checking")]
        }
        self.error = error
        self.calls: list[tuple[str, list[dict[str, Any]]]] = []
        self.known_import_ids: set[str] = set()
        self.list_budget_calls = 0

    def list_budgets(self) -> list[Budget]:
        self.list_budget_calls += 1
        return list(self.budgets)

    def list_accounts(self, budget_id: str) -> list[Account]:
        return list(self.accounts.get(budget_id, []))

    def create_transactions(self, budget_id, transactions) -> CreateTransactionsResult:
        if self.error is not None:
            raise self.error
        self.calls.append((budget_id, transactions))
        created, duplicates = [], []
        for index, tx in enumerate(transactions):
            if tx["import_id"] in self.known_import_ids:
                duplicates.append(tx["import_id"])
            else:
                self.known_import_ids.add(tx["import_id"])
                created.append(f"tx-{len(self.known_import_ids)}-{index}")
        return CreateTransactionsResult(transaction_ids=created, duplicate_import_ids=duplicates)


NEON = DialectDescriptor(
    name="CH Neon Monthly",
    filename_pattern=r"^\d{4}_\d{1,2}_account_statements",
    use_regex=True,
    delimiter=";",
    header_rows=1,
    columns=(
        ColumnField.DATE,
        ColumnField.AMOUNT,
        ColumnField.SKIP,
        ColumnField.SKIP,
        ColumnField.SKIP,
        ColumnField.PAYEE,
        ColumnField.MEMO,
    ),
)

SPLIT_COLUMNS = DialectDescriptor(
    name="Test Split Bank",
    filename_pattern="split_export",
    delimiter=",",
    header_rows=2,
    footer_rows=1,
    columns=(
        ColumnField.DATE,
        ColumnField.DESCRIPTION,
        ColumnField.OUTFLOW,
        ColumnField.INFLOW,
        ColumnField.SUBJECT,
    ),
    date_format="%d.%m.%Y",
)


@pytest.fixture(autouse=True)
def isolated_environment(monkeypatch, tmp_path):
    """Keep real credentials and config files out of tests."""
    for name in (
        "YNAB_ACCESS_TOKEN",
        "YNAB_BUDGET_ID",
        "YNAB_ACCOUNT_ID",
        "YNAB_API_BASE",
        "API_TIMEOUT",
        "QUICKYNAB_CONFIG",
        "QUICKYNAB_DIALECTS",
        "QUICKYNAB_LOG_LEVEL",
    ):
        monkeypatch.delenv(name, raising=False)
    monkeypatch.setenv("HOME", str(tmp_path / "home"))
    monkeypatch.chdir(tmp_path)


@pytest.fixture(autouse=True)
def offline_dialect_fetch(monkeypatch):
    """Make the first-run bank format download fail without touching the network."""

    def _offline(*args, **kwargs):
        raise DomainError("Failed to fetch bank2ynab configs: offline")

    monkeypatch.setattr("quickynab.cli.context.fetch_bank2ynab_configs", _offline)


@pytest.fixture
def registry():
    """Registry with a regex dialect and a substring dialect."""
    return DialectRegistry([NEON, SPLIT_COLUMNS])


@pytest.fixture
def csv_import_service(registry):
    """Create a CSVImportService over the test registry."""
    return CSVImportService(registry)


@pytest.fixture
def settings():
    """Settings with a token, budget and account configured."""
    return Settings(
        ynab_access_token="test-token",
        ynab_budget_id="budget-123",
        ynab_account_id="account-456",
    )


@pytest.fixture
def fake_client():
    """Create an in-memory YNAB client."""
    return FakeBudgetClient()


@pytest.fixture
def make_client():
    """Return the fake client class for tests that need custom budgets or accounts."""
    return FakeBudgetClient


@pytest.fixture
def upload_service(fake_client, settings):
    """Create an UploadService over the fake client."""
    return UploadService(fake_client, settings)


@pytest.fixture
def write_csv(tmp_path):
    """Write CSV content to a file named ``name`` and return its path."""

    def _write(name: str, content: str) -> Path:
        path = tmp_path / name
        path.write_text(content, encoding="utf-8")
        return path

    return _write


@pytest.fixture
def cli_runner():
    """Create a Click CLI test runner."""
    from click.testing import CliRunner

    return CliRunner()
