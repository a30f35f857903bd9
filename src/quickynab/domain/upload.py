"""Upload domain service."""

from typing import Any, Optional, Sequence

from quickynab.config import Settings
from quickynab.domain.entities import Account, Budget, Transaction, UploadResult
from quickynab.domain.errors import (
    AmbiguousSelectionError,
    NotFoundError,
    no_budgets,
    no_open_accounts,
)
from quickynab.logging_setup import get_logger
from quickynab.utils.import_id import generate_import_id, to_milliunits
from quickynab.ynab.base import BudgetClient

logger = get_logger(__name__)


class UploadService:
    """Service for resolving the target account and uploading transactions."""

    def __init__(self, client: BudgetClient, settings: Optional[Settings] = None):
        """Initialize upload service.

        Args:
            client: YNAB API client
            settings: Settings providing the configured budget and account
        """
        self.client = client
        self.settings = settings

    def list_budgets(self) -> list[Budget]:
        return self.client.list_budgets()

    def list_accounts(self, budget_id: str) -> list[Account]:
        """List open accounts of a budget."""
        return [account for account in self.client.list_accounts(budget_id) if not account.closed]

    def resolve_budget_id(self, override: Optional[str] = None) -> str:
        """Resolve the target budget.

        Order: explicit override, configured budget, the only budget.

        Raises:
            NotFoundError: If the user has no budgets
            AmbiguousSelectionError: If several budgets qualify
        """
        if override:
            return override
        if self.settings is not None and self.settings.budget_id:
            return self.settings.budget_id

        budgets = self.list_budgets()
        if not budgets:
            raise NotFoundError(no_budgets())
        if len(budgets) == 1:
            logger.info("Using budget: %s", budgets[0].name)
            return budgets[0].id

        raise AmbiguousSelectionError(
            "budget",
            [(budget.id, budget.name) for budget in budgets],
            hint="Please set YNAB_BUDGET_ID or pass a budget explicitly.",
        )

    def resolve_account_id(self, budget_id: str, override: Optional[str] = None) -> str:
        """Resolve the target account among the budget's open accounts.

        Raises:
            NotFoundError: If the budget has no open accounts
            AmbiguousSelectionError: If several accounts qualify
        """
        if override:
            return override
        if self.settings is not None and self.settings.account_id:
            return self.settings.account_id

        accounts = self.list_accounts(budget_id)
        if not accounts:
            raise NotFoundError(no_open_accounts())
        if len(accounts) == 1:
            logger.info("Using account: %s", accounts[0].name)
            return accounts[0].id

        raise AmbiguousSelectionError(
            "account",
            [(account.id, f"{account.name} [{account.type}]") for account in accounts],
            hint="Please set YNAB_ACCOUNT_ID or pass an account explicitly.",
        )

    @staticmethod
    def to_payload(transaction: Transaction, account_id: str) -> dict[str, Any]:
        """Convert a transaction into a create-transactions request item."""
        payload: dict[str, Any] = {
            "account_id": account_id,
            "date": transaction.date,
            "amount": to_milliunits(transaction.amount),
            "cleared": "uncleared",
            "approved": False,
            "import_id": generate_import_id(transaction),
        }
        if transaction.payee_name:
            payload["payee_name"] = transaction.payee_name
        if transaction.memo:
            payload["memo"] = transaction.memo
        return payload

    def upload(
        self,
        transactions: Sequence[Transaction],
        account_id: Optional[str] = None,
        budget_id: Optional[str] = None,
    ) -> UploadResult:
        """Upload transactions in a single batch.

        Args:
            transactions: Parsed transactions
            account_id: Optional account override
            budget_id: Optional budget override

        Returns:
            UploadResult with counts of new and duplicate transactions

        Raises:
            YnabApiError: If the API rejects the request; it is not retried
            AmbiguousSelectionError: If the budget or account cannot be chosen
        """
        if not transactions:
            return UploadResult(imported=0, duplicates=0, budget_id=budget_id, account_id=account_id)

        resolved_budget = self.resolve_budget_id(budget_id)
        resolved_account = self.resolve_account_id(resolved_budget, account_id)

        payload = [self.to_payload(tx, resolved_account) for tx in transactions]
        logger.info("Uploading %d transactions", len(payload))
        result = self.client.create_transactions(resolved_budget, payload)

        return UploadResult(
            imported=len(result.transaction_ids),
            duplicates=len(result.duplicate_import_ids),
            budget_id=resolved_budget,
            account_id=resolved_account,
        )
