"""Abstract budgeting service interface."""

from abc import ABC, abstractmethod
from typing import Any

# Import entities directly to avoid pulling in the domain services
from quickynab.domain.entities import Account, Budget, CreateTransactionsResult


class BudgetClient(ABC):
    """Abstract client for the YNAB API."""

    @abstractmethod
    def list_budgets(self) -> list[Budget]:
        """List all budgets of the token's owner."""
        pass

    @abstractmethod
    def list_accounts(self, budget_id: str) -> list[Account]:
        """List all accounts of a budget, closed ones included."""
        pass

    @abstractmethod
    def create_transactions(
        self, budget_id: str, transactions: list[dict[str, Any]]
    ) -> CreateTransactionsResult:
        """Create a batch of transactions in one request."""
        pass
