"""YNAB API client over HTTP."""

from typing import Any, Optional

import requests

from quickynab.domain.entities import Account, Budget, CreateTransactionsResult
from quickynab.domain.errors import YnabApiError
from quickynab.logging_setup import get_logger
from quickynab.ynab.base import BudgetClient

logger = get_logger(__name__)

DEFAULT_API_BASE = "https://api.ynab.com/v1"
DEFAULT_TIMEOUT_SECONDS = 30


class YnabHttpClient(BudgetClient):
    """``requests``-based implementation of the YNAB API.

    Requests are made one at a time and are never retried.
    """

    def __init__(
        self,
        access_token: str,
        base_url: str = DEFAULT_API_BASE,
        timeout: float = DEFAULT_TIMEOUT_SECONDS,
        session: Optional[requests.Session] = None,
    ):
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.session = session or requests.Session()
        self.session.headers.update(
            {
                "Authorization": f"Bearer {access_token}",
                "Accept": "application/json",
                "User-Agent": "quickynab",
            }
        )

    def _request(self, method: str, path: str, **kwargs) -> dict[str, Any]:
        url = f"{self.base_url}{path}"
        logger.debug("%s %s", method, url)
        try:
            response = self.session.request(method, url, timeout=self.timeout, **kwargs)
        except requests.RequestException as e:
            raise YnabApiError(f"YNAB API Error: {e}")

        if not response.ok:
            detail = None
            try:
                detail = response.json().get("error", {}).get("detail")
            except ValueError:
                pass
            message = detail or response.reason or f"HTTP {response.status_code}"
            raise YnabApiError(
                f"YNAB API Error: {message}",
                status_code=response.status_code,
                detail=detail,
            )

        try:
            return response.json().get("data", {})
        except ValueError as e:
            raise YnabApiError(f"YNAB API Error: invalid JSON response: {e}", status_code=response.status_code)

    def list_budgets(self) -> list[Budget]:
        data = self._request("GET", "/budgets")
        budgets = []
        for item in data.get("budgets", []):
            currency = item.get("currency_format") or {}
            budgets.append(
                Budget(
                    id=item["id"],
                    name=item["name"],
                    currency_symbol=currency.get("currency_symbol"),
                    decimal_digits=currency.get("decimal_digits"),
                )
            )
        return budgets

    def list_accounts(self, budget_id: str) -> list[Account]:
        data = self._request("GET", f"/budgets/{budget_id}/accounts")
        return [
            Account(
                id=item["id"],
                name=item["name"],
                type=item.get("type", ""),
                closed=bool(item.get("closed", False)),
            )
            for item in data.get("accounts", [])
        ]

    def create_transactions(
        self, budget_id: str, transactions: list[dict[str, Any]]
    ) -> CreateTransactionsResult:
        data = self._request(
            "POST",
            f"/budgets/{budget_id}/transactions",
            json={"transactions": transactions},
        )
        return CreateTransactionsResult(
            transaction_ids=list(data.get("transaction_ids") or []),
            duplicate_import_ids=list(data.get("duplicate_import_ids") or []),
        )
