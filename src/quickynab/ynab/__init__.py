"""YNAB API client layer for quickynab application."""

from quickynab.ynab.base import BudgetClient
from quickynab.ynab.http_client import YnabHttpClient
from quickynab.ynab.factories import create_ynab_client

__all__ = ["BudgetClient", "YnabHttpClient", "create_ynab_client"]
