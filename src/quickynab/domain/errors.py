"""Shared domain error messages and error types."""

from typing import Optional, Sequence


class DomainError(ValueError):
    """Base class for domain-level errors.

    Subclasses provide semantic categories while preserving ValueError
    compatibility for existing error handling.
    """


class ValidationError(DomainError):
    """Invalid input or failed validation in domain logic."""


class NotFoundError(DomainError):
    """Requested budget, account or file does not exist."""


class ConfigError(DomainError):
    """Missing or unusable configuration, such as an absent access token."""


class CSVParseError(DomainError):
    """A CSV file cannot be imported at all."""

    def __init__(self, message: str, line: Optional[int] = None):
        super().__init__(message)
        self.line = line


class YnabApiError(DomainError):
    """The YNAB API rejected a request or could not be reached."""

    def __init__(
        self,
        message: str,
        status_code: Optional[int] = None,
        detail: Optional[str] = None,
    ):
        super().__init__(message)
        self.status_code = status_code
        self.detail = detail


class AmbiguousSelectionError(DomainError):
    """Several budgets or accounts qualify and none was chosen.

    ``choices`` holds ``(id, label)`` pairs so that callers can offer them
    to the user.
    """

    def __init__(self, kind: str, choices: Sequence[tuple[str, str]], hint: str = ""):
        self.kind = kind
        self.choices = list(choices)
        lines = [f"Multiple {kind}s found.{' ' + hint if hint else ''}", f"Available {kind}s:"]
        lines.extend(f"  - {label} ({choice_id})" for choice_id, label in self.choices)
        super().__init__("\n".join(lines))


def missing_access_token() -> str:
    """Return message for an unconfigured access token."""
    return (
        "YNAB_ACCESS_TOKEN not found. "
        'Please run "quickynab init" to set up your configuration.'
    )


def missing_date_column(headers: str) -> str:
    """Return message for a generic CSV without a Date header."""
    return f"Invalid CSV format. Missing Date column. Headers found: {headers}"


def no_data_rows(filename: str) -> str:
    """Return message for a CSV without any data rows."""
    return f"CSV file '{filename}' contains no data rows"


def no_budgets() -> str:
    """Return message when the YNAB user has no budgets."""
    return "No budgets found in your YNAB account"


def no_open_accounts() -> str:
    """Return message when a budget has no open accounts."""
    return "No open accounts found in your budget"
