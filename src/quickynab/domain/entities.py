"""Domain model entities for quickynab.

These are pure data classes representing the import pipeline's concepts,
independent of how the YNAB API encodes them on the wire. Dialect
descriptors are loaded once and never mutated; transactions are created per
parsed row and consumed by the upload step.
"""

from dataclasses import dataclass, field
from decimal import Decimal
from enum import Enum
from typing import Optional


class ColumnField(str, Enum):
    """Logical field a physical CSV column maps to."""

    DATE = "Date"
    PAYEE = "Payee"
    DESCRIPTION = "Description"
    MEMO = "Memo"
    SUBJECT = "Subject"
    CATEGORY = "Category"
    AMOUNT = "Amount"
    INFLOW = "Inflow"
    OUTFLOW = "Outflow"
    SKIP = "skip"

    @classmethod
    def from_label(cls, label: str) -> Optional["ColumnField"]:
        """Return the field for a column label, or None if unrecognized."""
        label = label.strip()
        for member in cls:
            if member.value.lower() == label.lower():
                return member
        return None


@dataclass(frozen=True)
class DialectDescriptor:
    """A bank's CSV export layout."""

    name: str
    filename_pattern: str
    use_regex: bool = False
    delimiter: str = ","
    header_rows: int = 0
    footer_rows: int = 0
    columns: tuple[ColumnField, ...] = ()
    date_format: Optional[str] = None


@dataclass(frozen=True)
class Transaction:
    """Canonical normalized transaction.

    ``amount`` is positive for money into the account and negative for money
    out of it.
    """

    date: str
    amount: Decimal
    payee_name: Optional[str] = None
    memo: Optional[str] = None
    category_name: Optional[str] = None


@dataclass(frozen=True)
class SkippedRow:
    """A data row that was dropped during parsing."""

    row_num: int
    reason: str


@dataclass(frozen=True)
class ParseReport:
    """Outcome of parsing one CSV file."""

    transactions: list[Transaction]
    dialect_name: Optional[str] = None
    skipped: list[SkippedRow] = field(default_factory=list)


@dataclass(frozen=True)
class Budget:
    """YNAB budget summary."""

    id: str
    name: str
    currency_symbol: Optional[str] = None
    decimal_digits: Optional[int] = None


@dataclass(frozen=True)
class Account:
    """YNAB account summary."""

    id: str
    name: str
    type: str
    closed: bool = False


@dataclass(frozen=True)
class CreateTransactionsResult:
    """Response of the YNAB create-transactions endpoint."""

    transaction_ids: list[str]
    duplicate_import_ids: list[str]


@dataclass(frozen=True)
class UploadResult:
    """Counts reported back to the caller after an upload."""

    imported: int
    duplicates: int
    budget_id: Optional[str] = None
    account_id: Optional[str] = None
