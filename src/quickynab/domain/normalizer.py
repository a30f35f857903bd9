"""Row normalization into canonical transactions."""

from decimal import Decimal
from typing import Mapping, Optional, Sequence

from quickynab.domain.entities import ColumnField, Transaction
from quickynab.utils.amount_parser import parse_amount_or_zero
from quickynab.utils.date_parser import is_iso_date, normalize_date
from quickynab.utils.sanitize import MEMO_MAX_LENGTH, PAYEE_MAX_LENGTH, sanitize_text

GENERIC_COLUMNS = ("Date", "Payee", "Category", "Memo", "Outflow", "Inflow")


def map_columns(row: Sequence[str], columns: Sequence[ColumnField]) -> dict[ColumnField, str]:
    """Pair physical row values with their logical fields.

    ``skip`` columns and mapped positions beyond the end of the row are left
    out; physical columns beyond the mapping are ignored.
    """
    values: dict[ColumnField, str] = {}
    for index, field in enumerate(columns):
        if field is ColumnField.SKIP or index >= len(row):
            continue
        values[field] = row[index]
    return values


def compute_amount(values: Mapping[ColumnField, str]) -> Decimal:
    """Signed amount: ``inflow - outflow`` if either is present, else ``Amount``."""
    inflow = values.get(ColumnField.INFLOW)
    outflow = values.get(ColumnField.OUTFLOW)
    if inflow or outflow:
        return parse_amount_or_zero(inflow) - parse_amount_or_zero(outflow)
    return parse_amount_or_zero(values.get(ColumnField.AMOUNT))


def build_transaction(
    values: Mapping[ColumnField, str], date_format: Optional[str] = None
) -> Optional[Transaction]:
    """Build a transaction from field values, or None if the date is unusable."""
    date = normalize_date(values.get(ColumnField.DATE, ""), date_format)
    if not is_iso_date(date):
        return None

    payee = values.get(ColumnField.PAYEE) or values.get(ColumnField.DESCRIPTION)
    memo = values.get(ColumnField.MEMO) or values.get(ColumnField.SUBJECT)

    return Transaction(
        date=date,
        amount=compute_amount(values),
        payee_name=sanitize_text(payee, PAYEE_MAX_LENGTH),
        memo=sanitize_text(memo, MEMO_MAX_LENGTH),
        category_name=sanitize_text(values.get(ColumnField.CATEGORY), PAYEE_MAX_LENGTH),
    )


def normalize_record(
    row: Sequence[str],
    columns: Sequence[ColumnField],
    date_format: Optional[str] = None,
) -> Optional[Transaction]:
    """Normalize a positional row of a bank dialect.

    Returns:
        Transaction, or None when the row is rejected
    """
    values = map_columns(row, columns)
    # Category columns only carry meaning in the generic layout.
    values.pop(ColumnField.CATEGORY, None)
    return build_transaction(values, date_format)


def header_columns(header: Sequence[str]) -> tuple[ColumnField, ...]:
    """Map a generic-dialect header row to fields, case-insensitively."""
    columns = []
    for label in header:
        field = ColumnField.from_label(label)
        columns.append(field if field is not None else ColumnField.SKIP)
    return tuple(columns)


def normalize_generic_record(
    row: Sequence[str], columns: Sequence[ColumnField]
) -> Optional[Transaction]:
    """Normalize a row of the generic ``Date,Payee,Category,Memo,Outflow,Inflow`` layout.

    ``columns`` comes from ``header_columns`` so lookup follows the header,
    not a fixed position.
    """
    return build_transaction(map_columns(row, columns))
