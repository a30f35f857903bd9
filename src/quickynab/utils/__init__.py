"""Utility functions for quickynab."""

from quickynab.utils.date_parser import normalize_date, is_iso_date
from quickynab.utils.amount_parser import parse_amount, parse_amount_or_zero
from quickynab.utils.sanitize import sanitize_text
from quickynab.utils.import_id import generate_import_id, to_milliunits

__all__ = [
    "normalize_date",
    "is_iso_date",
    "parse_amount",
    "parse_amount_or_zero",
    "sanitize_text",
    "generate_import_id",
    "to_milliunits",
]
