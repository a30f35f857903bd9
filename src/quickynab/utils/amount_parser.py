"""Amount parsing utilities."""

from decimal import Decimal, InvalidOperation
import re

from quickynab.logging_setup import get_logger

logger = get_logger(__name__)

# Currency words and abbreviations such as "CHF", "kr", "zł" or "Fr."
_CURRENCY_WORD_RE = re.compile(r"[^\W\d_]+\.?")
_NON_NUMERIC_RE = re.compile(r"[^0-9.,+\-]")
_EUROPEAN_DECIMAL_RE = re.compile(r"^[+-]?\d{1,3}(\.\d{3})+,\d+$|^[+-]?\d+,\d{1,2}$")


def parse_amount(amount_str: str) -> Decimal:
    """Parse an amount string into a Decimal.

    Handles various formats:
    - "123.45"
    - "$123.45", "CHF 123.45", "-80,00 SEK", "Fr. 12.50"
    - "-123.45", "-$123.45", "123.45-"
    - "1,234.56", "1'234.56", "1 200,00"
    - "1.234,56", "12,50" (decimal comma)
    - "(123.45)" (negative in parentheses)

    Args:
        amount_str: Amount string

    Returns:
        Decimal amount

    Raises:
        ValueError: If amount string cannot be parsed
    """
    if not amount_str or not amount_str.strip():
        raise ValueError("Empty amount string")

    original = amount_str
    amount_str = amount_str.strip()

    # Handle parentheses notation (negative)
    is_negative = False
    if amount_str.startswith("(") and amount_str.endswith(")"):
        is_negative = True
        amount_str = amount_str[1:-1]

    # Drop currency text, then everything that is not part of a number
    amount_str = _CURRENCY_WORD_RE.sub("", amount_str)
    amount_str = _NON_NUMERIC_RE.sub("", amount_str)
    if not amount_str:
        raise ValueError(f"Could not parse amount '{original}'")

    # Trailing minus sign
    if amount_str.endswith("-") and not amount_str.startswith("-"):
        amount_str = "-" + amount_str[:-1]

    if _EUROPEAN_DECIMAL_RE.match(amount_str):
        amount_str = amount_str.replace(".", "").replace(",", ".")
    else:
        amount_str = amount_str.replace(",", "")

    try:
        amount = Decimal(amount_str)
    except InvalidOperation as e:
        raise ValueError(f"Could not parse amount '{original}': {e}")
    if not amount.is_finite():
        raise ValueError(f"Could not parse amount '{original}'")
    return -amount if is_negative else amount


def parse_amount_or_zero(amount_str: str | None) -> Decimal:
    """Parse an amount string, treating empty or unparseable input as zero."""
    if amount_str is None or not amount_str.strip():
        return Decimal("0")
    try:
        return parse_amount(amount_str)
    except ValueError as e:
        logger.warning("Treating amount as zero: %s", e)
        return Decimal("0")
