"""Import id generation for YNAB duplicate suppression.

YNAB silently drops a transaction whose ``import_id`` already exists on the
target account. The id is derived from transaction content only, so the same
transaction produces the same id no matter which file, batch or position it
came from.
"""

import hashlib
from decimal import Decimal, ROUND_HALF_UP

from quickynab.domain.entities import Transaction

IMPORT_ID_PREFIX = "YNAB"
IMPORT_ID_MAX_LENGTH = 36
MILLIUNITS_PER_UNIT = 1000


def to_milliunits(amount: Decimal) -> int:
    """Convert a currency amount to YNAB milliunits (amount x 1000)."""
    return int((Decimal(amount) * MILLIUNITS_PER_UNIT).quantize(Decimal("1"), rounding=ROUND_HALF_UP))


def occurrence_for(payee_name: str | None, memo: str | None) -> int:
    """Small number derived from payee and memo (last 4 hex digits of SHA-256)."""
    text = f"{payee_name or ''}:{memo or ''}"
    digest = hashlib.sha256(text.encode("utf-8")).hexdigest()
    return int(digest[-4:], 16)


def generate_import_id(transaction: Transaction) -> str:
    """Return the import id for a transaction.

    Format: ``YNAB:<milliunits>:<YYYY-MM-DD>:<occurrence>``, at most 36
    characters.
    """
    import_id = ":".join(
        [
            IMPORT_ID_PREFIX,
            str(to_milliunits(transaction.amount)),
            transaction.date,
            str(occurrence_for(transaction.payee_name, transaction.memo)),
        ]
    )
    return import_id[:IMPORT_ID_MAX_LENGTH]
