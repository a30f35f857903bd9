"""Text sanitization for payee and memo fields."""

import re
from typing import Optional

PAYEE_MAX_LENGTH = 200
MEMO_MAX_LENGTH = 100

_CONTROL_CHARS_RE = re.compile(r"[\x00-\x08\x0B\x0C\x0E-\x1F\x7F]")


def sanitize_text(value: Optional[str], max_length: int = PAYEE_MAX_LENGTH) -> Optional[str]:
    """Strip control characters, trim and truncate a free-text field.

    Returns None instead of an empty string.
    """
    if not value:
        return None

    cleaned = _CONTROL_CHARS_RE.sub("", value).strip()
    if len(cleaned) > max_length:
        cleaned = cleaned[:max_length].rstrip()

    return cleaned or None
