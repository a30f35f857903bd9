"""Date parsing utilities."""

import re
from typing import Optional

ISO_DATE_RE = re.compile(r"^\d{4}-\d{2}-\d{2}$")

# Each hint maps to a pattern and the order of (year, month, day) groups in it.
_FORMAT_HINTS: dict[str, tuple[re.Pattern, tuple[str, str, str]]] = {
    "%Y-%m-%d": (re.compile(r"^(\d{4})-(\d{2})-(\d{2})$"), ("y", "m", "d")),
    "%d.%m.%Y": (re.compile(r"^(\d{1,2})\.(\d{1,2})\.(\d{4})$"), ("d", "m", "y")),
    "%d/%m/%Y": (re.compile(r"^(\d{1,2})/(\d{1,2})/(\d{4})$"), ("d", "m", "y")),
    "%m/%d/%Y": (re.compile(r"^(\d{1,2})/(\d{1,2})/(\d{4})$"), ("m", "d", "y")),
    "%Y%m%d": (re.compile(r"^(\d{4})(\d{2})(\d{2})$"), ("y", "m", "d")),
}

_SEPARATED_RE = re.compile(r"^(\d{1,2})([./])(\d{1,2})\2(\d{4})$")
_COMPACT_RE = re.compile(r"^(\d{4})(\d{2})(\d{2})$")


def is_iso_date(value: Optional[str]) -> bool:
    """Return True if value is a ``YYYY-MM-DD`` string."""
    return bool(value) and ISO_DATE_RE.match(value) is not None


def _iso(year: str, month: str, day: str) -> str:
    return f"{year}-{month.zfill(2)}-{day.zfill(2)}"


def _apply_hint(token: str, date_format: str) -> Optional[str]:
    hint = _FORMAT_HINTS.get(date_format)
    if hint is None:
        return None
    pattern, order = hint
    match = pattern.match(token)
    if match is None:
        return None
    parts = dict(zip(order, match.groups()))
    return _iso(parts["y"], parts["m"], parts["d"])


def _detect(token: str) -> str:
    if ISO_DATE_RE.match(token):
        return token

    match = _SEPARATED_RE.match(token)
    if match:
        first, _, second, year = match.groups()
        # Day-first unless the second component cannot be a month.
        if int(second) > 12:
            return _iso(year, first, second)
        return _iso(year, second, first)

    match = _COMPACT_RE.match(token)
    if match:
        return _iso(*match.groups())

    return token


def normalize_date(token: str, date_format: Optional[str] = None) -> str:
    """Convert a bank date token into an ISO ``YYYY-MM-DD`` string.

    An explicit ``date_format`` hint is applied when the token structurally
    matches it; otherwise the format is detected. Separated dates without a
    matching hint are read day-first unless the second component is greater
    than 12, in which case they are read month-first.

    Args:
        token: Date string as found in the CSV file
        date_format: Optional strftime-style format hint from the dialect

    Returns:
        ISO date string, or the stripped token unchanged when no format
        matches (check with ``is_iso_date``)
    """
    if not token:
        return ""
    token = token.strip()

    if ISO_DATE_RE.match(token):
        return token

    if date_format:
        converted = _apply_hint(token, date_format)
        if converted is not None:
            return converted

    return _detect(token)
