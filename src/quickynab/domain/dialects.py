"""Bank CSV dialect registry and filename matching."""

import configparser
import json
import re
from functools import lru_cache
from importlib import resources
from pathlib import Path
from typing import Any, Iterable, Iterator, Mapping, Optional

import requests

from quickynab.domain.entities import ColumnField, DialectDescriptor
from quickynab.domain.errors import DomainError, ValidationError
from quickynab.logging_setup import get_logger

logger = get_logger(__name__)

BANK2YNAB_CONF_URL = "https://raw.githubusercontent.com/bank2ynab/bank2ynab/develop/bank2ynab.conf"
BUNDLED_SNAPSHOT = "bank_dialects.json"
SUPPORTED_DATE_FORMATS = {"%Y-%m-%d", "%d.%m.%Y", "%d/%m/%Y", "%m/%d/%Y", "%Y%m%d"}


def _parse_columns(name: str, labels: Iterable[str]) -> tuple[ColumnField, ...]:
    columns = []
    for label in labels:
        field = ColumnField.from_label(label)
        if field is None:
            logger.debug("Dialect '%s': ignoring unknown column '%s'", name, label)
            field = ColumnField.SKIP
        columns.append(field)
    return tuple(columns)


def _parse_row_count(name: str, key: str, value: Any) -> int:
    try:
        count = int(value or 0)
    except (TypeError, ValueError):
        raise ValidationError(f"Dialect '{name}': {key} must be an integer, got {value!r}")
    if count < 0:
        raise ValidationError(f"Dialect '{name}': {key} must not be negative")
    return count


def descriptor_from_dict(name: str, data: Mapping[str, Any]) -> DialectDescriptor:
    """Build and validate a descriptor from one snapshot entry.

    Raises:
        ValidationError: If the entry is malformed
    """
    pattern = data.get("pattern") or ""
    if not pattern:
        raise ValidationError(f"Dialect '{name}' has no filename pattern")

    delimiter = data.get("delimiter") or ","
    if delimiter == "\\t":
        delimiter = "\t"
    if len(delimiter) != 1:
        raise ValidationError(f"Dialect '{name}': delimiter must be a single character")

    date_format = data.get("date_format") or None
    if date_format is not None and date_format not in SUPPORTED_DATE_FORMATS:
        logger.debug("Dialect '%s': date format %s will be detected heuristically", name, date_format)

    return DialectDescriptor(
        name=data.get("name") or name,
        filename_pattern=pattern,
        use_regex=bool(data.get("use_regex", False)),
        delimiter=delimiter,
        header_rows=_parse_row_count(name, "header_rows", data.get("header_rows")),
        footer_rows=_parse_row_count(name, "footer_rows", data.get("footer_rows")),
        columns=_parse_columns(name, data.get("columns") or []),
        date_format=date_format,
    )


def descriptor_to_dict(descriptor: DialectDescriptor) -> dict[str, Any]:
    """Serialize a descriptor into the snapshot format."""
    return {
        "name": descriptor.name,
        "pattern": descriptor.filename_pattern,
        "use_regex": descriptor.use_regex,
        "delimiter": descriptor.delimiter,
        "header_rows": descriptor.header_rows,
        "footer_rows": descriptor.footer_rows,
        "columns": [column.value for column in descriptor.columns],
        "date_format": descriptor.date_format,
    }


def match_dialect(
    filename: str, descriptors: Iterable[DialectDescriptor]
) -> Optional[DialectDescriptor]:
    """Return the first descriptor whose filename pattern matches.

    Descriptors are tried in iteration order, so more specific patterns must
    come first. A regex pattern that fails to compile never matches.
    """
    for descriptor in descriptors:
        if descriptor.use_regex:
            try:
                if re.search(descriptor.filename_pattern, filename):
                    return descriptor
            except re.error as e:
                logger.debug("Dialect '%s' has an invalid pattern: %s", descriptor.name, e)
                continue
        elif descriptor.filename_pattern in filename:
            return descriptor
    return None


class DialectRegistry:
    """Ordered, read-only collection of bank dialects keyed by name."""

    def __init__(self, descriptors: Iterable[DialectDescriptor] = ()):
        """Initialize registry.

        Args:
            descriptors: Descriptors in priority order

        Raises:
            ValidationError: If two descriptors share a name
        """
        self._descriptors: dict[str, DialectDescriptor] = {}
        for descriptor in descriptors:
            if descriptor.name in self._descriptors:
                raise ValidationError(f"Dialect '{descriptor.name}' is registered twice")
            self._descriptors[descriptor.name] = descriptor

    @classmethod
    def from_dict(cls, data: Mapping[str, Mapping[str, Any]]) -> "DialectRegistry":
        """Build a registry from snapshot data, skipping malformed entries."""
        descriptors = []
        for name, entry in data.items():
            try:
                descriptors.append(descriptor_from_dict(name, entry))
            except ValidationError as e:
                logger.warning("Skipping dialect: %s", e)
        return cls(descriptors)

    @classmethod
    def load(cls, path: Optional[Path] = None) -> "DialectRegistry":
        """Load a registry from a JSON snapshot.

        Args:
            path: Snapshot file. Defaults to the snapshot bundled with the package.
        """
        if path is None:
            text = resources.files("quickynab.data").joinpath(BUNDLED_SNAPSHOT).read_text("utf-8")
        else:
            try:
                text = Path(path).read_text(encoding="utf-8")
            except OSError as e:
                raise ValidationError(f"Could not read dialect snapshot {path}: {e}")
        try:
            data = json.loads(text)
        except json.JSONDecodeError as e:
            raise ValidationError(f"Dialect snapshot is not valid JSON: {e}")
        return cls.from_dict(data)

    def __iter__(self) -> Iterator[DialectDescriptor]:
        return iter(self._descriptors.values())

    def __len__(self) -> int:
        return len(self._descriptors)

    def __contains__(self, name: object) -> bool:
        return name in self._descriptors

    def get(self, name: str) -> Optional[DialectDescriptor]:
        return self._descriptors.get(name)

    def names(self) -> list[str]:
        return list(self._descriptors)

    def match(self, filename: str) -> Optional[DialectDescriptor]:
        """Return the best matching dialect for a filename, or None."""
        return match_dialect(filename, self)


@lru_cache(maxsize=1)
def default_registry() -> DialectRegistry:
    """Registry built from the bundled snapshot, loaded once per process."""
    return DialectRegistry.load()


def parse_bank2ynab_conf(text: str) -> dict[str, dict[str, Any]]:
    """Convert the upstream INI-style ``bank2ynab.conf`` into snapshot data.

    Sections keep their file order; values from ``[DEFAULT]`` apply to every
    section, and the ``DEFAULT`` section itself is not emitted.
    """
    parser = configparser.ConfigParser(interpolation=None, strict=False)
    parser.optionxform = str
    parser.read_string(text)

    configs: dict[str, dict[str, Any]] = {}
    for name in parser.sections():
        section = parser[name]
        pattern = section.get("Source Filename Pattern") or section.get("Source Filename") or ""
        columns = section.get("Input Columns", "")
        configs[name] = {
            "name": name,
            "pattern": pattern,
            "use_regex": section.get("Use Regex For Filename", "False").strip() == "True",
            "delimiter": section.get("Source CSV Delimiter") or ",",
            "header_rows": int(section.get("Header Rows") or 0),
            "footer_rows": int(section.get("Footer Rows") or 0),
            "columns": [col.strip() for col in columns.split(",")] if columns else [],
            "date_format": section.get("Date Format") or None,
        }
    return configs


def fetch_bank2ynab_configs(url: str = BANK2YNAB_CONF_URL, timeout: int = 30) -> dict[str, dict[str, Any]]:
    """Download the upstream dialect file and convert it to snapshot data."""
    try:
        response = requests.get(url, timeout=timeout)
        response.raise_for_status()
    except requests.RequestException as e:
        raise DomainError(f"Failed to fetch bank2ynab configs: {e}")
    return parse_bank2ynab_conf(response.text)


def write_snapshot(configs: Mapping[str, Any], path: Path) -> bool:
    """Write snapshot data as JSON unless the file already holds the same data.

    Returns:
        True if the file was written
    """
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    if path.exists():
        try:
            if json.loads(path.read_text(encoding="utf-8")) == configs:
                return False
        except json.JSONDecodeError:
            pass
    path.write_text(json.dumps(configs, indent=2, ensure_ascii=False) + "\n", encoding="utf-8")
    return True
