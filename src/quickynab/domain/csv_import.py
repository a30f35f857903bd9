"""CSV import domain service."""

import csv
import io
from pathlib import Path
from typing import Callable, Iterator, Optional

from quickynab.domain.dialects import DialectRegistry, default_registry
from quickynab.domain.entities import (
    ColumnField,
    DialectDescriptor,
    ParseReport,
    SkippedRow,
    Transaction,
)
from quickynab.domain.errors import CSVParseError, missing_date_column, no_data_rows
from quickynab.domain.normalizer import (
    header_columns,
    normalize_generic_record,
    normalize_record,
)
from quickynab.logging_setup import get_logger

logger = get_logger(__name__)

# Upload handlers stage files as "ynab-<random>-<original name>".
TEMP_FILE_PREFIX = "ynab-"

# Encodings tried in order when reading an export.
SOURCE_ENCODINGS = ("utf-8-sig", "cp1252")


def _split_lines(content: str) -> list[str]:
    lines = content.replace("\r\n", "\n").replace("\r", "\n").split("\n")
    while lines and not lines[-1].strip():
        lines.pop()
    return lines


def _iter_records(
    text: str, delimiter: str
) -> Iterator[tuple[int, Optional[list[str]], Optional[str]]]:
    """Yield ``(line_num, fields, error)`` for each non-blank record.

    Exactly one of ``fields`` and ``error`` is set. A malformed record does
    not stop the iteration.
    """
    reader = csv.reader(
        io.StringIO(text),
        delimiter=delimiter,
        quotechar='"',
        doublequote=True,
        strict=True,
    )
    while True:
        try:
            row = next(reader)
        except StopIteration:
            return
        except csv.Error as e:
            yield reader.line_num, None, str(e)
            continue
        fields = [value.strip() for value in row]
        if not any(fields):
            continue
        yield reader.line_num, fields, None


class CSVImportService:
    """Service for turning bank CSV exports into transactions."""

    def __init__(self, registry: Optional[DialectRegistry] = None):
        """Initialize CSV import service.

        Args:
            registry: Dialect registry. Defaults to the bundled snapshot.
        """
        self.registry = registry if registry is not None else default_registry()

    def resolve_filename(self, file_path: str | Path, original_filename: Optional[str] = None) -> str:
        """Return the filename used for dialect matching.

        An explicit ``original_filename`` wins. Otherwise the base name of
        ``file_path`` is used, with a ``ynab-<random>-`` staging prefix removed.
        """
        if original_filename:
            return original_filename

        filename = Path(file_path).name
        if filename.startswith(TEMP_FILE_PREFIX):
            parts = filename.split("-")
            if len(parts) >= 3:
                filename = "-".join(parts[2:])
        return filename

    def detect_dialect(
        self, file_path: str | Path, original_filename: Optional[str] = None
    ) -> Optional[DialectDescriptor]:
        """Return the dialect for a file, or None for the generic layout."""
        return self.registry.match(self.resolve_filename(file_path, original_filename))

    def _read(self, file_path: str | Path) -> str:
        path = Path(file_path)
        if not path.is_file():
            raise CSVParseError(f"CSV file not found: {file_path}")
        try:
            data = path.read_bytes()
        except OSError as e:
            raise CSVParseError(f"Could not read CSV file {file_path}: {e}")

        for encoding in SOURCE_ENCODINGS:
            try:
                return data.decode(encoding)
            except UnicodeDecodeError:
                continue
        logger.warning(
            "%s is neither UTF-8 nor cp1252; undecodable bytes were replaced", path.name
        )
        return data.decode("utf-8-sig", errors="replace")

    def validate_structure(
        self, file_path: str | Path, original_filename: Optional[str] = None
    ) -> None:
        """Cheap pre-check run before a full parse.

        Raises:
            CSVParseError: If the file is unreadable, empty, or (for the
                generic layout) has no Date column in its first line
        """
        content = self._read(file_path)
        lines = _split_lines(content)
        if not lines:
            raise CSVParseError(no_data_rows(Path(file_path).name))

        if self.detect_dialect(file_path, original_filename) is not None:
            return

        first_line = lines[0].lower()
        if "date" not in first_line:
            raise CSVParseError(missing_date_column(first_line), line=1)

    def parse(
        self, file_path: str | Path, original_filename: Optional[str] = None
    ) -> list[Transaction]:
        """Parse a CSV file into transactions in file order.

        Args:
            file_path: Path to CSV file
            original_filename: Name the file had before it was staged, if known

        Returns:
            List of transactions; rejected rows are logged and left out

        Raises:
            CSVParseError: If the file cannot be imported at all
        """
        return self.parse_report(file_path, original_filename).transactions

    def parse_report(
        self, file_path: str | Path, original_filename: Optional[str] = None
    ) -> ParseReport:
        """Parse a CSV file and report the dialect used and the skipped rows."""
        filename = self.resolve_filename(file_path, original_filename)
        descriptor = self.registry.match(filename)
        content = self._read(file_path)

        if descriptor is not None:
            logger.info("Detected %s format", descriptor.name)
            return self._parse_dialect(content, descriptor, filename)

        logger.info("Using generic YNAB format")
        return self._parse_generic(content, filename)

    def _parse_dialect(
        self, content: str, descriptor: DialectDescriptor, filename: str
    ) -> ParseReport:
        lines = _split_lines(content)
        end = len(lines) - descriptor.footer_rows
        data_lines = lines[descriptor.header_rows : max(end, descriptor.header_rows)]

        records = _iter_records("\n".join(data_lines), descriptor.delimiter)
        transactions, skipped = self._collect(
            records,
            lambda fields: normalize_record(fields, descriptor.columns, descriptor.date_format),
            filename,
            row_offset=descriptor.header_rows,
        )
        return ParseReport(transactions=transactions, dialect_name=descriptor.name, skipped=skipped)

    def _parse_generic(self, content: str, filename: str) -> ParseReport:
        records = _iter_records(content, ",")
        header = next(records, None)
        if header is None:
            raise CSVParseError(no_data_rows(filename))

        _, header_fields, error = header
        if error is not None:
            raise CSVParseError(f"Could not read CSV header: {error}", line=1)

        columns = header_columns(header_fields)
        if ColumnField.DATE not in columns:
            raise CSVParseError(missing_date_column(",".join(header_fields)), line=1)

        transactions, skipped = self._collect(
            records,
            lambda fields: normalize_generic_record(fields, columns),
            filename,
        )
        return ParseReport(transactions=transactions, dialect_name=None, skipped=skipped)

    def _collect(
        self,
        records: Iterator[tuple[int, Optional[list[str]], Optional[str]]],
        normalize: Callable[[list[str]], Optional[Transaction]],
        filename: str,
        row_offset: int = 0,
    ) -> tuple[list[Transaction], list[SkippedRow]]:
        transactions: list[Transaction] = []
        skipped: list[SkippedRow] = []
        seen_rows = 0

        for line_num, fields, error in records:
            seen_rows += 1
            row_num = row_offset + line_num
            if error is None:
                try:
                    transaction = normalize(fields)
                except Exception as e:
                    error = str(e)
                else:
                    if transaction is not None:
                        transactions.append(transaction)
                        continue
                    error = "missing or unparseable date"
            logger.warning("Skipping row %d: %s", row_num, error)
            skipped.append(SkippedRow(row_num=row_num, reason=error))

        if seen_rows == 0:
            raise CSVParseError(no_data_rows(filename))

        return transactions, skipped
