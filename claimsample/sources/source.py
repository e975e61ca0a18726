"""Source steps for loading tabular records."""

import csv
import json
from collections.abc import Iterable, Sequence
from pathlib import Path

from loguru import logger

from claimsample.core.step import Step
from claimsample.core.types import Record


class MissingColumnError(ValueError):
    """Raised when a required column is absent from the input header."""

    def __init__(self, missing: Sequence[str], header: Sequence[str]) -> None:
        self.missing = list(missing)
        self.header = list(header)
        names = ", ".join(f"'{m}'" for m in self.missing)
        super().__init__(
            f"Column {names} not found in data. "
            f"Check input file headers (found: {', '.join(self.header) or 'none'})."
        )


def validate_header(header: Sequence[str], required: Iterable[str]) -> None:
    """
    Check that every required column is present in the header.

    Raises:
        MissingColumnError: If any required column is absent.
    """
    present = set(header)
    missing = [col for col in required if col not in present]
    if missing:
        raise MissingColumnError(missing, header)


def row_to_record(header: Sequence[str], row: Sequence[str]) -> Record:
    """Align a row to the header, trimming values. Short rows are padded with ""."""
    return {
        name: (row[i].strip() if i < len(row) and row[i] is not None else "")
        for i, name in enumerate(header)
    }


class ListSource(Step):
    """Load records from a Python list."""

    def __init__(
        self,
        records: list[Record],
        required_columns: Sequence[str] = (),
    ) -> None:
        """
        Initialize a list source.

        Args:
            records: List of records to load.
            required_columns: Columns the first record must carry.
        """
        super().__init__()
        self._records = records
        self._required = tuple(required_columns)

    def process(self, records: Iterable[Record]) -> Iterable[Record]:
        """Yield records from the list."""
        if self._records and self._required:
            validate_header(list(self._records[0].keys()), self._required)
        logger.info(f"Loading {len(self._records)} records from list")
        yield from self._records


class FileSource(Step):
    """Load records from local files (CSV, TSV, JSONL)."""

    FORMATS = ("csv", "tsv", "jsonl")

    def __init__(
        self,
        path: str | Path,
        format: str | None = None,
        required_columns: Sequence[str] = (),
        **kwargs,
    ) -> None:
        """
        Initialize a file source.

        Args:
            path: Path to the file to load.
            format: File format. If None, auto-detected from extension.
                Supported: "csv", "tsv", "jsonl"
            required_columns: Columns that must appear in the header.
                Checked before any record is yielded.
            **kwargs: Additional arguments passed to csv.reader.
        """
        super().__init__()
        self._path = Path(path)
        self._format = format or self._detect_format()
        self._required = tuple(required_columns)
        self._kwargs = kwargs
        self.header: list[str] = []

        if self._format not in self.FORMATS:
            raise ValueError(
                f"Unsupported format: {self._format}. "
                f"Supported formats: {', '.join(self.FORMATS)}"
            )

    def _detect_format(self) -> str:
        """Detect file format from extension."""
        suffix = self._path.suffix.lower()
        format_map = {
            ".csv": "csv",
            ".tsv": "tsv",
            ".jsonl": "jsonl",
            ".json": "jsonl",
        }
        if suffix not in format_map:
            raise ValueError(
                f"Cannot auto-detect format from extension: {suffix}. "
                "Please specify format explicitly."
            )
        return format_map[suffix]

    def process(self, records: Iterable[Record]) -> Iterable[Record]:
        """Load and yield records from the file."""
        logger.info(f"Loading data from {self._path} (format: {self._format})")

        if self._format == "csv":
            yield from self._load_delimited(",")
        elif self._format == "tsv":
            yield from self._load_delimited("\t")
        elif self._format == "jsonl":
            yield from self._load_jsonl()

    def _load_delimited(self, delimiter: str) -> Iterable[Record]:
        """Load records from a CSV/TSV file with a header row."""
        with open(self._path, "r", encoding="utf-8", newline="") as f:
            reader = csv.reader(f, delimiter=delimiter, **self._kwargs)
            first = next(reader, None)
            self.header = [h.strip() for h in first] if first else []
            validate_header(self.header, self._required)

            count = 0
            for row in reader:
                if not row:
                    continue
                yield row_to_record(self.header, row)
                count += 1

        logger.info(f"Loaded {count} records with {len(self.header)} columns")

    def _load_jsonl(self) -> Iterable[Record]:
        """Load records from a JSONL file. The first record's keys act as the header."""
        with open(self._path, "r", encoding="utf-8") as f:
            for line_num, line in enumerate(f, start=1):
                line = line.strip()
                if not line:
                    continue
                try:
                    record = json.loads(line)
                except json.JSONDecodeError as e:
                    logger.warning(f"Skipping invalid JSON at line {line_num}: {e}")
                    continue
                if not self.header:
                    self.header = [str(k).strip() for k in record]
                    validate_header(self.header, self._required)
                yield {str(k).strip(): v for k, v in record.items()}

        if not self.header:
            validate_header(self.header, self._required)


class Source:
    """Factory class for creating source steps."""

    @staticmethod
    def file(
        path: str | Path,
        format: str | None = None,
        required_columns: Sequence[str] = (),
        **kwargs,
    ) -> FileSource:
        """
        Load records from a local file.

        Args:
            path: Path to the file to load.
            format: File format. If None, auto-detected from extension.
            required_columns: Columns that must appear in the header.
            **kwargs: Additional arguments passed to the underlying reader.

        Returns:
            A FileSource step.

        Examples:
            >>> Source.file("claims.csv", required_columns=["claim_hcc_id"])
            >>> Source.file("claims.jsonl")
        """
        return FileSource(
            path=path, format=format, required_columns=required_columns, **kwargs
        )

    @staticmethod
    def csv(path: str | Path, required_columns: Sequence[str] = (), **kwargs) -> FileSource:
        """Load records from a CSV file."""
        return FileSource(
            path=path, format="csv", required_columns=required_columns, **kwargs
        )

    @staticmethod
    def tsv(path: str | Path, required_columns: Sequence[str] = (), **kwargs) -> FileSource:
        """Load records from a TSV file."""
        return FileSource(
            path=path, format="tsv", required_columns=required_columns, **kwargs
        )

    @staticmethod
    def jsonl(path: str | Path, required_columns: Sequence[str] = ()) -> FileSource:
        """Load records from a JSONL file."""
        return FileSource(path=path, format="jsonl", required_columns=required_columns)

    @staticmethod
    def list(records: list[Record], required_columns: Sequence[str] = ()) -> ListSource:
        """
        Load records from a Python list.

        Example:
            >>> Source.list([
            ...     {"claim_hcc_id": "1", "status": "Denied"},
            ...     {"claim_hcc_id": "2", "status": "Final"},
            ... ])
        """
        return ListSource(records, required_columns=required_columns)
