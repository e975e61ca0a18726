"""Sink classes for saving pipeline output."""

import csv
import json
from collections.abc import Callable, Iterable, Sequence
from pathlib import Path

from loguru import logger

from claimsample.core.step import Step
from claimsample.core.types import Record


class Sink(Step):
    """Factory class for creating sink steps."""

    @staticmethod
    def jsonl(path: str | Path) -> "JSONLSink":
        """Create a JSONL file sink."""
        return JSONLSink(path)

    @staticmethod
    def csv(
        path: str | Path,
        fieldnames: Sequence[str] | Callable[[], Sequence[str]] | None = None,
    ) -> "CSVSink":
        """Create a CSV file sink."""
        return CSVSink(path, fieldnames=fieldnames)

    @staticmethod
    def list() -> "ListSink":
        """Create a list sink that collects records in memory."""
        return ListSink()


class JSONLSink(Step):
    """Write records to a JSONL file."""

    def __init__(self, path: str | Path) -> None:
        super().__init__()
        self._path = Path(path)

    def process(self, records: Iterable[Record]) -> Iterable[Record]:
        """Write records to JSONL file and pass them through."""
        self._path.parent.mkdir(parents=True, exist_ok=True)
        count = 0

        with open(self._path, "w", encoding="utf-8") as f:
            for record in records:
                f.write(json.dumps(record, default=str, ensure_ascii=False) + "\n")
                count += 1
                yield record

        logger.info(f"Saved {count} records to {self._path}")


class CSVSink(Step):
    """Write records to a CSV file."""

    def __init__(
        self,
        path: str | Path,
        fieldnames: Sequence[str] | Callable[[], Sequence[str]] | None = None,
    ) -> None:
        """
        Initialize a CSV sink.

        Args:
            path: Output file path.
            fieldnames: Column order, or a callable returning it at write time
                (e.g. the header of a source read earlier in the pipeline).
                Defaults to the keys of the first record. When it yields
                columns, a header-only file is written for an empty sample.
        """
        super().__init__()
        self._path = Path(path)
        self._fieldnames = fieldnames

    def _resolve_fieldnames(self) -> list[str]:
        if self._fieldnames is None:
            return []
        if callable(self._fieldnames):
            return list(self._fieldnames())
        return list(self._fieldnames)

    def process(self, records: Iterable[Record]) -> Iterable[Record]:
        """Write records to CSV file and pass them through."""
        records_list = list(records)
        fieldnames = self._resolve_fieldnames()

        if not records_list and not fieldnames:
            logger.warning(f"No records to save to {self._path}")
            return

        fieldnames = fieldnames or list(records_list[0].keys())
        self._path.parent.mkdir(parents=True, exist_ok=True)

        with open(self._path, "w", encoding="utf-8", newline="") as f:
            writer = csv.DictWriter(
                f, fieldnames=fieldnames, restval="", extrasaction="ignore"
            )
            writer.writeheader()
            for record in records_list:
                writer.writerow(record)
                yield record

        logger.info(f"Saved {len(records_list)} records to {self._path}")


class ListSink(Step):
    """Collect records into a list (for testing)."""

    def __init__(self) -> None:
        super().__init__()
        self.records: list[Record] = []

    def process(self, records: Iterable[Record]) -> Iterable[Record]:
        """Collect records and pass them through."""
        for record in records:
            self.records.append(record)
            yield record

        logger.info(f"Collected {len(self.records)} records")
