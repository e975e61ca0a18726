"""Core type definitions for claimsample."""

from dataclasses import dataclass
from typing import Any

Record = dict[str, Any]


def get_value(record: Record, attr: str) -> str:
    """
    Look up an attribute as a trimmed string.

    Missing attributes and None values (short CSV rows) read as "".
    """
    value = record.get(attr)
    if value is None:
        return ""
    return str(value).strip()


@dataclass(frozen=True)
class ScoredRecord:
    """A record paired with the score and probability assigned by the Scorer."""

    record: Record
    """The source row, left untouched."""

    score: int = 0
    """Sum of matched weights."""

    probability: float = 0.0
    """Score normalized by the dataset total (0 when the total is 0)."""

    def get(self, attr: str) -> str:
        return get_value(self.record, attr)
