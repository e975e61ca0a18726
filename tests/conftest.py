"""Shared fixtures for claimsample tests."""

import csv
from pathlib import Path

import pytest

from claimsample.core.config import WeightTable

HEADER = ["claim_hcc_id", "claim_source", "claim_type", "status", "payment_status"]


@pytest.fixture
def header() -> list[str]:
    return list(HEADER)


@pytest.fixture
def claims() -> list[dict[str, str]]:
    """Six claims covering a mix of weighted and unweighted values."""
    rows = [
        ["C1", "EDI", "Professional", "Final", "Check Issued"],
        ["C2", "Paper", "Dental", "Open", "Pending"],
        ["C3", "Web", "Vision", "Denied", "Pending"],
        ["C4", "Web", "Vision", "Open", "Pending"],
        ["C5", "Web", "Vision", "Open", "Pending"],
        ["C6", "Web", "Vision", "Open", "Pending"],
    ]
    return [dict(zip(HEADER, row)) for row in rows]


@pytest.fixture
def unweighted_claims() -> list[dict[str, str]]:
    """Claims that match none of the default weight rules."""
    return [
        dict(zip(HEADER, [f"U{i}", "Web", "Vision", "Open", "Pending"]))
        for i in range(1, 4)
    ]


@pytest.fixture
def status_table() -> WeightTable:
    return WeightTable.from_pairs([("status", "Denied")])


@pytest.fixture
def write_csv(tmp_path):
    """Write a header and rows to a CSV file under tmp_path."""

    def _write(name: str, header: list[str], rows: list[list[str]]) -> Path:
        path = tmp_path / name
        with open(path, "w", encoding="utf-8", newline="") as f:
            writer = csv.writer(f)
            writer.writerow(header)
            writer.writerows(rows)
        return path

    return _write
