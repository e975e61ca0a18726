"""Tests for the claimsample command line."""

import csv
import json

import pytest

from claimsample.cli import main


@pytest.fixture(autouse=True)
def clean_env(monkeypatch):
    for name in ("CLAIMSAMPLE_OUTPUT", "CLAIMSAMPLE_SAMPLE_SIZE", "CLAIMSAMPLE_ID_FIELD"):
        monkeypatch.delenv(name, raising=False)


def count_rows(path):
    with open(path, newline="") as f:
        return len(list(csv.reader(f))) - 1


class TestMain:
    def test_samples_file(self, tmp_path, write_csv, header):
        rows = [[f"C{i}", "EDI", "Vision", "Open", "Pending"] for i in range(8)]
        src = write_csv("claims.csv", header, rows)
        out = tmp_path / "sampled.csv"
        assert main([str(src), "-o", str(out), "-n", "3", "--seed", "4"]) == 0
        assert count_rows(out) == 3

    def test_missing_identifier_column(self, tmp_path, write_csv):
        src = write_csv("claims.csv", ["status"], [["Denied"]])
        out = tmp_path / "sampled.csv"
        assert main([str(src), "-o", str(out)]) == 1
        assert not out.exists()

    def test_custom_id_field(self, tmp_path, write_csv):
        src = write_csv("claims.csv", ["member_id", "status"], [["M1", "Denied"], ["M2", "Open"]])
        out = tmp_path / "sampled.csv"
        assert main([str(src), "-o", str(out), "--id-field", "member_id", "-n", "2"]) == 0
        assert count_rows(out) == 2

    def test_missing_input(self, tmp_path):
        assert main([str(tmp_path / "missing.csv"), "-o", str(tmp_path / "out.csv")]) == 1

    def test_invalid_sample_size(self, tmp_path, write_csv, header):
        src = write_csv("claims.csv", header, [])
        assert main([str(src), "-n", "-1", "-o", str(tmp_path / "out.csv")]) == 1

    def test_config_file(self, tmp_path, write_csv, header):
        rows = [[f"C{i}", "Web", "Vision", "Open", "Pending"] for i in range(6)]
        rows[2][1] = "Fax"
        src = write_csv("claims.csv", header, rows)
        config = tmp_path / "weights.json"
        config.write_text(json.dumps({"weights": [["claim_source", "Fax"]], "sample_size": 2}))
        out = tmp_path / "sampled.csv"
        assert main([str(src), "-o", str(out), "--config", str(config)]) == 0
        with open(out, newline="") as f:
            written = list(csv.DictReader(f))
        assert [r["claim_hcc_id"] for r in written] == ["C2", "C2"]

    def test_sample_size_from_environment(self, tmp_path, write_csv, header, monkeypatch):
        rows = [[f"C{i}", "EDI", "Vision", "Open", "Pending"] for i in range(8)]
        src = write_csv("claims.csv", header, rows)
        out = tmp_path / "sampled.csv"
        monkeypatch.setenv("CLAIMSAMPLE_SAMPLE_SIZE", "4")
        assert main([str(src), "-o", str(out)]) == 0
        assert count_rows(out) == 4

    def test_header_only_input(self, tmp_path, write_csv, header):
        src = write_csv("claims.csv", header, [])
        out = tmp_path / "sampled.csv"
        assert main([str(src), "-o", str(out)]) == 0
        assert out.exists()
        assert count_rows(out) == 0

    def test_zero_sample_size(self, tmp_path, write_csv, header):
        src = write_csv("claims.csv", header, [["C1", "EDI", "Vision", "Open", "Pending"]])
        out = tmp_path / "sampled.csv"
        assert main([str(src), "-o", str(out), "-n", "0"]) == 0
        with open(out, newline="") as f:
            assert list(csv.reader(f)) == [header]

    def test_unsupported_input_extension(self, tmp_path):
        src = tmp_path / "claims.xlsx"
        src.write_text("")
        assert main([str(src), "-o", str(tmp_path / "out.csv")]) == 1

    def test_malformed_config_file(self, tmp_path, write_csv, header):
        src = write_csv("claims.csv", header, [])
        config = tmp_path / "weights.json"
        config.write_text("{not json")
        assert main([str(src), "-o", str(tmp_path / "out.csv"), "--config", str(config)]) == 1
