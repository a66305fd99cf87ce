"""Tests for the command-line interface."""

from __future__ import annotations

import json
from pathlib import Path

import pytest

from sheetquery.__main__ import main

GOLDEN_DIR = str(Path(__file__).parent / "golden")


def test_rows_prints_json(capsys: pytest.CaptureFixture[str]) -> None:
    """Should print parsed rows as a JSON array."""
    code = main(["rows", "basic_sheet", "--golden-dir", GOLDEN_DIR, "--limit", "5"])

    assert code == 0
    rows = json.loads(capsys.readouterr().out)
    assert [row["Name"] for row in rows] == ["Alice", "Bob", "Dan"]


def test_source_prints_payload(capsys: pytest.CaptureFixture[str]) -> None:
    """Should print the JSONP payload as JSON."""
    code = main(["source", "basic_sheet", "--golden-dir", GOLDEN_DIR])

    assert code == 0
    payload = json.loads(capsys.readouterr().out)
    assert payload["table"]["cols"][1]["label"] == "Age"


def test_rows_unknown_spreadsheet_fails(capsys: pytest.CaptureFixture[str]) -> None:
    """Should report the error and exit with 1."""
    code = main(["rows", "nonexistent", "--golden-dir", GOLDEN_DIR])

    assert code == 1
    assert "Golden file not found" in capsys.readouterr().err


def test_source_without_wrapper_fails(capsys: pytest.CaptureFixture[str]) -> None:
    code = main(["source", "unwrapped_source", "--golden-dir", GOLDEN_DIR])

    assert code == 1
    assert "Error: " in capsys.readouterr().err
