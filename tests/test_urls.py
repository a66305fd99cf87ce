"""Tests for gviz URL construction and spreadsheet ID parsing."""

from __future__ import annotations

from sheetquery.query import FetchOptions
from sheetquery.urls import build_csv_url, build_source_url, parse_spreadsheet_id

BASE = "https://docs.google.com/spreadsheets/d"


def test_parse_spreadsheet_id_from_url() -> None:
    """Should extract spreadsheet ID from an edit URL."""
    url = "https://docs.google.com/spreadsheets/d/1abc_XYZ-9/edit#gid=0"
    assert parse_spreadsheet_id(url) == "1abc_XYZ-9"


def test_parse_spreadsheet_id_plain() -> None:
    """Should return plain spreadsheet IDs unchanged."""
    assert parse_spreadsheet_id("1abc_xyz") == "1abc_xyz"


def test_csv_url_without_options() -> None:
    """No options means no tq parameter."""
    assert build_csv_url("abc") == f"{BASE}/abc/gviz/tq?tqx=out:csv"
    assert build_csv_url("abc", {}) == f"{BASE}/abc/gviz/tq?tqx=out:csv"


def test_csv_url_gid_only_still_sends_query() -> None:
    """Any supplied option triggers a SELECT * query."""
    url = build_csv_url("abc", {"gid": 123})
    assert url == f"{BASE}/abc/gviz/tq?tqx=out:csv&gid=123&tq=SELECT%20*"


def test_csv_url_parameter_order() -> None:
    """Export parameters come in a fixed order before the query."""
    options = FetchOptions(
        range="A1:C10", sheet="Data", gid=5, headers=1, select="A", limit=2
    )
    url = build_csv_url("abc", options)
    assert url == (
        f"{BASE}/abc/gviz/tq?tqx=out:csv"
        "&headers=1&gid=5&sheet=Data&range=A1%3AC10"
        "&tq=SELECT%20A%20LIMIT%202"
    )


def test_csv_url_encodes_sheet_name() -> None:
    url = build_csv_url("abc", {"sheet": "Q1 Sales"})
    assert "&sheet=Q1%20Sales&" in url


def test_csv_url_accepts_spreadsheet_url() -> None:
    url = build_csv_url("https://docs.google.com/spreadsheets/d/abc/edit")
    assert url == f"{BASE}/abc/gviz/tq?tqx=out:csv"


def test_csv_url_base_url_override() -> None:
    url = build_csv_url("abc", base_url="http://localhost:8080/d/")
    assert url == "http://localhost:8080/d/abc/gviz/tq?tqx=out:csv"


def test_source_url() -> None:
    assert build_source_url("abc") == f"{BASE}/abc/gviz/tq"


def test_source_url_with_sheet() -> None:
    assert build_source_url("abc", "My Sheet") == f"{BASE}/abc/gviz/tq?sheet=My%20Sheet"


def test_csv_url_key_set_to_none_sends_query() -> None:
    """A key present with a None value still triggers the query parameter."""
    url = build_csv_url("abc", {"select": None})
    assert url == f"{BASE}/abc/gviz/tq?tqx=out:csv&tq=SELECT%20*"
