"""Request URLs for the gviz endpoints."""

from __future__ import annotations

import re
import urllib.parse
from collections.abc import Mapping
from typing import Any

from sheetquery.config import get_settings
from sheetquery.query import QueryOptions, build_query, coerce_options

# https://docs.google.com/spreadsheets/d/SPREADSHEET_ID/edit...
_SPREADSHEET_URL_PATTERN = re.compile(r"docs\.google\.com/spreadsheets/d/([a-zA-Z0-9_-]+)")

# Export parameters, in the order they are appended
URL_PARAMS = ("headers", "gid", "sheet", "range")


def parse_spreadsheet_id(id_or_url: str) -> str:
    """Extract spreadsheet ID from a URL or return as-is if already an ID."""
    match = _SPREADSHEET_URL_PATTERN.search(id_or_url)
    if match:
        return match.group(1)
    return id_or_url


def _quote(value: Any) -> str:
    return urllib.parse.quote(str(value), safe="")


def gviz_endpoint(spreadsheet_id: str, base_url: str | None = None) -> str:
    base = (base_url or get_settings().base_url).rstrip("/")
    return f"{base}/{parse_spreadsheet_id(spreadsheet_id)}/gviz/tq"


def build_csv_url(
    spreadsheet_id: str,
    options: QueryOptions | Mapping[str, Any] | None = None,
    *,
    base_url: str | None = None,
) -> str:
    """Build the CSV export URL for a spreadsheet.

    Each truthy export option appends one parameter. The ``tq`` query is
    appended whenever any option at all was supplied, so passing only
    ``gid`` still sends ``tq=SELECT *``.
    """
    opts = coerce_options(options)
    url = f"{gviz_endpoint(spreadsheet_id, base_url)}?tqx=out:csv"

    for name in URL_PARAMS:
        value = getattr(opts, name)
        if value:
            url += f"&{name}={_quote(value)}"

    if not opts.is_empty():
        url += f"&tq={build_query(opts)}"

    return url


def build_source_url(
    spreadsheet_id: str,
    sheet_name: str | None = None,
    *,
    base_url: str | None = None,
) -> str:
    """Build the JSONP data source URL, optionally scoped to one sheet tab."""
    url = gviz_endpoint(spreadsheet_id, base_url)
    if sheet_name:
        url += f"?sheet={_quote(sheet_name)}"
    return url
