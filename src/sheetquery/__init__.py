"""sheetquery - Query publicly shared Google Sheets through the gviz endpoint.

Builds Google Query Language strings from structured options, fetches CSV
or JSONP output over HTTP and parses the result into row dicts.
"""

__version__ = "0.1.0"

from sheetquery.client import (
    SheetQueryClient,
    extract_jsonp,
    get_sheet_data,
    get_source_data,
)
from sheetquery.csv_parser import parse_csv
from sheetquery.query import FetchOptions, QueryOptions, build_query
from sheetquery.transport import (
    GvizTransport,
    HttpStatusError,
    LocalFileTransport,
    NetworkError,
    NotFoundError,
    Transport,
    TransportError,
)
from sheetquery.urls import build_csv_url, build_source_url, parse_spreadsheet_id

__all__ = [
    "FetchOptions",
    "GvizTransport",
    "HttpStatusError",
    "LocalFileTransport",
    "NetworkError",
    "NotFoundError",
    "QueryOptions",
    "SheetQueryClient",
    "Transport",
    "TransportError",
    "__version__",
    "build_csv_url",
    "build_query",
    "build_source_url",
    "extract_jsonp",
    "get_sheet_data",
    "get_source_data",
    "parse_csv",
    "parse_spreadsheet_id",
]
