"""SheetQueryClient - Main API for sheetquery.

Provides `get_sheet_data` (CSV export with a GQL query) and `get_source_data`
(raw JSONP data source payload) for publicly shared spreadsheets.
"""

from __future__ import annotations

import json
import re
from collections.abc import Mapping
from typing import Any

from sheetquery.csv_parser import parse_csv
from sheetquery.logging import logger, spreadsheet_id_ctx
from sheetquery.query import QueryOptions
from sheetquery.transport import GvizTransport, Transport
from sheetquery.urls import build_csv_url, build_source_url, parse_spreadsheet_id

__all__ = [
    "SheetQueryClient",
    "extract_jsonp",
    "get_sheet_data",
    "get_source_data",
]

_JSONP_PATTERN = re.compile(
    r"google\.visualization\.Query\.setResponse\((.*)\);?\s*$", re.DOTALL
)


def extract_jsonp(body: str) -> Any:
    """Parse the JSON payload out of a gviz JSONP response.

    The body is expected to look like
    ``google.visualization.Query.setResponse({...});``, optionally preceded
    by a comment line. Without the wrapper an empty string is parsed, which
    raises ``json.JSONDecodeError``.
    """
    match = _JSONP_PATTERN.search(body)
    payload = match.group(1) if match else ""
    return json.loads(payload)


class SheetQueryClient:
    """Client for querying publicly shared Google Sheets.

    Example:
        >>> async with SheetQueryClient() as client:
        ...     rows = await client.get_sheet_data(
        ...         "1BxiMVs0XRA5nFMdKvBdBZjgmUUqptlbs74OgvE2upms",
        ...         {"select": "A, B", "where": "B > 10", "limit": 5},
        ...     )
    """

    def __init__(
        self,
        transport: Transport | None = None,
        *,
        base_url: str | None = None,
    ) -> None:
        """Initialize the client.

        Args:
            transport: Transport implementation, defaults to GvizTransport
            base_url: Override for the configured spreadsheets base URL
        """
        self._transport = transport if transport is not None else GvizTransport()
        self._base_url = base_url

    async def __aenter__(self) -> SheetQueryClient:
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.close()

    async def close(self) -> None:
        """Close the underlying transport."""
        await self._transport.close()

    async def get_sheet_data(
        self,
        spreadsheet_id: str,
        options: QueryOptions | Mapping[str, Any] | None = None,
    ) -> list[dict[str, str]]:
        """Fetch a sheet as CSV and parse it into rows.

        Args:
            spreadsheet_id: The spreadsheet ID or its URL
            options: Query clauses and export parameters (headers, gid,
                sheet, range). A dict may use gviz keys like ``groupBy``.

        Returns:
            One dict per data row, all values as strings

        Raises:
            HttpStatusError: The endpoint answered with a non-success status
            NetworkError: The request failed before a response arrived
        """
        spreadsheet_id = parse_spreadsheet_id(spreadsheet_id)
        token = spreadsheet_id_ctx.set(spreadsheet_id)
        try:
            url = build_csv_url(spreadsheet_id, options, base_url=self._base_url)
            logger.debug(f"Fetching CSV: {url}")
            csv_data = await self._transport.get_text(url)
            return parse_csv(csv_data)
        except Exception:
            logger.exception("Error fetching or parsing data")
            raise
        finally:
            spreadsheet_id_ctx.reset(token)

    async def get_source_data(
        self,
        spreadsheet_id: str,
        sheet_name: str | None = None,
    ) -> Any:
        """Fetch the JSONP data source payload of a spreadsheet.

        The payload (``table``, ``cols``, ``rows`` and so on) is returned as
        parsed JSON without further interpretation.

        Args:
            spreadsheet_id: The spreadsheet ID or its URL
            sheet_name: Optional sheet tab name
        """
        spreadsheet_id = parse_spreadsheet_id(spreadsheet_id)
        token = spreadsheet_id_ctx.set(spreadsheet_id)
        try:
            url = build_source_url(spreadsheet_id, sheet_name, base_url=self._base_url)
            logger.debug(f"Fetching data source: {url}")
            # The body is parsed whatever the status; gviz reports errors in the payload
            body = await self._transport.get_text(url, check_status=False)
            return extract_jsonp(body)
        except Exception:
            logger.exception("Error fetching data source")
            raise
        finally:
            spreadsheet_id_ctx.reset(token)


async def get_sheet_data(
    spreadsheet_id: str,
    options: QueryOptions | Mapping[str, Any] | None = None,
) -> list[dict[str, str]]:
    """One-shot `SheetQueryClient.get_sheet_data` over a fresh GvizTransport."""
    async with SheetQueryClient() as client:
        return await client.get_sheet_data(spreadsheet_id, options)


async def get_source_data(spreadsheet_id: str, sheet_name: str | None = None) -> Any:
    """One-shot `SheetQueryClient.get_source_data` over a fresh GvizTransport."""
    async with SheetQueryClient() as client:
        return await client.get_source_data(spreadsheet_id, sheet_name)
