"""CLI entry point for sheetquery.

Usage:
    python -m sheetquery rows <spreadsheet_id_or_url> [--select COLS] [--where EXPR] ...
    python -m sheetquery source <spreadsheet_id_or_url> [--sheet NAME]
"""

from __future__ import annotations

import argparse
import asyncio
import json
import sys
from pathlib import Path

from sheetquery.client import SheetQueryClient
from sheetquery.config import get_settings
from sheetquery.logging import setup_logging
from sheetquery.query import FetchOptions
from sheetquery.transport import GvizTransport, LocalFileTransport, Transport

# CLI flag -> FetchOptions field
_OPTION_FLAGS = (
    "select",
    "where",
    "group_by",
    "pivot",
    "order_by",
    "limit",
    "offset",
    "label",
    "headers",
    "gid",
    "sheet",
    "range",
)


def _make_transport(args: argparse.Namespace) -> Transport:
    if args.golden_dir:
        return LocalFileTransport(Path(args.golden_dir))
    return GvizTransport()


def _options_from_args(args: argparse.Namespace) -> FetchOptions:
    return FetchOptions(**{name: getattr(args, name) for name in _OPTION_FLAGS})


async def cmd_rows(args: argparse.Namespace) -> int:
    """Fetch rows through the CSV export and print them as JSON."""
    client = SheetQueryClient(_make_transport(args))

    try:
        rows = await client.get_sheet_data(args.spreadsheet, _options_from_args(args))
        print(json.dumps(rows, indent=2, ensure_ascii=False))
        print(f"\n# {len(rows)} row(s)", file=sys.stderr)
        return 0
    except Exception as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1
    finally:
        await client.close()


async def cmd_source(args: argparse.Namespace) -> int:
    """Fetch the JSONP data source and print its payload."""
    client = SheetQueryClient(_make_transport(args))

    try:
        payload = await client.get_source_data(args.spreadsheet, args.sheet)
        print(json.dumps(payload, indent=2, ensure_ascii=False))
        return 0
    except Exception as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1
    finally:
        await client.close()


def _add_common_arguments(parser: argparse.ArgumentParser) -> None:
    parser.add_argument(
        "spreadsheet",
        help="Spreadsheet ID or full Google Sheets URL",
    )
    parser.add_argument(
        "--sheet",
        default=None,
        help="Sheet tab name",
    )
    parser.add_argument(
        "--golden-dir",
        default=None,
        help="Read responses from golden files in this directory instead of the network",
    )


def main(argv: list[str] | None = None) -> int:
    """Main entry point."""
    settings = get_settings()
    setup_logging(json_logs=settings.json_logs, log_level=settings.log_level)

    parser = argparse.ArgumentParser(
        prog="sheetquery",
        description="Query publicly shared Google Sheets via the gviz endpoint",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    # rows subcommand
    rows_parser = subparsers.add_parser(
        "rows",
        help="Fetch rows as CSV, optionally filtered with a GQL query",
    )
    _add_common_arguments(rows_parser)
    rows_parser.add_argument("--select", help="Columns to return, e.g. 'A, C'")
    rows_parser.add_argument("--where", help="Filter predicate, e.g. 'B > 10'")
    rows_parser.add_argument("--group-by", dest="group_by", help="Grouping columns")
    rows_parser.add_argument("--pivot", help="Pivot columns")
    rows_parser.add_argument("--order-by", dest="order_by", help="Sort columns")
    rows_parser.add_argument("--limit", type=int, help="Maximum number of rows")
    rows_parser.add_argument("--offset", type=int, help="Number of rows to skip")
    rows_parser.add_argument("--label", help="Column relabeling, e.g. \"A 'Name'\"")
    rows_parser.add_argument("--headers", type=int, help="Number of header rows")
    rows_parser.add_argument("--gid", help="Numeric sheet tab id")
    rows_parser.add_argument("--range", help="Cell range, e.g. A1:C10")
    rows_parser.set_defaults(func=cmd_rows)

    # source subcommand
    source_parser = subparsers.add_parser(
        "source",
        help="Fetch the raw JSONP data source payload",
    )
    _add_common_arguments(source_parser)
    source_parser.set_defaults(func=cmd_source)

    args = parser.parse_args(argv)
    result: int = asyncio.run(args.func(args))
    return result


if __name__ == "__main__":
    sys.exit(main())
