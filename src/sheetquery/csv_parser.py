"""Parse gviz CSV exports into row dicts.

This is a deliberately naive splitter: fields are separated on every comma,
so a quoted value containing a comma is split in two. The resulting line
then has more fields than the header and is dropped.
"""

from __future__ import annotations

from sheetquery.logging import logger


def _split_fields(line: str) -> list[str]:
    return [value.strip().replace('"', "") for value in line.split(",")]


def parse_csv(text: str) -> list[dict[str, str]]:
    """Parse CSV text with a header line into a list of rows.

    Every value is kept as a string. Lines whose field count differs from
    the header count are skipped silently.

    Args:
        text: Raw CSV body

    Returns:
        Rows in source order, each keyed by header name in header order

    Raises:
        Any exception raised while splitting the input is logged and
        re-raised unchanged.
    """
    try:
        lines = text.split("\n")
        headers = _split_fields(lines[0])

        rows: list[dict[str, str]] = []
        for line in lines[1:]:
            values = _split_fields(line)
            if len(values) == len(headers):
                rows.append(dict(zip(headers, values)))

        return rows
    except Exception:
        logger.exception("Error parsing CSV data")
        raise
