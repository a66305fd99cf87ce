"""Logging configuration using loguru with spreadsheet context support."""

import sys
from contextvars import ContextVar
from typing import Any

from loguru import logger

# Spreadsheet currently being fetched, set by the client for each call
spreadsheet_id_ctx: ContextVar[str | None] = ContextVar("spreadsheet_id", default=None)


def format_record(_record: dict[str, Any]) -> str:
    """Format log record with spreadsheet context."""
    spreadsheet_id = spreadsheet_id_ctx.get()
    context_str = f"[sheet={spreadsheet_id}] " if spreadsheet_id else ""

    return (
        "<green>{time:YYYY-MM-DD HH:mm:ss.SSS}</green> | "
        "<level>{level: <8}</level> | "
        "<cyan>{name}</cyan>:<cyan>{function}</cyan>:<cyan>{line}</cyan> | "
        f"{context_str}"
        "<level>{message}</level>\n"
        "{exception}"
    )


def setup_logging(json_logs: bool = False, log_level: str = "WARNING") -> None:
    """Configure loguru for command-line use.

    The library never calls this itself; embedding applications keep
    whatever sinks they have configured.

    Args:
        json_logs: If True, output logs as JSON
        log_level: Minimum log level to output
    """
    logger.remove()

    if json_logs:
        logger.add(
            sys.stderr,
            format="{message}",
            level=log_level,
            serialize=True,
        )
    else:
        logger.add(
            sys.stderr,
            format=format_record,
            level=log_level,
            colorize=True,
        )


__all__ = [
    "logger",
    "setup_logging",
    "spreadsheet_id_ctx",
]
