"""Shared test fixtures for sheetquery."""

from __future__ import annotations

import sys
from collections.abc import Iterator
from pathlib import Path

import pytest

from sheetquery.client import SheetQueryClient
from sheetquery.logging import logger
from sheetquery.transport import LocalFileTransport

GOLDEN_DIR = Path(__file__).parent / "golden"


@pytest.fixture
def local_transport() -> LocalFileTransport:
    """Create a transport that reads from golden files."""
    return LocalFileTransport(GOLDEN_DIR)


@pytest.fixture
def client(local_transport: LocalFileTransport) -> SheetQueryClient:
    """Create a SheetQueryClient with local file transport."""
    return SheetQueryClient(local_transport)


@pytest.fixture(autouse=True)
def reset_logging() -> Iterator[None]:
    """Drop sinks added by the CLI so they don't outlive captured streams."""
    yield
    logger.remove()
    logger.add(sys.stderr)
