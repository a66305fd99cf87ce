"""Transport layer for fetching gviz responses.

Defines the Transport protocol and implementations:
- GvizTransport: Production transport issuing HTTP GETs to docs.google.com
- LocalFileTransport: Test transport reading from local golden files
"""

from __future__ import annotations

import ssl
import urllib.parse
from abc import ABC, abstractmethod
from pathlib import Path  # noqa: TC003 - used at runtime

import certifi
import httpx

from sheetquery.config import get_settings


class TransportError(Exception):
    """Base exception for transport errors."""


class NetworkError(TransportError):
    """Raised when the request could not be completed."""


class HttpStatusError(TransportError):
    """Raised when the endpoint answers with a non-success status."""

    def __init__(self, message: str, status_code: int) -> None:
        super().__init__(message)
        self.status_code = status_code


class NotFoundError(HttpStatusError):
    """Raised when the spreadsheet is not found (404)."""


class Transport(ABC):
    """Abstract base class for gviz transports."""

    @abstractmethod
    async def get_text(self, url: str, *, check_status: bool = True) -> str:
        """Fetch a URL and return the response body as text.

        Args:
            url: Fully built gviz request URL
            check_status: If False, the body of a non-success response is
                returned instead of raising

        Returns:
            Decoded response body

        Raises:
            HttpStatusError: On a non-success response when checking status
            NetworkError: When no response was received
        """
        ...

    @abstractmethod
    async def close(self) -> None:
        """Close any open connections."""
        ...


class GvizTransport(Transport):
    """Production transport for Google's public gviz endpoints.

    No credentials are sent; the spreadsheet must be shared publicly.
    """

    def __init__(
        self,
        timeout: float | None = None,
        http_client: httpx.AsyncClient | None = None,
    ) -> None:
        """Initialize the transport.

        Args:
            timeout: Request timeout in seconds. Falls back to the
                configured timeout, then to httpx's default.
            http_client: Pre-built client to use instead of creating one
        """
        if http_client is not None:
            self._client = http_client
            return

        if timeout is None:
            timeout = get_settings().timeout
        ssl_context = ssl.create_default_context(cafile=certifi.where())
        if timeout is None:
            self._client = httpx.AsyncClient(verify=ssl_context)
        else:
            self._client = httpx.AsyncClient(timeout=timeout, verify=ssl_context)

    async def get_text(self, url: str, *, check_status: bool = True) -> str:
        """Make an unauthenticated GET request, following redirects."""
        try:
            # Google redirects exports to googleusercontent.com
            response = await self._client.get(url, follow_redirects=True)
            if check_status:
                response.raise_for_status()
            return response.text
        except httpx.HTTPStatusError as e:
            status = e.response.status_code
            message = f"Failed to fetch data. Status: {status}"
            if status == 404:
                raise NotFoundError(message, status_code=status) from e
            raise HttpStatusError(message, status_code=status) from e
        except httpx.RequestError as e:
            raise NetworkError(f"Network error: {e}") from e

    async def close(self) -> None:
        """Close the HTTP client."""
        await self._client.aclose()


class LocalFileTransport(Transport):
    """Test transport that reads from local golden files.

    Expected directory structure:
        golden_dir/
            <spreadsheet_id>/
                data.csv      # body for CSV export requests
                source.txt    # body for JSONP data source requests
    """

    def __init__(self, golden_dir: Path) -> None:
        """Initialize the transport.

        Args:
            golden_dir: Directory containing golden test files
        """
        self._golden_dir = golden_dir
        self.requests: list[str] = []

    async def get_text(self, url: str, *, check_status: bool = True) -> str:  # noqa: ARG002
        """Read the golden file matching the request URL."""
        self.requests.append(url)

        parts = urllib.parse.urlsplit(url)
        # /spreadsheets/d/<id>/gviz/tq
        spreadsheet_id = parts.path.rstrip("/").split("/")[-3]
        query = urllib.parse.parse_qs(parts.query)
        filename = "data.csv" if query.get("tqx") == ["out:csv"] else "source.txt"

        path = self._golden_dir / spreadsheet_id / filename
        if not path.exists():
            raise NotFoundError(f"Golden file not found: {path}", status_code=404)
        return path.read_text(encoding="utf-8")

    async def close(self) -> None:
        """No-op for local file transport."""
        pass
