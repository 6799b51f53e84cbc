"""Catalog transports.

A source only delivers bytes. Whether those bytes are still gzip-compressed
is the caller's ``already_decompressed`` setting, not something a source
reports or the loader guesses.
"""

import asyncio
import logging
from pathlib import Path
from typing import Protocol

import httpx

from starnamer.core.exceptions import CatalogFetchError

logger = logging.getLogger(__name__)


class CatalogSource(Protocol):
    """Protocol for catalog payload transports."""

    def describe(self) -> str:
        """Human-readable locator for logs and errors."""
        ...

    async def fetch(self) -> bytes:
        """Fetch the raw catalog payload.

        Returns:
            Payload bytes, exactly as the transport delivered them

        Raises:
            CatalogFetchError: If the payload cannot be retrieved
        """
        ...

    async def close(self) -> None:
        """Release transport resources."""
        ...


class HttpCatalogSource:
    """Fetch the catalog over HTTP.

    httpx transparently decodes ``Content-Encoding: gzip`` responses, so a
    ``.csv.gz`` served with that header arrives already decompressed while
    one served as ``application/gzip`` does not.
    """

    TIMEOUT = 30.0

    def __init__(self, url: str, client: httpx.AsyncClient | None = None):
        """Initialize the source.

        Args:
            url: Catalog URL
            client: Optional httpx client (for testing/reuse)
        """
        self.url = url
        self._client = client
        self._owns_client = client is None

    def describe(self) -> str:
        return self.url

    async def _get_client(self) -> httpx.AsyncClient:
        """Get or create the HTTP client."""
        if self._client is None:
            self._client = httpx.AsyncClient(
                timeout=self.TIMEOUT, follow_redirects=True
            )
        return self._client

    async def close(self) -> None:
        """Close the HTTP client if we own it."""
        if self._owns_client and self._client is not None:
            await self._client.aclose()
            self._client = None

    async def fetch(self) -> bytes:
        client = await self._get_client()
        logger.info(f"Fetching star catalog from {self.url}")

        try:
            response = await client.get(self.url)
            response.raise_for_status()
        except httpx.HTTPStatusError as e:
            raise CatalogFetchError(
                f"HTTP {e.response.status_code} fetching catalog",
                source=self.url,
            ) from e
        except httpx.RequestError as e:
            raise CatalogFetchError(
                f"Request failed: {e}",
                source=self.url,
            ) from e

        return response.content


class FileCatalogSource:
    """Read the catalog from a local file."""

    def __init__(self, path: Path):
        self.path = Path(path)

    def describe(self) -> str:
        return str(self.path)

    async def close(self) -> None:
        pass

    async def fetch(self) -> bytes:
        logger.info(f"Reading star catalog from {self.path}")
        try:
            return await asyncio.to_thread(self.path.read_bytes)
        except OSError as e:
            raise CatalogFetchError(
                f"Failed to read catalog: {e}",
                source=str(self.path),
            ) from e
