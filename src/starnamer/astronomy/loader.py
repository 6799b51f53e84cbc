"""Single-flight catalog loading.

State machine::

    UNLOADED -> LOADING -> LOADED
                        -> FAILED  (sticky until reset())

Concurrent callers during LOADING share one in-flight task and observe the
same index instance or the same exception instance.
"""

import asyncio
import gzip
import logging
import zlib
from enum import Enum

from starnamer.astronomy.catalog import CatalogIndex
from starnamer.astronomy.parser import ParseResult, parse_catalog
from starnamer.astronomy.sources import CatalogSource
from starnamer.core.exceptions import (
    CatalogDecodeError,
    CatalogEmptyError,
    CatalogError,
    CatalogFetchError,
    CatalogPreviouslyFailedError,
)

logger = logging.getLogger(__name__)


class LoadState(str, Enum):
    """Catalog load lifecycle."""

    UNLOADED = "unloaded"
    LOADING = "loading"
    LOADED = "loaded"
    FAILED = "failed"


def decode_payload(
    payload: bytes, already_decompressed: bool, source: str | None = None
) -> str:
    """Turn a raw catalog payload into text.

    Args:
        payload: Bytes as delivered by the transport
        already_decompressed: True if the transport already removed gzip
        source: Source locator for error messages

    Returns:
        Decoded CSV text

    Raises:
        CatalogDecodeError: If the payload does not match the setting
    """
    if not already_decompressed:
        try:
            payload = gzip.decompress(payload)
        except (OSError, EOFError, zlib.error) as e:
            raise CatalogDecodeError(
                f"Catalog payload is not gzip data ({e}); check the "
                "already_decompressed setting for this source",
                source=source,
            ) from e

    try:
        return payload.decode("utf-8-sig")
    except UnicodeDecodeError as e:
        raise CatalogDecodeError(
            f"Catalog payload is not UTF-8 text ({e}); if it is still "
            "compressed, already_decompressed should be false",
            source=source,
        ) from e


class CatalogLoader:
    """Loads a catalog once and memoizes the outcome."""

    FETCH_TIMEOUT = 30.0

    def __init__(self, fetch_timeout: float = FETCH_TIMEOUT):
        """Initialize the loader.

        Args:
            fetch_timeout: Seconds allowed for the fetch phase
        """
        self.fetch_timeout = fetch_timeout
        self._lock = asyncio.Lock()
        self._state = LoadState.UNLOADED
        self._index: CatalogIndex | None = None
        self._error: CatalogError | None = None
        self._inflight: asyncio.Task | None = None
        self.malformed_rows = 0

    @property
    def state(self) -> LoadState:
        return self._state

    @property
    def index(self) -> CatalogIndex | None:
        """The published index, or None until a load has succeeded."""
        return self._index

    @property
    def error(self) -> CatalogError | None:
        """The error that moved the loader to FAILED, if any."""
        return self._error

    async def load(
        self, source: CatalogSource, already_decompressed: bool
    ) -> CatalogIndex:
        """Load the catalog, or join the load already in progress.

        Args:
            source: Catalog transport
            already_decompressed: Whether the transport delivers plain text

        Returns:
            The catalog index

        Raises:
            CatalogFetchError: Fetch failed or timed out
            CatalogDecodeError: Payload did not match already_decompressed
            CatalogEmptyError: No valid rows
            CatalogPreviouslyFailedError: An earlier load failed
        """
        async with self._lock:
            if self._state is LoadState.LOADED:
                return self._index
            if self._state is LoadState.FAILED:
                raise CatalogPreviouslyFailedError(self._error)
            if self._inflight is None:
                self._state = LoadState.LOADING
                self._inflight = asyncio.create_task(
                    self._run(source, already_decompressed)
                )
            task = self._inflight

        # Shielded so one cancelled caller does not cancel everyone's load
        return await asyncio.shield(task)

    async def reset(self) -> bool:
        """Return a finished loader to UNLOADED.

        Returns:
            False if a load is in progress (nothing changed), True otherwise
        """
        async with self._lock:
            if self._state is LoadState.LOADING:
                return False
            logger.info(f"Resetting catalog loader (was {self._state.value})")
            self._state = LoadState.UNLOADED
            self._index = None
            self._error = None
            self.malformed_rows = 0
            return True

    async def _run(
        self, source: CatalogSource, already_decompressed: bool
    ) -> CatalogIndex:
        try:
            index = await self._fetch_and_build(source, already_decompressed)
        except asyncio.CancelledError:
            async with self._lock:
                self._state = LoadState.UNLOADED
                self._inflight = None
            raise
        except Exception as e:
            error = e if isinstance(e, CatalogError) else CatalogError(
                f"Unexpected catalog failure: {e}", source=source.describe()
            )
            async with self._lock:
                self._state = LoadState.FAILED
                self._error = error
                self._inflight = None
            logger.error(f"Catalog load failed: {error}")
            if error is e:
                raise
            raise error from e

        async with self._lock:
            self._index = index
            self._state = LoadState.LOADED
            self._inflight = None
        logger.info(f"Catalog loaded: {index.total_count()} stars")
        return index

    async def _fetch_and_build(
        self, source: CatalogSource, already_decompressed: bool
    ) -> CatalogIndex:
        locator = source.describe()

        try:
            payload = await asyncio.wait_for(
                source.fetch(), timeout=self.fetch_timeout
            )
        except asyncio.TimeoutError as e:
            raise CatalogFetchError(
                f"Catalog fetch timed out after {self.fetch_timeout}s",
                source=locator,
            ) from e
        except CatalogFetchError:
            raise
        except Exception as e:
            raise CatalogFetchError(
                f"Catalog fetch failed: {e}", source=locator
            ) from e

        result = await asyncio.to_thread(
            self._parse, payload, already_decompressed, locator
        )
        self.malformed_rows = result.malformed_rows
        if not result.records:
            raise CatalogEmptyError(result.malformed_rows, source=locator)

        return await asyncio.to_thread(CatalogIndex, result.records)

    @staticmethod
    def _parse(
        payload: bytes, already_decompressed: bool, locator: str
    ) -> ParseResult:
        text = decode_payload(payload, already_decompressed, source=locator)
        return parse_catalog(text)
