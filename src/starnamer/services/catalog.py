"""Catalog cache manager and background warm-up."""

import asyncio
import logging

from starnamer.astronomy.catalog import CatalogIndex
from starnamer.astronomy.loader import CatalogLoader, LoadState
from starnamer.astronomy.sources import CatalogSource
from starnamer.core.exceptions import CatalogError

logger = logging.getLogger(__name__)


class CatalogCacheManager:
    """Owns the catalog loader and the source it loads from.

    Foreground callers use :meth:`get_index`; process startup calls
    :meth:`schedule_background_load` once. Both go through the same
    single-flight loader, so at most one fetch is ever in flight.
    """

    BACKGROUND_DELAY = 2.0

    def __init__(
        self,
        source: CatalogSource,
        already_decompressed: bool,
        loader: CatalogLoader | None = None,
    ):
        """Initialize the cache manager.

        Args:
            source: Catalog transport
            already_decompressed: Whether the transport delivers plain text
            loader: Catalog loader (creates one if not provided)
        """
        self.source = source
        self.already_decompressed = already_decompressed
        self.loader = loader or CatalogLoader()
        self._background: asyncio.Task | None = None

    @property
    def state(self) -> LoadState:
        return self.loader.state

    async def load(self) -> CatalogIndex:
        """Load the catalog, surfacing catalog errors to the caller."""
        return await self.loader.load(self.source, self.already_decompressed)

    async def get_index(self) -> CatalogIndex | None:
        """Get the index, loading it in the foreground if needed.

        Returns:
            The index, or None if the catalog failed to load
        """
        if self.loader.index is not None:
            return self.loader.index
        try:
            return await self.load()
        except CatalogError as e:
            logger.warning(f"Catalog unavailable: {e}")
            return None

    def schedule_background_load(
        self, delay: float = BACKGROUND_DELAY
    ) -> asyncio.Task | None:
        """Schedule one deferred, non-blocking load attempt.

        Args:
            delay: Seconds to wait before loading

        Returns:
            The scheduled task, or None if the catalog is already
            loading, loaded or failed
        """
        if self._background is not None:
            return self._background
        if self.loader.state is not LoadState.UNLOADED:
            logger.debug(
                f"Background load not scheduled (state: {self.loader.state.value})"
            )
            return None

        self._background = asyncio.create_task(self._background_load(delay))
        return self._background

    async def _background_load(self, delay: float) -> None:
        await asyncio.sleep(delay)

        if self.loader.state is not LoadState.UNLOADED:
            logger.debug(
                f"Background load skipped (state: {self.loader.state.value})"
            )
            return

        try:
            index = await self.load()
        except CatalogError as e:
            logger.warning(f"Background catalog load failed, not retrying: {e}")
            return
        logger.info(f"Background catalog load finished: {index.total_count()} stars")

    async def reset(self) -> bool:
        """Allow a new load after a failure."""
        return await self.loader.reset()

    async def close(self) -> None:
        """Cancel a pending background load and close the source."""
        if self._background is not None and not self._background.done():
            self._background.cancel()
            try:
                await self._background
            except asyncio.CancelledError:
                pass
        await self.source.close()
