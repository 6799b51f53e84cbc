"""Star service - composition root for catalog and suggestions."""

import logging
import random

from starnamer.astronomy.catalog import CatalogIndex
from starnamer.astronomy.loader import CatalogLoader
from starnamer.astronomy.sources import (
    CatalogSource,
    FileCatalogSource,
    HttpCatalogSource,
)
from starnamer.core.exceptions import ConfigError
from starnamer.generator.client import HttpStarGenerator
from starnamer.generator.protocols import StarGenerator
from starnamer.services.catalog import CatalogCacheManager
from starnamer.storage.cache import ProposalCache
from starnamer.storage.config import ConfigManager
from starnamer.suggestions.models import EmotionSuggestion
from starnamer.suggestions.resolver import SuggestionResolver

logger = logging.getLogger(__name__)

NO_CATALOG_MESSAGE = (
    "No catalog configured. Set 'catalog_path' or 'catalog_url' "
    "with 'starnamer config set'."
)


def build_catalog_source(config: ConfigManager) -> CatalogSource | None:
    """Pick the catalog transport from configuration.

    A local path wins over a URL.

    Returns:
        The source, or None if neither is configured
    """
    if config.catalog_path is not None:
        return FileCatalogSource(config.catalog_path)
    if config.catalog_url:
        return HttpCatalogSource(config.catalog_url)
    return None


class StarService:
    """Main service: one per process, shared by every caller.

    Wires the catalog cache manager, the generator and the proposal cache
    into a suggestion resolver. Without a catalog the service still
    suggests, from synthetic stars.
    """

    def __init__(
        self,
        catalog: CatalogCacheManager | None = None,
        generator: StarGenerator | None = None,
        proposal_cache: ProposalCache | None = None,
        rng: random.Random | None = None,
        generator_timeout: float = SuggestionResolver.GENERATOR_TIMEOUT,
        proposal_ttl_hours: float = SuggestionResolver.PROPOSAL_TTL_HOURS,
        background_delay: float = CatalogCacheManager.BACKGROUND_DELAY,
    ):
        """Initialize the star service.

        Args:
            catalog: Catalog cache manager (None if no catalog is configured)
            generator: External star generator
            proposal_cache: Cache of generator proposals
            rng: Random source (seed it for reproducible output)
            generator_timeout: Generator timeout in seconds
            proposal_ttl_hours: Maximum age of cached proposals
            background_delay: Delay before the background catalog load
        """
        self.catalog = catalog
        self.generator = generator
        self.proposal_cache = proposal_cache
        self.background_delay = background_delay
        self.resolver = SuggestionResolver(
            catalog=catalog,
            generator=generator,
            proposal_cache=proposal_cache,
            rng=rng,
            generator_timeout=generator_timeout,
            proposal_ttl_hours=proposal_ttl_hours,
        )

    @classmethod
    def from_config(
        cls,
        config: ConfigManager,
        rng: random.Random | None = None,
        proposal_cache: ProposalCache | None = None,
    ) -> "StarService":
        """Build the service from user configuration.

        Args:
            config: Configuration manager
            rng: Random source
            proposal_cache: Proposal cache (opens the configured one if None)

        Returns:
            Configured StarService
        """
        catalog = None
        source = build_catalog_source(config)
        if source is None:
            logger.warning(f"{NO_CATALOG_MESSAGE} Suggestions will be synthetic.")
        else:
            catalog = CatalogCacheManager(
                source=source,
                already_decompressed=config.catalog_already_decompressed,
                loader=CatalogLoader(fetch_timeout=config.catalog_fetch_timeout),
            )

        if proposal_cache is None:
            proposal_cache = ProposalCache(config.cache_db_path)

        generator = None
        if config.generator_url:
            generator = HttpStarGenerator(
                config.generator_url,
                api_key=config.generator_api_key,
                timeout=config.generator_timeout,
            )

        return cls(
            catalog=catalog,
            generator=generator,
            proposal_cache=proposal_cache,
            rng=rng,
            generator_timeout=config.generator_timeout,
            proposal_ttl_hours=config.proposal_cache_ttl_hours,
            background_delay=config.background_load_delay,
        )

    def require_catalog(self) -> CatalogCacheManager:
        """Get the catalog cache manager.

        Raises:
            ConfigError: If no catalog is configured
        """
        if self.catalog is None:
            raise ConfigError(NO_CATALOG_MESSAGE)
        return self.catalog

    def start(self) -> None:
        """Kick off the deferred background catalog load.

        Must be called from a running event loop.
        """
        if self.catalog is not None:
            self.catalog.schedule_background_load(self.background_delay)

    async def suggest(
        self, emotion_key: str, count: int = 5
    ) -> list[EmotionSuggestion]:
        """Resolve suggestions for an emotion (never raises)."""
        return await self.resolver.resolve(emotion_key, count)

    async def get_index(self) -> CatalogIndex:
        """Load the catalog, surfacing catalog and configuration errors."""
        return await self.require_catalog().load()

    async def close(self) -> None:
        """Close all clients."""
        if self.catalog is not None:
            await self.catalog.close()
        if self.generator is not None:
            await self.generator.close()
        if self.proposal_cache is not None:
            await self.proposal_cache.close()
