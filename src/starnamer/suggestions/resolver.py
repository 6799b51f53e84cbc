"""Suggestion resolution pipeline.

Three stages, tried in order until one yields the requested number of
suggestions:

1. AI: generator proposals confirmed against the catalog (confidence 0.9)
2. Catalog: the emotion's partition of the named stars (confidence 0.8)
3. Fallback: synthetic stars (confidence 0.5), which cannot fail

Stages are never mixed. A stage that comes up short is discarded and the
next stage starts from scratch, so a batch always has a single source.
"""

import asyncio
import logging
import random
from typing import Protocol

from starnamer.astronomy.catalog import CatalogIndex
from starnamer.astronomy.models import CatalogRecord
from starnamer.core.exceptions import (
    GeneratorTimeoutError,
    GeneratorUnavailableError,
    StarNotFoundError,
)
from starnamer.generator.models import GenerationRequest, StarProposal
from starnamer.generator.protocols import StarGenerator
from starnamer.storage.cache import ProposalCache
from starnamer.suggestions.emotions import (
    EMOTIONS,
    category_position,
    normalize_key,
)
from starnamer.suggestions.fallback import synthesize_records
from starnamer.suggestions.models import EmotionSuggestion, SuggestionSource
from starnamer.suggestions.templates import describe

logger = logging.getLogger(__name__)


class CatalogProvider(Protocol):
    """Anything that can hand out the catalog index when it is available."""

    async def get_index(self) -> CatalogIndex | None:
        """Get the index, or None if the catalog is unavailable."""
        ...


def partition_for(
    named_stars: list[CatalogRecord], emotion_key: str
) -> list[CatalogRecord]:
    """Named stars assigned to an emotion category.

    Star ``i`` (brightest first) belongs to the category at position
    ``i mod len(EMOTIONS)``. Unknown keys get every named star.
    """
    position = category_position(emotion_key)
    if position is None:
        return list(named_stars)
    return named_stars[position::len(EMOTIONS)]


class SuggestionResolver:
    """Resolves ranked star suggestions for an emotion."""

    GENERATOR_TIMEOUT = 30.0
    PROPOSAL_TTL_HOURS = 24

    def __init__(
        self,
        catalog: CatalogProvider | None = None,
        generator: StarGenerator | None = None,
        proposal_cache: ProposalCache | None = None,
        rng: random.Random | None = None,
        generator_timeout: float = GENERATOR_TIMEOUT,
        proposal_ttl_hours: float = PROPOSAL_TTL_HOURS,
    ):
        """Initialize the resolver.

        Args:
            catalog: Provider of the catalog index
            generator: External star generator (AI stage skipped if None)
            proposal_cache: Cache of generator proposals
            rng: Random source for templates and fallback stars
            generator_timeout: Seconds to wait for the generator
            proposal_ttl_hours: Maximum age of cached proposals
        """
        self.catalog = catalog
        self.generator = generator
        self.proposal_cache = proposal_cache
        self.rng = rng or random.Random()
        self.generator_timeout = generator_timeout
        self.proposal_ttl_hours = proposal_ttl_hours

    async def resolve(
        self, emotion_key: str, count: int = 5
    ) -> list[EmotionSuggestion]:
        """Resolve suggestions for an emotion. Never raises.

        Args:
            emotion_key: Emotion category key
            count: Number of suggestions wanted

        Returns:
            Exactly ``count`` suggestions from a single stage
        """
        if count <= 0:
            return []

        key = normalize_key(emotion_key)
        index = await self._get_index()

        try:
            suggestions = await self._ai_stage(key, count, index)
        except Exception as e:
            logger.warning(f"AI stage failed for {key}: {e}")
            suggestions = []
        if len(suggestions) >= count:
            return suggestions[:count]

        try:
            suggestions = self._catalog_stage(key, count, index)
        except Exception as e:
            logger.warning(f"Catalog stage failed for {key}: {e}")
            suggestions = []
        if len(suggestions) >= count:
            return suggestions[:count]

        logger.info(f"Using synthetic fallback stars for {key}")
        return self._fallback_stage(key, count)

    async def _get_index(self) -> CatalogIndex | None:
        if self.catalog is None:
            return None
        try:
            return await self.catalog.get_index()
        except Exception as e:
            logger.warning(f"Catalog unavailable: {e}")
            return None

    async def _ai_stage(
        self, key: str, count: int, index: CatalogIndex | None
    ) -> list[EmotionSuggestion]:
        if index is None:
            logger.debug("AI stage skipped: no catalog to confirm proposals")
            return []

        proposals = await self._get_proposals(key)
        if not proposals:
            return []

        suggestions: list[EmotionSuggestion] = []
        seen: set[int] = set()
        for proposal in proposals:
            try:
                record = index.get_by_name(proposal.name)
            except StarNotFoundError:
                logger.debug(f"No catalog match for proposal: {proposal.name}")
                continue
            if record.id in seen:
                continue
            seen.add(record.id)

            description = proposal.description.strip()
            if not description:
                description = describe(record, key, self.rng)
            suggestions.append(
                EmotionSuggestion.create(SuggestionSource.AI, key, record, description)
            )
            if len(suggestions) == count:
                break

        logger.debug(
            f"AI stage confirmed {len(suggestions)} of {len(proposals)} proposals"
        )
        return suggestions

    async def _get_proposals(self, key: str) -> list[StarProposal]:
        """Cached proposals if fresh, otherwise ask the generator."""
        if self.proposal_cache is not None:
            cached = await self.proposal_cache.get_proposals(
                key, ttl_hours=self.proposal_ttl_hours
            )
            if cached:
                logger.debug(f"Using {len(cached)} cached proposals for {key}")
                return cached

        if self.generator is None:
            return []

        try:
            response = await asyncio.wait_for(
                self.generator.generate(GenerationRequest(emotion_key=key)),
                timeout=self.generator_timeout,
            )
        except asyncio.TimeoutError as e:
            raise GeneratorTimeoutError(
                f"Generator gave no answer within {self.generator_timeout}s"
            ) from e

        if not response.is_usable:
            raise GeneratorUnavailableError("Generator returned no stars")

        if self.proposal_cache is not None:
            try:
                await self.proposal_cache.set_proposals(key, response.stars)
            except Exception as e:
                logger.warning(f"Could not cache proposals for {key}: {e}")

        return response.stars

    def _catalog_stage(
        self, key: str, count: int, index: CatalogIndex | None
    ) -> list[EmotionSuggestion]:
        if index is None:
            return []

        records = partition_for(index.get_named_stars(), key)[:count]
        return [
            EmotionSuggestion.create(
                SuggestionSource.CATALOG, key, record, describe(record, key, self.rng)
            )
            for record in records
        ]

    def _fallback_stage(self, key: str, count: int) -> list[EmotionSuggestion]:
        return [
            EmotionSuggestion.create(
                SuggestionSource.FALLBACK,
                key,
                record,
                describe(record, key, self.rng),
                suffix=number,
            )
            for number, record in enumerate(
                synthesize_records(key, count, self.rng), start=1
            )
        ]
