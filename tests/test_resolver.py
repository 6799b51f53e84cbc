"""Tests for the suggestion pipeline."""

import asyncio
import random
from pathlib import Path

import pytest

from starnamer.astronomy.catalog import CatalogIndex
from starnamer.core.exceptions import GeneratorUnavailableError
from starnamer.storage.cache import ProposalCache
from starnamer.suggestions.emotions import EMOTIONS
from starnamer.suggestions.fallback import synthesize_records
from starnamer.suggestions.models import SuggestionSource
from starnamer.suggestions.resolver import SuggestionResolver, partition_for
from starnamer.suggestions.templates import (
    BLAZING_CLAUSE,
    DISTANT_CLAUSE,
    PULSING_CLAUSE,
    describe,
)

from conftest import NAMED_BY_MAGNITUDE, FakeGenerator, StaticCatalog

AI_NAMES = ["Vega", "Altair", "Deneb", "Sirius", "Rigel"]


def resolve(resolver: SuggestionResolver, key: str, count: int = 5):
    return asyncio.run(resolver.resolve(key, count))


class TestPartition:
    """Test round-robin assignment of named stars to emotions."""

    def test_love_partition(self, index: CatalogIndex):
        names = [r.proper_name for r in partition_for(index.get_named_stars(), "love")]
        assert names == ["Sirius", "Spica"]

    def test_partitions_cover_named_stars_once(self, index: CatalogIndex):
        named = index.get_named_stars()
        seen = [
            record.id
            for emotion in EMOTIONS
            for record in partition_for(named, emotion.key)
        ]
        assert sorted(seen) == sorted(r.id for r in named)

    def test_unknown_key_gets_everything(self, index: CatalogIndex):
        named = index.get_named_stars()
        assert partition_for(named, "nostalgia") == named


class TestAiStage:
    """Test generator proposals confirmed against the catalog."""

    def test_ai_suggestions(self, index: CatalogIndex):
        generator = FakeGenerator(AI_NAMES)
        resolver = SuggestionResolver(StaticCatalog(index), generator)

        suggestions = resolve(resolver, "Love")

        assert len(suggestions) == 5
        assert [s.display_name for s in suggestions] == AI_NAMES
        assert all(s.source is SuggestionSource.AI for s in suggestions)
        assert all(s.confidence == 0.9 for s in suggestions)
        assert suggestions[0].id == "ai-love-91262"
        assert suggestions[0].description == "Vega shines for you"
        assert generator.requests[0].emotion_key == "love"

    def test_proposals_resolved_by_name_match(self, index: CatalogIndex):
        generator = FakeGenerator(["vega", "ALTAIR", "Deneb", "sirius", "Rig"])
        resolver = SuggestionResolver(StaticCatalog(index), generator)

        suggestions = resolve(resolver, "love")

        assert [s.display_name for s in suggestions] == AI_NAMES

    def test_duplicate_proposals_collapse(self, index: CatalogIndex):
        generator = FakeGenerator(["Vega", "vega", "Altair"])
        resolver = SuggestionResolver(StaticCatalog(index), generator)

        suggestions = resolve(resolver, "nostalgia", count=2)

        assert [s.display_name for s in suggestions] == ["Vega", "Altair"]
        assert len({s.id for s in suggestions}) == 2

    def test_blank_description_uses_template(self, index: CatalogIndex):
        generator = FakeGenerator(["Deneb"], descriptions=["   "])
        resolver = SuggestionResolver(StaticCatalog(index), generator)

        suggestions = resolve(resolver, "family", count=1)

        assert suggestions[0].source is SuggestionSource.AI
        assert "Deneb" in suggestions[0].description
        assert suggestions[0].description.endswith(f"{BLAZING_CLAUSE}.")

    def test_no_catalog_skips_ai(self):
        generator = FakeGenerator(AI_NAMES)
        resolver = SuggestionResolver(StaticCatalog(None), generator)

        suggestions = resolve(resolver, "love")

        assert all(s.source is SuggestionSource.FALLBACK for s in suggestions)
        assert generator.requests == []


class TestStageFallthrough:
    """Test that short or failed stages fall through without mixing."""

    def test_short_ai_batch_falls_to_catalog(self, index: CatalogIndex):
        generator = FakeGenerator(["Vega", "Nibiru"])
        resolver = SuggestionResolver(StaticCatalog(index), generator)

        suggestions = resolve(resolver, "love", count=2)

        assert [s.display_name for s in suggestions] == ["Sirius", "Spica"]
        assert all(s.source is SuggestionSource.CATALOG for s in suggestions)
        assert all(s.confidence == 0.8 for s in suggestions)
        assert suggestions[0].id == "catalog-love-32263"

    def test_generator_error_falls_to_catalog(self, index: CatalogIndex):
        generator = FakeGenerator(error=GeneratorUnavailableError("HTTP 503"))
        resolver = SuggestionResolver(StaticCatalog(index), generator)

        suggestions = resolve(resolver, "nostalgia")

        assert [s.display_name for s in suggestions] == NAMED_BY_MAGNITUDE[:5]

    def test_unexpected_generator_error_falls_to_catalog(self, index: CatalogIndex):
        generator = FakeGenerator(error=RuntimeError("kaboom"))
        resolver = SuggestionResolver(StaticCatalog(index), generator)

        suggestions = resolve(resolver, "nostalgia", count=3)

        assert all(s.source is SuggestionSource.CATALOG for s in suggestions)

    def test_generator_timeout_falls_to_catalog(self, index: CatalogIndex):
        generator = FakeGenerator(AI_NAMES, delay=5)
        resolver = SuggestionResolver(
            StaticCatalog(index), generator, generator_timeout=0.05
        )

        suggestions = resolve(resolver, "nostalgia", count=3)

        assert all(s.source is SuggestionSource.CATALOG for s in suggestions)

    def test_unsuccessful_response_falls_to_catalog(self, index: CatalogIndex):
        generator = FakeGenerator(AI_NAMES, success=False)
        resolver = SuggestionResolver(StaticCatalog(index), generator)

        suggestions = resolve(resolver, "nostalgia")

        assert all(s.source is SuggestionSource.CATALOG for s in suggestions)

    def test_small_partition_falls_to_fallback(self, index: CatalogIndex):
        """Love only owns two named stars, so five suggestions are synthetic."""
        resolver = SuggestionResolver(StaticCatalog(index))

        suggestions = resolve(resolver, "love", count=5)

        assert len(suggestions) == 5
        assert all(s.source is SuggestionSource.FALLBACK for s in suggestions)

    def test_catalog_provider_error_falls_to_fallback(self):
        class BrokenCatalog:
            async def get_index(self):
                raise RuntimeError("disk on fire")

        resolver = SuggestionResolver(BrokenCatalog())

        suggestions = resolve(resolver, "love")

        assert all(s.source is SuggestionSource.FALLBACK for s in suggestions)


class TestFallbackStage:
    """Test synthetic suggestions."""

    def test_fallback_shape(self):
        resolver = SuggestionResolver(rng=random.Random(7))

        suggestions = resolve(resolver, "memorial", count=5)

        assert [s.id for s in suggestions] == [
            f"fallback-memorial-{n}" for n in range(1, 6)
        ]
        assert [s.display_name for s in suggestions] == [
            f"Memorial Star {n}" for n in range(1, 6)
        ]
        assert all(s.confidence == 0.5 for s in suggestions)
        assert all(s.catalog_ref.id < 0 for s in suggestions)

    def test_fallback_records_in_range(self):
        for record in synthesize_records("love", 50, random.Random(1)):
            assert 0 <= record.ra < 24
            assert -90 <= record.dec <= 90
            assert 10 <= record.distance <= 110
            assert 0 <= record.magnitude <= 6

    def test_unknown_key_fallback_name(self):
        suggestions = resolve(SuggestionResolver(), "  Nostalgia ", count=1)
        assert suggestions[0].display_name == "Nostalgia Star 1"
        assert suggestions[0].emotion_key == "nostalgia"

    def test_seeded_output_is_reproducible(self):
        first = resolve(SuggestionResolver(rng=random.Random(42)), "healing")
        second = resolve(SuggestionResolver(rng=random.Random(42)), "healing")
        assert [s.to_display_record() for s in first] == [
            s.to_display_record() for s in second
        ]


class TestResolveContract:
    """Test properties that hold for every request."""

    @pytest.mark.parametrize("count", [0, -3])
    def test_non_positive_count(self, index: CatalogIndex, count: int):
        assert resolve(SuggestionResolver(StaticCatalog(index)), "love", count) == []

    @pytest.mark.parametrize("key", [e.key for e in EMOTIONS] + ["", "nostalgia"])
    @pytest.mark.parametrize("count", [1, 2, 5])
    def test_exact_count_single_source(self, index: CatalogIndex, key: str, count: int):
        resolver = SuggestionResolver(StaticCatalog(index), rng=random.Random(0))

        suggestions = resolve(resolver, key, count)

        assert len(suggestions) == count
        assert len({s.source for s in suggestions}) == 1
        assert len({s.id for s in suggestions}) == count
        for s in suggestions:
            assert s.confidence == s.source.confidence

    def test_display_record(self, index: CatalogIndex):
        suggestion = resolve(SuggestionResolver(StaticCatalog(index)), "family", 1)[0]
        data = suggestion.to_display_record()
        assert data["scientific_name"] == "Vega"
        assert data["emotion_id"] == "family"
        assert data["source"] == "catalog"
        assert data["confidence"] == 0.8
        assert data["catalog_id"] == 91262
        assert data["coordinates"] == "18h 36m 56.2s +38° 47′ 01″"


class TestProposalCaching:
    """Test that generator proposals are cached per emotion."""

    def test_second_request_uses_cache(self, index: CatalogIndex, tmp_path: Path):
        async def run():
            generator = FakeGenerator(AI_NAMES)
            cache = ProposalCache(tmp_path / "cache.db")
            resolver = SuggestionResolver(StaticCatalog(index), generator, cache)
            try:
                first = await resolver.resolve("love")
                second = await resolver.resolve("love")
            finally:
                await cache.close()
            return generator, first, second

        generator, first, second = asyncio.run(run())
        assert len(generator.requests) == 1
        assert [s.id for s in first] == [s.id for s in second]
        assert all(s.source is SuggestionSource.AI for s in second)


class TestTemplates:
    """Test templated descriptions."""

    def test_variable_clause_wins(self, index: CatalogIndex):
        text = describe(index.get_by_id(27919), "adventure", random.Random(0))
        assert text.startswith(("Betelgeuse", "Set your", "New horizons"))
        assert text.endswith(f"{PULSING_CLAUSE}.")

    def test_distant_clause(self, index: CatalogIndex):
        text = describe(index.get_by_id(101), "love", random.Random(0))
        assert text.endswith(f"{DISTANT_CLAUSE}.")

    def test_no_clause(self, index: CatalogIndex):
        text = describe(index.get_by_id(100), "love", random.Random(0))
        assert ";" not in text
        assert "HYG 100" in text
