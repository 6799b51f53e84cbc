"""Tests for configuration and the proposal cache."""

import asyncio
from pathlib import Path

import pytest

from starnamer.core.exceptions import ConfigError
from starnamer.generator.models import StarProposal
from starnamer.storage.cache import ProposalCache
from starnamer.storage.config import DEFAULT_SETTINGS, ConfigManager


class TestConfigManager:
    """Test TOML-backed settings."""

    def test_creates_default_config(self, tmp_path: Path):
        config = ConfigManager(tmp_path)
        assert config.config_file.exists()
        assert config.settings == DEFAULT_SETTINGS
        assert config.catalog_url is None
        assert config.catalog_path is None
        assert config.generator_url is None
        assert config.suggestion_count == 5
        assert config.background_load_delay == 2.0

    def test_settings_persist(self, tmp_path: Path):
        ConfigManager(tmp_path).set_setting("generator_url", "https://gen.test")
        assert ConfigManager(tmp_path).generator_url == "https://gen.test"

    @pytest.mark.parametrize(
        "key,raw,expected",
        [
            ("catalog_already_decompressed", "true", True),
            ("catalog_already_decompressed", "No", False),
            ("suggestion_count", "3", 3),
            ("catalog_fetch_timeout", "12.5", 12.5),
            ("catalog_url", "https://cat.test/hyg.csv.gz", "https://cat.test/hyg.csv.gz"),
        ],
    )
    def test_set_from_string(self, tmp_path: Path, key: str, raw: str, expected):
        config = ConfigManager(tmp_path)
        assert config.set_setting_from_string(key, raw) == expected
        assert ConfigManager(tmp_path).get_setting(key) == expected

    def test_unknown_setting(self, tmp_path: Path):
        with pytest.raises(ConfigError, match="Unknown"):
            ConfigManager(tmp_path).set_setting_from_string("colour", "blue")

    @pytest.mark.parametrize(
        "key,raw",
        [("suggestion_count", "many"), ("catalog_already_decompressed", "maybe")],
    )
    def test_invalid_value(self, tmp_path: Path, key: str, raw: str):
        with pytest.raises(ConfigError, match="Invalid"):
            ConfigManager(tmp_path).set_setting_from_string(key, raw)

    def test_catalog_path_expands_user(self, tmp_path: Path):
        config = ConfigManager(tmp_path)
        config.set_setting("catalog_path", "~/hyg.csv")
        assert config.catalog_path == Path.home() / "hyg.csv"

    def test_corrupt_file(self, tmp_path: Path):
        (tmp_path / "config.toml").write_text("settings = [unclosed", encoding="utf-8")
        with pytest.raises(ConfigError):
            ConfigManager(tmp_path)

    def test_cache_db_path(self, tmp_path: Path):
        config = ConfigManager(tmp_path)
        assert config.cache_db_path == tmp_path / "data" / "cache.db"
        assert config.data_dir.is_dir()


class TestProposalCache:
    """Test the SQLite proposal cache."""

    PROPOSALS = [
        StarProposal(name="Vega", description="Bright."),
        StarProposal(name="Altair", description="Swift."),
    ]

    def run(self, tmp_path: Path, body):
        async def wrapper():
            cache = ProposalCache(tmp_path / "cache.db")
            try:
                return await body(cache)
            finally:
                await cache.close()

        return asyncio.run(wrapper())

    def test_round_trip_keeps_order(self, tmp_path: Path):
        async def body(cache: ProposalCache):
            await cache.set_proposals("love", self.PROPOSALS)
            return await cache.get_proposals("love")

        assert self.run(tmp_path, body) == self.PROPOSALS

    def test_missing(self, tmp_path: Path):
        async def body(cache: ProposalCache):
            return await cache.get_proposals("love")

        assert self.run(tmp_path, body) is None

    def test_expired(self, tmp_path: Path):
        async def body(cache: ProposalCache):
            await cache.set_proposals("love", self.PROPOSALS)
            return await cache.get_proposals("love", ttl_hours=-1)

        assert self.run(tmp_path, body) is None

    def test_replace_and_isolation(self, tmp_path: Path):
        async def body(cache: ProposalCache):
            await cache.set_proposals("love", self.PROPOSALS)
            await cache.set_proposals("love", self.PROPOSALS[1:])
            await cache.set_proposals("memorial", self.PROPOSALS[:1])
            return (
                await cache.get_proposals("love"),
                await cache.get_proposals("memorial"),
            )

        love, memorial = self.run(tmp_path, body)
        assert [p.name for p in love] == ["Altair"]
        assert [p.name for p in memorial] == ["Vega"]

    def test_clear_and_stats(self, tmp_path: Path):
        async def body(cache: ProposalCache):
            await cache.set_proposals("love", self.PROPOSALS)
            await cache.set_proposals("memorial", self.PROPOSALS)
            stats = await cache.get_stats()
            removed = await cache.clear("love")
            return stats, removed, await cache.get_proposals("love")

        stats, removed, love = self.run(tmp_path, body)
        assert stats["total_entries"] == 4
        assert stats["emotions"] == 2
        assert removed == 2
        assert love is None
