"""CLI context management."""

import random
from dataclasses import dataclass
from pathlib import Path

from rich.console import Console

from starnamer.display.renderer import DisplayRenderer
from starnamer.services.stars import StarService
from starnamer.storage.cache import ProposalCache
from starnamer.storage.config import ConfigManager


@dataclass
class CliContext:
    """Context object passed to all CLI commands."""

    config: ConfigManager
    console: Console
    renderer: DisplayRenderer
    verbose: bool = False

    # Lazily initialized services
    _star_service: StarService | None = None
    _cache: ProposalCache | None = None

    @classmethod
    def create(
        cls,
        config_dir: Path | None = None,
        verbose: bool = False,
    ) -> "CliContext":
        """Create a new CLI context.

        Args:
            config_dir: Custom config directory
            verbose: Enable verbose output

        Returns:
            Initialized CliContext
        """
        config = ConfigManager(config_dir)
        console = Console()
        renderer = DisplayRenderer(console)

        return cls(
            config=config,
            console=console,
            renderer=renderer,
            verbose=verbose,
        )

    def get_cache(self) -> ProposalCache:
        """Get or create the proposal cache."""
        if self._cache is None:
            self._cache = ProposalCache(self.config.cache_db_path)
        return self._cache

    def get_star_service(self, seed: int | None = None) -> StarService:
        """Get or create the star service.

        Args:
            seed: Seed for template and fallback randomness
        """
        if self._star_service is None:
            rng = random.Random(seed) if seed is not None else None
            self._star_service = StarService.from_config(
                self.config, rng=rng, proposal_cache=self.get_cache()
            )
        return self._star_service

    async def cleanup(self) -> None:
        """Clean up resources."""
        if self._star_service:
            await self._star_service.close()
            self._star_service = None
        if self._cache:
            await self._cache.close()
            self._cache = None
