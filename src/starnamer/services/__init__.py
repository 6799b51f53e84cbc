"""Service layer for catalog loading and star suggestions."""

from starnamer.services.catalog import CatalogCacheManager
from starnamer.services.stars import StarService

__all__ = ["CatalogCacheManager", "StarService"]
