"""Core utilities and exceptions."""

from starnamer.core.exceptions import (
    CacheError,
    CatalogDecodeError,
    CatalogEmptyError,
    CatalogError,
    CatalogFetchError,
    CatalogPreviouslyFailedError,
    ConfigError,
    GeneratorError,
    GeneratorTimeoutError,
    GeneratorUnavailableError,
    StarnamerError,
    StarNotFoundError,
)

__all__ = [
    "StarnamerError",
    "ConfigError",
    "CatalogError",
    "CatalogFetchError",
    "CatalogDecodeError",
    "CatalogEmptyError",
    "CatalogPreviouslyFailedError",
    "StarNotFoundError",
    "GeneratorError",
    "GeneratorUnavailableError",
    "GeneratorTimeoutError",
    "CacheError",
]
