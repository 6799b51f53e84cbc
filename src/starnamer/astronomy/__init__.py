"""Star catalog models, parsing, indexing and loading."""

from starnamer.astronomy.catalog import CatalogIndex
from starnamer.astronomy.coordinates import format_coordinates
from starnamer.astronomy.loader import CatalogLoader, LoadState
from starnamer.astronomy.models import CatalogRecord

__all__ = [
    "CatalogIndex",
    "CatalogLoader",
    "CatalogRecord",
    "LoadState",
    "format_coordinates",
]
