"""Immutable star catalog index."""

import bisect
import logging
from collections.abc import Iterable, Iterator

from starnamer.astronomy.models import CatalogRecord
from starnamer.core.exceptions import StarNotFoundError

logger = logging.getLogger(__name__)


class CatalogIndex:
    """Read-only indices over a set of catalog records.

    Built in a single pass and never modified afterwards, so any number of
    readers may query it concurrently without locking.
    """

    def __init__(self, records: Iterable[CatalogRecord]):
        """Build the index.

        Args:
            records: Records in catalog order; ids must be unique

        Raises:
            ValueError: If two records share an id
        """
        self._by_id: dict[int, CatalogRecord] = {}
        self._by_name: dict[str, list[CatalogRecord]] = {}
        # (lower-cased name, record) in insertion order, for substring search
        self._names: list[tuple[str, CatalogRecord]] = []
        by_magnitude: list[CatalogRecord] = []
        named: list[CatalogRecord] = []

        for record in records:
            if record.id in self._by_id:
                raise ValueError(f"Duplicate catalog id: {record.id}")
            self._by_id[record.id] = record
            by_magnitude.append(record)

            if record.is_named:
                name = record.proper_name.strip().lower()
                self._by_name.setdefault(name, []).append(record)
                self._names.append((name, record))
                named.append(record)

        def sort_key(record: CatalogRecord) -> tuple[float, int]:
            return (record.magnitude, record.id)

        by_magnitude.sort(key=sort_key)
        named.sort(key=sort_key)

        self._by_magnitude = tuple(by_magnitude)
        self._magnitudes = [record.magnitude for record in by_magnitude]
        self._named = tuple(named)

        logger.debug(
            f"Indexed {len(self._by_id)} stars ({len(self._named)} named)"
        )

    def get_by_id(self, record_id: int) -> CatalogRecord | None:
        """Get a star by catalog id.

        Args:
            record_id: Catalog id

        Returns:
            Matching record or None
        """
        return self._by_id.get(record_id)

    def get_by_magnitude_range(
        self, min_magnitude: float, max_magnitude: float
    ) -> list[CatalogRecord]:
        """Get stars within a magnitude range (inclusive).

        Args:
            min_magnitude: Minimum (brightest) magnitude
            max_magnitude: Maximum (faintest) magnitude

        Returns:
            Records ascending by magnitude, ties by ascending id
        """
        if min_magnitude > max_magnitude:
            return []
        start = bisect.bisect_left(self._magnitudes, min_magnitude)
        end = bisect.bisect_right(self._magnitudes, max_magnitude)
        return list(self._by_magnitude[start:end])

    def search_by_name(self, query: str) -> list[CatalogRecord]:
        """Search proper names by case-insensitive substring.

        Args:
            query: Search query

        Returns:
            Matching records in catalog order (empty for a blank query)
        """
        query_lower = query.lower().strip()
        if not query_lower:
            return []
        return [record for name, record in self._names if query_lower in name]

    def get_by_name(self, name: str) -> CatalogRecord:
        """Resolve a name to a single star.

        Exact (case-insensitive) matches win over substring matches.

        Args:
            name: Star name

        Returns:
            Matching record

        Raises:
            StarNotFoundError: If no proper name matches
        """
        name_lower = name.lower().strip()
        exact = self._by_name.get(name_lower)
        if exact:
            return exact[0]

        matches = self.search_by_name(name_lower)
        if not matches:
            raise StarNotFoundError(name)
        return matches[0]

    def get_named_stars(self) -> list[CatalogRecord]:
        """Get all named stars, brightest first."""
        return list(self._named)

    def get_variable_stars(self) -> list[CatalogRecord]:
        """Get all variable stars, brightest first."""
        return [record for record in self._by_magnitude if record.is_variable]

    def get_by_constellation(self, constellation: str) -> list[CatalogRecord]:
        """Get stars in a constellation, brightest first.

        Args:
            constellation: Constellation abbreviation (e.g., "Lyr")

        Returns:
            List of stars in that constellation
        """
        const_lower = constellation.lower().strip()
        return [
            record for record in self._by_magnitude
            if record.constellation and record.constellation.lower() == const_lower
        ]

    def get_by_distance_range(
        self, min_distance: float, max_distance: float
    ) -> list[CatalogRecord]:
        """Get stars within a distance range in parsecs (inclusive).

        Returns:
            Records brightest first; empty if min > max
        """
        return [
            record for record in self._by_magnitude
            if min_distance <= record.distance <= max_distance
        ]

    def get_by_spectral_class(self, prefix: str) -> list[CatalogRecord]:
        """Get stars whose spectral class starts with a prefix, brightest first.

        Args:
            prefix: Case-insensitive prefix (e.g., "M" or "a0")
        """
        prefix_lower = prefix.lower().strip()
        if not prefix_lower:
            return []
        return [
            record for record in self._by_magnitude
            if record.spectral_class
            and record.spectral_class.lower().startswith(prefix_lower)
        ]

    def total_count(self) -> int:
        """Get the number of stars in the catalog."""
        return len(self._by_id)

    def named_count(self) -> int:
        """Get the number of named stars."""
        return len(self._named)

    def __len__(self) -> int:
        return len(self._by_id)

    def __iter__(self) -> Iterator[CatalogRecord]:
        return iter(self._by_id.values())
