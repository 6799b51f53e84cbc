"""HYG-style CSV parsing.

Every row goes through :class:`RawCatalogRow`, a string-typed mirror of the
columns we care about, before it is promoted to a :class:`CatalogRecord`.
Rows that fail promotion are skipped and counted, never fatal.
"""

import csv
import io
import logging
import math
from dataclasses import dataclass, field

from pydantic import BaseModel

from starnamer.astronomy.models import CatalogRecord

logger = logging.getLogger(__name__)

# Variable-star column values that mean "not variable"
_FALSE_FLAGS = {"0", "false", "no", "n"}


class RawCatalogRow(BaseModel):
    """A catalog row before validation; every column is an optional string."""

    id: str | None = None
    proper: str | None = None
    ra: str | None = None
    dec: str | None = None
    dist: str | None = None
    mag: str | None = None
    absmag: str | None = None
    spect: str | None = None
    var: str | None = None
    con: str | None = None
    x: str | None = None
    y: str | None = None
    z: str | None = None

    @classmethod
    def from_csv(cls, row: dict[str, str]) -> "RawCatalogRow":
        """Build from a csv.DictReader row, ignoring unknown columns."""
        known = {
            key: value for key, value in row.items()
            if key in cls.model_fields
        }
        return cls(**known)

    def to_record(self) -> CatalogRecord:
        """Validate and promote to a CatalogRecord.

        Raises:
            ValueError: If a required field is missing or malformed
        """
        record_id = _require_int(self.id, "id")
        # HYG reserves id 0 for the Sun
        if record_id <= 0:
            raise ValueError(f"id must be positive, got {record_id}")

        return CatalogRecord(
            id=record_id,
            proper_name=_optional_str(self.proper),
            ra=_require_float(self.ra, "ra"),
            dec=_require_float(self.dec, "dec"),
            distance=_optional_float(self.dist),
            magnitude=_require_float(self.mag, "mag"),
            absolute_magnitude=_optional_float(self.absmag),
            spectral_class=_optional_str(self.spect),
            is_variable=_flag(self.var),
            constellation=_optional_str(self.con),
            cartesian=(
                _optional_float(self.x),
                _optional_float(self.y),
                _optional_float(self.z),
            ),
        )


@dataclass
class ParseResult:
    """Outcome of parsing a catalog payload."""

    records: list[CatalogRecord] = field(default_factory=list)
    malformed_rows: int = 0

    @property
    def total_rows(self) -> int:
        return len(self.records) + self.malformed_rows


def parse_catalog(text: str) -> ParseResult:
    """Parse CSV catalog text into records.

    The first non-comment line is the header. Blank lines and lines starting
    with ``#`` are skipped. Rows with the wrong number of columns, invalid
    required fields or a duplicate id are counted as malformed.

    Args:
        text: Decoded CSV text

    Returns:
        ParseResult with valid records in file order
    """
    result = ParseResult()
    lines = (
        line for line in io.StringIO(text)
        if line.strip() and not line.lstrip().startswith("#")
    )
    reader = csv.DictReader(lines, skipinitialspace=True)
    if reader.fieldnames is None:
        return result
    reader.fieldnames = [
        name.strip().lstrip("\ufeff").lower() for name in reader.fieldnames
    ]

    seen_ids: set[int] = set()
    for row in reader:
        # DictReader files surplus values under None and pads short rows with None
        if None in row or any(value is None for value in row.values()):
            logger.debug(f"Skipping row {reader.line_num}: wrong column count")
            result.malformed_rows += 1
            continue

        try:
            record = RawCatalogRow.from_csv(row).to_record()
        except ValueError as e:
            logger.debug(f"Skipping row {reader.line_num}: {e}")
            result.malformed_rows += 1
            continue

        if record.id in seen_ids:
            logger.debug(f"Skipping row {reader.line_num}: duplicate id {record.id}")
            result.malformed_rows += 1
            continue

        seen_ids.add(record.id)
        result.records.append(record)

    if result.malformed_rows:
        logger.warning(
            f"Skipped {result.malformed_rows} malformed catalog rows "
            f"({len(result.records)} valid)"
        )
    return result


def _optional_str(value: str | None) -> str | None:
    if value is None:
        return None
    value = value.strip()
    return value or None


def _require_float(value: str | None, name: str) -> float:
    text = _optional_str(value)
    if text is None:
        raise ValueError(f"missing {name}")
    number = float(text)
    if not math.isfinite(number):
        raise ValueError(f"{name} is not finite: {text}")
    return number


def _optional_float(value: str | None, default: float = 0.0) -> float:
    try:
        return _require_float(value, "value")
    except ValueError:
        return default


def _require_int(value: str | None, name: str) -> int:
    text = _optional_str(value)
    if text is None:
        raise ValueError(f"missing {name}")
    return int(text)


def _flag(value: str | None) -> bool:
    text = _optional_str(value)
    return text is not None and text.lower() not in _FALSE_FLAGS
