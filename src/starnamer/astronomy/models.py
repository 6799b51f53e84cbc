"""Star catalog data models."""

from pydantic import BaseModel, ConfigDict, Field

from starnamer.astronomy.appearance import VisualHint, visual_hint
from starnamer.astronomy.coordinates import format_coordinates


class CatalogRecord(BaseModel):
    """A star in the catalog.

    Records are frozen; once an index is built nothing may change them.
    """

    model_config = ConfigDict(frozen=True)

    id: int = Field(description="Catalog id, unique within a catalog")
    proper_name: str | None = Field(default=None, description="Proper name")
    ra: float = Field(ge=0, lt=24, description="Right ascension in hours")
    dec: float = Field(ge=-90, le=90, description="Declination in degrees")
    distance: float = Field(default=0.0, ge=0, description="Distance in parsecs")
    magnitude: float = Field(description="Apparent magnitude")
    absolute_magnitude: float = Field(default=0.0, description="Absolute magnitude")
    spectral_class: str | None = Field(default=None, description="Spectral class")
    is_variable: bool = Field(default=False, description="Variable star flag")
    constellation: str | None = Field(default=None, description="Constellation abbreviation")
    cartesian: tuple[float, float, float] = Field(
        default=(0.0, 0.0, 0.0), description="x, y, z in parsecs"
    )

    @property
    def is_named(self) -> bool:
        """Check if the star has a non-blank proper name."""
        return bool(self.proper_name and self.proper_name.strip())

    @property
    def display_name(self) -> str:
        """Proper name, or a catalog designation for unnamed stars."""
        if self.is_named:
            return self.proper_name.strip()
        return f"HYG {self.id}"

    @property
    def coordinates(self) -> str:
        """Sexagesimal RA/Dec string."""
        return format_coordinates(self.ra, self.dec)

    @property
    def visual(self) -> VisualHint:
        """Display hint derived from magnitude and spectral class."""
        return visual_hint(self.magnitude, self.spectral_class)

    def to_display_record(self) -> dict:
        """Plain projection for display and storage collaborators."""
        return {
            "catalog_id": self.id,
            "scientific_name": self.display_name,
            "coordinates": self.coordinates,
            "distance": self.distance,
            "magnitude": self.magnitude,
            "spectral_class": self.spectral_class,
            "constellation": self.constellation,
            "is_variable": self.is_variable,
            "visual_data": self.visual.model_dump(),
        }
