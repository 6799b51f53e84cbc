"""Visual hints derived from catalog properties."""

from pydantic import BaseModel, Field

from starnamer.core.utils import clamp

DEFAULT_COLOR = "#F8F8FF"

# Keyed by the first letter of the spectral class
SPECTRAL_COLORS = {
    "O": "#B0C4DE",
    "B": "#B0C4DE",
    "A": "#F8F8FF",
    "F": "#FFFACD",
    "G": "#FFE4B5",
    "K": "#FFA500",
    "M": "#FF6347",
}


class VisualHint(BaseModel):
    """How a star should be drawn by a display collaborator."""

    brightness: float = Field(ge=0, le=1, description="Relative brightness 0-1")
    color: str = Field(description="Hex color")
    size: float = Field(gt=0, description="Relative size")


def color_for_spectral_class(spectral_class: str | None) -> str:
    """Get a display color for a spectral class.

    Args:
        spectral_class: Spectral class such as "K2III" (may be None)

    Returns:
        Hex color string
    """
    if not spectral_class:
        return DEFAULT_COLOR
    return SPECTRAL_COLORS.get(spectral_class.strip()[:1].upper(), DEFAULT_COLOR)


def brightness_for_magnitude(magnitude: float) -> float:
    """Map apparent magnitude to a 0.3-1.0 brightness (lower mag = brighter)."""
    return clamp(1.2 - 0.07 * magnitude, 0.3, 1.0)


def size_for_brightness(brightness: float) -> float:
    """Map brightness to a 0.8-1.6 relative size."""
    return clamp(brightness * 1.5, 0.8, 1.6)


def visual_hint(magnitude: float, spectral_class: str | None) -> VisualHint:
    """Build the visual hint for a star."""
    brightness = brightness_for_magnitude(magnitude)
    return VisualHint(
        brightness=round(brightness, 3),
        color=color_for_spectral_class(spectral_class),
        size=round(size_for_brightness(brightness), 3),
    )
