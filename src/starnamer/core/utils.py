"""Common utilities."""

import math
from datetime import datetime, timezone


def spherical_to_cartesian(
    ra: float, dec: float, distance: float
) -> tuple[float, float, float]:
    """Convert equatorial coordinates to HYG-style cartesian coordinates.

    Args:
        ra: Right ascension in hours
        dec: Declination in degrees
        distance: Distance in parsecs

    Returns:
        Tuple of (x, y, z) in parsecs
    """
    ra_rad = math.radians(ra * 15)
    dec_rad = math.radians(dec)

    x = distance * math.cos(dec_rad) * math.cos(ra_rad)
    y = distance * math.cos(dec_rad) * math.sin(ra_rad)
    z = distance * math.sin(dec_rad)
    return (x, y, z)


def absolute_magnitude(magnitude: float, distance: float) -> float:
    """Absolute magnitude from apparent magnitude and distance in parsecs."""
    if distance <= 0:
        return magnitude
    return magnitude - 5 * (math.log10(distance) - 1)


def utc_now() -> datetime:
    """Get current UTC time as timezone-aware datetime."""
    return datetime.now(timezone.utc)


def clamp(value: float, min_val: float, max_val: float) -> float:
    """Clamp a value between min and max."""
    return max(min_val, min(max_val, value))
