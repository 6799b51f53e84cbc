"""Sexagesimal formatting of equatorial coordinates.

The output of :func:`format_coordinates` is stored and displayed verbatim,
so its shape is a compatibility contract::

    18h 36m 56.2s +38° 47′ 01″

Declination uses U+2212 MINUS SIGN for southern values, never a hyphen.
"""

import math

MINUS_SIGN = "−"


def split_right_ascension(ra: float) -> tuple[int, int, float]:
    """Split right ascension into hours, minutes and seconds.

    Seconds are rounded to one decimal place; a value that rounds up to
    60.0 carries into the minutes (and hours, wrapping at 24).

    Args:
        ra: Right ascension in hours, [0, 24)

    Returns:
        Tuple of (hours, minutes, seconds)
    """
    hours = math.floor(ra)
    remainder = (ra - hours) * 60
    minutes = math.floor(remainder)
    seconds = round((remainder - minutes) * 60, 1)

    if seconds >= 60.0:
        seconds = 0.0
        minutes += 1
    if minutes >= 60:
        minutes = 0
        hours += 1
    return (hours % 24, minutes, seconds)


def split_declination(dec: float) -> tuple[str, int, int, int]:
    """Split declination into sign, degrees, arcminutes and arcseconds.

    Args:
        dec: Declination in degrees, [-90, 90]

    Returns:
        Tuple of (sign, degrees, arcminutes, arcseconds)
    """
    sign = "+" if dec >= 0 else MINUS_SIGN
    value = abs(dec)
    degrees = math.floor(value)
    remainder = (value - degrees) * 60
    minutes = math.floor(remainder)
    seconds = round((remainder - minutes) * 60)

    if seconds >= 60:
        seconds = 0
        minutes += 1
    if minutes >= 60:
        minutes = 0
        degrees += 1
    return (sign, degrees, minutes, seconds)


def format_right_ascension(ra: float) -> str:
    """Format right ascension as ``HHh MMm SS.Ss``."""
    hours, minutes, seconds = split_right_ascension(ra)
    return f"{hours:02d}h {minutes:02d}m {seconds:04.1f}s"


def format_declination(dec: float) -> str:
    """Format declination as ``±DD° MM′ SS″``."""
    sign, degrees, minutes, seconds = split_declination(dec)
    return f"{sign}{degrees:02d}° {minutes:02d}′ {seconds:02d}″"


def format_coordinates(ra: float, dec: float) -> str:
    """Format a right ascension/declination pair.

    Out-of-range input is not validated here; callers own that contract.

    Args:
        ra: Right ascension in hours, [0, 24)
        dec: Declination in degrees, [-90, 90]

    Returns:
        Formatted string like ``18h 36m 56.2s +38° 47′ 01″``
    """
    return f"{format_right_ascension(ra)} {format_declination(dec)}"
