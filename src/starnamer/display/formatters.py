"""Formatting utilities for display."""

from starnamer.astronomy.loader import LoadState
from starnamer.suggestions.models import SuggestionSource


def format_magnitude(magnitude: float) -> str:
    """Format apparent magnitude with an explicit sign.

    Args:
        magnitude: Apparent magnitude

    Returns:
        String like "+0.03" or "-1.46"
    """
    return f"{magnitude:+.2f}"


def format_distance(parsecs: float) -> str:
    """Format a distance in parsecs and light years.

    Args:
        parsecs: Distance in parsecs

    Returns:
        String like "7.7 pc (25.0 ly)"
    """
    if parsecs <= 0:
        return "unknown"
    light_years = parsecs * 3.26156
    return f"{parsecs:.1f} pc ({light_years:.1f} ly)"


def format_confidence(confidence: float) -> str:
    """Format confidence as a percentage."""
    return f"{confidence * 100:.0f}%"


def get_source_color(source: SuggestionSource) -> str:
    """Get Rich color for a suggestion source."""
    if source is SuggestionSource.AI:
        return "bright_green"
    elif source is SuggestionSource.CATALOG:
        return "cyan"
    else:
        return "yellow"


def format_source(source: SuggestionSource) -> str:
    """Format a suggestion source with color markup for Rich."""
    color = get_source_color(source)
    return f"[{color}]{source.value}[/{color}]"


def format_load_state(state: LoadState) -> str:
    """Format catalog load state with color markup for Rich."""
    colors = {
        LoadState.UNLOADED: "dim",
        LoadState.LOADING: "yellow",
        LoadState.LOADED: "green",
        LoadState.FAILED: "red",
    }
    color = colors[state]
    return f"[{color}]{state.value}[/{color}]"


def format_swatch(color: str) -> str:
    """Colored block for a hex color."""
    return f"[{color}]●[/{color}]"
