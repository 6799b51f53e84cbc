"""Templated descriptions for catalog and fallback suggestions."""

import random

from starnamer.astronomy.models import CatalogRecord
from starnamer.suggestions.emotions import normalize_key

DEFAULT_POOL = "default"

TEMPLATE_POOLS: dict[str, tuple[str, ...]] = {
    "love": (
        "{name} burns with the steady warmth of a love that never dims",
        "{name} keeps watch over two hearts that found each other",
        "Every night {name} repeats the promise you made",
        "{name} glows like a secret shared between sweethearts",
    ),
    "friendship": (
        "{name} shines like the friend who always shows up",
        "{name} is a loyal light across every season",
        "Laughter and late talks live on in {name}",
        "{name} marks the place where kindred spirits meet",
    ),
    "family": (
        "{name} holds the quiet strength of a family together",
        "Generations can find their way home by {name}",
        "{name} is a hearth fire set among the stars",
        "{name} carries the roots and branches of your family",
    ),
    "milestones": (
        "{name} marks the moment everything changed",
        "{name} crowns an achievement worth remembering",
        "A new chapter begins beneath {name}",
        "{name} stands proud for every step that led here",
    ),
    "memorial": (
        "{name} keeps a gentle vigil for someone dearly missed",
        "Love outlasts time in the light of {name}",
        "{name} holds memories that will never fade",
        "Whenever you look up, {name} is still there",
    ),
    "healing": (
        "{name} offers a calm light for mending hearts",
        "Breathe slowly and let {name} carry the weight",
        "{name} shines softly on the road to renewal",
        "{name} is a reminder that dawn always returns",
    ),
    "adventure": (
        "{name} has guided travellers to the edge of every map",
        "Set your compass by {name} and keep going",
        "{name} calls out to the restless and the brave",
        "New horizons open wherever {name} is rising",
    ),
    "creativity": (
        "{name} sparks ideas that no one has imagined yet",
        "{name} paints the dark with a brush of pure light",
        "Every masterpiece begins with a star like {name}",
        "{name} hums with the restless energy of creation",
    ),
    DEFAULT_POOL: (
        "{name} is a beautiful celestial beacon chosen just for you",
        "{name} shines with a light all its own",
        "{name} carries your words across the night sky",
    ),
}

PULSING_CLAUSE = "its pulsing light beats like a living heart"
BLAZING_CLAUSE = "it blazes among the brightest lights of the night"
DISTANT_CLAUSE = "its distant glow has crossed centuries to reach you"

BLAZING_MAGNITUDE = 2.0
DISTANT_PARSECS = 100.0


def template_pool(emotion_key: str) -> tuple[str, ...]:
    """Template pool for an emotion, the default pool for unknown keys."""
    return TEMPLATE_POOLS.get(
        normalize_key(emotion_key), TEMPLATE_POOLS[DEFAULT_POOL]
    )


def property_clause(record: CatalogRecord) -> str | None:
    """At most one clause describing the record, by priority.

    Variable stars pulse, then bright stars blaze, then far stars are distant.
    """
    if record.is_variable:
        return PULSING_CLAUSE
    if record.magnitude < BLAZING_MAGNITUDE:
        return BLAZING_CLAUSE
    if record.distance > DISTANT_PARSECS:
        return DISTANT_CLAUSE
    return None


def describe(record: CatalogRecord, emotion_key: str, rng: random.Random) -> str:
    """Build a templated description for a record.

    Args:
        record: Star to describe
        emotion_key: Emotion category key
        rng: Random source used to pick the template

    Returns:
        Description text
    """
    text = rng.choice(template_pool(emotion_key)).format(name=record.display_name)
    clause = property_clause(record)
    if clause:
        text = f"{text}; {clause}"
    return f"{text}."
