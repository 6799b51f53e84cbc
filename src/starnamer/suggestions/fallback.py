"""Synthetic stars for when neither the generator nor the catalog can help."""

import random

from starnamer.astronomy.models import CatalogRecord
from starnamer.core.utils import absolute_magnitude, spherical_to_cartesian
from starnamer.suggestions.emotions import display_name

SPECTRAL_LETTERS = "OBAFGKM"


def synthesize_record(
    emotion_key: str, number: int, rng: random.Random
) -> CatalogRecord:
    """Create a plausible but fictional star.

    Args:
        emotion_key: Emotion category key (used in the name)
        number: 1-based position in the batch; the record id is ``-number``
        rng: Random source

    Returns:
        Synthetic catalog record
    """
    # Drawn in degrees and scaled to hours so RA stays in [0, 24)
    ra = rng.random() * 360 / 15
    dec = rng.uniform(-90, 90)
    distance = 10 + rng.random() * 100
    magnitude = rng.random() * 6

    return CatalogRecord(
        id=-number,
        proper_name=f"{display_name(emotion_key)} Star {number}",
        ra=ra,
        dec=dec,
        distance=distance,
        magnitude=magnitude,
        absolute_magnitude=absolute_magnitude(magnitude, distance),
        spectral_class=rng.choice(SPECTRAL_LETTERS),
        is_variable=False,
        cartesian=spherical_to_cartesian(ra, dec, distance),
    )


def synthesize_records(
    emotion_key: str, count: int, rng: random.Random
) -> list[CatalogRecord]:
    """Create ``count`` synthetic stars numbered 1..count."""
    return [synthesize_record(emotion_key, n, rng) for n in range(1, count + 1)]
