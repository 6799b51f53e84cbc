"""Emotion categories offered by the storefront."""

from pydantic import BaseModel, Field


class Emotion(BaseModel):
    """A suggestion theme."""

    key: str = Field(description="Stable category key")
    name: str = Field(description="Display name")
    color: str = Field(description="Theme color")
    description: str = Field(description="Short pitch for the category")


# Order matters: catalog partitioning assigns named stars round-robin over it
EMOTIONS: tuple[Emotion, ...] = (
    Emotion(
        key="love",
        name="Love",
        color="#FF6B9D",
        description="Dedicate a star to express deep romantic love and eternal commitment",
    ),
    Emotion(
        key="friendship",
        name="Friendship",
        color="#4ECDC4",
        description="Celebrate the bonds of friendship that illuminate your life",
    ),
    Emotion(
        key="family",
        name="Family",
        color="#45B7D1",
        description="Honor family connections that provide strength and guidance",
    ),
    Emotion(
        key="milestones",
        name="Milestones",
        color="#96CEB4",
        description="Mark significant achievements and life-changing moments",
    ),
    Emotion(
        key="memorial",
        name="Memorial",
        color="#FECA57",
        description="Create lasting tributes to cherished memories and loved ones",
    ),
    Emotion(
        key="healing",
        name="Healing",
        color="#A8E6CF",
        description="Find peace and renewal through celestial connection",
    ),
    Emotion(
        key="adventure",
        name="Adventure",
        color="#FF8B94",
        description="Commemorate journeys and the spirit of exploration",
    ),
    Emotion(
        key="creativity",
        name="Creativity",
        color="#B4A7D6",
        description="Inspire artistic expression and innovative thinking",
    ),
)

_BY_KEY = {emotion.key: emotion for emotion in EMOTIONS}


def normalize_key(emotion_key: str) -> str:
    """Normalize a caller-supplied emotion key."""
    return emotion_key.strip().lower()


def get_emotion(emotion_key: str) -> Emotion | None:
    """Look up a known emotion category."""
    return _BY_KEY.get(normalize_key(emotion_key))


def category_position(emotion_key: str) -> int | None:
    """Position of a category in the partition order, None if unknown."""
    emotion = get_emotion(emotion_key)
    if emotion is None:
        return None
    return EMOTIONS.index(emotion)


def display_name(emotion_key: str) -> str:
    """Display name for any key, known or not."""
    emotion = get_emotion(emotion_key)
    if emotion is not None:
        return emotion.name
    key = normalize_key(emotion_key)
    return key.title() if key else "Unnamed"
