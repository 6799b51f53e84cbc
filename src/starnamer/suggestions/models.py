"""Suggestion data models."""

from enum import Enum

from pydantic import BaseModel, Field

from starnamer.astronomy.models import CatalogRecord


class SuggestionSource(str, Enum):
    """Pipeline stage that produced a suggestion."""

    AI = "ai"
    CATALOG = "catalog"
    FALLBACK = "fallback"

    @property
    def confidence(self) -> float:
        """Fixed confidence for suggestions from this stage."""
        return SOURCE_CONFIDENCE[self]


SOURCE_CONFIDENCE = {
    SuggestionSource.AI: 0.9,
    SuggestionSource.CATALOG: 0.8,
    SuggestionSource.FALLBACK: 0.5,
}


class EmotionSuggestion(BaseModel):
    """A ranked star suggestion for an emotion category."""

    id: str = Field(description="Identifier, unique within a batch")
    display_name: str = Field(description="Star name to show")
    description: str = Field(description="Poetic description")
    confidence: float = Field(ge=0, le=1, description="Confidence 0-1")
    source: SuggestionSource = Field(description="Pipeline stage")
    emotion_key: str = Field(description="Emotion category key")
    catalog_ref: CatalogRecord = Field(description="Backing catalog record")

    @classmethod
    def create(
        cls,
        source: SuggestionSource,
        emotion_key: str,
        record: CatalogRecord,
        description: str,
        suffix: str | int | None = None,
    ) -> "EmotionSuggestion":
        """Build a suggestion with the stage's fixed confidence."""
        if suffix is None:
            suffix = record.id
        return cls(
            id=f"{source.value}-{emotion_key}-{suffix}",
            display_name=record.display_name,
            description=description,
            confidence=source.confidence,
            source=source,
            emotion_key=emotion_key,
            catalog_ref=record,
        )

    def to_display_record(self) -> dict:
        """Plain projection for display and storage collaborators."""
        record = self.catalog_ref
        return {
            "id": self.id,
            "scientific_name": self.display_name,
            "poetic_description": self.description,
            "coordinates": record.coordinates,
            "visual_data": record.visual.model_dump(),
            "emotion_id": self.emotion_key,
            "source": self.source.value,
            "confidence": self.confidence,
            "catalog_id": record.id,
        }
