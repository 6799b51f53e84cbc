"""Generator request/response models."""

from datetime import datetime

from pydantic import AliasChoices, BaseModel, Field


class GenerationRequest(BaseModel):
    """Request sent to the star generator."""

    emotion_key: str = Field(
        serialization_alias="emotionId", description="Emotion category key"
    )


class StarProposal(BaseModel):
    """A star name proposed by the generator, not yet confirmed by the catalog."""

    name: str = Field(
        validation_alias=AliasChoices("name", "scientific_name"),
        description="Proposed star name",
    )
    description: str = Field(
        default="",
        validation_alias=AliasChoices("description", "poetic_description"),
        description="Poetic description",
    )
    generated_at: datetime | None = Field(
        default=None,
        validation_alias=AliasChoices("generatedAt", "generated_at"),
        description="When the generator produced this proposal",
    )


class GenerationResponse(BaseModel):
    """Generator response."""

    success: bool = Field(default=False, description="Generator success flag")
    stars: list[StarProposal] = Field(
        default_factory=list, description="Proposed stars in rank order"
    )
    source: str | None = Field(
        default=None, description="Generator-reported origin (e.g., ai, fallback)"
    )

    @property
    def is_usable(self) -> bool:
        """Check if the response can feed the suggestion pipeline."""
        return self.success and bool(self.stars)
