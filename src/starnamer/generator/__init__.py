"""External star generator collaborator."""

from starnamer.generator.models import (
    GenerationRequest,
    GenerationResponse,
    StarProposal,
)
from starnamer.generator.protocols import StarGenerator

__all__ = [
    "GenerationRequest",
    "GenerationResponse",
    "StarGenerator",
    "StarProposal",
]
