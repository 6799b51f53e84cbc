"""Star generator protocol (interface)."""

from typing import Protocol

from starnamer.generator.models import GenerationRequest, GenerationResponse


class StarGenerator(Protocol):
    """Protocol for external star-name generators."""

    async def generate(self, request: GenerationRequest) -> GenerationResponse:
        """Propose stars for an emotion.

        Args:
            request: Generation request

        Returns:
            Generator response (may be unsuccessful or empty)

        Raises:
            GeneratorUnavailableError: Generator failed or is unreachable
            GeneratorTimeoutError: Generator did not answer in time
        """
        ...

    async def close(self) -> None:
        """Release resources."""
        ...
