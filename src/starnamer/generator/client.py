"""HTTP client for the AI star generator endpoint."""

import logging

import httpx
from pydantic import ValidationError

from starnamer.core.exceptions import (
    GeneratorTimeoutError,
    GeneratorUnavailableError,
)
from starnamer.generator.models import (
    GenerationRequest,
    GenerationResponse,
    StarProposal,
)

logger = logging.getLogger(__name__)


class HttpStarGenerator:
    """Client for a generator function that answers ``{success, stars}``."""

    TIMEOUT = 30.0

    def __init__(
        self,
        url: str,
        api_key: str | None = None,
        client: httpx.AsyncClient | None = None,
        timeout: float = TIMEOUT,
    ):
        """Initialize the client.

        Args:
            url: Generator endpoint URL
            api_key: Optional bearer token
            client: Optional httpx client (for testing/reuse)
            timeout: Request timeout in seconds
        """
        self.url = url
        self.api_key = api_key
        self.timeout = timeout
        self._client = client
        self._owns_client = client is None

    async def _get_client(self) -> httpx.AsyncClient:
        """Get or create the HTTP client."""
        if self._client is None:
            self._client = httpx.AsyncClient(timeout=self.timeout)
        return self._client

    async def close(self) -> None:
        """Close the HTTP client if we own it."""
        if self._owns_client and self._client is not None:
            await self._client.aclose()
            self._client = None

    async def generate(self, request: GenerationRequest) -> GenerationResponse:
        """Ask the generator for star proposals.

        Args:
            request: Generation request

        Returns:
            Parsed generator response
        """
        client = await self._get_client()

        headers = {"Content-Type": "application/json"}
        if self.api_key:
            headers["Authorization"] = f"Bearer {self.api_key}"

        try:
            response = await client.post(
                self.url,
                json=request.model_dump(by_alias=True),
                headers=headers,
            )
            response.raise_for_status()
            data = response.json()
        except httpx.TimeoutException as e:
            raise GeneratorTimeoutError(
                f"Generator timed out: {e}", source=self.url
            ) from e
        except httpx.HTTPStatusError as e:
            raise GeneratorUnavailableError(
                f"HTTP {e.response.status_code}: {e.response.text}",
                source=self.url,
            ) from e
        except httpx.RequestError as e:
            raise GeneratorUnavailableError(
                f"Request failed: {e}", source=self.url
            ) from e
        except ValueError as e:
            raise GeneratorUnavailableError(
                f"Invalid JSON from generator: {e}", source=self.url
            ) from e

        return self._parse_response(data)

    def _parse_response(self, data: dict) -> GenerationResponse:
        """Parse the generator payload, keeping proposals that validate."""
        if not isinstance(data, dict):
            raise GeneratorUnavailableError(
                "Generator returned a non-object payload", source=self.url
            )

        proposals = []
        for i, item in enumerate(data.get("stars") or []):
            try:
                proposals.append(StarProposal.model_validate(item))
            except ValidationError as e:
                logger.warning(f"Ignoring malformed generator proposal {i}: {e}")

        return GenerationResponse(
            success=bool(data.get("success")),
            stars=proposals,
            source=data.get("source"),
        )
