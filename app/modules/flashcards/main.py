"""Flashcards generator service class and simple module entrypoint.

``FlashcardsGenerator`` turns pasted study text into validated candidate
flashcards through OpenRouter's chat-completions API. It can be used in API
handlers, the CLI, or directly:

    generator = FlashcardsGenerator.from_settings()
    cards = await generator.generate_flashcards(text)
"""

from __future__ import annotations

import asyncio
import logging
from typing import Any, Optional

import httpx
from pydantic import ValidationError

from app.core.config import OpenRouterSettings, settings
from app.core.logging import get_logger
from app.modules.flashcards.errors import ErrorKind, OpenRouterError, kind_for_status
from app.modules.flashcards.generator import (
    build_generation_request,
    parse_generation_response,
    validate_candidates,
)
from app.modules.flashcards.models.flashcards import CandidateFlashcard
from app.modules.flashcards.models.openrouter import (
    GenerationRequest,
    GenerationResponse,
)
from app.modules.flashcards.retry import Sleep, retry_with_backoff


class FlashcardsGenerator:
    """Formats, sends (with retries), parses and validates a generation call."""

    def __init__(
        self,
        config: OpenRouterSettings,
        *,
        http_client: Optional[httpx.AsyncClient] = None,
        logger: Optional[logging.Logger] = None,
        sleep: Sleep = asyncio.sleep,
    ) -> None:
        if not config.api_key:
            raise RuntimeError(
                "OpenRouter API key not configured. Set OPENROUTER_API_KEY in your environment."
            )
        self.config = config
        self.http_client = http_client
        self.logger = logger or get_logger(__name__)
        self.sleep = sleep

    @classmethod
    def from_settings(cls, **kwargs: Any) -> "FlashcardsGenerator":
        return cls(settings.openrouter, **kwargs)

    async def generate_flashcards(self, text: str) -> list[CandidateFlashcard]:
        """Generate candidate flashcards for ``text``.

        Raises ``OpenRouterError``; ``kind`` tells the caller which stage failed.
        """
        request = build_generation_request(text, self.config.model)
        try:
            response = await retry_with_backoff(
                lambda: self._send(request),
                max_attempts=self.config.max_retries,
                logger=self.logger,
                sleep=self.sleep,
            )
            cards = parse_generation_response(response)
            return validate_candidates(cards)
        except OpenRouterError as e:
            self.logger.error(
                "OpenRouter generation failed: kind=%s message=%s",
                e.kind.value,
                e.message,
            )
            raise

    def generate_sync(self, text: str) -> list[CandidateFlashcard]:
        """Synchronous wrapper if an event loop is unavailable."""
        return asyncio.run(self.generate_flashcards(text))

    async def _send(self, request: GenerationRequest) -> GenerationResponse:
        """One POST to ``/chat/completions``; no retries at this layer."""
        url = f"{self.config.base_url.rstrip('/')}/chat/completions"
        headers = {
            "Authorization": f"Bearer {self.config.api_key}",
            "Content-Type": "application/json",
        }
        timeout = httpx.Timeout(self.config.timeout_seconds)

        try:
            # httpx limits each phase; the overall deadline covers a slow body too
            async with asyncio.timeout(self.config.timeout_seconds):
                if self.http_client is not None:
                    response = await self.http_client.post(
                        url, json=request.model_dump(), headers=headers, timeout=timeout
                    )
                else:
                    async with httpx.AsyncClient(timeout=timeout) as client:
                        response = await client.post(
                            url, json=request.model_dump(), headers=headers
                        )
        except (TimeoutError, httpx.TimeoutException) as e:
            raise OpenRouterError(
                ErrorKind.TIMEOUT, "Request timed out", original_error=e
            ) from e
        except httpx.HTTPError as e:
            raise OpenRouterError(
                ErrorKind.NETWORK,
                f"Failed to communicate with OpenRouter API: {e}",
                original_error=e,
            ) from e

        if not response.is_success:
            raise OpenRouterError(
                kind_for_status(response.status_code),
                f"API request failed with status {response.status_code}: "
                f"{response.reason_phrase}. Response: {response.text}",
            )

        try:
            body = response.json()
        except ValueError as e:
            raise OpenRouterError(
                ErrorKind.NETWORK,
                f"Failed to decode OpenRouter response body: {response.text[:200]}",
                original_error=e,
            ) from e

        try:
            return GenerationResponse.model_validate(body)
        except ValidationError as e:
            raise OpenRouterError(
                ErrorKind.GENERATION,
                f"Invalid response structure. Response: {str(body)[:500]}",
                original_error=e,
            ) from e
