"""Prompt construction and response handling for AI flashcard generation.

Everything here is pure: the HTTP side lives in ``main.FlashcardsGenerator``.
The request asks OpenRouter for a strict JSON array of ``{front, back}``
objects; the response is parsed into raw card dicts and then filtered down to
``CandidateFlashcard`` models.
"""

from __future__ import annotations

import json
from typing import Any

from app.modules.flashcards.errors import ErrorKind, OpenRouterError
from app.modules.flashcards.models.flashcards import CandidateFlashcard
from app.modules.flashcards.models.openrouter import (
    ChatMessage,
    GenerationRequest,
    GenerationResponse,
)

SNIPPET_LENGTH = 500

SYSTEM_PROMPT = (
    "You are a helpful AI that creates high-quality educational flashcards. "
    "Generate concise, clear, and accurate flashcards from the provided text. "
    "Each flashcard should have a clear question on the front and a "
    "comprehensive answer on the back. "
    "Return the flashcards only in requested JSON response format without any "
    "other text or thinking section."
)

FLASHCARDS_SCHEMA: dict[str, Any] = {
    "type": "array",
    "items": {
        "type": "object",
        "properties": {
            "front": {"type": "string"},
            "back": {"type": "string"},
        },
        "required": ["front", "back"],
    },
}


def _snippet(value: Any) -> str:
    text = value if isinstance(value, str) else repr(value)
    if len(text) > SNIPPET_LENGTH:
        return text[:SNIPPET_LENGTH] + "..."
    return text


def build_generation_request(text: str, model: str) -> GenerationRequest:
    """Two-message chat request constrained to the flashcards JSON schema."""
    return GenerationRequest(
        model=model,
        messages=(
            ChatMessage(role="system", content=SYSTEM_PROMPT),
            ChatMessage(role="user", content=text),
        ),
        response_format={
            "type": "json_schema",
            "json_schema": {
                "name": "flashcards",
                "strict": True,
                "schema": FLASHCARDS_SCHEMA,
            },
        },
    )


def parse_generation_response(response: GenerationResponse) -> list[dict[str, Any]]:
    """Decode the first choice's content into raw ``{front, back}`` records.

    Raises ``OpenRouterError`` with ``ErrorKind.GENERATION`` when the response
    does not carry a JSON array in ``choices[0].message.content``. Fields other
    than ``front`` and ``back`` are dropped.
    """
    if not response.choices:
        raise OpenRouterError(
            ErrorKind.GENERATION,
            "Invalid response structure: missing or empty choices array. "
            f"Response: {_snippet(response.model_dump_json())}",
        )

    first = response.choices[0]
    if first.message is None or not isinstance(first.message.content, str):
        raise OpenRouterError(
            ErrorKind.GENERATION,
            f"Invalid message structure in first choice. Choice: {_snippet(first.model_dump_json())}",
        )

    content = first.message.content
    if not content:
        raise OpenRouterError(ErrorKind.GENERATION, "Empty content in AI response")

    try:
        parsed = json.loads(content)
    except json.JSONDecodeError as e:
        raise OpenRouterError(
            ErrorKind.GENERATION,
            f"Failed to parse content as JSON: {_snippet(content)}",
            original_error=e,
        ) from e

    if not isinstance(parsed, list):
        raise OpenRouterError(
            ErrorKind.GENERATION,
            f"Expected array of flashcards, got: {type(parsed).__name__}",
        )

    cards: list[dict[str, Any]] = []
    for item in parsed:
        item = item if isinstance(item, dict) else {}
        cards.append(
            {
                "front": item.get("front"),
                "back": item.get("back"),
                "source": "AI",
                "candidate": True,
            }
        )
    return cards


def validate_candidates(cards: list[dict[str, Any]]) -> list[CandidateFlashcard]:
    """Keep cards whose front and back are non-empty strings after trimming."""
    if not cards:
        raise OpenRouterError(ErrorKind.VALIDATION, "No valid flashcards generated")

    valid: list[CandidateFlashcard] = []
    for card in cards:
        front = card.get("front")
        back = card.get("back")
        if not isinstance(front, str) or not isinstance(back, str):
            continue
        front, back = front.strip(), back.strip()
        if front and back:
            valid.append(CandidateFlashcard(front=front, back=back))

    if not valid:
        raise OpenRouterError(
            ErrorKind.VALIDATION, "All generated flashcards were invalid"
        )
    return valid
