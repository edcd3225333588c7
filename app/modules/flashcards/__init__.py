"""Flashcards module exports."""

from .errors import ErrorKind, OpenRouterError, RETRYABLE_KINDS
from .models.flashcards import CandidateFlashcard
from .generator import (
    build_generation_request,
    parse_generation_response,
    validate_candidates,
)
from .main import FlashcardsGenerator

__all__ = [
    "ErrorKind",
    "OpenRouterError",
    "RETRYABLE_KINDS",
    "CandidateFlashcard",
    "build_generation_request",
    "parse_generation_response",
    "validate_candidates",
    "FlashcardsGenerator",
]
