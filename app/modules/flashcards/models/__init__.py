from .flashcards import CandidateFlashcard
from .openrouter import (
    ChatMessage,
    Choice,
    GenerationRequest,
    GenerationResponse,
    ResponseMessage,
    Usage,
)

__all__ = [
    "CandidateFlashcard",
    "ChatMessage",
    "Choice",
    "GenerationRequest",
    "GenerationResponse",
    "ResponseMessage",
    "Usage",
]
