"""Pydantic models for generated flashcards.

Candidates carry no identity; the database assigns one when they are stored.
"""

from typing import Literal

from pydantic import BaseModel


class CandidateFlashcard(BaseModel):
    """Validated AI suggestion awaiting review."""

    front: str
    back: str
    source: Literal["AI"] = "AI"
    candidate: Literal[True] = True
