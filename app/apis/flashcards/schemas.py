from __future__ import annotations

import uuid
from datetime import datetime
from typing import Literal, Optional

from pydantic import BaseModel, Field, field_validator, model_validator

from app.core.db.schemas.flashcards import BACK_MAX_LENGTH, FRONT_MAX_LENGTH

GENERATION_TEXT_MIN_LENGTH = 1000
GENERATION_TEXT_MAX_LENGTH = 10000


class GenerateFlashcardsRequest(BaseModel):
    text: str = Field(
        ...,
        min_length=GENERATION_TEXT_MIN_LENGTH,
        max_length=GENERATION_TEXT_MAX_LENGTH,
        description="Study text to turn into flashcards",
    )


class ManualFlashcardCreate(BaseModel):
    front: str = Field(..., min_length=1, max_length=FRONT_MAX_LENGTH)
    back: str = Field(..., min_length=1, max_length=BACK_MAX_LENGTH)
    source: Literal["MANUAL"] = "MANUAL"
    candidate: Literal[False] = False


class FlashcardUpdate(BaseModel):
    front: Optional[str] = Field(None, min_length=1, max_length=FRONT_MAX_LENGTH)
    back: Optional[str] = Field(None, min_length=1, max_length=BACK_MAX_LENGTH)
    candidate: Optional[bool] = Field(
        None, description="If true, marks the flashcard as a candidate for review"
    )

    @field_validator("front", "back", mode="before")
    @classmethod
    def _strip(cls, value):
        if isinstance(value, str):
            return value.strip()
        return value

    @model_validator(mode="after")
    def _at_least_one_field(self) -> "FlashcardUpdate":
        if not self.model_fields_set:
            raise ValueError("At least one field must be provided for update")
        for field in ("front", "back", "candidate"):
            if field in self.model_fields_set and getattr(self, field) is None:
                raise ValueError(f"{field} cannot be null")
        return self


class FlashcardRead(BaseModel):
    id: uuid.UUID
    front: str
    back: str
    source: str
    candidate: bool
    created_at: datetime
    updated_at: datetime

    @classmethod
    def from_row(cls, row) -> "FlashcardRead":
        return cls(
            id=row.id,
            front=row.front,
            back=row.back,
            source=getattr(row.source, "value", row.source),
            candidate=row.candidate,
            created_at=row.created_at,
            updated_at=row.updated_at,
        )


class Pagination(BaseModel):
    page: int
    limit: int
    total: int


class FlashcardsListResponse(BaseModel):
    data: list[FlashcardRead] = Field(default_factory=list)
    pagination: Pagination


class LearningSessionRead(BaseModel):
    position: int
    current: Optional[FlashcardRead] = None
    total_cards: int
    completed_cards: int
    remaining_cards: int
    progress: int
    can_go_previous: bool
    can_go_next: bool
    is_complete: bool


class StatisticsRead(BaseModel):
    generated_count: int = 0
    accepted_edited_count: int = 0
    accepted_unedited_count: int = 0
