from __future__ import annotations

import enum
import uuid
from datetime import datetime
from typing import TYPE_CHECKING
from sqlalchemy import (
    Boolean,
    DateTime,
    Enum,
    ForeignKey,
    String,
    Uuid,
    func,
)
from sqlalchemy.orm import Mapped, mapped_column, relationship

from app.core.db.base import Base

if TYPE_CHECKING:
    from .auth import User


FRONT_MAX_LENGTH = 200
BACK_MAX_LENGTH = 500


class FlashcardSource(enum.Enum):
    AI = "AI"
    AI_EDITED = "AI_EDITED"
    MANUAL = "MANUAL"


class Flashcard(Base):
    __tablename__ = "flashcards"

    id: Mapped[uuid.UUID] = mapped_column(
        Uuid, primary_key=True, default=uuid.uuid4, index=True
    )
    user_id: Mapped[int] = mapped_column(
        ForeignKey("users.id"), nullable=False, index=True
    )
    front: Mapped[str] = mapped_column(String(FRONT_MAX_LENGTH), nullable=False)
    back: Mapped[str] = mapped_column(String(BACK_MAX_LENGTH), nullable=False)
    source: Mapped[FlashcardSource] = mapped_column(
        Enum(FlashcardSource, name="flashcard_source"),
        nullable=False,
        default=FlashcardSource.MANUAL,
    )
    # Candidates are AI suggestions awaiting review
    candidate: Mapped[bool] = mapped_column(
        Boolean, nullable=False, default=False, index=True
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime,
        nullable=False,
        server_default=func.now(),
        index=True,
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime,
        nullable=False,
        server_default=func.now(),
        onupdate=func.now(),
        index=True,
    )

    user: Mapped["User"] = relationship("User", back_populates="flashcards")


__all__ = [
    "FRONT_MAX_LENGTH",
    "BACK_MAX_LENGTH",
    "FlashcardSource",
    "Flashcard",
]
