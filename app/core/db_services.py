"""Database service classes for flashcards and usage statistics."""

from __future__ import annotations

import uuid
from dataclasses import dataclass
from typing import Any, Literal, Optional, Sequence

from sqlalchemy import func, select
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.db.schemas.flashcards import (
    BACK_MAX_LENGTH,
    FRONT_MAX_LENGTH,
    Flashcard,
    FlashcardSource,
)
from app.core.db.schemas.statistics import Statistics
from app.core.logging import get_logger
from app.modules.flashcards.models.flashcards import CandidateFlashcard


logger = get_logger(__name__)

SortOrder = Literal["created_at_desc", "created_at_asc"]


class FlashcardNotFoundError(Exception):
    """Raised when a flashcard does not exist or belongs to another user."""

    def __init__(self, flashcard_id: uuid.UUID) -> None:
        super().__init__("Flashcard not found")
        self.flashcard_id = flashcard_id


class NoStorableFlashcardsError(Exception):
    """Raised when every generated candidate exceeds the column limits."""


@dataclass(frozen=True)
class StatisticsDelta:
    generated: int = 0
    accepted_edited: int = 0
    accepted_unedited: int = 0


@dataclass(frozen=True)
class FlashcardChanges:
    values: dict[str, Any]
    delta: StatisticsDelta


def resolve_update(flashcard: Flashcard, changes: dict[str, Any]) -> FlashcardChanges:
    """Apply the edit rules to a requested update.

    Editing a candidate accepts it, and editing an AI card marks it
    ``AI_EDITED``. An edited AI candidate counts as accepted-edited.
    """
    values = {k: v for k, v in changes.items() if k in ("front", "back", "candidate")}
    if flashcard.candidate:
        values["candidate"] = False
    elif "candidate" not in values:
        values["candidate"] = flashcard.candidate

    delta = StatisticsDelta()
    if flashcard.source is FlashcardSource.AI:
        values["source"] = FlashcardSource.AI_EDITED
        if flashcard.candidate:
            delta = StatisticsDelta(accepted_edited=1)
    else:
        values["source"] = flashcard.source
    return FlashcardChanges(values=values, delta=delta)


def storable_candidates(
    candidates: Sequence[CandidateFlashcard],
) -> list[CandidateFlashcard]:
    """Candidates that fit the `front`/`back` column lengths."""
    return [
        c
        for c in candidates
        if len(c.front) <= FRONT_MAX_LENGTH and len(c.back) <= BACK_MAX_LENGTH
    ]


def acceptance_delta(flashcard: Flashcard) -> StatisticsDelta:
    if flashcard.source is FlashcardSource.AI:
        return StatisticsDelta(accepted_unedited=1)
    return StatisticsDelta()


class StatisticsService:
    """Per-user generation and acceptance counters."""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def get_statistics(self, user_id: int) -> Optional[Statistics]:
        result = await self.session.execute(
            select(Statistics).where(Statistics.user_id == user_id)
        )
        return result.scalar_one_or_none()

    async def track(self, user_id: int, delta: StatisticsDelta) -> None:
        """Add ``delta`` to the user's counters, creating the row on first use."""
        if delta == StatisticsDelta():
            return

        stats = await self.get_statistics(user_id)
        if stats is None:
            stats = Statistics(
                user_id=user_id,
                generated_count=0,
                accepted_edited_count=0,
                accepted_unedited_count=0,
            )
            self.session.add(stats)

        stats.generated_count += delta.generated
        stats.accepted_edited_count += delta.accepted_edited
        stats.accepted_unedited_count += delta.accepted_unedited
        await self.session.flush()
        logger.info(
            "Statistics updated",
            extra={"user_id": user_id},
        )


class FlashcardService:
    """Service for storing, querying and reviewing a user's flashcards."""

    def __init__(self, session: AsyncSession):
        self.session = session
        self.statistics = StatisticsService(session)

    async def save_generated_flashcards(
        self,
        user_id: int,
        candidates: Sequence[CandidateFlashcard],
    ) -> list[Flashcard]:
        """Store validated AI candidates and count them as generated.

        Candidates longer than the columns allow are dropped; if none fit,
        ``NoStorableFlashcardsError`` is raised and nothing is stored.
        """
        fitting = storable_candidates(candidates)
        if len(fitting) < len(candidates):
            logger.warning(
                f"Dropped {len(candidates) - len(fitting)} over-length generated flashcards",
                extra={"user_id": user_id},
            )
        if not fitting:
            raise NoStorableFlashcardsError("All generated flashcards exceed length limits")

        rows = [
            Flashcard(
                user_id=user_id,
                front=c.front,
                back=c.back,
                source=FlashcardSource.AI,
                candidate=True,
            )
            for c in fitting
        ]
        self.session.add_all(rows)
        await self.session.flush()
        await self.statistics.track(user_id, StatisticsDelta(generated=len(rows)))
        await self.session.commit()

        for row in rows:
            await self.session.refresh(row)
        logger.info(
            f"Stored {len(rows)} generated flashcards", extra={"user_id": user_id}
        )
        return rows

    async def create_manual_flashcard(
        self, user_id: int, *, front: str, back: str
    ) -> Flashcard:
        flashcard = Flashcard(
            user_id=user_id,
            front=front,
            back=back,
            source=FlashcardSource.MANUAL,
            candidate=False,
        )
        self.session.add(flashcard)
        await self.session.commit()
        await self.session.refresh(flashcard)
        logger.info(
            f"Created manual flashcard {flashcard.id}", extra={"user_id": user_id}
        )
        return flashcard

    async def get_flashcard(
        self,
        user_id: int,
        flashcard_id: uuid.UUID,
        *,
        candidate: Optional[bool] = None,
    ) -> Flashcard:
        query = select(Flashcard).where(
            Flashcard.id == flashcard_id, Flashcard.user_id == user_id
        )
        if candidate is not None:
            query = query.where(Flashcard.candidate == candidate)
        result = await self.session.execute(query)
        flashcard = result.scalar_one_or_none()
        if flashcard is None:
            raise FlashcardNotFoundError(flashcard_id)
        return flashcard

    async def list_flashcards(
        self,
        user_id: int,
        *,
        candidate: bool,
        page: int = 1,
        limit: int = 20,
        sort: Optional[SortOrder] = None,
    ) -> tuple[list[Flashcard], int]:
        """One page of accepted or candidate flashcards plus the total count."""
        where = (Flashcard.user_id == user_id, Flashcard.candidate == candidate)

        total = (
            await self.session.execute(select(func.count(Flashcard.id)).where(*where))
        ).scalar() or 0

        if sort == "created_at_asc":
            order = Flashcard.created_at.asc()
        elif sort == "created_at_desc":
            order = Flashcard.created_at.desc()
        else:
            order = Flashcard.updated_at.desc()

        rows = await self.session.execute(
            select(Flashcard)
            .where(*where)
            .order_by(order)
            .offset((page - 1) * limit)
            .limit(limit)
        )
        return list(rows.scalars().all()), total

    async def list_all_accepted(self, user_id: int) -> list[Flashcard]:
        rows = await self.session.execute(
            select(Flashcard)
            .where(Flashcard.user_id == user_id, Flashcard.candidate.is_(False))
            .order_by(Flashcard.created_at.asc())
        )
        return list(rows.scalars().all())

    async def update_flashcard(
        self,
        user_id: int,
        flashcard_id: uuid.UUID,
        changes: dict[str, Any],
    ) -> Flashcard:
        flashcard = await self.get_flashcard(user_id, flashcard_id)
        resolved = resolve_update(flashcard, changes)
        for field, value in resolved.values.items():
            setattr(flashcard, field, value)
        await self.statistics.track(user_id, resolved.delta)
        await self.session.commit()
        await self.session.refresh(flashcard)
        logger.info(f"Updated flashcard {flashcard_id}", extra={"user_id": user_id})
        return flashcard

    async def accept_flashcard(
        self, user_id: int, flashcard_id: uuid.UUID
    ) -> Flashcard:
        flashcard = await self.get_flashcard(user_id, flashcard_id, candidate=True)
        delta = acceptance_delta(flashcard)
        flashcard.candidate = False
        await self.statistics.track(user_id, delta)
        await self.session.commit()
        await self.session.refresh(flashcard)
        logger.info(f"Accepted flashcard {flashcard_id}", extra={"user_id": user_id})
        return flashcard

    async def delete_flashcard(self, user_id: int, flashcard_id: uuid.UUID) -> None:
        flashcard = await self.get_flashcard(user_id, flashcard_id)
        await self.session.delete(flashcard)
        await self.session.commit()
        logger.info(f"Deleted flashcard {flashcard_id}", extra={"user_id": user_id})
