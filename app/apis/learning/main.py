from __future__ import annotations

from typing import Literal, Optional

from fastapi import APIRouter, Query

from app.apis.deps import CurrentUser, FlashcardServiceDep
from app.apis.flashcards.schemas import FlashcardRead, LearningSessionRead
from app.core.config import settings
from app.modules.flashcards.learning import LearningSession


router = APIRouter()


@router.get(
    f"/{settings.app.version}/learning/session",
    response_model=LearningSessionRead,
    tags=["learning"],
)
async def get_learning_session(
    user: CurrentUser,
    service: FlashcardServiceDep,
    position: int = Query(0, ge=0),
    action: Optional[Literal["next", "previous", "reset"]] = None,
) -> LearningSessionRead:
    """Linear walk over accepted flashcards; the client keeps the position."""
    cards = await service.list_all_accepted(user.id)
    session = LearningSession(cards, position=position)

    if action == "next":
        session.next()
    elif action == "previous":
        session.previous()
    elif action == "reset":
        session.reset()

    stats = session.stats
    current = session.current
    return LearningSessionRead(
        position=session.index,
        current=FlashcardRead.from_row(current) if current is not None else None,
        total_cards=stats.total_cards,
        completed_cards=stats.completed_cards,
        remaining_cards=stats.remaining_cards,
        progress=stats.progress,
        can_go_previous=session.can_go_previous,
        can_go_next=session.can_go_next,
        is_complete=session.is_complete,
    )
