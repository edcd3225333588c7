from __future__ import annotations

from typing import Annotated, AsyncIterator

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from app.core.db.base import get_session
from app.core.db.schemas.auth import User
from app.core.db_services import FlashcardService, StatisticsService
from app.modules.auth import current_active_user
from app.modules.flashcards.main import FlashcardsGenerator


async def get_flashcard_service(
    session: AsyncSession = Depends(get_session),
) -> AsyncIterator[FlashcardService]:
    yield FlashcardService(session)


async def get_statistics_service(
    session: AsyncSession = Depends(get_session),
) -> AsyncIterator[StatisticsService]:
    yield StatisticsService(session)


def get_flashcards_generator() -> FlashcardsGenerator:
    """Fresh generator per request; calls share no mutable state."""
    return FlashcardsGenerator.from_settings()


CurrentUser = Annotated[User, Depends(current_active_user)]
FlashcardServiceDep = Annotated[FlashcardService, Depends(get_flashcard_service)]
StatisticsServiceDep = Annotated[StatisticsService, Depends(get_statistics_service)]
GeneratorDep = Annotated[FlashcardsGenerator, Depends(get_flashcards_generator)]
