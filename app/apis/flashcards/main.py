from __future__ import annotations

import uuid
from typing import Optional

from fastapi import APIRouter, HTTPException, Query, Response, status

from app.apis.deps import CurrentUser, FlashcardServiceDep, GeneratorDep
from app.core.config import settings
from app.core.db_services import (
    FlashcardNotFoundError,
    NoStorableFlashcardsError,
    SortOrder,
)
from app.core.logging import get_logger
from app.modules.flashcards.errors import OpenRouterError
from app.modules.flashcards.export import ExportFormat, export_flashcards
from .schemas import (
    FlashcardRead,
    FlashcardsListResponse,
    FlashcardUpdate,
    GenerateFlashcardsRequest,
    ManualFlashcardCreate,
    Pagination,
)


router = APIRouter()
logger = get_logger(__name__)

PREFIX = f"/{settings.app.version}/flashcards"


def _not_found(e: FlashcardNotFoundError, user_id: int) -> HTTPException:
    logger.warning(f"Flashcard not found: {e.flashcard_id}", extra={"user_id": user_id})
    return HTTPException(
        status_code=status.HTTP_404_NOT_FOUND, detail="Flashcard not found"
    )


@router.post(
    f"{PREFIX}/generate",
    response_model=list[FlashcardRead],
    status_code=status.HTTP_200_OK,
    tags=["flashcards"],
)
async def generate_flashcards(
    req: GenerateFlashcardsRequest,
    user: CurrentUser,
    service: FlashcardServiceDep,
    generator: GeneratorDep,
) -> list[FlashcardRead]:
    logger.info(
        f"Starting flashcards generation (text length {len(req.text)})",
        extra={"user_id": user.id},
    )
    try:
        candidates = await generator.generate_flashcards(req.text)
    except OpenRouterError as e:
        logger.error(
            f"Flashcards generation failed: {e.kind.value}", extra={"user_id": user.id}
        )
        raise HTTPException(
            status_code=status.HTTP_502_BAD_GATEWAY,
            detail="Failed to generate flashcards",
        )

    try:
        rows = await service.save_generated_flashcards(user.id, candidates)
    except NoStorableFlashcardsError as e:
        logger.error(f"Flashcards generation failed: {e}", extra={"user_id": user.id})
        raise HTTPException(
            status_code=status.HTTP_502_BAD_GATEWAY,
            detail="Failed to generate flashcards",
        )
    return [FlashcardRead.from_row(r) for r in rows]


@router.post(
    PREFIX,
    response_model=FlashcardRead,
    status_code=status.HTTP_201_CREATED,
    tags=["flashcards"],
)
async def create_flashcard(
    req: ManualFlashcardCreate,
    user: CurrentUser,
    service: FlashcardServiceDep,
) -> FlashcardRead:
    row = await service.create_manual_flashcard(user.id, front=req.front, back=req.back)
    return FlashcardRead.from_row(row)


async def _list(
    service: FlashcardServiceDep,
    user_id: int,
    *,
    candidate: bool,
    page: int,
    limit: int,
    sort: Optional[SortOrder],
) -> FlashcardsListResponse:
    rows, total = await service.list_flashcards(
        user_id, candidate=candidate, page=page, limit=limit, sort=sort
    )
    return FlashcardsListResponse(
        data=[FlashcardRead.from_row(r) for r in rows],
        pagination=Pagination(page=page, limit=limit, total=total),
    )


@router.get(
    PREFIX,
    response_model=FlashcardsListResponse,
    tags=["flashcards"],
)
async def list_accepted_flashcards(
    user: CurrentUser,
    service: FlashcardServiceDep,
    page: int = Query(1, ge=1),
    limit: int = Query(20, ge=1, le=100),
    sort: Optional[SortOrder] = None,
) -> FlashcardsListResponse:
    return await _list(
        service, user.id, candidate=False, page=page, limit=limit, sort=sort
    )


@router.get(
    f"{PREFIX}/candidates",
    response_model=FlashcardsListResponse,
    tags=["flashcards"],
)
async def list_candidate_flashcards(
    user: CurrentUser,
    service: FlashcardServiceDep,
    page: int = Query(1, ge=1),
    limit: int = Query(20, ge=1, le=100),
    sort: Optional[SortOrder] = None,
) -> FlashcardsListResponse:
    return await _list(
        service, user.id, candidate=True, page=page, limit=limit, sort=sort
    )


@router.get(f"{PREFIX}/export", tags=["flashcards"])
async def export_accepted_flashcards(
    user: CurrentUser,
    service: FlashcardServiceDep,
    format: ExportFormat = ExportFormat.JSON,
) -> Response:
    rows = await service.list_all_accepted(user.id)
    cards = [FlashcardRead.from_row(r).model_dump(mode="json") for r in rows]
    content, filename, media_type = export_flashcards(cards, format)
    logger.info(
        f"Exported {len(cards)} flashcards as {format.value}",
        extra={"user_id": user.id},
    )
    return Response(
        content=content,
        media_type=media_type,
        headers={"Content-Disposition": f'attachment; filename="{filename}"'},
    )


@router.get(
    f"{PREFIX}/{{flashcard_id}}",
    response_model=FlashcardRead,
    tags=["flashcards"],
)
async def get_flashcard(
    flashcard_id: uuid.UUID,
    user: CurrentUser,
    service: FlashcardServiceDep,
) -> FlashcardRead:
    try:
        row = await service.get_flashcard(user.id, flashcard_id)
    except FlashcardNotFoundError as e:
        raise _not_found(e, user.id)
    return FlashcardRead.from_row(row)


@router.patch(
    f"{PREFIX}/{{flashcard_id}}",
    response_model=FlashcardRead,
    tags=["flashcards"],
)
async def update_flashcard(
    flashcard_id: uuid.UUID,
    req: FlashcardUpdate,
    user: CurrentUser,
    service: FlashcardServiceDep,
) -> FlashcardRead:
    try:
        row = await service.update_flashcard(
            user.id, flashcard_id, req.model_dump(exclude_unset=True)
        )
    except FlashcardNotFoundError as e:
        raise _not_found(e, user.id)
    return FlashcardRead.from_row(row)


@router.patch(
    f"{PREFIX}/{{flashcard_id}}/accept",
    response_model=FlashcardRead,
    tags=["flashcards"],
)
async def accept_flashcard(
    flashcard_id: uuid.UUID,
    user: CurrentUser,
    service: FlashcardServiceDep,
) -> FlashcardRead:
    try:
        row = await service.accept_flashcard(user.id, flashcard_id)
    except FlashcardNotFoundError as e:
        raise _not_found(e, user.id)
    return FlashcardRead.from_row(row)


@router.delete(
    f"{PREFIX}/{{flashcard_id}}",
    status_code=status.HTTP_204_NO_CONTENT,
    tags=["flashcards"],
)
async def delete_flashcard(
    flashcard_id: uuid.UUID,
    user: CurrentUser,
    service: FlashcardServiceDep,
) -> Response:
    try:
        await service.delete_flashcard(user.id, flashcard_id)
    except FlashcardNotFoundError as e:
        raise _not_found(e, user.id)
    return Response(status_code=status.HTTP_204_NO_CONTENT)
