from fastapi import APIRouter

from app.apis.deps import CurrentUser, StatisticsServiceDep
from app.apis.flashcards.schemas import StatisticsRead
from app.core.config import settings


router = APIRouter()


@router.get(
    f"/{settings.app.version}/statistics",
    response_model=StatisticsRead,
    tags=["statistics"],
)
async def get_statistics(
    user: CurrentUser,
    service: StatisticsServiceDep,
) -> StatisticsRead:
    stats = await service.get_statistics(user.id)
    if stats is None:
        return StatisticsRead()
    return StatisticsRead(
        generated_count=stats.generated_count,
        accepted_edited_count=stats.accepted_edited_count,
        accepted_unedited_count=stats.accepted_unedited_count,
    )
