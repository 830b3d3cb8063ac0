"""
Lesson API Routes

Gated lesson listing and per-lesson progress.
"""

from fastapi import APIRouter, Depends, status
from pydantic import BaseModel, Field

from course_access.api.error import ClientError, ServerError
from course_access.app.services.unit_of_work import UnitOfWork
from course_access.app.use_cases.access import (
    AccessContext,
    BlockLessonsResponse,
    GetBlockLessonsUseCase,
)
from course_access.app.use_cases.progress import (
    BlockProgressResponse,
    GetBlockProgressUseCase,
    LessonProgressView,
    SaveProgressCommand,
    SaveProgressUseCase,
)
from course_access.depends import get_access_context, get_catalog, get_unit_of_work
from course_access.domain.catalog import Catalog

router = APIRouter(prefix="/blocks", tags=["Lessons"])


def _raise_for(error):
    if error.code == "NOT_AUTHENTICATED":
        raise ClientError(error, status_code=status.HTTP_401_UNAUTHORIZED)
    if error.code in ("BLOCK_NOT_FOUND", "LESSON_NOT_FOUND"):
        raise ClientError(error, status_code=status.HTTP_404_NOT_FOUND)
    if error.code == "ACCESS_DENIED":
        raise ClientError(error, status_code=status.HTTP_403_FORBIDDEN)
    raise ServerError(error)


@router.get(
    "/{block_id}/lessons", status_code=status.HTTP_200_OK, response_model=BlockLessonsResponse
)
async def get_block_lessons(
    block_id: str,
    context: AccessContext = Depends(get_access_context),
    catalog: Catalog = Depends(get_catalog),
):
    """
    List Block Lessons

    Locked blocks answer 200 with locked=true and no lessons.

    Raises:
        - 404 Not Found: Unknown block
    """
    result = GetBlockLessonsUseCase(catalog).execute(context, block_id)

    if result.is_err():
        _raise_for(result.error)

    return result.value


@router.get(
    "/{block_id}/progress", status_code=status.HTTP_200_OK, response_model=BlockProgressResponse
)
async def get_block_progress(
    block_id: str,
    context: AccessContext = Depends(get_access_context),
    uow: UnitOfWork = Depends(get_unit_of_work),
    catalog: Catalog = Depends(get_catalog),
):
    """
    Block Progress

    Raises:
        - 401 Unauthorized: No session
        - 403 Forbidden: Block is locked for the caller
        - 404 Not Found: Unknown block
    """
    result = await GetBlockProgressUseCase(uow, catalog).execute(context, block_id)

    if result.is_err():
        _raise_for(result.error)

    return result.value


class SaveProgressRequest(BaseModel):
    """Progress report; percent is clamped to 0..100"""

    seconds: float = Field(
        0.0, ge=0, allow_inf_nan=False, description="Playback position in seconds"
    )
    percent: int = Field(0, description="Watched share of the lesson")
    done: bool = Field(False, description="Viewer marked the lesson as done")


@router.put(
    "/{block_id}/lessons/{position}/progress",
    status_code=status.HTTP_200_OK,
    response_model=LessonProgressView,
)
async def save_lesson_progress(
    block_id: str,
    position: int,
    request: SaveProgressRequest,
    context: AccessContext = Depends(get_access_context),
    uow: UnitOfWork = Depends(get_unit_of_work),
    catalog: Catalog = Depends(get_catalog),
):
    """
    Save Lesson Progress

    Raises:
        - 401 Unauthorized: No session
        - 403 Forbidden: Block is locked for the caller
        - 404 Not Found: Unknown block or lesson
    """
    command = SaveProgressCommand(
        block_id=block_id,
        position=position,
        seconds=request.seconds,
        percent=request.percent,
        done=request.done,
    )
    result = await SaveProgressUseCase(uow, catalog).execute(context, command)

    if result.is_err():
        _raise_for(result.error)

    return result.value
