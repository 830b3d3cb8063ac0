"""
Unit tests for SaveProgressUseCase and GetBlockProgressUseCase
"""
from datetime import timedelta

import pytest

from course_access.app.use_cases.access import AccessContext
from course_access.app.use_cases.progress import (
    GetBlockProgressUseCase,
    SaveProgressCommand,
    SaveProgressUseCase,
)
from course_access.domain.base import utcnow
from course_access.domain.catalog import load_catalog
from course_access.domain.entities import LessonProgress

VIEWER = AccessContext(identity="viewer@example.com", entitlements=frozenset({"course-1-full"}))


def command(**overrides):
    data = {"block_id": "course-1-block-2", "position": 3, "seconds": 42.5, "percent": 40}
    data.update(overrides)
    return SaveProgressCommand(**data)


@pytest.mark.asyncio
async def test_save_creates_progress(mock_uow):
    result = await SaveProgressUseCase(mock_uow, load_catalog()).execute(VIEWER, command())

    assert result.is_ok()
    assert result.value.percent == 40
    assert result.value.done is False

    saved = mock_uow.lesson_progress.save.call_args[0][0]
    assert saved.identity == "viewer@example.com"
    assert saved.block_id == "course-1-block-2"
    assert saved.position == 3
    assert saved.seconds == 42.5
    mock_uow.commit.assert_called_once()


@pytest.mark.asyncio
async def test_save_marks_done_at_ninety_percent(mock_uow):
    result = await SaveProgressUseCase(mock_uow, load_catalog()).execute(
        VIEWER, command(percent=90)
    )

    assert result.value.done is True


@pytest.mark.asyncio
async def test_save_clamps_values(mock_uow):
    result = await SaveProgressUseCase(mock_uow, load_catalog()).execute(
        VIEWER, command(percent=250, seconds=-5)
    )

    assert result.value.percent == 100
    assert result.value.seconds == 0.0
    assert result.value.done is True


@pytest.mark.asyncio
async def test_done_is_never_cleared(mock_uow):
    existing = LessonProgress(
        identity="viewer@example.com",
        block_id="course-1-block-2",
        position=3,
        seconds=600,
        percent=100,
        done=True,
    )
    mock_uow.lesson_progress.get.return_value = existing

    result = await SaveProgressUseCase(mock_uow, load_catalog()).execute(
        VIEWER, command(percent=5, seconds=10)
    )

    assert result.value.done is True
    assert result.value.percent == 5
    assert mock_uow.lesson_progress.save.call_args[0][0] is existing


@pytest.mark.asyncio
async def test_save_requires_login(mock_uow):
    result = await SaveProgressUseCase(mock_uow, load_catalog()).execute(
        AccessContext.anonymous(), command()
    )

    assert result.error.code == "NOT_AUTHENTICATED"
    mock_uow.lesson_progress.save.assert_not_called()


@pytest.mark.asyncio
async def test_save_denied_for_locked_block(mock_uow):
    context = AccessContext(identity="viewer@example.com", entitlements=frozenset({"course-2-full"}))

    result = await SaveProgressUseCase(mock_uow, load_catalog()).execute(context, command())

    assert result.error.code == "ACCESS_DENIED"
    mock_uow.lesson_progress.save.assert_not_called()


@pytest.mark.asyncio
async def test_save_unknown_lesson(mock_uow):
    result = await SaveProgressUseCase(mock_uow, load_catalog()).execute(
        VIEWER, command(position=99)
    )

    assert result.error.code == "LESSON_NOT_FOUND"


@pytest.mark.asyncio
async def test_block_progress_summary(mock_uow):
    now = utcnow()
    mock_uow.lesson_progress.list_by_block.return_value = [
        LessonProgress(
            identity="viewer@example.com", block_id="course-1-block-2", position=1,
            seconds=300, percent=100, done=True, updated_at=now - timedelta(hours=1),
        ),
        LessonProgress(
            identity="viewer@example.com", block_id="course-1-block-2", position=2,
            seconds=120, percent=30, done=False, updated_at=now,
        ),
    ]

    result = await GetBlockProgressUseCase(mock_uow, load_catalog()).execute(
        VIEWER, "course-1-block-2"
    )

    data = result.value
    assert data.total_lessons == 5
    assert data.completed_lessons == 1
    assert data.percent == 20
    assert data.resume_position == 2
    assert [lesson.position for lesson in data.lessons] == [1, 2]


@pytest.mark.asyncio
async def test_block_progress_without_history(mock_uow):
    result = await GetBlockProgressUseCase(mock_uow, load_catalog()).execute(
        VIEWER, "course-1-block-1"
    )

    assert result.value.resume_position is None
    assert result.value.completed_lessons == 0
    assert result.value.lessons == []


@pytest.mark.asyncio
@pytest.mark.parametrize("seconds", [float("nan"), float("inf"), float("-inf")])
async def test_save_stores_zero_for_non_finite_seconds(mock_uow, seconds):
    result = await SaveProgressUseCase(mock_uow, load_catalog()).execute(
        VIEWER, command(percent=10, seconds=seconds)
    )

    assert result.value.seconds == 0.0
    saved = mock_uow.lesson_progress.save.call_args[0][0]
    assert saved.seconds == 0.0
