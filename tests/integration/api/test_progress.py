import pytest
from httpx import AsyncClient


@pytest.fixture
def unlocked(client: AsyncClient, login, admin_headers):
    async def _unlocked(email="viewer@example.com", entitlement_id="course-1-full"):
        await login(email)
        response = await client.post(
            "/admin/grants",
            json={"email": email, "entitlement_id": entitlement_id},
            headers=admin_headers,
        )
        assert response.status_code == 200

    return _unlocked


@pytest.mark.asyncio
async def test_save_and_resume(client: AsyncClient, unlocked):
    await unlocked()

    response = await client.put(
        "/blocks/course-1-block-1/lessons/1/progress",
        json={"seconds": 610, "percent": 95},
    )
    assert response.status_code == 200
    assert response.json()["done"] is True

    response = await client.put(
        "/blocks/course-1-block-1/lessons/2/progress",
        json={"seconds": 42.5, "percent": 12},
    )
    assert response.status_code == 200
    assert response.json()["done"] is False

    response = await client.get("/blocks/course-1-block-1/progress")
    assert response.status_code == 200
    data = response.json()
    assert data["total_lessons"] == 5
    assert data["completed_lessons"] == 1
    assert data["resume_position"] == 2
    assert [(lesson["position"], lesson["seconds"]) for lesson in data["lessons"]] == [
        (1, 610.0),
        (2, 42.5),
    ]


@pytest.mark.asyncio
async def test_update_keeps_single_row_and_done_flag(client: AsyncClient, unlocked):
    await unlocked()

    await client.put("/blocks/course-1-block-1/lessons/3/progress", json={"percent": 100})
    response = await client.put(
        "/blocks/course-1-block-1/lessons/3/progress", json={"seconds": 5, "percent": 1}
    )

    assert response.json()["done"] is True
    assert response.json()["percent"] == 1

    data = (await client.get("/blocks/course-1-block-1/progress")).json()
    assert len(data["lessons"]) == 1


@pytest.mark.asyncio
async def test_explicit_done(client: AsyncClient, unlocked):
    await unlocked()

    response = await client.put(
        "/blocks/course-1-block-1/lessons/4/progress", json={"percent": 10, "done": True}
    )

    assert response.json()["done"] is True


@pytest.mark.asyncio
async def test_progress_is_per_identity(client: AsyncClient, unlocked):
    await unlocked("first@example.com")
    await client.put("/blocks/course-1-block-1/lessons/1/progress", json={"percent": 50})

    await unlocked("second@example.com")
    data = (await client.get("/blocks/course-1-block-1/progress")).json()

    assert data["lessons"] == []
    assert data["resume_position"] is None


@pytest.mark.asyncio
async def test_progress_requires_session(client: AsyncClient):
    response = await client.put(
        "/blocks/course-1-block-1/lessons/1/progress", json={"percent": 50}
    )
    assert response.status_code == 401
    assert response.json()["error"]["code"] == "NOT_AUTHENTICATED"

    response = await client.get("/blocks/course-1-block-1/progress")
    assert response.status_code == 401


@pytest.mark.asyncio
async def test_progress_on_locked_block_is_forbidden(client: AsyncClient, unlocked):
    await unlocked(entitlement_id="course-2-block-1")

    response = await client.put(
        "/blocks/course-1-block-1/lessons/1/progress", json={"percent": 50}
    )

    assert response.status_code == 403
    assert response.json()["error"]["code"] == "ACCESS_DENIED"


@pytest.mark.asyncio
async def test_progress_on_unknown_lesson(client: AsyncClient, unlocked):
    await unlocked()

    response = await client.put(
        "/blocks/course-1-block-1/lessons/42/progress", json={"percent": 50}
    )

    assert response.status_code == 404
    assert response.json()["error"]["code"] == "LESSON_NOT_FOUND"


@pytest.mark.asyncio
@pytest.mark.parametrize("seconds", ["NaN", "Infinity", "-Infinity", "-1"])
async def test_save_rejects_invalid_seconds(client: AsyncClient, unlocked, seconds):
    await unlocked()

    response = await client.put(
        "/blocks/course-1-block-1/lessons/1/progress",
        content='{"seconds": %s, "percent": 10}' % seconds,
        headers={"Content-Type": "application/json"},
    )

    assert response.status_code == 422

    data = (await client.get("/blocks/course-1-block-1/progress")).json()
    assert data["lessons"] == []
