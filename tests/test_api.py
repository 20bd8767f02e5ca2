"""
Тесты для API Layer (REST endpoints).

Проверяем:
- HTTP статус-коды
- Форматы запросов/ответов (camelCase JSON)
- Валидацию входных данных (422 в едином формате)
- Обработку ошибок (404, 500)
- Интеграцию всех слоёв (API → Service → Repository → DB)
"""

import pytest
from httpx import AsyncClient
from sqlalchemy.exc import OperationalError

from planner.repositories import TaskTagRepository

TASK_PAYLOAD = {
    "title": "Test task",
    "priority": "medium",
    "scheduledDate": "2025-12-01",
    "tagIds": [],
}


async def post_task(client: AsyncClient, **overrides) -> dict:
    response = await client.post("/tasks", json={**TASK_PAYLOAD, **overrides})
    assert response.status_code == 201, response.json()
    return response.json()


def error_fields(response) -> list[str]:
    return [d["field"] for d in response.json()["error"]["details"]]


# ============================================================================
# CREATE
# ============================================================================


@pytest.mark.asyncio
async def test_create_task(test_client: AsyncClient):
    """Test: POST /tasks - создание задачи."""
    response = await test_client.post("/tasks", json=TASK_PAYLOAD)

    assert response.status_code == 201
    data = response.json()
    assert data["id"]
    assert data["title"] == "Test task"
    assert data["status"] == "planned"
    assert data["priority"] == "medium"
    assert data["scheduledDate"] == "2025-12-01"
    assert data["dueDate"] is None
    assert data["description"] is None
    assert data["tagIds"] == []
    assert "createdAt" in data
    assert "updatedAt" in data


@pytest.mark.asyncio
async def test_create_task_without_tag_ids_field(test_client: AsyncClient):
    """Test: tagIds можно не передавать - будет []."""
    payload = {k: v for k, v in TASK_PAYLOAD.items() if k != "tagIds"}

    response = await test_client.post("/tasks", json=payload)

    assert response.status_code == 201
    assert response.json()["tagIds"] == []


@pytest.mark.asyncio
async def test_create_task_with_tags(test_client: AsyncClient, test_db, tags):
    """Test: tagIds возвращаются как прислали, связи - только для существующих тегов."""
    data = await post_task(test_client, tagIds=["work", "ghost"], status="in_progress")

    assert data["tagIds"] == ["work", "ghost"]
    assert data["status"] == "in_progress"
    assert await TaskTagRepository(test_db).get_tag_ids(data["id"]) == [tags["work"].id]


@pytest.mark.asyncio
async def test_create_task_accepts_snake_case(test_client: AsyncClient):
    """Test: snake_case ключи тоже принимаются."""
    response = await test_client.post(
        "/tasks",
        json={"title": "Snake", "priority": "low", "scheduled_date": "2025-12-01", "tag_ids": []},
    )

    assert response.status_code == 201
    assert response.json()["scheduledDate"] == "2025-12-01"


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "overrides, field",
    [
        ({"title": ""}, "title"),
        ({"title": "x" * 201}, "title"),
        ({"title": 123}, "title"),
        ({"description": "x" * 2001}, "description"),
        ({"scheduledDate": "2025-1-1"}, "scheduledDate"),
        ({"dueDate": "2025-12-011"}, "dueDate"),
        ({"priority": "urgent"}, "priority"),
        ({"status": "cancelled"}, "status"),
        ({"tagIds": "work"}, "tagIds"),
        ({"tagIds": [1]}, "tagIds.0"),
    ],
)
async def test_create_task_validation_error(test_client: AsyncClient, overrides, field):
    """Test: POST /tasks - ошибки валидации в едином формате ErrorResponse."""
    response = await test_client.post("/tasks", json={**TASK_PAYLOAD, **overrides})

    assert response.status_code == 422
    data = response.json()
    assert data["error"]["code"] == "VALIDATION_ERROR"
    assert field in error_fields(response)


@pytest.mark.asyncio
async def test_create_task_missing_required_fields(test_client: AsyncClient):
    """Test: title, priority, scheduledDate обязательны."""
    response = await test_client.post("/tasks", json={})

    assert response.status_code == 422
    assert {"title", "priority", "scheduledDate"} <= set(error_fields(response))


@pytest.mark.asyncio
async def test_create_task_date_length_only(test_client: AsyncClient):
    """Test: дата проверяется только по длине, не по календарю."""
    data = await post_task(test_client, scheduledDate="2025-13-45")

    assert data["scheduledDate"] == "2025-13-45"


# ============================================================================
# READ
# ============================================================================


@pytest.mark.asyncio
async def test_get_task_by_id(test_client: AsyncClient):
    """Test: GET /tasks/{id} - получение задачи по ID."""
    created = await post_task(test_client)

    response = await test_client.get(f"/tasks/{created['id']}")

    assert response.status_code == 200
    assert response.json() == created


@pytest.mark.asyncio
async def test_get_task_not_found(test_client: AsyncClient):
    """Test: GET /tasks/{id} - 404 с id в сообщении."""
    response = await test_client.get("/tasks/missing-id")

    assert response.status_code == 404
    error = response.json()["error"]
    assert error["code"] == "NOT_FOUND"
    assert "missing-id" in error["message"]


@pytest.mark.asyncio
async def test_get_tasks_filters(test_client: AsyncClient):
    """Test: GET /tasks?date=&from=&to=&status= - фильтрация."""
    await post_task(test_client, title="before", scheduledDate="2025-11-30")
    await post_task(test_client, title="first", scheduledDate="2025-12-01")
    await post_task(test_client, title="done", scheduledDate="2025-12-03", status="done")
    await post_task(test_client, title="last", scheduledDate="2025-12-05")

    by_date = await test_client.get("/tasks", params={"date": "2025-12-01"})
    by_range = await test_client.get("/tasks", params={"from": "2025-12-01", "to": "2025-12-05"})
    done = await test_client.get(
        "/tasks", params={"from": "2025-12-01", "to": "2025-12-05", "status": "done"}
    )
    everything = await test_client.get("/tasks")

    assert [t["title"] for t in by_date.json()] == ["first"]
    assert [t["title"] for t in by_range.json()] == ["first", "done", "last"]
    assert [t["title"] for t in done.json()] == ["done"]
    assert len(everything.json()) == 4


@pytest.mark.asyncio
async def test_get_tasks_empty(test_client: AsyncClient):
    """Test: нет задач - пустой список, не ошибка."""
    response = await test_client.get("/tasks", params={"date": "2030-01-01"})

    assert response.status_code == 200
    assert response.json() == []


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "params, field",
    [
        ({"date": "2025-12"}, "date"),
        ({"from": "yesterday"}, "from"),
        ({"status": "cancelled"}, "status"),
    ],
)
async def test_get_tasks_invalid_query(test_client: AsyncClient, params, field):
    """Test: некорректные query параметры - 422."""
    response = await test_client.get("/tasks", params=params)

    assert response.status_code == 422
    assert field in error_fields(response)


# ============================================================================
# UPDATE
# ============================================================================


@pytest.mark.asyncio
async def test_update_task_partial(test_client: AsyncClient, test_db, tags):
    """Test: PATCH /tasks/{id} - частичное обновление, tagIds заменяются."""
    created = await post_task(test_client, title="OLD", tagIds=["home"])

    response = await test_client.patch(
        f"/tasks/{created['id']}", json={"status": "done", "tagIds": ["work"]}
    )

    assert response.status_code == 200
    data = response.json()
    assert data["title"] == "OLD"
    assert data["status"] == "done"
    assert data["tagIds"] == ["work"]
    assert data["createdAt"] == created["createdAt"]
    assert await TaskTagRepository(test_db).get_tag_ids(created["id"]) == [tags["work"].id]


@pytest.mark.asyncio
async def test_update_task_without_tag_ids_keeps_links(test_client: AsyncClient, test_db, tags):
    """Test: без tagIds в теле связи не трогаются."""
    created = await post_task(test_client, tagIds=["study"])

    response = await test_client.patch(f"/tasks/{created['id']}", json={"title": "Renamed"})

    assert response.json()["tagIds"] == ["study"]
    assert await TaskTagRepository(test_db).get_tag_ids(created["id"]) == [tags["study"].id]


@pytest.mark.asyncio
async def test_update_task_clear_optional_fields(test_client: AsyncClient):
    """Test: null в description/dueDate очищает поле."""
    created = await post_task(test_client, description="details", dueDate="2025-12-02")

    response = await test_client.patch(
        f"/tasks/{created['id']}", json={"description": None, "dueDate": None}
    )

    assert response.status_code == 200
    assert response.json()["description"] is None
    assert response.json()["dueDate"] is None


@pytest.mark.asyncio
@pytest.mark.parametrize(
    "body, field",
    [
        ({"title": None}, "title"),
        ({"title": ""}, "title"),
        ({"priority": None}, "priority"),
        ({"status": "archived"}, "status"),
        ({"scheduledDate": "tomorrow"}, "scheduledDate"),
        ({"tagIds": None}, "tagIds"),
    ],
)
async def test_update_task_validation_error(test_client: AsyncClient, body, field):
    """Test: PATCH - null недопустим для обязательных полей."""
    created = await post_task(test_client)

    response = await test_client.patch(f"/tasks/{created['id']}", json=body)

    assert response.status_code == 422
    assert field in error_fields(response)


@pytest.mark.asyncio
async def test_update_task_not_found(test_client: AsyncClient):
    """Test: PATCH несуществующей задачи - 404."""
    response = await test_client.patch("/tasks/missing-id", json={"status": "done"})

    assert response.status_code == 404
    assert "missing-id" in response.json()["error"]["message"]


# ============================================================================
# DELETE
# ============================================================================


@pytest.mark.asyncio
async def test_delete_task(test_client: AsyncClient, test_db, tags):
    """Test: DELETE /tasks/{id} - 204, затем 404."""
    created = await post_task(test_client, tagIds=["work"])

    response = await test_client.delete(f"/tasks/{created['id']}")

    assert response.status_code == 204
    assert response.content == b""
    assert (await test_client.get(f"/tasks/{created['id']}")).status_code == 404
    assert await TaskTagRepository(test_db).get_tag_ids(created["id"]) == []


@pytest.mark.asyncio
async def test_delete_task_not_found(test_client: AsyncClient):
    """Test: DELETE несуществующей задачи - 404."""
    response = await test_client.delete("/tasks/missing-id")

    assert response.status_code == 404
    assert response.json()["error"]["code"] == "NOT_FOUND"


# ============================================================================
# STORE FAILURE
# ============================================================================


@pytest.mark.asyncio
async def test_store_failure_returns_500_and_rolls_back(
    test_client: AsyncClient, tags, monkeypatch
):
    """Test: сбой БД посреди create - 500 без деталей, задача не сохранена."""

    async def broken_add_links(self, task_id, tag_ids):
        raise OperationalError("INSERT INTO task_tags", {}, Exception("disk I/O error"))

    monkeypatch.setattr(TaskTagRepository, "add_links", broken_add_links)

    response = await test_client.post("/tasks", json={**TASK_PAYLOAD, "tagIds": ["work"]})

    assert response.status_code == 500
    error = response.json()["error"]
    assert error["code"] == "INTERNAL_ERROR"
    assert "disk" not in error["message"]
    assert (await test_client.get("/tasks")).json() == []


# ============================================================================
# TAGS
# ============================================================================


@pytest.mark.asyncio
async def test_get_tags(test_client: AsyncClient, tags):
    """Test: GET /tags - все теги по алфавиту."""
    response = await test_client.get("/tags")

    assert response.status_code == 200
    data = response.json()
    assert [t["name"] for t in data] == ["Home", "Study", "Work"]
    assert data[0]["key"] == "home"
    assert data[0]["color"] is None
    assert data[2]["color"] == "#3B82F6"
    assert "createdAt" in data[0]


# ============================================================================
# APP-LEVEL
# ============================================================================


@pytest.mark.asyncio
async def test_api_v1_prefix(test_client: AsyncClient):
    """Test: те же endpoints доступны под /api/v1."""
    created = await post_task(test_client)

    response = await test_client.get(f"/api/v1/tasks/{created['id']}")

    assert response.status_code == 200
    assert (await test_client.get("/api/v1/tags")).status_code == 200


@pytest.mark.asyncio
async def test_root(test_client: AsyncClient):
    """Test: GET / - информация о API."""
    response = await test_client.get("/")

    assert response.status_code == 200
    assert response.json()["endpoints"]["tasks"] == "/api/v1/tasks"


@pytest.mark.asyncio
async def test_request_id_header(test_client: AsyncClient):
    """Test: X-Request-ID из запроса возвращается в ответе."""
    response = await test_client.get("/tasks", headers={"X-Request-ID": "trace-123"})

    assert response.headers["X-Request-ID"] == "trace-123"

    generated = await test_client.get("/tasks")
    assert generated.headers["X-Request-ID"]


@pytest.mark.asyncio
async def test_health_check(test_client: AsyncClient, session_factory, monkeypatch):
    """Test: GET /health - проверка подключения к БД."""
    monkeypatch.setattr("planner.main.AsyncSessionLocal", session_factory)

    response = await test_client.get("/health")

    assert response.status_code == 200
    data = response.json()
    assert data["status"] == "ok"
    assert data["checks"]["database"] == "connected"
