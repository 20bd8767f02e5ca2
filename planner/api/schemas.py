"""
Pydantic схемы для API.

DTOs (Data Transfer Objects) - объекты для передачи данных через HTTP.

Вся валидация входных данных живёт здесь: длины строк, допустимые
значения enum, типы. Сервис получает уже проверенные данные.

Клиент (SPA) говорит в camelCase (scheduledDate, tagIds), поэтому у
полей есть camelCase алиасы; snake_case тоже принимается.
"""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from ..models import TaskPriority, TaskStatus

# Дата в формате YYYY-MM-DD: проверяется только длина, не календарь
DATE_LENGTH = 10


class CamelModel(BaseModel):
    """Базовая схема: camelCase в JSON, snake_case в Python."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


# ============================================================================
# TASK SCHEMAS
# ============================================================================


class TaskCreate(CamelModel):
    """
    Схема для создания задачи (POST /tasks).

    Пример запроса:
    {
        "title": "Подготовить отчёт",
        "priority": "high",
        "scheduledDate": "2025-12-01",
        "dueDate": "2025-12-03",
        "tagIds": ["work"]
    }
    """

    title: str = Field(..., min_length=1, max_length=200, description="Название задачи")
    description: str | None = Field(None, max_length=2000, description="Описание задачи")
    scheduled_date: str = Field(
        ...,
        min_length=DATE_LENGTH,
        max_length=DATE_LENGTH,
        description="День задачи (YYYY-MM-DD)",
    )
    due_date: str | None = Field(
        None, min_length=DATE_LENGTH, max_length=DATE_LENGTH, description="Дедлайн (YYYY-MM-DD)"
    )
    priority: TaskPriority = Field(..., description="Приоритет: low, medium, high")
    status: TaskStatus = Field(default=TaskStatus.PLANNED, description="Статус задачи")
    tag_ids: list[str] = Field(default_factory=list, description="Ключи тегов")


class TaskUpdate(CamelModel):
    """
    Схема для частичного обновления задачи (PATCH /tasks/{id}).

    Все поля опциональные. В сервис уходят только поля, которые
    клиент действительно прислал (model_dump(exclude_unset=True)).

    null допустим только для description и due_date (очистить поле).
    Для остальных полей null - ошибка валидации.
    """

    title: str = Field(None, min_length=1, max_length=200)
    description: str | None = Field(None, max_length=2000)
    scheduled_date: str = Field(None, min_length=DATE_LENGTH, max_length=DATE_LENGTH)
    due_date: str | None = Field(None, min_length=DATE_LENGTH, max_length=DATE_LENGTH)
    priority: TaskPriority = None
    status: TaskStatus = None
    tag_ids: list[str] = None


class TaskResponse(CamelModel):
    """
    Схема для ответа API.

    Пример ответа:
    {
        "id": "3f2a5c1e-...",
        "title": "Подготовить отчёт",
        "description": null,
        "status": "planned",
        "priority": "high",
        "scheduledDate": "2025-12-01",
        "dueDate": "2025-12-03",
        "tagIds": ["work"],
        "createdAt": "2025-11-30T12:00:00",
        "updatedAt": "2025-11-30T12:00:00"
    }
    """

    id: str
    title: str
    description: str | None
    status: TaskStatus
    priority: TaskPriority
    scheduled_date: str
    due_date: str | None
    tag_ids: list[str]
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(
        alias_generator=to_camel, populate_by_name=True, from_attributes=True
    )
    # from_attributes=True позволяет создавать схему из SQLAlchemy модели:
    # TaskResponse.model_validate(task_model)


# ============================================================================
# TAG SCHEMAS
# ============================================================================


class TagResponse(CamelModel):
    """
    Схема тега в ответе (GET /tags).

    Пример:
    {"id": "9b1d...", "key": "work", "name": "Работа", "color": "#3B82F6", ...}
    """

    id: str
    key: str
    name: str
    color: str | None
    created_at: datetime
    updated_at: datetime

    model_config = ConfigDict(
        alias_generator=to_camel, populate_by_name=True, from_attributes=True
    )


# ============================================================================
# COMMON SCHEMAS
# ============================================================================


class ErrorDetail(BaseModel):
    """
    Детали ошибки для конкретного поля.

    Пример:
    {
        "field": "title",
        "message": "String should have at least 1 character"
    }
    """

    field: str = Field(..., description="Название поля с ошибкой")
    message: str = Field(..., description="Описание ошибки")


class ErrorBody(BaseModel):
    """
    Тело ошибки с кодом и деталями.

    Коды:
    - VALIDATION_ERROR: ошибка валидации полей
    - NOT_FOUND: задача не найдена
    - RATE_LIMIT_EXCEEDED: превышен лимит запросов
    - INTERNAL_ERROR: ошибка базы данных / внутренняя ошибка
    """

    code: str = Field(..., description="Код ошибки (VALIDATION_ERROR, NOT_FOUND, etc.)")
    message: str = Field(..., description="Человекочитаемое сообщение")
    details: list[ErrorDetail] | None = Field(
        default=None, description="Список ошибок по полям (для валидации)"
    )


class ErrorResponse(BaseModel):
    """
    Единый формат ответа для всех ошибок API.

    Пример ошибки "не найдено":
    {
        "error": {
            "code": "NOT_FOUND",
            "message": "Task with id 3f2a... not found",
            "details": null
        }
    }
    """

    error: ErrorBody
