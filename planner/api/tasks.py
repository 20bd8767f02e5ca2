"""
API endpoints для работы с задачами.

CRUD + фильтрация списка по дате/диапазону дат/статусу.
Бизнес-логики здесь нет: схема проверяет входные данные,
сервис делает работу, NotFoundError превращается в 404 в errors.py.
"""

from fastapi import APIRouter, Depends, Query, Response, status

from ..models import TaskStatus
from ..services import TaskService
from .dependencies import get_task_service
from .schemas import DATE_LENGTH, ErrorResponse, TaskCreate, TaskResponse, TaskUpdate

router = APIRouter(prefix="/tasks", tags=["tasks"])


# ============================================================================
# GET ALL TASKS
# ============================================================================


@router.get(
    "",
    response_model=list[TaskResponse],
    summary="Получить задачи с фильтрами",
    description="""
    Получить задачи с опциональными фильтрами.

    **Фильтры:**
    - date: точная дата (имеет приоритет над from/to)
    - from / to: диапазон дат включительно
    - status: planned, in_progress, done

    Сортировка: по дате (по возрастанию), внутри дня - сначала новые.
    """,
    responses={422: {"model": ErrorResponse, "description": "Ошибка валидации"}},
)
async def get_tasks(
    date: str | None = Query(
        None, min_length=DATE_LENGTH, max_length=DATE_LENGTH, description="Дата YYYY-MM-DD"
    ),
    date_from: str | None = Query(
        None, alias="from", min_length=DATE_LENGTH, max_length=DATE_LENGTH, description="С даты"
    ),
    date_to: str | None = Query(
        None, alias="to", min_length=DATE_LENGTH, max_length=DATE_LENGTH, description="По дату"
    ),
    status: TaskStatus | None = Query(None, description="Фильтр по статусу"),
    service: TaskService = Depends(get_task_service),
) -> list[TaskResponse]:
    """
    Примеры запросов:
    ```
    GET /tasks?date=2025-12-01
    GET /tasks?from=2025-12-01&to=2025-12-07&status=done
    ```
    """
    tasks = await service.get_tasks(date=date, date_from=date_from, date_to=date_to, status=status)
    return [TaskResponse.model_validate(t) for t in tasks]


# ============================================================================
# GET TASK BY ID
# ============================================================================


@router.get(
    "/{task_id}",
    response_model=TaskResponse,
    summary="Получить задачу по ID",
    responses={404: {"model": ErrorResponse, "description": "Задача не найдена"}},
)
async def get_task(
    task_id: str, service: TaskService = Depends(get_task_service)
) -> TaskResponse:
    task = await service.get_task(task_id)
    return TaskResponse.model_validate(task)


# ============================================================================
# CREATE TASK
# ============================================================================


@router.post(
    "",
    response_model=TaskResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Создать задачу",
    description="""
    Создать задачу и привязать теги по ключам.

    Ключи, которых нет в справочнике тегов, сохраняются в tagIds,
    но связь для них не создаётся.
    """,
    responses={422: {"model": ErrorResponse, "description": "Ошибка валидации"}},
)
async def create_task(
    data: TaskCreate, service: TaskService = Depends(get_task_service)
) -> TaskResponse:
    """
    Пример запроса:
    ```json
    {
        "title": "Подготовить отчёт",
        "priority": "high",
        "scheduledDate": "2025-12-01",
        "tagIds": ["work"]
    }
    ```
    """
    task = await service.create_task(
        title=data.title,
        priority=data.priority,
        scheduled_date=data.scheduled_date,
        description=data.description,
        due_date=data.due_date,
        status=data.status,
        tag_ids=data.tag_ids,
    )
    return TaskResponse.model_validate(task)


# ============================================================================
# UPDATE TASK
# ============================================================================


@router.patch(
    "/{task_id}",
    response_model=TaskResponse,
    summary="Обновить задачу",
    description="""
    Частичное обновление задачи.

    Не переданные поля не меняются. Если передан tagIds (даже пустой),
    связи с тегами пересоздаются целиком.
    """,
    responses={
        404: {"model": ErrorResponse, "description": "Задача не найдена"},
        422: {"model": ErrorResponse, "description": "Ошибка валидации"},
    },
)
async def update_task(
    task_id: str, data: TaskUpdate, service: TaskService = Depends(get_task_service)
) -> TaskResponse:
    # exclude_unset: отличаем "поле не прислали" от "прислали null"
    task = await service.update_task(task_id, data.model_dump(exclude_unset=True))
    return TaskResponse.model_validate(task)


# ============================================================================
# DELETE TASK
# ============================================================================


@router.delete(
    "/{task_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    response_class=Response,
    summary="Удалить задачу",
    responses={404: {"model": ErrorResponse, "description": "Задача не найдена"}},
)
async def delete_task(task_id: str, service: TaskService = Depends(get_task_service)) -> None:
    await service.delete_task(task_id)
