"""
Dependencies для FastAPI endpoints.

Каждый запрос получает свою сессию БД, а сервисы создаются поверх неё:
    get_db -> get_task_service -> endpoint

В тестах get_db подменяется через app.dependency_overrides.
"""

from fastapi import Depends
from sqlalchemy.ext.asyncio import AsyncSession

from ..core.database import get_db
from ..services import TagService, TaskService


async def get_task_service(db: AsyncSession = Depends(get_db)) -> TaskService:
    """
    Dependency для TaskService.

    Использование:
        @router.post("/tasks")
        async def create_task(service: TaskService = Depends(get_task_service)):
            ...
    """
    return TaskService(db)


async def get_tag_service(db: AsyncSession = Depends(get_db)) -> TagService:
    """Dependency для TagService."""
    return TagService(db)
