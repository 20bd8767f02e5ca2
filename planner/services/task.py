"""Task service with business logic."""

from collections.abc import Mapping, Sequence
from typing import Any

from sqlalchemy.ext.asyncio import AsyncSession

from ..core.database import transaction
from ..core.exceptions import NotFoundError
from ..core.logging import get_logger
from ..models import Tag, Task, TaskPriority, TaskStatus, utc_now
from ..repositories import TaskRepository, TaskTagRepository
from .tag import TagService

logger = get_logger(__name__)


class TaskService:
    """
    Сервис для работы с задачами.

    Задача хранит ключи тегов (tag_ids) и одновременно имеет строки
    в task_tags для тех ключей, что нашлись в справочнике. Обе стороны
    меняются только внутри одной транзакции: create, update, delete
    либо проходят целиком, либо не оставляют следов.

    Входные данные уже провалидированы на уровне API (pydantic схемы),
    здесь только правила слияния и работа со связями.
    """

    def __init__(self, db: AsyncSession):
        """Инициализация сервиса с несколькими репозиториями."""
        self.db = db
        self.task_repo = TaskRepository(db)
        self.task_tag_repo = TaskTagRepository(db)
        self.tag_service = TagService(db)

    async def create_task(
        self,
        title: str,
        priority: TaskPriority,
        scheduled_date: str,
        description: str | None = None,
        due_date: str | None = None,
        status: TaskStatus = TaskStatus.PLANNED,
        tag_ids: Sequence[str] | None = None,
    ) -> Task:
        """
        Создать задачу и привязать к ней теги.

        Args:
            title: Название задачи
            priority: Приоритет
            scheduled_date: День, на который запланирована задача (YYYY-MM-DD)
            description: Описание
            due_date: Дедлайн (YYYY-MM-DD)
            status: Статус, по умолчанию planned
            tag_ids: Ключи тегов

        Returns:
            Созданная задача

        Порядок:
        1. Найти теги по ключам (только если ключи переданы)
        2. Создать задачу; tag_ids = ключи как есть, даже ненайденные
        3. Создать связи для найденных тегов, без дубликатов
        Шаги 2 и 3 выполняются в одной транзакции.
        """
        requested_keys = list(tag_ids or [])
        now = utc_now()

        async with transaction(self.db):
            tags = await self.tag_service.resolve_by_keys(requested_keys) if requested_keys else []

            task = Task(
                title=title,
                description=description,
                status=TaskStatus(status),
                priority=TaskPriority(priority),
                scheduled_date=scheduled_date,
                due_date=due_date,
                tag_ids=requested_keys,
                created_at=now,
                updated_at=now,
            )
            task = await self.task_repo.create(task)

            if tags:
                tag_pks = self._ordered_tag_ids(requested_keys, tags)
                await self.task_tag_repo.add_links(task.id, tag_pks)

        self._warn_unresolved(task.id, requested_keys, tags)
        logger.info(
            "Task created",
            extra={
                "task_id": task.id,
                "scheduled_date": task.scheduled_date,
                "tag_count": len(tags),
            },
        )
        return task

    async def get_task(self, task_id: str) -> Task:
        """
        Получить задачу по ID.

        Raises:
            NotFoundError: Если задача не найдена
        """
        task = await self.task_repo.get_by_id(task_id)
        if not task:
            raise NotFoundError("Task", task_id)
        return task

    async def get_tasks(
        self,
        date: str | None = None,
        date_from: str | None = None,
        date_to: str | None = None,
        status: TaskStatus | None = None,
    ) -> list[Task]:
        """
        Получить задачи с фильтрами.

        date имеет приоритет над диапазоном date_from/date_to.
        Пустой результат - не ошибка.
        """
        return await self.task_repo.get_filtered(
            date=date, date_from=date_from, date_to=date_to, status=status
        )

    async def update_task(self, task_id: str, patch: Mapping[str, Any]) -> Task:
        """
        Частично обновить задачу.

        Args:
            task_id: ID задачи
            patch: Только те поля, которые прислал клиент
                   (ключи: title, description, status, priority,
                   scheduled_date, due_date, tag_ids)

        Returns:
            Обновлённая задача

        Raises:
            NotFoundError: Если задача не найдена

        Правила слияния:
        - Поля нет в patch - остаётся старое значение
        - Поле есть в patch - перезаписывается (в том числе None для
          description и due_date)
        - Ключ tag_ids есть в patch (даже []) - все старые связи удаляются,
          для новых ключей создаются заново, task.tag_ids = новый список
        - Ключа tag_ids нет - связи и tag_ids не трогаем
        """
        async with transaction(self.db):
            task = await self.get_task(task_id)

            task.title = patch.get("title", task.title)
            task.description = patch.get("description", task.description)
            task.status = TaskStatus(patch.get("status", task.status))
            task.priority = TaskPriority(patch.get("priority", task.priority))
            task.scheduled_date = patch.get("scheduled_date", task.scheduled_date)
            task.due_date = patch.get("due_date", task.due_date)

            if "tag_ids" in patch:
                new_keys = list(patch["tag_ids"] or [])
                await self._replace_tags(task.id, new_keys)
                task.tag_ids = new_keys

            task.updated_at = utc_now()

            await self.db.flush()
            await self.db.refresh(task)

        logger.info(
            "Task updated",
            extra={"task_id": task.id, "fields": sorted(patch.keys())},
        )
        return task

    async def delete_task(self, task_id: str) -> None:
        """
        Удалить задачу вместе со связями.

        Raises:
            NotFoundError: Если задача не найдена (в БД ничего не меняется)
        """
        async with transaction(self.db):
            if not await self.task_repo.exists(task_id):
                raise NotFoundError("Task", task_id)

            removed_links = await self.task_tag_repo.delete_by_task(task_id)
            await self.task_repo.delete(task_id)

        logger.info("Task deleted", extra={"task_id": task_id, "removed_links": removed_links})

    async def _replace_tags(self, task_id: str, keys: list[str]) -> None:
        """Удалить все связи задачи и создать их заново для найденных ключей."""
        await self.task_tag_repo.delete_by_task(task_id)

        if not keys:
            return

        tags = await self.tag_service.resolve_by_keys(keys)
        if tags:
            await self.task_tag_repo.add_links(task_id, self._ordered_tag_ids(keys, tags))

        self._warn_unresolved(task_id, keys, tags)

    @staticmethod
    def _ordered_tag_ids(keys: Sequence[str], tags: Sequence[Tag]) -> list[str]:
        """ID найденных тегов в порядке запрошенных ключей."""
        by_key = {tag.key: tag.id for tag in tags}
        return [by_key[key] for key in keys if key in by_key]

    @staticmethod
    def _warn_unresolved(task_id: str, keys: Sequence[str], tags: Sequence[Tag]) -> None:
        # tag_ids сохраняет такие ключи, но связи для них нет
        unresolved = sorted(set(keys) - {tag.key for tag in tags})
        if unresolved:
            logger.warning(
                "Unknown tag keys stored without association",
                extra={"task_id": task_id, "tag_keys": unresolved},
            )
