"""Repository for the task_tags association table."""

from collections.abc import Sequence

from sqlalchemy import delete, insert, select
from sqlalchemy.ext.asyncio import AsyncSession

from ..models import task_tags
from ..models.base import utc_now


class TaskTagRepository:
    """
    Репозиторий для связей задача-тег.

    У связи нет собственной модели (это Table, а не класс),
    поэтому репозиторий работает через Core-запросы, а не через BaseRepository.
    """

    def __init__(self, db: AsyncSession):
        self.db = db

    async def get_tag_ids(self, task_id: str) -> list[str]:
        """
        Получить id тегов, привязанных к задаче.

        SQL эквивалент:
            SELECT tag_id FROM task_tags WHERE task_id = {task_id};
        """
        result = await self.db.execute(
            select(task_tags.c.tag_id).where(task_tags.c.task_id == task_id)
        )
        return list(result.scalars().all())

    async def add_links(self, task_id: str, tag_ids: Sequence[str]) -> int:
        """
        Привязать теги к задаче, пропуская дубликаты.

        Дубликатом считается как повтор внутри tag_ids,
        так и связь, которая уже есть в таблице.

        Returns:
            Количество реально вставленных строк

        SQL эквивалент:
            INSERT INTO task_tags (task_id, tag_id, created_at)
            VALUES ({task_id}, {tag_id}, now()), ...;
        """
        existing = set(await self.get_tag_ids(task_id))

        new_ids: list[str] = []
        for tag_id in tag_ids:
            if tag_id not in existing:
                existing.add(tag_id)
                new_ids.append(tag_id)

        if not new_ids:
            return 0

        now = utc_now()
        await self.db.execute(
            insert(task_tags),
            [{"task_id": task_id, "tag_id": tag_id, "created_at": now} for tag_id in new_ids],
        )
        return len(new_ids)

    async def delete_by_task(self, task_id: str) -> int:
        """
        Удалить все связи задачи.

        Returns:
            Количество удалённых строк

        SQL эквивалент:
            DELETE FROM task_tags WHERE task_id = {task_id};
        """
        result = await self.db.execute(delete(task_tags).where(task_tags.c.task_id == task_id))
        return result.rowcount
