"""Task repository with specific queries."""

from sqlalchemy import and_, select
from sqlalchemy.ext.asyncio import AsyncSession

from ..models import Task, TaskStatus
from .base import BaseRepository


class TaskRepository(BaseRepository[Task]):
    """
    Репозиторий для работы с задачами.

    Поверх базового CRUD добавляет выборку списка задач
    с фильтрами по дате и статусу.
    """

    def __init__(self, db: AsyncSession):
        super().__init__(Task, db)

    async def get_filtered(
        self,
        date: str | None = None,
        date_from: str | None = None,
        date_to: str | None = None,
        status: TaskStatus | None = None,
    ) -> list[Task]:
        """
        Получить задачи с фильтрами.

        Все фильтры комбинируются через AND.

        Args:
            date: Точная дата (YYYY-MM-DD). Если указана - диапазон игнорируется
            date_from: Нижняя граница диапазона (включительно)
            date_to: Верхняя граница диапазона (включительно)
            status: Фильтр по статусу

        Returns:
            Задачи, отсортированные по scheduled_date (по возрастанию),
            внутри одного дня - сначала новые

        SQL эквивалент (диапазон + статус):
            SELECT * FROM tasks
            WHERE scheduled_date >= {date_from}
              AND scheduled_date <= {date_to}
              AND status = {status}
            ORDER BY scheduled_date ASC, created_at DESC;

        Даты хранятся строками YYYY-MM-DD, поэтому строковое
        сравнение совпадает с хронологическим.
        """
        conditions = []

        if date is not None:
            conditions.append(Task.scheduled_date == date)
        else:
            if date_from is not None:
                conditions.append(Task.scheduled_date >= date_from)
            if date_to is not None:
                conditions.append(Task.scheduled_date <= date_to)

        if status is not None:
            conditions.append(Task.status == status)

        query = select(Task)
        if conditions:
            query = query.where(and_(*conditions))

        query = query.order_by(Task.scheduled_date.asc(), Task.created_at.desc())

        result = await self.db.execute(query)
        return list(result.scalars().all())
