"""Tag repository with specific queries."""

from collections.abc import Sequence

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from ..models import Tag
from .base import BaseRepository


class TagRepository(BaseRepository[Tag]):
    """
    Репозиторий для работы с тегами.

    Теги только читаются: задачи ссылаются на них по key,
    а создаются они сид-скриптом.
    """

    def __init__(self, db: AsyncSession):
        super().__init__(Tag, db)

    async def get_all_ordered(self) -> list[Tag]:
        """
        Получить все теги, отсортированные по имени.

        SQL эквивалент:
            SELECT * FROM tags ORDER BY name ASC;
        """
        result = await self.db.execute(select(Tag).order_by(Tag.name.asc()))
        return list(result.scalars().all())

    async def get_by_key(self, key: str) -> Tag | None:
        """
        Получить тег по ключу.

        SQL эквивалент:
            SELECT * FROM tags WHERE key = {key};
        """
        result = await self.db.execute(select(Tag).where(Tag.key == key))
        return result.scalar_one_or_none()

    async def get_by_keys(self, keys: Sequence[str]) -> list[Tag]:
        """
        Получить теги по списку ключей одним запросом.

        Args:
            keys: Ключи тегов (могут повторяться)

        Returns:
            Найденные теги. Порядок не совпадает с порядком keys,
            ненайденных ключей в результате просто нет.

        SQL эквивалент:
            SELECT * FROM tags WHERE key IN ({keys});
        """
        if not keys:
            return []

        result = await self.db.execute(select(Tag).where(Tag.key.in_(set(keys))))
        return list(result.scalars().all())
