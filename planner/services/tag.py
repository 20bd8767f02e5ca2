"""Tag service with business logic."""

from collections.abc import Sequence

from sqlalchemy.ext.asyncio import AsyncSession

from ..core.logging import get_logger
from ..models import Tag
from ..repositories import TagRepository

logger = get_logger(__name__)


class TagService:
    """
    Сервис для работы с тегами.

    Для задач теги - справочник: TaskService только ищет их по ключам
    и никогда не создаёт новые.
    """

    def __init__(self, db: AsyncSession):
        self.db = db
        self.tag_repo = TagRepository(db)

    async def get_all_tags(self) -> list[Tag]:
        """Все теги по алфавиту (по name)."""
        return await self.tag_repo.get_all_ordered()

    async def resolve_by_keys(self, keys: Sequence[str]) -> list[Tag]:
        """
        Найти теги по ключам.

        Args:
            keys: Ключи тегов из task.tagIds

        Returns:
            Найденные теги. Порядок не гарантирован,
            неизвестные ключи просто отсутствуют в результате (это не ошибка).
        """
        if not keys:
            return []
        return await self.tag_repo.get_by_keys(keys)

    async def get_or_create_tag(self, key: str, name: str, color: str | None = None) -> Tag:
        """
        Получить тег по ключу или создать, если его нет.

        Используется только для начального наполнения справочника
        (scripts/seed_data.py). Существующий тег не изменяется.

        Raises:
            ValueError: Если key или name пустые
        """
        if not key or not key.strip():
            raise ValueError("Tag key cannot be empty")
        if not name or not name.strip():
            raise ValueError("Tag name cannot be empty")

        key = key.strip()
        tag = await self.tag_repo.get_by_key(key)
        if tag:
            return tag

        tag = await self.tag_repo.create(Tag(key=key, name=name.strip(), color=color))
        logger.info("Tag created", extra={"tag_id": tag.id, "tag_key": tag.key})
        return tag
