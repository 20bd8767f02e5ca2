"""Tag model."""

from sqlalchemy import String
from sqlalchemy.orm import Mapped, mapped_column

from .base import Base, TimestampMixin, UUIDPrimaryKeyMixin


class Tag(Base, UUIDPrimaryKeyMixin, TimestampMixin):
    """
    Категория задачи.

    key - стабильный slug ("work", "study"), по нему клиент ссылается
    на тег в task.tagIds и в фильтрах. name - подпись для UI.
    """

    __tablename__ = "tags"

    key: Mapped[str] = mapped_column(String(50), unique=True, nullable=False)
    name: Mapped[str] = mapped_column(String(100), nullable=False)
    color: Mapped[str | None] = mapped_column(String(20), nullable=True)

    def __repr__(self) -> str:
        return f"<Tag(id={self.id}, key='{self.key}', name='{self.name}')>"
