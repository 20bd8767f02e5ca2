"""Task model."""

import enum

from sqlalchemy import JSON, String, Text
from sqlalchemy import Enum as SQLEnum
from sqlalchemy.orm import Mapped, mapped_column

from .base import Base, TimestampMixin, UUIDPrimaryKeyMixin


class TaskStatus(str, enum.Enum):
    """Task status enum."""

    PLANNED = "planned"
    IN_PROGRESS = "in_progress"
    DONE = "done"


class TaskPriority(str, enum.Enum):
    """Task priority enum."""

    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


class Task(Base, UUIDPrimaryKeyMixin, TimestampMixin):
    """
    Задача, запланированная на конкретный день.

    Даты хранятся строками YYYY-MM-DD: фильтрация по диапазону
    работает через обычное строковое сравнение.

    tag_ids - ключи тегов в том порядке, в котором их прислал клиент.
    Связи в task_tags создаются только для ключей, найденных в таблице tags,
    поэтому tag_ids может содержать ключи без соответствующей связи.
    """

    __tablename__ = "tasks"

    title: Mapped[str] = mapped_column(String(200), nullable=False)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)

    status: Mapped[TaskStatus] = mapped_column(
        SQLEnum(TaskStatus, native_enum=False, values_callable=lambda e: [m.value for m in e]),
        default=TaskStatus.PLANNED,
        nullable=False,
    )
    priority: Mapped[TaskPriority] = mapped_column(
        SQLEnum(TaskPriority, native_enum=False, values_callable=lambda e: [m.value for m in e]),
        nullable=False,
    )

    scheduled_date: Mapped[str] = mapped_column(String(10), nullable=False, index=True)
    due_date: Mapped[str | None] = mapped_column(String(10), nullable=True)

    tag_ids: Mapped[list[str]] = mapped_column(JSON, default=list, nullable=False)

    def __repr__(self) -> str:
        return (
            f"<Task(id={self.id}, title='{self.title}', "
            f"scheduled_date={self.scheduled_date}, status={self.status.value})>"
        )
