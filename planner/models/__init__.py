"""SQLAlchemy models for the planner."""

from .base import Base, TimestampMixin, UUIDPrimaryKeyMixin, utc_now
from .tag import Tag
from .task import Task, TaskPriority, TaskStatus
from .task_tag import task_tags

__all__ = [
    "Base",
    "TimestampMixin",
    "UUIDPrimaryKeyMixin",
    "utc_now",
    "Tag",
    "Task",
    "TaskStatus",
    "TaskPriority",
    "task_tags",
]
