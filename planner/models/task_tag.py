"""Task-Tag junction table."""

from sqlalchemy import Column, DateTime, ForeignKey, String, Table

from .base import Base, utc_now

# Many-to-many junction table for tasks and tags.
# Строки создаются и удаляются только TaskService вместе с задачей.
task_tags = Table(
    "task_tags",
    Base.metadata,
    Column("task_id", String(36), ForeignKey("tasks.id"), primary_key=True),
    Column("tag_id", String(36), ForeignKey("tags.id"), primary_key=True),
    Column("created_at", DateTime, default=utc_now, nullable=False),
)
