"""Service layer with business logic."""

from .tag import TagService
from .task import TaskService

__all__ = [
    "TaskService",
    "TagService",
]
