"""Core application components."""

from .config import Settings, settings
from .database import AsyncSessionLocal, drop_db, engine, get_db, init_db, transaction
from .exceptions import NotFoundError, PlannerError

__all__ = [
    "settings",
    "Settings",
    "engine",
    "AsyncSessionLocal",
    "get_db",
    "init_db",
    "drop_db",
    "transaction",
    "PlannerError",
    "NotFoundError",
]
