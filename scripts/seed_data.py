#!/usr/bin/env python3
"""
Seed script: справочник тегов и несколько задач для демонстрации.

Запуск (после init_db.py):
    python -m scripts.seed_data

Теги создаются только если их ещё нет (по key),
задачи - только в пустую базу.
Задачи создаются через TaskService - со связями и транзакцией,
как если бы их прислал клиент.
"""

import asyncio
from datetime import date, timedelta

from planner.core.database import AsyncSessionLocal, transaction
from planner.models import TaskPriority, TaskStatus
from planner.services import TagService, TaskService

TAGS = [
    {"key": "work", "name": "Работа", "color": "#3B82F6"},
    {"key": "study", "name": "Учёба", "color": "#10B981"},
    {"key": "home", "name": "Дом", "color": "#F59E0B"},
    {"key": "health", "name": "Здоровье", "color": "#EF4444"},
    {"key": "sport", "name": "Спорт", "color": "#22C55E"},
]


def sample_tasks(today: date) -> list[dict]:
    """Задачи на ближайшие дни относительно today."""

    def day(offset: int) -> str:
        return (today + timedelta(days=offset)).isoformat()

    return [
        {
            "title": "Подготовить отчёт за неделю",
            "priority": TaskPriority.HIGH,
            "scheduled_date": day(0),
            "due_date": day(1),
            "tag_ids": ["work"],
        },
        {
            "title": "Разобрать главу про async SQLAlchemy",
            "description": "Сессии, транзакции, flush vs commit",
            "priority": TaskPriority.MEDIUM,
            "scheduled_date": day(0),
            "tag_ids": ["study"],
        },
        {
            "title": "Тренировка",
            "priority": TaskPriority.LOW,
            "scheduled_date": day(1),
            "tag_ids": ["sport", "health"],
        },
        {
            "title": "Оплатить коммунальные услуги",
            "priority": TaskPriority.MEDIUM,
            "scheduled_date": day(-1),
            "status": TaskStatus.DONE,
            "tag_ids": ["home"],
        },
    ]


async def main() -> None:
    async with AsyncSessionLocal() as session:
        tag_service = TagService(session)
        async with transaction(session):
            for tag in TAGS:
                await tag_service.get_or_create_tag(**tag)
        print(f"✓ Теги: {len(TAGS)}")

        task_service = TaskService(session)
        if await task_service.get_tasks():
            print("• Задачи уже есть, пропускаем")
            return

        tasks = sample_tasks(date.today())
        for data in tasks:
            await task_service.create_task(**data)
        print(f"✓ Задачи: {len(tasks)}")


if __name__ == "__main__":
    asyncio.run(main())
