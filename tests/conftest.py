"""
Pytest fixtures для тестов.

Предоставляет:
- test_db: изолированная SQLite in-memory БД для каждого теста
- test_client: HTTP клиент для тестирования API endpoints
- tags: справочник тегов (work, study, home)
- file_session_factory: файловая SQLite БД для тестов параллельных сессий
"""

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker, create_async_engine
from sqlalchemy.pool import StaticPool

from planner.api.dependencies import get_db
from planner.core.database import build_engine
from planner.main import app
from planner.models import Base, Tag
from planner.repositories import TagRepository

# Test database URL (SQLite in-memory)
TEST_DATABASE_URL = "sqlite+aiosqlite:///:memory:"


@pytest_asyncio.fixture
async def test_engine():
    """
    Создаёт async engine для тестовой БД (SQLite in-memory).

    StaticPool обеспечивает что используется одно и то же соединение,
    что критично для in-memory БД (иначе данные теряются).
    """
    engine = create_async_engine(
        TEST_DATABASE_URL,
        echo=False,
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield engine

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)

    await engine.dispose()


@pytest_asyncio.fixture
async def session_factory(test_engine):
    """Session maker с теми же настройками, что и AsyncSessionLocal."""
    return async_sessionmaker(test_engine, class_=AsyncSession, expire_on_commit=False)


@pytest_asyncio.fixture
async def test_db(session_factory):
    """
    Предоставляет async session для работы с тестовой БД.

    Каждый тест получает чистую БД.
    """
    async with session_factory() as session:
        yield session
        await session.rollback()


@pytest_asyncio.fixture
async def tags(test_db) -> dict[str, Tag]:
    """Справочник тегов: {key: Tag}."""
    repo = TagRepository(test_db)
    created = {}
    for key, name, color in [
        ("work", "Work", "#3B82F6"),
        ("study", "Study", "#10B981"),
        ("home", "Home", None),
    ]:
        created[key] = await repo.create(Tag(key=key, name=name, color=color))
    await test_db.commit()
    return created


@pytest_asyncio.fixture
async def file_session_factory(tmp_path):
    """
    Session maker поверх файловой SQLite БД.

    Engine создаётся так же, как основной (build_engine), поэтому
    у каждой сессии своё соединение. Нужен для тестов параллельных сессий.
    """
    engine = build_engine(f"sqlite+aiosqlite:///{tmp_path / 'planner.db'}")

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    yield async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)

    await engine.dispose()


@pytest_asyncio.fixture
async def test_client(session_factory):
    """
    Предоставляет HTTP клиент для тестирования API endpoints.

    Использует тестовую БД вместо основной.
    """

    async def override_get_db():
        async with session_factory() as session:
            try:
                yield session
                await session.commit()
            except Exception:
                await session.rollback()
                raise
            finally:
                await session.close()

    app.dependency_overrides[get_db] = override_get_db

    async with AsyncClient(transport=ASGITransport(app=app), base_url="http://test") as client:
        yield client

    app.dependency_overrides.clear()


@pytest.fixture(scope="session")
def anyio_backend():
    """Используем asyncio для всех async тестов."""
    return "asyncio"
