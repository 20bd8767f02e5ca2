"""Database connection, session management and transaction scope."""

from collections.abc import AsyncGenerator, AsyncIterator
from contextlib import asynccontextmanager

from sqlalchemy.ext.asyncio import (
    AsyncEngine,
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.pool import NullPool, StaticPool

from .config import settings


def build_engine(url: str, echo: bool = False) -> AsyncEngine:
    """
    Создать async engine под URL.

    - SQLite in-memory: StaticPool, иначе каждая сессия видит пустую БД
    - SQLite файл и PostgreSQL: NullPool, у каждой сессии своё соединение
      и своя транзакция
    """
    if "sqlite" in url and ":memory:" in url:
        return create_async_engine(
            url,
            echo=echo,
            poolclass=StaticPool,
            connect_args={"check_same_thread": False},
        )
    if "sqlite" in url:
        return create_async_engine(
            url,
            echo=echo,
            poolclass=NullPool,
            connect_args={"check_same_thread": False},
        )
    return create_async_engine(url, echo=echo, poolclass=NullPool)


engine = build_engine(settings.DATABASE_URL, echo=settings.DATABASE_ECHO)

AsyncSessionLocal = async_sessionmaker(
    engine,
    class_=AsyncSession,
    expire_on_commit=False,
    autocommit=False,
    autoflush=False,
)


async def get_db() -> AsyncGenerator[AsyncSession, None]:
    """
    Dependency for getting database session.

    Usage in FastAPI:
        @app.get("/items")
        async def get_items(db: AsyncSession = Depends(get_db)):
            ...
    """
    async with AsyncSessionLocal() as session:
        try:
            yield session
            await session.commit()
        except Exception:
            await session.rollback()
            raise
        finally:
            await session.close()


@asynccontextmanager
async def transaction(session: AsyncSession) -> AsyncIterator[AsyncSession]:
    """
    Атомарная область для многошаговой операции.

    Всё, что выполнено через session внутри блока, либо фиксируется
    целиком (commit при нормальном выходе), либо откатывается целиком
    (rollback при любом исключении, исключение пробрасывается дальше).

    Граница - вся транзакция сессии, а не только блок: несохранённые
    изменения, сделанные через session до входа в блок, фиксируются
    или откатываются вместе с ним. Вызывающий код, которому нужна
    своя отдельная запись, делает commit до вызова сервиса.

    Использование:
        async with transaction(self.db) as tx:
            await TaskRepository(tx).create(task)
            await TaskTagRepository(tx).add_links(task.id, tag_ids)
    """
    try:
        yield session
        await session.commit()
    except Exception:
        await session.rollback()
        raise


async def init_db():
    """Initialize database (create all tables)."""
    from ..models import Base

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)


async def drop_db():
    """Drop all tables (use with caution!)."""
    from ..models import Base

    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.drop_all)
