"""
FastAPI приложение планировщика.

Запуск:
    uvicorn planner.main:app --reload

Документация: /docs (Swagger UI), /redoc.

Роутеры подключены дважды: под /api/v1 и без префикса
(пути /tasks, /tags использует браузерный клиент).
"""

import time
from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager
from datetime import UTC, datetime

from fastapi import APIRouter, FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from slowapi import Limiter
from slowapi.errors import RateLimitExceeded
from slowapi.util import get_remote_address
from sqlalchemy import text

from .api import tags_router, tasks_router
from .api.errors import error_response, register_error_handlers
from .api.middleware import RequestLoggingMiddleware
from .api.schemas import ErrorDetail
from .core.config import settings
from .core.database import AsyncSessionLocal
from .core.logging import get_logger, setup_logging

setup_logging(log_level=settings.LOG_LEVEL, log_format=settings.LOG_FORMAT)

logger = get_logger(__name__)

APP_VERSION = "1.0.0"
APP_START_TIME: float = 0.0

# Лимит считается по IP клиента
limiter = Limiter(key_func=get_remote_address)


def rate_limit_exceeded_handler(request: Request, exc: RateLimitExceeded) -> JSONResponse:
    """429 в едином формате ErrorResponse."""
    return error_response(
        429,
        "RATE_LIMIT_EXCEEDED",
        f"Слишком много запросов. Лимит: {exc.detail}",
        [ErrorDetail(field="rate_limit", message=str(exc.detail))],
    )


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    global APP_START_TIME

    APP_START_TIME = time.time()
    logger.info(
        "Application started",
        extra={"app_name": settings.APP_NAME, "version": APP_VERSION, "debug": settings.DEBUG},
    )

    yield

    logger.info("Application stopped", extra={"uptime_seconds": uptime_seconds()})


def uptime_seconds() -> int:
    return int(time.time() - APP_START_TIME) if APP_START_TIME > 0 else 0


app = FastAPI(
    lifespan=lifespan,
    title=settings.APP_NAME,
    description="Задачи по дням с категориями-тегами.",
    version=APP_VERSION,
)

app.state.limiter = limiter
# slowapi handler имеет специфичный тип, но работает корректно
app.add_exception_handler(RateLimitExceeded, rate_limit_exceeded_handler)  # type: ignore[arg-type]

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)
app.add_middleware(RequestLoggingMiddleware)

api_v1_router = APIRouter(prefix="/api/v1")
api_v1_router.include_router(tasks_router)
api_v1_router.include_router(tags_router)

app.include_router(api_v1_router)
app.include_router(tasks_router)
app.include_router(tags_router)

register_error_handlers(app)


@app.get("/", tags=["root"], summary="Информация о API")
@limiter.limit(settings.RATE_LIMIT)
async def root(request: Request):
    return {
        "name": settings.APP_NAME,
        "version": APP_VERSION,
        "api_version": "v1",
        "docs": "/docs",
        "endpoints": {
            "tasks": "/api/v1/tasks",
            "tags": "/api/v1/tags",
        },
    }


async def check_database() -> bool:
    """SELECT 1 через отдельную сессию; False если БД недоступна."""
    try:
        async with AsyncSessionLocal() as session:
            await session.execute(text("SELECT 1"))
    except Exception:
        logger.warning("Health check: database unavailable", exc_info=True)
        return False
    return True


@app.get("/health", tags=["health"], summary="Проверка работоспособности")
@limiter.limit(settings.RATE_LIMIT)
async def health_check(request: Request):
    """
    200 - {"status": "ok", "checks": {"database": "connected", ...}}
    503 - {"status": "error", "checks": {"database": "disconnected", ...}}
    """
    connected = await check_database()

    return JSONResponse(
        status_code=200 if connected else 503,
        content={
            "status": "ok" if connected else "error",
            "checks": {
                "database": "connected" if connected else "disconnected",
                "version": APP_VERSION,
                "uptime_seconds": uptime_seconds(),
            },
            "timestamp": datetime.now(UTC).isoformat(),
        },
    )
