"""
Обработчики ошибок (Exception Handlers) для API.

Все ошибки отдаются клиенту в едином формате ErrorResponse:
- RequestValidationError (pydantic) -> 422 VALIDATION_ERROR
- NotFoundError (сервис)            -> 404 NOT_FOUND
- SQLAlchemyError (сбой БД)         -> 500 INTERNAL_ERROR

Транзакция к моменту вызова handler уже откачена сервисом
(core.database.transaction), здесь только формирование ответа и лог.
"""

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from sqlalchemy.exc import SQLAlchemyError

from ..core.exceptions import NotFoundError
from ..core.logging import get_logger
from .schemas import ErrorBody, ErrorDetail, ErrorResponse

logger = get_logger(__name__)


def error_response(
    status_code: int, code: str, message: str, details: list[ErrorDetail] | None = None
) -> JSONResponse:
    """Собрать JSONResponse в едином формате ошибок."""
    body = ErrorResponse(error=ErrorBody(code=code, message=message, details=details))
    return JSONResponse(status_code=status_code, content=body.model_dump())


async def not_found_handler(request: Request, exc: NotFoundError) -> JSONResponse:
    """Обработчик для NotFoundError (404)."""
    logger.warning(
        "Resource not found",
        extra={"resource": exc.resource, "resource_id": exc.resource_id, "path": request.url.path},
    )
    return error_response(status.HTTP_404_NOT_FOUND, exc.code, str(exc))


async def validation_error_handler(
    request: Request, exc: RequestValidationError
) -> JSONResponse:
    """
    Обработчик для ошибок валидации Pydantic (422).

    Pydantic возвращает ошибки в своём формате:
    {"detail": [{"type": "string_too_short", "loc": ["body", "title"], "msg": "..."}]}

    Мы преобразуем это в наш формат:
    {"error": {"code": "VALIDATION_ERROR", "details": [{"field": "title", "message": "..."}]}}
    """
    details = []
    for error in exc.errors():
        # loc - путь к полю: ["body", "tagIds", 0] или ["query", "from"]
        field_path = [str(p) for p in error.get("loc", [])]
        if len(field_path) > 1 and field_path[0] in ("body", "query", "path"):
            field_path = field_path[1:]
        field_name = ".".join(field_path) if field_path else "unknown"

        details.append(ErrorDetail(field=field_name, message=error.get("msg", "Ошибка валидации")))

    logger.warning(
        "Validation error",
        extra={"path": request.url.path, "fields": [d.field for d in details]},
    )

    return error_response(
        status.HTTP_422_UNPROCESSABLE_ENTITY,
        "VALIDATION_ERROR",
        "Ошибка валидации входных данных",
        details,
    )


async def database_error_handler(request: Request, exc: SQLAlchemyError) -> JSONResponse:
    """
    Обработчик для сбоев базы данных (500).

    ВАЖНО: Не показываем детали внутренних ошибок клиенту!
    """
    logger.error(
        f"Database error: {type(exc).__name__}",
        extra={"path": request.url.path},
        exc_info=exc,
    )
    return error_response(
        status.HTTP_500_INTERNAL_SERVER_ERROR, "INTERNAL_ERROR", "Внутренняя ошибка сервера"
    )


def register_error_handlers(app: FastAPI) -> None:
    """
    Регистрирует все error handlers в приложении FastAPI.

    Вызывается из main.py:
        register_error_handlers(app)
    """
    app.add_exception_handler(NotFoundError, not_found_handler)
    app.add_exception_handler(RequestValidationError, validation_error_handler)
    app.add_exception_handler(SQLAlchemyError, database_error_handler)
