"""API endpoints для справочника тегов (только чтение)."""

from fastapi import APIRouter, Depends

from ..services import TagService
from .dependencies import get_tag_service
from .schemas import TagResponse

router = APIRouter(prefix="/tags", tags=["tags"])


@router.get("", response_model=list[TagResponse], summary="Получить все теги")
async def get_tags(service: TagService = Depends(get_tag_service)) -> list[TagResponse]:
    """
    Получить список всех тегов, отсортированный по name.

    Пример запроса:
    ```
    GET /tags
    ```
    """
    tags = await service.get_all_tags()
    return [TagResponse.model_validate(t) for t in tags]
