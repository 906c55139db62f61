import logging
from typing import Any, List

from fastapi import APIRouter, Depends, File, HTTPException, UploadFile, status

from app.api.deps import get_navigation_backend
from app.exceptions import NotFoundError, UpstreamError
from app.services.navigation import NavigationBackend
from app.services.normalizer import extract_buildings

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/buildings", tags=["Building"])


def _bad_gateway(e: UpstreamError) -> HTTPException:
    return HTTPException(status_code=status.HTTP_502_BAD_GATEWAY, detail=str(e))


@router.get(
    "",
    response_model=List[Any],
    summary="Получить список зданий",
    description="Проксирует список зданий с навигационного бэкенда и приводит ответ к массиву (buildings / data / results)."
)
async def list_buildings(backend: NavigationBackend = Depends(get_navigation_backend)):
    try:
        payload = await backend.list_buildings()
    except UpstreamError as e:
        raise _bad_gateway(e)
    return extract_buildings(payload)


@router.post(
    "",
    summary="Сохранить список зданий",
    description="Создаёт на бэкенде каждое здание из переданного списка."
)
async def save_buildings(
    buildings: List[dict],
    backend: NavigationBackend = Depends(get_navigation_backend)
):
    try:
        for building in buildings:
            await backend.create_building(building)
    except UpstreamError as e:
        raise _bad_gateway(e)
    return {"message": f"Saved {len(buildings)} buildings"}


@router.get(
    "/{slug}",
    summary="Получить здание по slug",
    description="Возвращает одно здание с навигационного бэкенда."
)
async def get_building(
    slug: str,
    backend: NavigationBackend = Depends(get_navigation_backend)
):
    try:
        return await backend.get_building(slug)
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail=str(e))
    except UpstreamError as e:
        raise _bad_gateway(e)


@router.post(
    "/{slug}/upload",
    summary="Загрузить изображение здания",
    description="Пересылает файл (multipart, поле file) на навигационный бэкенд."
)
async def upload_building_image(
    slug: str,
    file: UploadFile = File(...),
    backend: NavigationBackend = Depends(get_navigation_backend)
):
    content = await file.read()
    logger.info(f"Загрузка изображения для здания '{slug}': {file.filename} ({len(content)} байт)")
    try:
        return await backend.upload_building_image(
            slug, file.filename or "upload", content, file.content_type
        )
    except UpstreamError as e:
        raise _bad_gateway(e)
